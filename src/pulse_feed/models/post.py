# src/pulse_feed/models/post.py
"""SQLAlchemy model for posts and reposts."""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Enum, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from pulse_feed.db.session import Base
from pulse_feed.db.time import utcnow

POST_CONTENT_MAX_LENGTH = 280


class PostKind(str, enum.Enum):
    """Variant tag for a post row."""

    ORIGINAL = "original"
    REPOST = "repost"


class Post(Base):
    """A feed entry authored by a user.

    Rows are one of two variants, selected by ``kind``:
    originals carry ``content`` and no ``original_post_id``; reposts carry
    ``original_post_id`` and no content of their own.
    """

    __tablename__ = "posts"
    __table_args__ = (
        CheckConstraint(
            "(kind = 'original' AND content IS NOT NULL AND original_post_id IS NULL)"
            " OR (kind = 'repost' AND content IS NULL AND original_post_id IS NOT NULL)",
            name="ck_posts_kind_variant",
        ),
        CheckConstraint("likes >= 0", name="ck_posts_likes_non_negative"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    kind: Mapped[PostKind] = mapped_column(
        Enum(
            PostKind,
            name="post_kind",
            values_callable=lambda kinds: [kind.value for kind in kinds],
            native_enum=False,
            create_constraint=False,
            length=16,
        ),
        nullable=False,
    )
    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        index=True,
        nullable=False,
    )
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    likes: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    # Weak reference used only to resolve what a repost displays.
    original_post_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("posts.id"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        index=True,
    )

    @property
    def is_repost(self) -> bool:
        """Return True if this row is a repost wrapper."""
        return self.kind == PostKind.REPOST
