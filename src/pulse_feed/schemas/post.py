# src/pulse_feed/schemas/post.py
"""Post-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field, field_validator

from pulse_feed.models.post import PostKind

from .common import CamelModel, as_utc
from .user import PublicUser


class PostCreate(CamelModel):
    """Schema for creating a new post."""

    content: str = Field(..., description="Post text, trimmed, at most 280 characters")


class OriginalPost(CamelModel):
    """The original post a repost displays."""

    id: int
    kind: PostKind
    author: PublicUser
    content: str | None
    likes: int
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def _ensure_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class ResolvedPost(OriginalPost):
    """Post as returned to clients, with author and original expanded.

    For reposts ``content`` is null and ``original_post`` holds what the
    client displays.
    """

    original_post: OriginalPost | None = None


class LikeResponse(CamelModel):
    """Like counter after an increment."""

    likes: int


class LikeUpdate(CamelModel):
    """Payload of the ``likeUpdate`` live event."""

    id: int
    likes: int


class UserProfileResponse(CamelModel):
    """Public profile with the user's own posts, newest first."""

    user: PublicUser
    posts: list[ResolvedPost]
