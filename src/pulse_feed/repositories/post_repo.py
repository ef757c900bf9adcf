"""Content store: data access helpers for posts."""
from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from pulse_feed.models.post import Post, PostKind

__all__ = ["PostRepository"]


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, post_id: int) -> Post | None:
        """Return a post by identifier."""
        return self.session.get(Post, post_id)

    def get_many(self, post_ids: Iterable[int]) -> dict[int, Post]:
        """Return the posts with the given IDs keyed by ID."""
        ids = set(post_ids)
        if not ids:
            return {}
        result = self.session.execute(
            select(Post).where(Post.id.in_(ids)).execution_options(populate_existing=True)
        )
        return {post.id: post for post in result.scalars()}

    def list_recent(self) -> list[Post]:
        """Return every post, newest first."""
        result = self.session.execute(
            select(Post)
            .order_by(Post.created_at.desc(), Post.id.desc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars())

    def list_by_author(self, author_id: int) -> list[Post]:
        """Return the posts authored by ``author_id``, newest first."""
        result = self.session.execute(
            select(Post)
            .where(Post.author_id == author_id)
            .order_by(Post.created_at.desc(), Post.id.desc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars())

    def create_original(self, *, author_id: int, content: str) -> Post:
        """Insert an original post and return the persisted ORM instance."""
        return self._insert(
            Post(kind=PostKind.ORIGINAL, author_id=author_id, content=content, likes=0)
        )

    def create_repost(self, *, author_id: int, original_post_id: int) -> Post:
        """Insert a repost of ``original_post_id`` and return it."""
        return self._insert(
            Post(
                kind=PostKind.REPOST,
                author_id=author_id,
                content=None,
                original_post_id=original_post_id,
                likes=0,
            )
        )

    def increment_likes(self, post_id: int) -> int | None:
        """Add one like to a post in a single UPDATE.

        Returns:
            The new like count, or None if the post does not exist.
        """
        result = self.session.execute(
            update(Post)
            .where(Post.id == post_id)
            .values(likes=Post.likes + 1)
            .returning(Post.likes)
        )
        likes = result.scalar_one_or_none()
        self.session.commit()
        return likes

    def _insert(self, post: Post) -> Post:
        self.session.add(post)
        self.session.commit()
        self.session.refresh(post)
        return post
