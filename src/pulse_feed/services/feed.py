"""Feed operations: posting, reposting, likes, listings and profiles.

Every post handed back to a client goes through :meth:`FeedService.resolve`,
which fetches the referenced originals and users in bulk and then attaches
them. For reposts the repost chain is followed until an original is reached,
and that original is what ``originalPost`` carries.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from fastapi import UploadFile
from sqlalchemy.orm import Session

from pulse_feed.core.errors import InternalError, NotFound, ValidationError
from pulse_feed.models.post import POST_CONTENT_MAX_LENGTH, Post
from pulse_feed.models.user import User
from pulse_feed.repositories.post_repo import PostRepository
from pulse_feed.repositories.user_repo import UserRepository
from pulse_feed.schemas.post import (
    LikeUpdate,
    OriginalPost,
    ResolvedPost,
    UserProfileResponse,
)
from pulse_feed.schemas.user import PublicUser
from pulse_feed.services.avatar_storage import AvatarStorage
from pulse_feed.services.live import LIKE_UPDATE_EVENT, NEW_POST_EVENT, LiveNotifier

logger = logging.getLogger(__name__)


class FeedService:
    """Creates and lists posts and pushes changes to live viewers."""

    def __init__(self, db: Session, notifier: LiveNotifier) -> None:
        self.posts = PostRepository(db)
        self.users = UserRepository(db)
        self.notifier = notifier

    async def create_post(self, author_id: int, content: str) -> ResolvedPost:
        """Publish an original post for ``author_id``.

        Raises:
            ValidationError: If the trimmed content is empty or longer than 280 characters.
        """
        text = content.strip()
        if not text:
            raise ValidationError("Content is required")
        if len(text) > POST_CONTENT_MAX_LENGTH:
            raise ValidationError(
                f"Content must be at most {POST_CONTENT_MAX_LENGTH} characters"
            )

        post = self.posts.create_original(author_id=author_id, content=text)
        logger.info("User %d created post %d", author_id, post.id)
        return await self._publish(post)

    async def create_repost(self, author_id: int, original_post_id: int) -> ResolvedPost:
        """Repost ``original_post_id`` on behalf of ``author_id``.

        Raises:
            NotFound: If the referenced post does not exist.
        """
        if self.posts.get_by_id(original_post_id) is None:
            raise NotFound("Original post not found")

        repost = self.posts.create_repost(author_id=author_id, original_post_id=original_post_id)
        logger.info("User %d reposted post %d as %d", author_id, original_post_id, repost.id)
        return await self._publish(repost)

    async def like_post(self, post_id: int) -> int:
        """Add one like to ``post_id`` and return the new count.

        The ID is used as given; a repost's own ID increments the repost row.

        Raises:
            NotFound: If the post does not exist.
        """
        likes = self.posts.increment_likes(post_id)
        if likes is None:
            raise NotFound("Post not found")

        update = LikeUpdate(id=post_id, likes=likes)
        await self.notifier.broadcast(LIKE_UPDATE_EVENT, update.model_dump(mode="json", by_alias=True))
        return likes

    def list_feed(self) -> list[ResolvedPost]:
        """Return every post, newest first, resolved."""
        return self.resolve(self.posts.list_recent())

    def get_user_profile(self, username: str) -> UserProfileResponse:
        """Return a user's public record and the posts they authored.

        Raises:
            NotFound: If no user has that username.
        """
        user = self.users.get_by_username(username.strip())
        if user is None:
            raise NotFound("User not found")
        return UserProfileResponse(
            user=PublicUser.model_validate(user),
            posts=self.resolve(self.posts.list_by_author(user.id)),
        )

    def get_own_profile(self, user_id: int) -> PublicUser:
        """Return the public record for an authenticated caller."""
        user = self.users.get_by_id(user_id)
        if user is None:
            raise NotFound("User not found")
        return PublicUser.model_validate(user)

    def set_avatar(self, user_id: int, upload: UploadFile, storage: AvatarStorage) -> PublicUser:
        """Store ``upload`` as the caller's profile picture."""
        if self.users.get_by_id(user_id) is None:
            raise NotFound("User not found")
        url = storage.save(user_id, upload)
        try:
            user = self.users.update_avatar(user_id, url)
        except Exception:
            storage.discard(url)
            raise
        if user is None:
            storage.discard(url)
            raise NotFound("User not found")
        return PublicUser.model_validate(user)

    def resolve(self, posts: Sequence[Post]) -> list[ResolvedPost]:
        """Attach authors and originals to ``posts``, preserving order."""
        known = self._load_repost_chains(posts)
        roots: dict[int, Post | None] = {
            post.id: self._find_root(post, known) for post in posts if post.is_repost
        }

        author_ids = {post.author_id for post in posts}
        author_ids.update(root.author_id for root in roots.values() if root is not None)
        authors = self.users.get_many(author_ids)

        resolved: list[ResolvedPost] = []
        for post in posts:
            original: OriginalPost | None = None
            root = roots.get(post.id)
            if root is not None:
                original = OriginalPost(
                    id=root.id,
                    kind=root.kind,
                    author=_public_author(root, authors),
                    content=root.content,
                    likes=root.likes,
                    created_at=root.created_at,
                )
            resolved.append(
                ResolvedPost(
                    id=post.id,
                    kind=post.kind,
                    author=_public_author(post, authors),
                    content=post.content,
                    likes=post.likes,
                    created_at=post.created_at,
                    original_post=original,
                )
            )
        return resolved

    async def _publish(self, post: Post) -> ResolvedPost:
        (resolved,) = self.resolve([post])
        await self.notifier.broadcast(NEW_POST_EVENT, resolved.model_dump(mode="json", by_alias=True))
        return resolved

    def _load_repost_chains(self, posts: Sequence[Post]) -> dict[int, Post]:
        known = {post.id: post for post in posts}
        missing = {post.original_post_id for post in posts if post.is_repost} - known.keys()
        while missing:
            fetched = self.posts.get_many(missing)
            known.update(fetched)
            missing = {
                post.original_post_id for post in fetched.values() if post.is_repost
            } - known.keys()
        return known

    @staticmethod
    def _find_root(post: Post, known: dict[int, Post]) -> Post | None:
        seen: set[int] = set()
        current: Post | None = post
        while current is not None and current.is_repost:
            if current.id in seen:
                return None
            seen.add(current.id)
            current = known.get(current.original_post_id)  # type: ignore[arg-type]
        return current


def _public_author(post: Post, authors: dict[int, User]) -> PublicUser:
    author = authors.get(post.author_id)
    if author is None:
        raise InternalError(f"Author {post.author_id} of post {post.id} is missing")
    return PublicUser.model_validate(author)
