"""Credential store: persistence for user accounts."""
from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pulse_feed.core.errors import DuplicateUsername
from pulse_feed.core.security import hash_password
from pulse_feed.models.user import User

__all__ = ["UserRepository"]


class UserRepository:
    """Thin wrapper around database access for user accounts."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def create(
        self,
        *,
        username: str,
        password: str,
        display_name: str,
        profile_picture_url: str,
    ) -> User:
        """Hash ``password`` and insert a new user.

        Raises:
            DuplicateUsername: If the lowercase username is already taken.
        """
        username = username.lower()
        if self.get_by_username(username) is not None:
            raise DuplicateUsername()

        user = User(
            username=username,
            password_hash=hash_password(password),
            display_name=display_name,
            profile_picture_url=profile_picture_url,
        )
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError as err:
            # Lost a race against a concurrent registration.
            self.session.rollback()
            raise DuplicateUsername() from err
        self.session.refresh(user)
        return user

    def get_by_id(self, user_id: int) -> User | None:
        """Return a user by primary key."""
        return self.session.get(User, user_id)

    def get_by_username(self, username: str) -> User | None:
        """Return a user by username, ignoring case."""
        result = self.session.execute(select(User).where(User.username == username.lower()))
        return result.scalars().first()

    def get_many(self, user_ids: Iterable[int]) -> dict[int, User]:
        """Return the users with the given IDs keyed by ID."""
        ids = set(user_ids)
        if not ids:
            return {}
        result = self.session.execute(select(User).where(User.id.in_(ids)))
        return {user.id: user for user in result.scalars()}

    def update_avatar(self, user_id: int, profile_picture_url: str) -> User | None:
        """Point the user's profile picture at ``profile_picture_url``."""
        result = self.session.execute(
            update(User)
            .where(User.id == user_id)
            .values(profile_picture_url=profile_picture_url)
        )
        self.session.commit()
        if result.rowcount == 0:
            return None
        user = self.get_by_id(user_id)
        if user is not None:
            self.session.refresh(user)
        return user
