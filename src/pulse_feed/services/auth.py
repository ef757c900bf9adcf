"""Registration, login and token issuance."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from pulse_feed.core.errors import InvalidCredentials, ValidationError
from pulse_feed.core.security import create_access_token, verify_password
from pulse_feed.core.settings import settings
from pulse_feed.models.user import DISPLAY_NAME_MAX_LENGTH, USERNAME_MAX_LENGTH
from pulse_feed.repositories.user_repo import UserRepository
from pulse_feed.schemas.user import (
    PASSWORD_MIN_LENGTH,
    AuthResponse,
    LoginRequest,
    PublicUser,
    RegisterRequest,
)

logger = logging.getLogger(__name__)


class AuthService:
    """Validates credentials and issues bearer tokens."""

    def __init__(self, db: Session) -> None:
        self.users = UserRepository(db)

    def register(self, payload: RegisterRequest) -> AuthResponse:
        """Create an account and return a token bound to it.

        Raises:
            ValidationError: If username, password or display name break the length rules.
            DuplicateUsername: If the username is already registered.
        """
        username = payload.username.strip().lower()
        display_name = payload.display_name.strip()

        if not username:
            raise ValidationError("Username is required")
        if len(username) > USERNAME_MAX_LENGTH:
            raise ValidationError(f"Username must be at most {USERNAME_MAX_LENGTH} characters")
        if len(payload.password) < PASSWORD_MIN_LENGTH:
            raise ValidationError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
        if not display_name:
            raise ValidationError("Display name is required")
        if len(display_name) > DISPLAY_NAME_MAX_LENGTH:
            raise ValidationError(
                f"Display name must be at most {DISPLAY_NAME_MAX_LENGTH} characters"
            )

        user = self.users.create(
            username=username,
            password=payload.password,
            display_name=display_name,
            profile_picture_url=settings.default_profile_picture_url,
        )
        logger.info("Registered user %s (id=%d)", user.username, user.id)
        return AuthResponse(
            token=create_access_token(user.id),
            user=PublicUser.model_validate(user),
        )

    def login(self, payload: LoginRequest) -> AuthResponse:
        """Check a username/password pair and return a fresh token.

        Unknown usernames and wrong passwords both raise the same
        ``InvalidCredentials`` error.
        """
        user = self.users.get_by_username(payload.username.strip())
        password_hash = user.password_hash if user is not None else None
        if not verify_password(payload.password, password_hash) or user is None:
            logger.warning("Failed login attempt")
            raise InvalidCredentials()

        return AuthResponse(
            token=create_access_token(user.id),
            user=PublicUser.model_validate(user),
        )
