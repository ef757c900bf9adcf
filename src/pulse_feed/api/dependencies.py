"""Shared API dependencies for authentication and service wiring."""

import logging
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from starlette.requests import HTTPConnection

from pulse_feed.core.errors import InvalidToken, Unauthenticated
from pulse_feed.core.security import decode_access_token
from pulse_feed.db.session import get_db
from pulse_feed.services.auth import AuthService
from pulse_feed.services.avatar_storage import AvatarStorage, get_avatar_storage
from pulse_feed.services.feed import FeedService
from pulse_feed.services.live import LiveNotifier

logger = logging.getLogger(__name__)

# Missing or non-Bearer headers yield None so the gate can answer 401 itself.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> int:
    """Return the user ID carried by the request's bearer token.

    Raises:
        Unauthenticated: If no bearer token was sent.
        InvalidToken: If the token is malformed, badly signed or expired.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthenticated()
    try:
        return decode_access_token(credentials.credentials)
    except InvalidToken:
        logger.warning("Rejected bearer token")
        raise


def get_live_notifier(connection: HTTPConnection) -> LiveNotifier:
    """Return the application's live notifier."""
    return connection.app.state.live_notifier


def get_avatar_storage_dep() -> AvatarStorage:
    """Return the storage used for profile pictures."""
    return get_avatar_storage()


CurrentUserIdDep = Annotated[int, Depends(get_current_user_id)]
LiveNotifierDep = Annotated[LiveNotifier, Depends(get_live_notifier)]
AvatarStorageDep = Annotated[AvatarStorage, Depends(get_avatar_storage_dep)]


def get_auth_service(db: SessionDep) -> AuthService:
    """Build the auth service for this request."""
    return AuthService(db)


def get_feed_service(db: SessionDep, notifier: LiveNotifierDep) -> FeedService:
    """Build the feed service for this request."""
    return FeedService(db, notifier)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
FeedServiceDep = Annotated[FeedService, Depends(get_feed_service)]
