"""Domain errors raised by services and rendered at the request boundary.

Each error carries the HTTP status it maps to. Handlers registered in
``pulse_feed.main`` turn them into ``{"error": message}`` responses.
"""

from __future__ import annotations

from fastapi import status


class FeedError(Exception):
    """Base exception for all expected application failures."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(FeedError):
    """Raised when request input is missing or malformed."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class DuplicateUsername(FeedError):
    """Raised when registering a username that is already taken."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Username already exists"


class InvalidCredentials(FeedError):
    """Raised for any failed login, without revealing which part was wrong."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class Unauthenticated(FeedError):
    """Raised when a protected operation is called without a bearer token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class Forbidden(FeedError):
    """Raised when a bearer token is present but cannot be accepted."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Invalid or expired token"


class InvalidToken(Forbidden):
    """Raised by token verification for bad signatures, malformed or expired tokens."""


class NotFound(FeedError):
    """Raised when a referenced user or post does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InternalError(FeedError):
    """Raised for unexpected storage or I/O failures."""
