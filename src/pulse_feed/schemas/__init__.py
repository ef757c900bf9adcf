# src/pulse_feed/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .common import ErrorResponse
from .post import (
    LikeResponse,
    LikeUpdate,
    OriginalPost,
    PostCreate,
    ResolvedPost,
    UserProfileResponse,
)
from .user import AuthResponse, LoginRequest, PublicUser, RegisterRequest

__all__ = [
    "ErrorResponse",
    "LikeResponse", "LikeUpdate", "OriginalPost", "PostCreate", "ResolvedPost",
    "UserProfileResponse",
    "AuthResponse", "LoginRequest", "PublicUser", "RegisterRequest",
]
