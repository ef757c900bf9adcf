# src/pulse_feed/schemas/user.py
"""User and authentication Pydantic schemas."""

from datetime import datetime

from pydantic import Field, field_validator

from .common import CamelModel, as_utc

PASSWORD_MIN_LENGTH = 6


class RegisterRequest(CamelModel):
    """Schema for account registration."""

    username: str = Field(..., description="Unique handle, stored lowercase")
    password: str = Field(..., description=f"At least {PASSWORD_MIN_LENGTH} characters")
    display_name: str = Field(..., description="Public name shown next to posts")


class LoginRequest(CamelModel):
    """Schema for login submissions."""

    username: str
    password: str


class PublicUser(CamelModel):
    """User fields that are safe to return to any client."""

    id: int
    username: str
    display_name: str
    profile_picture_url: str
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def _ensure_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class AuthResponse(CamelModel):
    """Response returned after successful registration or login."""

    token: str = Field(..., description="Signed bearer token")
    user: PublicUser
