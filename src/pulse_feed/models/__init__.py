# src/pulse_feed/models/__init__.py
"""SQLAlchemy models for the Pulse Feed application."""

from .post import Post, PostKind
from .user import User

__all__ = [
    "Post", "PostKind",
    "User",
]
