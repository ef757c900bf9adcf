"""Business logic services for the Pulse Feed application."""

from .auth import AuthService
from .avatar_storage import AvatarStorage
from .feed import FeedService
from .live import LiveNotifier

__all__ = [
    "AuthService",
    "AvatarStorage",
    "FeedService",
    "LiveNotifier",
]
