"""HTTP and WebSocket routers."""

from .endpoints import auth_router, live_router, posts_router, users_router

__all__ = [
    "auth_router",
    "posts_router",
    "users_router",
    "live_router",
]
