"""Aggregate router exports."""
from .auth import router as auth_router
from .categories import router as categories_router
from .comments import router as comments_router
from .notifications import router as notifications_router
from .playlists import router as playlists_router
from .realtime import router as realtime_router
from .users import router as users_router
from .videos import router as videos_router

__all__ = [
    "auth_router",
    "categories_router",
    "comments_router",
    "notifications_router",
    "playlists_router",
    "realtime_router",
    "users_router",
    "videos_router",
]
