"""API endpoint modules."""

from .auth import router as auth_router
from .comments import router as comments_router
from .posts import router as posts_router
from .system import router as system_router
from .themes import router as themes_router

__all__ = [
    "auth_router",
    "comments_router",
    "posts_router",
    "system_router",
    "themes_router",
]
