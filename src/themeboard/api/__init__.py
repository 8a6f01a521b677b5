"""HTTP layer: routers, request gates and error handlers."""

from .endpoints import (
    auth_router,
    comments_router,
    posts_router,
    system_router,
    themes_router,
)

__all__ = [
    "auth_router",
    "comments_router",
    "posts_router",
    "system_router",
    "themes_router",
]
