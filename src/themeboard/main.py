# src/themeboard/main.py
"""Main entry point for the Themeboard application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from themeboard.api import (
    auth_router,
    comments_router,
    posts_router,
    system_router,
    themes_router,
)
from themeboard.api.error_handlers import register_error_handlers
from themeboard.core.logging import setup_logging
from themeboard.core.settings import Settings, get_settings
from themeboard.init_db import init_db

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application and everything it shares across requests.

    Logging, the database engine and session factory are created here, once,
    and stored on ``app.state`` before the first request can arrive.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_format)

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Themed posts, comments and likes",
        version=settings.app_version,
        debug=settings.debug,
    )

    engine, session_factory = init_db(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = session_factory

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.include_router(system_router)
    app.include_router(auth_router)
    app.include_router(themes_router)
    app.include_router(posts_router)
    app.include_router(comments_router)

    register_error_handlers(app)

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        app.state.engine.dispose()

    logger.info("Application %s %s ready", settings.app_name, settings.app_version)
    return app


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    logger.info("Server starting on %s:%d", settings.host, settings.port)
    uvicorn.run(
        "themeboard.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
