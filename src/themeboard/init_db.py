"""Create tables and seed reference data."""
from __future__ import annotations

import logging

from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker

from themeboard.core.settings import Settings, get_settings
from themeboard.db.session import build_engine, build_session_factory, create_tables
from themeboard.services.theme_service import seed_themes

logger = logging.getLogger(__name__)


def init_db(settings: Settings) -> tuple[Engine, sessionmaker[Session]]:
    """Create all tables, seed default themes, and return the engine and session factory."""
    engine = build_engine(settings.database_url, echo=settings.sql_debug)
    create_tables(engine)
    session_factory = build_session_factory(engine)
    with session_factory() as db:
        seed_themes(db, settings.default_themes)
    return engine, session_factory


if __name__ == "__main__":
    init_db(get_settings())
    print("Database initialized.")
