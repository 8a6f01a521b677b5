"""Theme lookups and startup seeding."""
from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy.orm import Session

from themeboard.models import Theme
from themeboard.schemas.post import ThemeResponse

logger = logging.getLogger(__name__)


def get_all_themes(db: Session) -> list[ThemeResponse]:
    """Return every theme ordered by name."""
    themes = db.query(Theme).order_by(Theme.name).all()
    return [ThemeResponse.model_validate(theme) for theme in themes]


def seed_themes(db: Session, names: Iterable[str]) -> int:
    """Insert ``names`` as themes when the table is empty. Returns the number added."""
    if db.query(Theme).first() is not None:
        return 0
    added = 0
    for name in dict.fromkeys(n.strip() for n in names):
        if name:
            db.add(Theme(name=name))
            added += 1
    db.commit()
    logger.info("Seeded %d themes", added)
    return added
