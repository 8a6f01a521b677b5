"""Shared like/unlike toggle for posts and comments."""
from __future__ import annotations

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from themeboard.db.session import Base


def toggle_like(
    db: Session,
    *,
    target: Any,
    model: type[Base],
    key: dict[str, str],
    like: bool,
) -> None:
    """Make the like row identified by ``key`` exist iff ``like``.

    ``target.likes`` is recomputed from the like table rather than
    incremented, so repeated or concurrent toggles cannot drift the count.
    """
    existing = db.get(model, key)
    if like and existing is None:
        db.add(model(**key))
        try:
            db.flush()
        except IntegrityError:
            # A concurrent request inserted the same like first.
            db.rollback()
    elif not like and existing is not None:
        db.delete(existing)
        db.flush()

    target_column, target_id = next((k, v) for k, v in key.items() if k != "user_id")
    target.likes = db.scalar(
        select(func.count()).select_from(model).where(getattr(model, target_column) == target_id)
    )
    db.commit()
