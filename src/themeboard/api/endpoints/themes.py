"""Theme endpoints for the Themeboard API."""

import logging

from fastapi import APIRouter

from themeboard.api.dependencies import SessionDep
from themeboard.schemas.post import ThemeResponse
from themeboard.services.theme_service import get_all_themes

router = APIRouter(prefix="/themes", tags=["themes"])
logger = logging.getLogger(__name__)


@router.get("", response_model=list[ThemeResponse])
def list_themes(db: SessionDep) -> list[ThemeResponse]:
    """List every theme a post can be filed under."""
    logger.info("Responding to GET /themes")
    return get_all_themes(db)
