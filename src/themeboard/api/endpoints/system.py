"""Health check endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter

router = APIRouter(tags=["system"])
logger = logging.getLogger(__name__)


@router.get("/")
async def health_check() -> dict[str, str]:
    """Report that the service is up."""
    logger.info("Health check")
    return {"message": "This server is healthy :D"}
