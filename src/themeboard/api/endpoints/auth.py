"""Authentication endpoints for the Themeboard API."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from themeboard.api.dependencies import (
    SessionDep,
    SettingsDep,
    VerifiedIdentityDep,
    openapi_for,
    validate_request,
)
from themeboard.schemas.common import EmptyResponse
from themeboard.schemas.user import AuthResponse, UserLogin, UserRegister
from themeboard.services.auth_service import login_user, logout_user, register_user

router = APIRouter(prefix="/auth", tags=["authentication"])
logger = logging.getLogger(__name__)

RegisterBody = Annotated[UserRegister, Depends(validate_request(UserRegister, "body"))]
LoginBody = Annotated[UserLogin, Depends(validate_request(UserLogin, "body"))]


@router.post(
    "/register",
    response_model=AuthResponse,
    openapi_extra=openapi_for(UserRegister, "body"),
)
def register(payload: RegisterBody, db: SessionDep, settings: SettingsDep) -> AuthResponse:
    """Create an account and return its first session."""
    logger.info("Responding to POST /auth/register")
    return register_user(db, settings, payload.username, payload.email, payload.password)


@router.post(
    "/login",
    response_model=AuthResponse,
    openapi_extra=openapi_for(UserLogin, "body"),
)
def login(payload: LoginBody, db: SessionDep, settings: SettingsDep) -> AuthResponse:
    """Exchange a username and password for a session token."""
    logger.info("Responding to POST /auth/login")
    return login_user(db, settings, payload.username, payload.password)


@router.post("/logout", response_model=EmptyResponse)
def logout(
    identity: VerifiedIdentityDep,
    db: SessionDep,
    settings: SettingsDep,
) -> EmptyResponse:
    """Revoke the session token used for this request."""
    logger.info("Responding to POST /auth/logout")
    logout_user(db, settings, identity.token)
    return EmptyResponse()
