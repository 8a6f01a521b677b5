"""Request gates shared by the API routes.

``verify_session`` is the hard gate: it either confirms the caller's identity
or stops the request with a 401. ``optional_identity`` is the soft check built
on :func:`themeboard.services.auth_service.verify_token`; it never blocks.
``validate_request`` checks a body or query against a schema. Handlers obtain
a trusted user id only through ``VerifiedIdentity`` or ``optional_identity``.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Annotated, Literal, TypeVar

from fastapi import Depends, Header, Request
from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from themeboard.core import security
from themeboard.core.errors import AuthenticationError, RequestValidationFailed
from themeboard.core.settings import Settings
from themeboard.db.session import get_db
from themeboard.services.auth_service import resolve_session, verify_token

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def get_app_settings(request: Request) -> Settings:
    """Return the settings the running application was built with."""
    return request.app.state.settings


SessionDep = Annotated[Session, Depends(get_db)]
SettingsDep = Annotated[Settings, Depends(get_app_settings)]


@dataclass(frozen=True)
class VerifiedIdentity:
    """Caller whose bearer token is live and bound to the claimed ``id`` header."""

    user_id: str
    token: str


def verify_session(
    request: Request,
    db: SessionDep,
    settings: SettingsDep,
    authorization: Annotated[str | None, Header()] = None,
    claimed_id: Annotated[str | None, Header(alias="id")] = None,
) -> VerifiedIdentity:
    """Confirm the caller or fail with a generic authentication error.

    Raises:
        AuthenticationError: If the header is missing or malformed, the token
            is unknown, expired or revoked, or the ``id`` header does not
            match the token's user.
    """
    token = security.parse_bearer(authorization)
    if token is None:
        raise AuthenticationError()

    session = resolve_session(db, settings, token)
    if session is None or session.user_id != claimed_id:
        logger.info(
            "Rejected session on %s %s",
            request.method,
            request.url.path,
            extra={"user_id": claimed_id, "method": request.method, "path": request.url.path},
        )
        raise AuthenticationError()

    request.state.user_id = session.user_id
    return VerifiedIdentity(user_id=session.user_id, token=token)


def optional_identity(
    db: SessionDep,
    settings: SettingsDep,
    authorization: Annotated[str | None, Header()] = None,
    claimed_id: Annotated[str | None, Header(alias="id")] = None,
) -> str | None:
    """Return the confirmed user id, or ``None`` for anonymous callers."""
    if verify_token(db, settings, authorization, claimed_id):
        return claimed_id
    return None


VerifiedIdentityDep = Annotated[VerifiedIdentity, Depends(verify_session)]
OptionalIdentityDep = Annotated[str | None, Depends(optional_identity)]


def _format_errors(err: ValidationError) -> list[dict[str, str]]:
    return [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in err.errors()
    ]


def validate_request(
    schema: type[ModelT],
    part: Literal["body", "query"],
) -> Callable[[Request], Awaitable[ModelT]]:
    """Build a dependency that validates ``part`` of the request against ``schema``.

    The validated model, with values coerced to their declared types, is
    what the handler receives.
    """

    async def _validate(request: Request) -> ModelT:
        if part == "query":
            raw: object = dict(request.query_params)
        else:
            body = await request.body()
            try:
                raw = json.loads(body) if body else {}
            except ValueError as err:
                raise RequestValidationFailed(
                    [{"field": "body", "message": "Malformed JSON body", "type": "json_invalid"}]
                ) from err
        try:
            return schema.model_validate(raw)
        except ValidationError as err:
            raise RequestValidationFailed(_format_errors(err)) from err

    _validate.__name__ = f"validate_{schema.__name__}_{part}"
    return _validate


def openapi_for(schema: type[BaseModel], part: Literal["body", "query"]) -> dict:
    """OpenAPI fragment describing what ``validate_request(schema, part)`` reads.

    FastAPI cannot see inside that dependency, so routes pass this as
    ``openapi_extra`` to document the expected body or query parameters.
    """
    json_schema = schema.model_json_schema(by_alias=True)
    if part == "query":
        required = set(json_schema.get("required", []))
        return {
            "parameters": [
                {"name": name, "in": "query", "required": name in required, "schema": prop}
                for name, prop in json_schema.get("properties", {}).items()
            ]
        }
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": json_schema}},
        }
    }
