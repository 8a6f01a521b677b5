"""Password hashing and session token primitives."""
from __future__ import annotations

import hashlib
import hmac
import secrets
import uuid
from datetime import datetime, timedelta

from jose import JWTError, jwt

from themeboard.core.settings import Settings
from themeboard.db.time import utcnow

_HASH_SCHEME = "pbkdf2_sha256"


def hash_password(password: str, iterations: int) -> str:
    """Return a salted PBKDF2-SHA256 hash encoded as ``scheme$iterations$salt$digest``."""
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), bytes.fromhex(salt), iterations
    )
    return f"{_HASH_SCHEME}${iterations}${salt}${digest.hex()}"


def verify_password(password: str, encoded: str) -> bool:
    """Check ``password`` against a hash produced by :func:`hash_password`."""
    try:
        scheme, iterations, salt, expected = encoded.split("$")
        if scheme != _HASH_SCHEME:
            return False
        digest = hashlib.pbkdf2_hmac(
            "sha256", password.encode("utf-8"), bytes.fromhex(salt), int(iterations)
        )
    except ValueError:
        return False
    return hmac.compare_digest(digest.hex(), expected)


def create_session_token(
    user_id: str,
    settings: Settings,
    *,
    now: datetime | None = None,
) -> tuple[str, str, datetime]:
    """Mint a signed session token for ``user_id``.

    Returns:
        ``(token, jti, expired_by)``; the caller persists ``jti`` and
        ``expired_by`` so the token can be revoked.
    """
    issued_at = now or utcnow()
    expired_by = issued_at + timedelta(seconds=settings.session_lifetime_seconds)
    jti = uuid.uuid4().hex
    token = jwt.encode(
        {
            "sub": user_id,
            "jti": jti,
            "iat": int(issued_at.timestamp()),
            "exp": int(expired_by.timestamp()),
        },
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return token, jti, expired_by


def decode_session_token(token: str, settings: Settings) -> tuple[str, str] | None:
    """Return ``(user_id, jti)`` for a well-signed, unexpired token, else ``None``."""
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        return None
    subject = payload.get("sub")
    jti = payload.get("jti")
    if not isinstance(subject, str) or not isinstance(jti, str):
        return None
    return subject, jti


def parse_bearer(authorization: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer <token>`` header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token or " " in token:
        return None
    return token
