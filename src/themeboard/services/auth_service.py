"""Account registration, login and session lifecycle."""
from __future__ import annotations

import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from themeboard.core import security
from themeboard.core.errors import AuthenticationError, ConflictError
from themeboard.core.settings import Settings
from themeboard.db.time import as_utc, utcnow
from themeboard.models import AuthSession, User
from themeboard.schemas.user import AuthResponse

__all__ = [
    "register_user",
    "login_user",
    "logout_user",
    "resolve_session",
    "verify_token",
]

logger = logging.getLogger(__name__)

_BAD_CREDENTIALS = "Invalid username or password"


def _open_session(db: Session, user: User, settings: Settings) -> AuthResponse:
    token, jti, expired_by = security.create_session_token(user.id, settings)
    db.add(AuthSession(jti=jti, user_id=user.id, expired_by=expired_by))
    db.commit()
    return AuthResponse(token=token, expired_by=expired_by, user_id=user.id)


def register_user(
    db: Session,
    settings: Settings,
    username: str,
    email: str,
    password: str,
) -> AuthResponse:
    """Create an account and log it in.

    Raises:
        ConflictError: If the username or email is already registered.
    """
    existing = db.query(User).filter(
        or_(User.username == username, User.email == email)
    ).first()
    if existing is not None:
        field = "Username" if existing.username == username else "Email"
        raise ConflictError(f"{field} is already registered")

    user = User(
        username=username,
        email=email,
        password_hash=security.hash_password(password, settings.password_hash_iterations),
    )
    db.add(user)
    try:
        db.flush()
    except IntegrityError as err:
        # Lost a race with a concurrent registration of the same name.
        db.rollback()
        raise ConflictError("Username or email is already registered") from err

    logger.info("Registered user %s", user.id)
    return _open_session(db, user, settings)


def login_user(db: Session, settings: Settings, username: str, password: str) -> AuthResponse:
    """Verify credentials and issue a new session.

    Unknown usernames and wrong passwords fail identically.
    """
    user = db.query(User).filter(User.username == username).first()
    if user is None or not security.verify_password(password, user.password_hash):
        raise AuthenticationError(_BAD_CREDENTIALS)
    return _open_session(db, user, settings)


def resolve_session(db: Session, settings: Settings, token: str) -> AuthSession | None:
    """Return the live session behind ``token``, or ``None`` if it is not valid now."""
    decoded = security.decode_session_token(token, settings)
    if decoded is None:
        return None
    user_id, jti = decoded
    session = db.get(AuthSession, jti)
    if session is None or session.user_id != user_id:
        return None
    if utcnow() >= as_utc(session.expired_by):
        return None
    return session


def logout_user(db: Session, settings: Settings, token: str) -> None:
    """Revoke ``token``.

    Raises:
        AuthenticationError: If the token is not a live session.
    """
    session = resolve_session(db, settings, token)
    if session is None:
        raise AuthenticationError()
    db.delete(session)
    db.commit()
    logger.info("Revoked session for user %s", session.user_id)


def verify_token(
    db: Session,
    settings: Settings,
    authorization: str | None,
    claimed_id: str | None,
) -> bool:
    """Return True only if the bearer token is live and bound to ``claimed_id``.

    Never raises; any missing or bad input yields False.
    """
    token = security.parse_bearer(authorization)
    if token is None or not claimed_id:
        return False
    try:
        session = resolve_session(db, settings, token)
    except SQLAlchemyError:
        logger.warning("Session lookup failed during optional token check", exc_info=True)
        return False
    return session is not None and session.user_id == claimed_id
