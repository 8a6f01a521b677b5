"""User and authentication Pydantic schemas."""

from datetime import datetime

from pydantic import EmailStr, Field, field_validator

from .common import CamelModel


def _normalize_username(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Username must not be blank")
    return v


class UserRegister(CamelModel):
    """Schema for creating an account."""

    username: str = Field(..., min_length=1, max_length=64, description="Unique login name")
    email: EmailStr = Field(..., max_length=320, description="Unique contact address")
    password: str = Field(..., min_length=1, max_length=256, description="Plain-text password")

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Reject usernames that are blank once trimmed."""
        return _normalize_username(v)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Store addresses lowercased so uniqueness ignores case."""
        return v.lower()


class UserLogin(CamelModel):
    """Schema for login submissions."""

    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1, max_length=256)

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        return _normalize_username(v)


class AuthResponse(CamelModel):
    """Session issued after a successful register or login."""

    token: str = Field(..., description="Bearer token for the Authorization header")
    expired_by: datetime = Field(..., description="Instant after which the token is rejected")
    user_id: str = Field(..., description="Identifier to send in the id header")
