"""Application settings and configuration.

This module defines all configuration options for the Themeboard application.
Settings are loaded from environment variables with sensible defaults.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Themeboard", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")

    # Security and authentication
    secret_key: str = Field(alias="SECRET_KEY")
    debug: bool = Field(default=False, alias="DEBUG")

    # Database configuration
    database_url: str = Field(default="sqlite:///./themeboard.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Session token settings
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    session_expire_minutes: int = Field(
        default=60 * 24 * 7,
        alias="SESSION_EXPIRE_MINUTES",
    )
    password_hash_iterations: int = Field(
        default=200_000,
        alias="PASSWORD_HASH_ITERATIONS",
    )

    # Feed and content settings
    posts_page_size: int = Field(default=10, ge=1, le=100, alias="POSTS_PAGE_SIZE")
    default_themes: list[str] = Field(
        default=["General", "Confessions", "Questions", "Rants"],
        alias="DEFAULT_THEMES",
    )

    # CORS configuration; the API is open to all origins by default
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="text", alias="LOG_FORMAT")

    # Server
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3030, alias="PORT")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def session_lifetime_seconds(self) -> int:
        """Return the session lifetime in seconds."""
        return self.session_expire_minutes * 60


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance, loading it on first use."""
    return Settings()  # type: ignore[call-arg]
