"""Configuration management for Campus Events.

This module handles application configuration using Pydantic settings.
Configuration can be loaded from environment variables or .env files.

Variable names carry no prefix (OPENAI_API_KEY, SHEET_ID, REFRESH_TOKEN, ...).
"""

from functools import lru_cache
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support.

    Credentials are optional: a missing key only fails the
    external call that needs it, never process startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # OpenAI Configuration
    openai_api_key: str = Field(
        default="",
        description="API key for the structured-generation service",
    )
    openai_model: str = Field(
        default="gpt-4o-mini",
        description="Model identifier used for event classification",
    )
    openai_timeout: float = Field(
        default=30.0,
        description="Timeout for a single classification request in seconds",
    )

    # Google Sheets Configuration
    google_client_email: str = Field(
        default="",
        description="Service account email used to read the sheet",
    )
    google_private_key: str = Field(
        default="",
        description="Service account private key (PEM, literal \\n allowed)",
    )
    google_service_account_file: Path | None = Field(
        default=None,
        description="Optional service account JSON file; takes precedence over email/key",
    )
    sheet_id: str = Field(
        default="",
        description="Spreadsheet identifier",
    )
    sheet_range: str = Field(
        default="Events!A2:G",
        description="A1 range holding the event rows",
    )

    # Refresh Configuration
    refresh_token: str | None = Field(
        default=None,
        description="Shared secret required by POST /api/refresh when set",
    )
    max_events: int | None = Field(
        default=None,
        ge=0,
        description="Maximum number of rows classified per refresh (default: all)",
    )

    # Classifier retry policy
    classifier_max_retries: int = Field(
        default=2,
        ge=0,
        description="Retries after the first remote attempt before falling back",
    )
    classifier_initial_delay: float = Field(
        default=1.5,
        ge=0.0,
        description="Delay before the first retry in seconds",
    )
    classifier_backoff: float = Field(
        default=2.0,
        ge=1.0,
        description="Multiplier applied to the delay after each retry",
    )

    # Server Configuration
    host: str = Field(default="0.0.0.0", description="Listen address")
    port: int = Field(default=3000, description="Listen port")
    static_dir: Path = Field(
        default=Path("public"),
        description="Directory of static assets served at /",
    )
    timezone: str = Field(
        default="America/Los_Angeles",
        description="IANA timezone campus dates are interpreted in",
    )

    # Application Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    @field_validator("refresh_token", "max_events", "google_service_account_file", mode="before")
    @classmethod
    def _blank_as_unset(cls, v: object) -> object:
        # `MAX_EVENTS=` in a .env file means "not configured".
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown timezone: {v!r}") from exc
        return v

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @property
    def decoded_private_key(self) -> str:
        """Private key with escaped newlines restored."""
        return self.google_private_key.replace("\\n", "\n")


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Returns:
        Settings: Application settings instance.
    """
    return Settings()
