"""Application configuration."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Healarr Notification API"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./healarr.db",
        description="SQLAlchemy async database URL (sqlite+aiosqlite or postgresql+asyncpg).",
    )
    database_pool_size: int = 5
    database_max_overflow: int = 10
    # Create tables on startup instead of relying on Alembic (tests, throwaway setups)
    database_create_tables: bool = False

    # Security - Encryption
    # Secret used to derive the AES-256 key for notification credentials.
    # Leave empty to store credentials as plaintext (pre-encryption installs).
    healarr_encryption_key: str = ""

    # Timeouts (seconds)
    store_timeout_seconds: float = Field(default=10.0, gt=0)
    http_timeout_seconds: float = Field(default=30.0, gt=0)

    # Delivery log retention
    notification_log_retention_days: int = Field(default=7, ge=1)
    notification_log_max_entries: int = Field(default=100, ge=1)
    notification_log_sweep_interval_seconds: float = Field(default=3600.0, gt=0)

    # Event bus
    subscriber_queue_size: int = Field(default=100, ge=1)

    # Transport
    shoutrrr_binary: str = "shoutrrr"

    # Outbound identity
    notification_source: str = "healarr"
    user_agent: str = "Healarr/1.0"

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Validate settings for security requirements."""
        if self.environment == "production" and self.debug:
            raise ValueError(
                "DEBUG mode cannot be enabled in production environment. "
                "This would expose detailed error messages and credentials in logs."
            )

        if not self.database_url.startswith(("sqlite+aiosqlite://", "postgresql+asyncpg://")):
            raise ValueError(
                "DATABASE_URL must use an async driver "
                "('sqlite+aiosqlite://' or 'postgresql+asyncpg://')"
            )

        return self

    @property
    def encryption_enabled(self) -> bool:
        """Whether notification credentials are encrypted at rest."""
        return bool(self.healarr_encryption_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
