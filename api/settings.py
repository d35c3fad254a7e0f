"""
Application settings using pydantic-settings for type-safe configuration.

All environment variables are centralized here with proper typing, validation,
and defaults suitable for local development. Settings are loaded once and cached.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Production values should be set via environment variables or a .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # === Data source ===
    data_source: str = Field(
        default="memory",
        description="Where trips are read from: 'memory' (in-process) or 'pocketbase'",
    )
    strict_references: bool = Field(
        default=False,
        description="Fail analysis on constraints naming unknown people instead of excluding them",
    )

    # === PocketBase Configuration ===
    pocketbase_url: str = Field(
        default="http://127.0.0.1:8090",
        description="PocketBase server URL",
    )
    pocketbase_admin_email: str = Field(
        default="admin@trip.local",
        description="PocketBase admin email for API authentication",
    )
    pocketbase_admin_password: str = Field(
        default="",
        description="PocketBase admin password (required when data_source=pocketbase)",
    )

    # === Optimizer ===
    solver_url: str = Field(
        default="",
        description="Base URL of the room-assignment optimizer; empty disables solving",
    )
    solver_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout for a single optimizer call",
    )

    # === CORS Configuration ===
    # str for env var parsing, converted to a list via property
    allowed_origins_str: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        alias="ALLOWED_ORIGINS",
        description="Allowed CORS origins (comma-separated)",
    )

    # === Logging ===
    log_level: str = Field(
        default="INFO",
        description="TRACE, DEBUG, INFO, WARNING or ERROR",
    )

    @property
    def allowed_origins(self) -> list[str]:
        """Parse comma-separated origins string into list."""
        return [origin.strip() for origin in self.allowed_origins_str.split(",") if origin.strip()]

    @field_validator("data_source", mode="after")
    @classmethod
    def validate_data_source(cls, v: str) -> str:
        v = v.lower()
        if v not in ("memory", "pocketbase"):
            raise ValueError(f"Invalid DATA_SOURCE: {v}. Must be 'memory' or 'pocketbase'")
        return v

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ("TRACE", "DEBUG", "INFO", "WARNING", "ERROR"):
            raise ValueError(f"Invalid LOG_LEVEL: {v}")
        return v

    @field_validator("pocketbase_admin_password", mode="after")
    @classmethod
    def warn_on_empty_password(cls, v: str) -> str:
        if v in {"password", "admin", "123456", ""}:
            logger.warning(
                "POCKETBASE_ADMIN_PASSWORD is not set or uses an insecure default. "
                "Set a strong password in your .env file before using the pocketbase data source."
            )
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are loaded once and cached for the lifetime of the application.
    """
    return Settings()
