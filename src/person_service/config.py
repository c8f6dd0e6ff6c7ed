"""Pydantic-based runtime settings.

Loads from ``PERSON_SERVICE_*`` environment variables (with optional .env file).
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Settings(BaseSettings):
    """All configuration for the person service, validated at startup."""

    model_config = SettingsConfigDict(
        env_prefix="PERSON_SERVICE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Database ---
    database_url: str = Field(
        default="sqlite+aiosqlite:///./persons.db",
        description="SQLAlchemy async database URL",
    )
    echo_sql: bool = Field(default=False, description="Log every SQL statement")
    seed_data: bool = Field(
        default=False,
        description="Load the demo dataset on startup when the table is empty",
    )

    # --- Logging ---
    log_level: str = Field(default="INFO", description="Root log level")

    # --- Paging ---
    default_page_size: int = Field(default=10, ge=1, description="Page size when none is given")
    max_page_size: int = Field(default=100, ge=1, description="Upper bound for requested page size")

    # --- Filtering ---
    strict_filters: bool = Field(
        default=False,
        description="Reject requests with invalid filters instead of ignoring them",
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @model_validator(mode="after")
    def _page_bounds(self) -> Settings:
        if self.default_page_size > self.max_page_size:
            raise ValueError("default_page_size cannot exceed max_page_size")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton Settings (cached after first call)."""
    return Settings()


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    logging.getLogger().setLevel(settings.log_level)
