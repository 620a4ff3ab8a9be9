"""Centralized configuration for the movie catalog.

All configuration values are sourced from environment variables
(optionally through a ``.env`` file). Every setting has a safe default
except the source API key, which ingestion checks before running.

Usage:
    from movie_catalog.settings import settings

    settings.source.api_key
    settings.database.sync_url
"""

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from movie_catalog.settings.api import APISettings, CacheSettings, CORSSettings
from movie_catalog.settings.base import IngestionSettings, LoggingSettings
from movie_catalog.settings.database import DatabaseSettings
from movie_catalog.settings.sources import MoviesDatabaseSettings

__all__ = [
    "Settings",
    "settings",
    "LoggingSettings",
    "IngestionSettings",
    "DatabaseSettings",
    "APISettings",
    "CORSSettings",
    "CacheSettings",
    "MoviesDatabaseSettings",
    "get_masked_settings",
]


# =============================================================================
# GLOBAL SETTINGS
# =============================================================================


class Settings(BaseSettings):
    """Global application settings.

    Aggregates all configuration sections into a single object.
    Access via the singleton: `from movie_catalog.settings import settings`
    """

    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    ingestion: IngestionSettings = Field(default_factory=IngestionSettings)
    source: MoviesDatabaseSettings = Field(default_factory=MoviesDatabaseSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    api: APISettings = Field(default_factory=APISettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        valid_envs = {"development", "production", "test"}
        v_lower = v.lower()
        if v_lower not in valid_envs:
            raise ValueError(f"Invalid ENVIRONMENT. Valid: {valid_envs}")
        return v_lower


# =============================================================================
# SINGLETON INSTANCE
# =============================================================================

settings = Settings()


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def get_masked_settings() -> dict[str, Any]:
    """Return settings dict with sensitive values masked.

    Returns:
        Configuration dictionary safe for logging.
    """
    config = settings.model_dump()
    mask = "***MASKED***"

    secrets = [
        ("source", "api_key"),
        ("database", "password"),
        ("database", "url"),
    ]

    for section, key in secrets:
        if section in config and key in config[section] and config[section][key]:
            config[section][key] = mask

    return config
