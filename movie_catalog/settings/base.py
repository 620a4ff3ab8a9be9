"""Base configuration settings.

Contains foundational settings for paths, logging, and ingestion.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# =============================================================================
# PROJECT ROOT DETECTION
# =============================================================================

_PROJECT_ROOT = Path(__file__).parent.parent.parent


def get_project_root() -> Path:
    """Get project root directory."""
    return _PROJECT_ROOT


# =============================================================================
# LOGGING SETTINGS
# =============================================================================


class LoggingSettings(BaseSettings):
    """Logging configuration.

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_dir: Log files directory, relative to the project root.
    """

    level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_dir: str = Field(default="logs", alias="LOG_DIR")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid LOG_LEVEL. Valid: {valid_levels}")
        return v_upper

    @property
    def logs_dir(self) -> Path:
        """Absolute log directory."""
        path = Path(self.log_dir)
        return path if path.is_absolute() else _PROJECT_ROOT / path


# =============================================================================
# INGESTION SETTINGS
# =============================================================================


class IngestionSettings(BaseSettings):
    """Ingestion pipeline configuration.

    Attributes:
        load_on_start: Run the pipeline when the API process starts.
        max_workers: Concurrent title fetches (1 keeps fetching sequential).
    """

    load_on_start: bool = Field(default=False, alias="LOAD_ON_START")
    max_workers: int = Field(default=1, ge=1, le=16, alias="INGEST_MAX_WORKERS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
