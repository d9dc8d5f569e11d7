"""Configuration models for questvault.

This module contains the Pydantic models for config file envelopes and
application settings.
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator


class ConfigEnvelope(BaseModel):
    """On-disk shape of every config file: ``{"version": ..., "data": {...}}``."""

    version: str | None
    data: dict[str, Any]


class LoggingConfig(BaseModel):
    """Structlog-based logging configuration."""

    level: str = "INFO"
    json_logs: bool | None = None  # None = auto-detect based on environment
    include_caller: bool = False  # Include file:line info (useful for debugging)
    extra_fields: dict[str, str] = Field(default_factory=lambda: {"service": "questvault"})
    max_file_bytes: int = 1_000_000
    backup_count: int = 3

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level '{v}'")
        return level


class AppSettings(BaseModel):
    """General application settings stored in ``settings/app``."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    auto_save: bool = True
    auto_save_interval_minutes: int = 5
    backup_old_saves: bool = True
