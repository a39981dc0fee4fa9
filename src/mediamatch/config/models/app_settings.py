"""Application and logging configuration models.

This module contains configuration models for application-level
defaults and logging configuration.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class AppSettings(BaseModel):
    """Application configuration.

    Defaults applied to lookups when the caller does not pass them.
    """

    locale: str = Field(default="en", min_length=2, description="Metadata locale")
    sort_order: Literal["aired", "dvd", "absolute"] = Field(
        default="aired",
        description="Episode ordering requested from the episode provider",
    )


class LoggingSettings(BaseModel):
    """Logging configuration.

    This class manages log level, optional JSON log file and
    console rendering.
    """

    level: str = Field(default="INFO", description="Logging level")
    file: str | None = Field(default=None, description="Optional JSON log file path")
    rich_console: bool = Field(default=True, description="Render console logs with rich")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Normalize and validate the level name."""
        level = v.upper()
        if level not in _LOG_LEVELS:
            msg = f"Invalid log level: {v}. Must be one of {', '.join(_LOG_LEVELS)}"
            raise ValueError(msg)
        return level


__all__ = [
    "AppSettings",
    "LoggingSettings",
]
