"""CLI context shared between the callback and the commands."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from mediamatch.config.models.settings import Settings


class LogLevel(str, Enum):
    """Log level choices accepted on the command line."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class CliContext:
    """Options parsed by the main callback.

    Attributes:
        settings: Loaded settings
        config_path: Configuration file given with ``--config``
        json_output: Print machine-readable JSON
    """

    settings: Settings
    config_path: Path | None = None
    json_output: bool = False
