"""Configuration models package."""

from __future__ import annotations

from .app_settings import AppSettings, LoggingSettings
from .matching_settings import (
    DetectionSettings,
    EpisodeMatchingSettings,
    SelectionSettings,
)
from .performance_settings import PerformanceSettings

__all__ = [
    "AppSettings",
    "DetectionSettings",
    "EpisodeMatchingSettings",
    "LoggingSettings",
    "PerformanceSettings",
    "SelectionSettings",
]
