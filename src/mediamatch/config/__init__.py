"""mediamatch Configuration Module

This module provides unified access to configuration models and settings
management:
- Settings: Main configuration facade
- Loader functions: get_config, load_settings, reload_config
- Domain models: App, Logging, Selection, Detection, EpisodeMatching, Performance
"""

from __future__ import annotations

from .models.settings import Settings

from .models import (
    AppSettings,
    DetectionSettings,
    EpisodeMatchingSettings,
    LoggingSettings,
    PerformanceSettings,
    SelectionSettings,
)

from .loader import (
    get_config,
    load_settings,
    reload_config,
)

__all__ = [
    "AppSettings",
    "DetectionSettings",
    "EpisodeMatchingSettings",
    "LoggingSettings",
    "PerformanceSettings",
    "SelectionSettings",
    "Settings",
    "get_config",
    "load_settings",
    "reload_config",
]
