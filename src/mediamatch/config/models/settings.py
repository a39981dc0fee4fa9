"""mediamatch Settings Configuration Model.

Main Settings class that consolidates all configuration domains.
"""

from __future__ import annotations

import logging
from pathlib import Path

import toml
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from mediamatch.config.models.app_settings import AppSettings, LoggingSettings
from mediamatch.config.models.matching_settings import (
    DetectionSettings,
    EpisodeMatchingSettings,
    SelectionSettings,
)
from mediamatch.config.models.performance_settings import PerformanceSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Settings facade providing unified configuration access.

    Values come from keyword arguments (usually a TOML file) with
    ``MEDIAMATCH_`` environment variables taking precedence, e.g.
    ``MEDIAMATCH_SELECTION__MAX_RESULTS=3``.
    """

    model_config = SettingsConfigDict(
        env_prefix="MEDIAMATCH_",
        env_nested_delimiter="__",
        env_ignore_empty=True,
        extra="ignore",
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    selection: SelectionSettings = Field(default_factory=SelectionSettings)
    detection: DetectionSettings = Field(default_factory=DetectionSettings)
    episode_matching: EpisodeMatchingSettings = Field(default_factory=EpisodeMatchingSettings)
    performance: PerformanceSettings = Field(default_factory=PerformanceSettings)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Environment overrides file values passed as keyword arguments
        return env_settings, init_settings

    @classmethod
    def from_toml_file(cls, file_path: str | Path) -> Settings:
        """Load settings from TOML file with environment variable overrides."""

        file_path = Path(file_path)
        if not file_path.exists():
            msg = f"Configuration file not found: {file_path}"
            raise FileNotFoundError(msg)

        raw_config = toml.load(file_path)
        logger.debug("Loaded configuration from %s", file_path)
        return cls(**raw_config)

    def to_toml_file(self, file_path: str | Path) -> None:
        """Save settings to TOML file."""

        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        config_dict = self.model_dump(exclude_none=True, exclude_unset=False)

        with open(file_path, "w", encoding="utf-8") as f:
            toml.dump(config_dict, f)
