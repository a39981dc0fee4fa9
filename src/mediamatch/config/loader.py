"""Settings loader.

This module handles:
- Configuration file loading from TOML
- Default configuration file discovery
- Thread-safe cached Settings instance
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

import toml
from pydantic import ValidationError

from mediamatch.config.models.settings import Settings
from mediamatch.shared.errors import (
    ConfigurationError,
    ErrorCode,
    ErrorContext,
)

logger = logging.getLogger(__name__)

HOME_DIR = ".mediamatch"

DEFAULT_CONFIG_PATHS: tuple[Path, ...] = (
    Path("config/config.toml"),
    Path("config.toml"),
    Path.home() / HOME_DIR / "config.toml",
)


class SettingsLoader:
    """Thread-safe cache for the process Settings instance.

    Uses double-checked locking to keep the common path lock free.
    """

    _instance: Settings | None = None
    _lock: threading.RLock = threading.RLock()

    def get_config(self) -> Settings:
        """Get the cached settings instance, loading it if necessary."""
        if self._instance is None:
            with self._lock:
                if self._instance is None:
                    self._instance = load_settings()

        return self._instance

    def reload_config(self) -> Settings:
        """Reload settings from the default configuration files."""
        with self._lock:
            self._instance = load_settings()

        return self._instance


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from a TOML configuration file or the environment.

    Args:
        config_path: Optional path to a TOML file. If None, the default
                    locations are tried in order and the first existing
                    file wins; without any file only defaults and
                    environment variables apply.

    Returns:
        Validated Settings instance

    Raises:
        ConfigurationError: If an explicit file is missing, or a file
                            cannot be parsed or fails validation
    """
    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            raise ConfigurationError(
                code=ErrorCode.CONFIG_MISSING,
                message=f"Configuration file not found: {path}",
                context=ErrorContext(
                    operation="load_settings",
                    additional_data={"config_path": str(path)},
                ),
            )
        return _load_file(path)

    for candidate in DEFAULT_CONFIG_PATHS:
        if candidate.exists():
            return _load_file(candidate)

    logger.debug("No configuration file found, using defaults")
    try:
        return Settings()
    except ValidationError as e:
        raise _invalid_config(e, "environment") from e


def _load_file(path: Path) -> Settings:
    try:
        return Settings.from_toml_file(path)
    except toml.TomlDecodeError as e:
        raise ConfigurationError(
            code=ErrorCode.CONFIG_INVALID,
            message=f"Malformed configuration file {path}: {e}",
            context=ErrorContext(
                operation="load_settings",
                additional_data={"config_path": str(path)},
            ),
            original_error=e,
        ) from e
    except ValidationError as e:
        raise _invalid_config(e, str(path)) from e
    except OSError as e:
        raise ConfigurationError(
            code=ErrorCode.CONFIG_ERROR,
            message=f"Failed to read configuration file {path}: {e}",
            context=ErrorContext(
                operation="load_settings",
                additional_data={"config_path": str(path)},
            ),
            original_error=e,
        ) from e


def _invalid_config(error: ValidationError, source: str) -> ConfigurationError:
    return ConfigurationError(
        code=ErrorCode.CONFIG_INVALID,
        message=f"Invalid configuration ({error.error_count()} errors)",
        context=ErrorContext(
            operation="load_settings",
            additional_data={"source": source},
        ),
        original_error=error,
    )


_loader = SettingsLoader()


def get_config() -> Settings:
    """Get the cached settings instance (thread-safe)."""
    return _loader.get_config()


def reload_config() -> Settings:
    """Reload the cached settings instance from configuration files."""
    return _loader.reload_config()
