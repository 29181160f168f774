"""Configuration service for Pomodoro CLI.

This module provides the ConfigService class, the single source of truth for
configuration. It handles:

- Loading and saving config.json
- Dotted-key access (``timer.work_minutes``) with validation
- Resetting all or part of the configuration to defaults
- Building the objects the timer needs from the stored values
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, ValidationError

from pomodoro_cli.models.config_models import AppConfig
from pomodoro_cli.models.focus.settings import TimerSettings

logger = logging.getLogger(__name__)

_MISSING = object()


class ConfigError(RuntimeError):
    """The config file could not be read or written."""


class ConfigService:
    """Service for loading, editing and saving the application configuration."""

    def __init__(self):
        """Initialize the config service."""

        self.config_dir = Path(user_config_dir("pomodoro_cli"))
        self.config_path = self.config_dir / "config.json"
        self.data_dir = Path(user_data_dir("pomodoro_cli"))

        # Ensure directories exist
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    @property
    def history_db_path(self) -> Path:
        """SQLite file holding session history."""
        if self.config.history.db_path:
            return Path(self.config.history.db_path).expanduser()
        return self.data_dir / "pomodoro_history.db"

    def load_config(self) -> AppConfig:
        """Load configuration from storage."""
        if self._config is not None:
            return self._config  # Return cached config if already loaded

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # Expected on first run
            logger.info("no config at %s, writing defaults", self.config_path)
            self._config = AppConfig()
            self.save_config()
        except (OSError, ValidationError) as e:
            raise ConfigError(f"Failed to load config: {e}") from e

        return self._config

    def save_config(self) -> None:
        """Save the current configuration to storage."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self.config.model_dump_json(indent=4))
        except OSError as e:
            raise ConfigError(f"Failed to save config: {e}") from e

    def has(self, key: str) -> bool:
        """Whether *key* names a configuration value or section."""
        return self._lookup(self.config, key, missing=_MISSING) is not _MISSING

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key. None if unknown."""
        return self._lookup(self.config, key)

    def set(self, key: str, value: Any) -> Any:
        """Set a configuration value by dot-separated key.

        Returns the stored (validated) value.

        Raises:
            KeyError: If the key does not exist
            ValueError: If the value fails validation
        """
        keys = key.split(".")
        config_dict = self.config.model_dump()

        current = config_dict
        for k in keys[:-1]:
            if not isinstance(current.get(k), dict):
                raise KeyError(key)
            current = current[k]
        target = current.get(keys[-1])
        if keys[-1] not in current or (isinstance(target, dict) and not isinstance(value, dict)):
            raise KeyError(key)

        current[keys[-1]] = value

        try:
            new_config = AppConfig.model_validate(config_dict)
        except ValidationError as e:
            errors = "; ".join(err["msg"] for err in e.errors())
            raise ValueError(f"Invalid value for '{key}': {errors}") from e

        self._config = new_config
        self.save_config()
        logger.info("config %s set to %r", key, self.get(key))
        return self.get(key)

    def reset(self, key: str | None = None) -> None:
        """Reset configuration, or a single key, to defaults.

        Raises:
            KeyError: If the key does not exist
        """
        if key is None:
            self._config = AppConfig()
            self.save_config()
            logger.info("config reset to defaults")
            return

        default_value = self._lookup(AppConfig(), key, missing=_MISSING)
        if default_value is _MISSING:
            raise KeyError(key)
        if isinstance(default_value, BaseModel):
            default_value = default_value.model_dump()
        self.set(key, default_value)

    def timer_settings(self) -> TimerSettings:
        """Timer settings built from the stored configuration."""
        return TimerSettings.from_config(self.config.timer)

    def save_timer_settings(self, settings: TimerSettings) -> None:
        """Persist timer settings edited through the timer's setters."""
        timer = {
            "work_minutes": settings.work_duration // 60,
            "short_break_minutes": settings.short_break_duration // 60,
            "long_break_minutes": settings.long_break_duration // 60,
            "sound_enabled": settings.sound_enabled,
            "notifications_enabled": settings.notifications_enabled,
        }
        config_dict = self.config.model_dump()
        config_dict["timer"] = timer
        try:
            self._config = AppConfig.model_validate(config_dict)
        except ValidationError as e:
            raise ValueError(f"Invalid timer settings: {e}") from e
        self.save_config()

    @staticmethod
    def _lookup(config: AppConfig, key: str, missing: Any = None) -> Any:
        value: Any = config
        for k in key.split("."):
            if not isinstance(value, BaseModel) or k not in type(value).model_fields:
                return missing
            value = getattr(value, k)
        return value


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get the shared ConfigService instance."""
    return ConfigService()
