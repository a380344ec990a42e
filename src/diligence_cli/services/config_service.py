"""Configuration service for managing Diligence CLI configuration.

This module provides the ConfigService class, the single source of truth for
configuration management. It handles:

- Loading and saving config.json
- Dot-separated key access (``recurrence.horizon_days``)
- Resetting single keys or the whole file to defaults
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, ValidationError

from diligence_cli.adapters.sqlite import SqliteTaskRepository
from diligence_cli.models.config_models import AppConfig
from diligence_cli.repositories import TaskRepository


class ConfigService:
    """Service for managing application configuration."""

    def __init__(self):
        """Initialize the config service."""

        self.config_dir = Path(user_config_dir("diligence_cli"))
        self.config_path = self.config_dir / "config.json"
        self.data_dir = Path(user_data_dir("diligence_cli"))

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
    def db_path(self) -> str:
        """Database path from config, falling back to the data directory."""
        return self.config.storage.db_path or str(self.data_dir / "diligence.db")

    def load_config(self) -> AppConfig:
        """Load configuration from storage.

        Raises:
            RuntimeError: If the config file exists but cannot be parsed
        """
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # First run
            self._config = AppConfig()
            self.save_config()
        except Exception as e:
            raise RuntimeError(f"Failed to load config: {e}") from e

        return self._config

    def save_config(self) -> None:
        """Save the current configuration to storage."""
        if self._config is None:
            raise RuntimeError("No configuration to save")

        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self._config.model_dump_json(indent=4))
            self.config_path.chmod(0o600)
        except Exception as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key.

        Raises:
            KeyError: If the key does not exist
        """
        return _lookup(self.config, key)

    def set(self, key: str, value: Any) -> Any:
        """Set a configuration value by dot-separated key.

        The value is coerced by the config models, so ``"45"`` becomes ``45``
        for integer settings.

        Raises:
            KeyError: If the key does not exist
            ValueError: If the value is rejected by validation
        """
        _lookup(self.config, key)

        keys = key.split(".")
        config_dict = self.config.model_dump()
        current = config_dict
        for k in keys[:-1]:
            current = current[k]
        current[keys[-1]] = value

        try:
            new_config = AppConfig.model_validate(config_dict)
        except ValidationError as e:
            message = e.errors()[0]["msg"]
            raise ValueError(f"Invalid value for '{key}': {message}") from e

        self._config = new_config
        self.save_config()
        return _lookup(new_config, key)

    def reset(self, key: str | None = None) -> None:
        """Reset one key, or the whole configuration, to defaults."""
        if key is None:
            self._config = AppConfig()
            self.save_config()
            return
        self.set(key, _lookup(AppConfig(), key))


def _lookup(config: AppConfig, key: str) -> Any:
    value: Any = config
    for k in key.split("."):
        if not isinstance(value, BaseModel) or k not in type(value).model_fields:
            raise KeyError(f"Unknown configuration key: {key}")
        value = getattr(value, k)
    return value


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    config_service = ConfigService()
    config_service.load_config()
    return config_service


def get_task_repository() -> TaskRepository:
    """Get the task repository for the configured database."""
    return SqliteTaskRepository(get_config_service().db_path)
