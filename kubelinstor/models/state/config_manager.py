"""Configuration loading for kubectl-linstor.

Settings come from an optional YAML file, overlaid with ``KUBECTL_LINSTOR_*``
environment variables, and are validated by :class:`PluginSettings`.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from kubelinstor.constants.values import APP_NAME, ENV_PREFIX
from kubelinstor.models.state.plugin_settings import (
    ConfigError,
    ConfigLoadError,
    PluginSettings,
)

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = f"{ENV_PREFIX}CONFIG"

# Settings that may be overridden from the environment.
_ENV_FIELDS: tuple[str, ...] = (
    "kubectl_binary",
    "context",
    "remote_command",
    "endpoint_kind",
    "controller_selector",
    "log_level",
)
_ENV_ALIASES: dict[str, str] = {"kubectl_binary": f"{ENV_PREFIX}KUBECTL"}


class ConfigManager:
    """Loads :class:`PluginSettings` from file and environment."""

    @staticmethod
    def default_path(environ: Mapping[str, str] | None = None) -> Path:
        """Return the configuration file location."""
        env = os.environ if environ is None else environ
        override = env.get(CONFIG_PATH_ENV)
        if override:
            return Path(override).expanduser()
        config_home = env.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
        return Path(config_home) / APP_NAME / "config.yaml"

    @staticmethod
    def env_var(field_name: str) -> str:
        """Return the environment variable overriding ``field_name``."""
        return _ENV_ALIASES.get(field_name, f"{ENV_PREFIX}{field_name.upper()}")

    @classmethod
    def _read_file(cls, path: Path) -> dict[str, Any]:
        if not path.exists():
            return {}
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigLoadError(f"failed to read config file {path}: {exc}") from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigLoadError(f"config file {path} must contain a mapping")
        return data

    @classmethod
    def _read_env(cls, environ: Mapping[str, str]) -> dict[str, str]:
        values: dict[str, str] = {}
        for field_name in _ENV_FIELDS:
            value = environ.get(cls.env_var(field_name))
            if value:
                values[field_name] = value
        return values

    @classmethod
    def load(
        cls,
        path: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> PluginSettings:
        """Load settings, environment taking precedence over the file.

        Raises:
            ConfigLoadError: If the file is unreadable or values are invalid.
        """
        env = os.environ if environ is None else environ
        config_path = path if path is not None else cls.default_path(env)
        data = cls._read_file(config_path)
        data.update(cls._read_env(env))
        try:
            settings = PluginSettings.model_validate(data)
        except ValidationError as exc:
            raise ConfigLoadError(f"invalid configuration: {exc}") from exc
        logger.debug("Loaded settings from %s: %s", config_path, settings)
        return settings


__all__ = ["ConfigError", "ConfigLoadError", "ConfigManager", "PluginSettings"]
