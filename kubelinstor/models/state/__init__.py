"""Plugin state: settings model and its loader."""

from kubelinstor.models.state.config_manager import ConfigManager
from kubelinstor.models.state.plugin_settings import (
    ConfigError,
    ConfigLoadError,
    PluginSettings,
)

__all__ = ["ConfigError", "ConfigLoadError", "ConfigManager", "PluginSettings"]
