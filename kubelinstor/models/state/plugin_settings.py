"""Plugin settings models."""

from pydantic import BaseModel, ConfigDict, field_validator

from kubelinstor.constants.defaults import (
    CONTROLLER_SELECTOR_DEFAULT,
    KUBECTL_BINARY_DEFAULT,
    LEGACY_CONTROLLER_SUFFIX_DEFAULT,
    LEGACY_POD_SELECTOR_DEFAULT,
    LOG_LEVEL_DEFAULT,
    REMOTE_COMMAND_DEFAULT,
)
from kubelinstor.constants.enums import EndpointKind
from kubelinstor.models.errors import KubectlLinstorError

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class PluginSettings(BaseModel):
    """Plugin settings model with validation."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    # kubectl invocation
    kubectl_binary: str = KUBECTL_BINARY_DEFAULT
    context: str | None = None
    remote_command: str = REMOTE_COMMAND_DEFAULT

    # Controller discovery
    endpoint_kind: EndpointKind = EndpointKind.DEPLOYMENT
    controller_selector: str = CONTROLLER_SELECTOR_DEFAULT
    legacy_controller_suffix: str = LEGACY_CONTROLLER_SUFFIX_DEFAULT
    # Every literal "{name}" is replaced with the legacy controller deployment
    # name; other braces are kept as they are.
    legacy_pod_selector: str = LEGACY_POD_SELECTOR_DEFAULT

    log_level: str = LOG_LEVEL_DEFAULT

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @field_validator("endpoint_kind", mode="before")
    @classmethod
    def _lowercase_endpoint_kind(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value


class ConfigError(KubectlLinstorError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when settings fail to load."""
