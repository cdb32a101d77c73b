"""Default values for settings.

All default values used in the PluginSettings model.
"""

from typing import Final

# ============================================================================
# kubectl defaults
# ============================================================================

KUBECTL_BINARY_DEFAULT: Final = "kubectl"
REMOTE_COMMAND_DEFAULT: Final = "linstor"

# ============================================================================
# Controller discovery defaults
# ============================================================================

ENDPOINT_KIND_DEFAULT: Final = "deployment"
CONTROLLER_SELECTOR_DEFAULT: Final = "app.kubernetes.io/component=linstor-controller"
LEGACY_CONTROLLER_SUFFIX_DEFAULT: Final = "-controller"
LEGACY_POD_SELECTOR_DEFAULT: Final = "app.kubernetes.io/instance={name}"

# ============================================================================
# Logging defaults
# ============================================================================

LOG_LEVEL_DEFAULT: Final = "WARNING"
LOG_FORMAT: Final = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

__all__ = [
    "CONTROLLER_SELECTOR_DEFAULT",
    "ENDPOINT_KIND_DEFAULT",
    "KUBECTL_BINARY_DEFAULT",
    "LEGACY_CONTROLLER_SUFFIX_DEFAULT",
    "LEGACY_POD_SELECTOR_DEFAULT",
    "LOG_FORMAT",
    "LOG_LEVEL_DEFAULT",
    "REMOTE_COMMAND_DEFAULT",
]
