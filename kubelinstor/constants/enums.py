"""All enum definitions for the plugin.

This module consolidates all enumerations used throughout the package.
"""

from enum import Enum

# =============================================================================
# Reference Enums
# =============================================================================

class ReferenceKind(str, Enum):
    """Prefixes recognised in front of a forwarded argument."""

    PVC = "pvc"
    POD = "pod"


# =============================================================================
# Controller Enums
# =============================================================================

class EndpointKind(str, Enum):
    """How the LINSTOR controller is addressed by ``kubectl exec``."""

    DEPLOYMENT = "deployment"
    POD = "pod"


__all__ = [
    "EndpointKind",
    "ReferenceKind",
]
