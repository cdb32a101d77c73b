"""Scalar constants for the plugin.

All application-level constants with proper type hints using Final.
"""

from typing import Final

# ============================================================================
# Application
# ============================================================================

APP_NAME: Final = "kubectl-linstor"
ENV_PREFIX: Final = "KUBECTL_LINSTOR_"

# ============================================================================
# Cluster API resource kinds
# ============================================================================

LINSTOR_CLUSTER_RESOURCE: Final = "linstorclusters"
LINSTOR_CONTROLLER_RESOURCE: Final = "linstorcontrollers"
PVC_RESOURCE: Final = "persistentvolumeclaims"
POD_RESOURCE: Final = "pods"

# ============================================================================
# jsonpath expressions
# ============================================================================

PVC_VOLUME_NAME_JSONPATH: Final = "jsonpath={.spec.volumeName}"
POD_CLAIM_NAMES_JSONPATH: Final = (
    "jsonpath={.spec.volumes[*].persistentVolumeClaim.claimName}"
)
# One "namespace,name" pair per line.
NAMESPACED_NAMES_JSONPATH: Final = (
    'jsonpath={range .items[*]}{.metadata.namespace},{.metadata.name}{"\\n"}{end}'
)
RUNNING_POD_FIELD_SELECTOR: Final = "status.phase=Running"

# ============================================================================
# Report download sub-command
# ============================================================================

SOS_REPORT_TOKENS: Final = frozenset({"sos", "sos-report"})
SOS_DOWNLOAD_TOKENS: Final = frozenset({"dl", "download"})

__all__ = [
    "APP_NAME",
    "ENV_PREFIX",
    "LINSTOR_CLUSTER_RESOURCE",
    "LINSTOR_CONTROLLER_RESOURCE",
    "NAMESPACED_NAMES_JSONPATH",
    "POD_CLAIM_NAMES_JSONPATH",
    "POD_RESOURCE",
    "PVC_RESOURCE",
    "PVC_VOLUME_NAME_JSONPATH",
    "RUNNING_POD_FIELD_SELECTOR",
    "SOS_DOWNLOAD_TOKENS",
    "SOS_REPORT_TOKENS",
]
