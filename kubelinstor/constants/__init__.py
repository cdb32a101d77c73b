"""Constants module for kubectl-linstor.

Centralized constants organized by domain:
- enums.py: All Enum class definitions
- values.py: Scalar constants (resource kinds, jsonpath expressions)
- defaults.py: Default values for settings
"""

from kubelinstor.constants.defaults import (
    CONTROLLER_SELECTOR_DEFAULT,
    ENDPOINT_KIND_DEFAULT,
    KUBECTL_BINARY_DEFAULT,
    LEGACY_CONTROLLER_SUFFIX_DEFAULT,
    LEGACY_POD_SELECTOR_DEFAULT,
    LOG_FORMAT,
    LOG_LEVEL_DEFAULT,
    REMOTE_COMMAND_DEFAULT,
)
from kubelinstor.constants.enums import EndpointKind, ReferenceKind
from kubelinstor.constants.values import (
    APP_NAME,
    ENV_PREFIX,
    LINSTOR_CLUSTER_RESOURCE,
    LINSTOR_CONTROLLER_RESOURCE,
    NAMESPACED_NAMES_JSONPATH,
    POD_CLAIM_NAMES_JSONPATH,
    POD_RESOURCE,
    PVC_RESOURCE,
    PVC_VOLUME_NAME_JSONPATH,
    RUNNING_POD_FIELD_SELECTOR,
    SOS_DOWNLOAD_TOKENS,
    SOS_REPORT_TOKENS,
)

__all__ = [
    "APP_NAME",
    "CONTROLLER_SELECTOR_DEFAULT",
    "ENDPOINT_KIND_DEFAULT",
    "ENV_PREFIX",
    "KUBECTL_BINARY_DEFAULT",
    "LEGACY_CONTROLLER_SUFFIX_DEFAULT",
    "LEGACY_POD_SELECTOR_DEFAULT",
    "LINSTOR_CLUSTER_RESOURCE",
    "LINSTOR_CONTROLLER_RESOURCE",
    "LOG_FORMAT",
    "LOG_LEVEL_DEFAULT",
    "NAMESPACED_NAMES_JSONPATH",
    "POD_CLAIM_NAMES_JSONPATH",
    "POD_RESOURCE",
    "PVC_RESOURCE",
    "PVC_VOLUME_NAME_JSONPATH",
    "REMOTE_COMMAND_DEFAULT",
    "RUNNING_POD_FIELD_SELECTOR",
    "SOS_DOWNLOAD_TOKENS",
    "SOS_REPORT_TOKENS",
    "EndpointKind",
    "ReferenceKind",
]
