"""Data models for kubectl-linstor."""

from kubelinstor.models.endpoint import ControllerEndpoint
from kubelinstor.models.errors import (
    AmbiguousControllerError,
    AmbiguousNamespaceError,
    DiscoveryError,
    EmptyResultError,
    InvalidReferenceError,
    KubectlCommandError,
    KubectlLinstorError,
    LookupFailedError,
    NoControllerFoundError,
    PodResolutionError,
    ResolutionError,
    SosReportError,
    TransportError,
)
from kubelinstor.models.refs import NamespacedRef, PodVolumes, parse_namespaced_ref

__all__ = [
    "AmbiguousControllerError",
    "AmbiguousNamespaceError",
    "ControllerEndpoint",
    "DiscoveryError",
    "EmptyResultError",
    "InvalidReferenceError",
    "KubectlCommandError",
    "KubectlLinstorError",
    "LookupFailedError",
    "NamespacedRef",
    "NoControllerFoundError",
    "PodResolutionError",
    "PodVolumes",
    "ResolutionError",
    "SosReportError",
    "TransportError",
    "parse_namespaced_ref",
]
