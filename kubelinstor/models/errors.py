"""Exception hierarchy for kubectl-linstor.

Resolution errors are recoverable per argument; discovery, transport and
download errors are fatal and surface at the CLI entry point.
"""

from __future__ import annotations

from collections.abc import Sequence


class KubectlLinstorError(Exception):
    """Base exception for all plugin errors."""


# =============================================================================
# Per-argument resolution errors
# =============================================================================

class ResolutionError(KubectlLinstorError):
    """A ``pvc:`` or ``pod:`` reference could not be resolved."""


class InvalidReferenceError(ResolutionError):
    """The reference token has an empty name part."""


class AmbiguousNamespaceError(ResolutionError):
    """Lookup failed without a namespace qualifier."""

    def __init__(self, prefix: str, name: str) -> None:
        self.prefix = prefix
        self.name = name
        super().__init__(f"maybe missing namespace: {prefix}:<namespace>/{name}")


class LookupFailedError(ResolutionError):
    """Lookup failed for a namespaced reference; carries kubectl's diagnostic."""

    def __init__(self, message: str, stderr: str) -> None:
        self.stderr = stderr
        super().__init__(f"{message}: {stderr}")


class EmptyResultError(ResolutionError):
    """Lookup succeeded but the requested field was empty."""


class PodResolutionError(ResolutionError):
    """One of the pod's claims could not be resolved."""

    def __init__(self, claim: str, cause: ResolutionError) -> None:
        self.claim = claim
        self.cause = cause
        super().__init__(f"could not convert Pod's PVC '{claim}' to PV: {cause}")


# =============================================================================
# Fatal errors
# =============================================================================

class DiscoveryError(KubectlLinstorError):
    """The LINSTOR controller could not be located."""


class NoControllerFoundError(DiscoveryError):
    """No controller candidate exists in the cluster."""


class AmbiguousControllerError(DiscoveryError):
    """More than one controller candidate exists in the cluster."""

    def __init__(self, description: str, candidates: Sequence[str]) -> None:
        self.candidates = list(candidates)
        super().__init__(
            f"found more than one {description}: {', '.join(self.candidates)}"
        )


class TransportError(KubectlLinstorError):
    """kubectl itself could not be run."""


class KubectlCommandError(KubectlLinstorError):
    """kubectl ran but exited with a non-zero status."""

    def __init__(self, args: Sequence[str], returncode: int, stderr: str) -> None:
        self.command = list(args)
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(stderr or f"kubectl exited with code {returncode}")


class SosReportError(KubectlLinstorError):
    """The sos-report download sub-command failed."""
