"""Cluster resource lookup - reads a single field of a named object."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence

from kubelinstor.models.errors import (
    AmbiguousNamespaceError,
    EmptyResultError,
    KubectlCommandError,
    LookupFailedError,
)
from kubelinstor.models.refs import NamespacedRef

logger = logging.getLogger(__name__)

RunKubectl = Callable[[Sequence[str]], Awaitable[str]]


class ResourceLookup:
    """Reads fields of cluster objects with ``kubectl get -o jsonpath``."""

    def __init__(self, run_kubectl_func: RunKubectl) -> None:
        """Initialize with kubectl runner function.

        Args:
            run_kubectl_func: Async function to run kubectl commands
        """
        self._run_kubectl = run_kubectl_func

    @staticmethod
    def _build_get_args(kind: str, ref: NamespacedRef, expression: str) -> tuple[str, ...]:
        return ("get", kind, ref.name, "--output", expression, *ref.namespace_args())

    async def _query(
        self,
        kind: str,
        ref: NamespacedRef,
        expression: str,
        *,
        prefix: str,
        failure: str,
    ) -> str:
        try:
            output = await self._run_kubectl(self._build_get_args(kind, ref, expression))
        except KubectlCommandError as exc:
            if ref.namespace is None:
                raise AmbiguousNamespaceError(prefix, ref.name) from exc
            raise LookupFailedError(failure, exc.stderr) from exc
        return output.strip()

    async def get_field(
        self,
        kind: str,
        ref: NamespacedRef,
        expression: str,
        *,
        prefix: str,
        failure: str = "lookup failed",
    ) -> str:
        """Return a scalar field of the referenced object.

        Args:
            kind: Resource kind, e.g. ``persistentvolumeclaims``
            ref: Object reference
            expression: kubectl output expression, e.g. ``jsonpath={.spec.volumeName}``
            prefix: Reference prefix used in the missing-namespace hint
            failure: Context prepended to kubectl's diagnostic on failure

        Raises:
            AmbiguousNamespaceError: Lookup failed and ``ref`` has no namespace.
            LookupFailedError: Lookup failed for a namespaced ``ref``.
            EmptyResultError: The field is empty.
        """
        value = await self._query(kind, ref, expression, prefix=prefix, failure=failure)
        if not value:
            raise EmptyResultError(f"empty {expression} for {kind} '{ref}'")
        return value

    async def get_list(
        self,
        kind: str,
        ref: NamespacedRef,
        expression: str,
        *,
        prefix: str,
        failure: str = "lookup failed",
    ) -> list[str]:
        """Return a whitespace-separated list field; empty when unset."""
        value = await self._query(kind, ref, expression, prefix=prefix, failure=failure)
        return value.split()
