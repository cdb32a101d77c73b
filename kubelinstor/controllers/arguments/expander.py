"""Argument expander - rewrites ``pvc:`` and ``pod:`` arguments.

Resolution failures never abort the command: the unexpanded argument is
forwarded and a warning is written to the diagnostic stream.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from typing import TextIO

from kubelinstor.constants.enums import ReferenceKind
from kubelinstor.controllers.resolvers import ClaimResolver, PodResolver
from kubelinstor.models.errors import ResolutionError

logger = logging.getLogger(__name__)


class ArgumentExpander:
    """Expands ``<resource>:[namespace/]name`` arguments to LINSTOR resource names."""

    def __init__(
        self,
        claim_resolver: ClaimResolver,
        pod_resolver: PodResolver,
        diagnostics: TextIO | None = None,
    ) -> None:
        """Initialize the expander.

        Args:
            claim_resolver: Resolver for ``pvc:`` arguments
            pod_resolver: Resolver for ``pod:`` arguments
            diagnostics: Stream for mapping and warning lines (stderr if None)
        """
        self._claims = claim_resolver
        self._pods = pod_resolver
        self._diagnostics = diagnostics

    def _emit(self, message: str) -> None:
        stream = self._diagnostics if self._diagnostics is not None else sys.stderr
        print(message, file=stream)

    @staticmethod
    def reference_kind(arg: str) -> ReferenceKind | None:
        """Return the reference kind of a tagged argument, None for plain ones."""
        prefix, sep, _ = arg.partition(":")
        if not sep:
            return None
        try:
            return ReferenceKind(prefix.lower())
        except ValueError:
            return None

    async def expand(self, arg: str) -> list[str]:
        """Expand one argument; plain arguments are returned unchanged."""
        kind = self.reference_kind(arg)
        if kind is None:
            return [arg]
        token = arg.partition(":")[2]
        if kind is ReferenceKind.PVC:
            return await self._expand_claim(arg, token)
        return await self._expand_pod(arg, token)

    async def expand_all(self, args: Iterable[str]) -> list[str]:
        """Expand every argument in order."""
        expanded: list[str] = []
        for arg in args:
            expanded.extend(await self.expand(arg))
        return expanded

    async def _expand_claim(self, arg: str, token: str) -> list[str]:
        try:
            volume_name = await self._claims.resolve_token(token)
        except ResolutionError as exc:
            logger.warning("Keeping %s unexpanded: %s", arg, exc)
            self._emit(
                f"could not convert PVC to PV name, continue with unexpanded arg '{arg}': {exc}"
            )
            return [arg]

        self._emit(f"{arg} -> {volume_name}")
        return [volume_name]

    async def _expand_pod(self, arg: str, token: str) -> list[str]:
        try:
            volumes = await self._pods.resolve_token(token)
        except ResolutionError as exc:
            logger.warning("Keeping %s unexpanded: %s", arg, exc)
            self._emit(
                f"could not convert pod to PV names, continue with unexpanded arg '{arg}': {exc}"
            )
            return [arg]

        self._emit(f"{arg} -> {volumes.mapping_text()}")
        return list(volumes.volume_ids)
