"""Base resolver for turning cluster references into LINSTOR resource names.

Resolvers receive a :class:`ResourceLookup` so that every cluster round trip
goes through the injected kubectl runner.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from kubelinstor.constants.enums import ReferenceKind
from kubelinstor.controllers.kubectl.lookup import ResourceLookup
from kubelinstor.models.refs import NamespacedRef, parse_namespaced_ref

ResultT = TypeVar("ResultT")


class BaseResolver(ABC, Generic[ResultT]):
    """Base resolver class.

    Subclasses set :attr:`reference_kind` and implement :meth:`resolve`.
    """

    reference_kind: ReferenceKind

    def __init__(self, lookup: ResourceLookup) -> None:
        """Initialize with the lookup used for cluster queries."""
        self._lookup = lookup

    @property
    def prefix(self) -> str:
        """Argument prefix handled by this resolver, e.g. ``pvc``."""
        return self.reference_kind.value

    @abstractmethod
    async def resolve(self, ref: NamespacedRef) -> ResultT:
        """Resolve a parsed reference.

        Raises:
            ResolutionError: If the reference cannot be resolved.
        """
        ...

    async def resolve_token(self, token: str) -> ResultT:
        """Parse ``[namespace/]name`` and resolve it."""
        return await self.resolve(parse_namespaced_ref(token))
