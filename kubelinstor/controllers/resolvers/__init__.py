"""Resolvers for ``pvc:`` and ``pod:`` references."""

from kubelinstor.controllers.resolvers.claim_resolver import ClaimResolver
from kubelinstor.controllers.resolvers.pod_resolver import PodResolver

__all__ = ["ClaimResolver", "PodResolver"]
