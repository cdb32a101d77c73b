"""Pod resolver - maps a pod to the LINSTOR resources of all its claims."""

from __future__ import annotations

import logging

from kubelinstor.constants.enums import ReferenceKind
from kubelinstor.constants.values import POD_CLAIM_NAMES_JSONPATH, POD_RESOURCE
from kubelinstor.controllers.base import BaseResolver
from kubelinstor.controllers.kubectl.lookup import ResourceLookup
from kubelinstor.controllers.resolvers.claim_resolver import ClaimResolver
from kubelinstor.models.errors import PodResolutionError, ResolutionError
from kubelinstor.models.refs import NamespacedRef, PodVolumes

logger = logging.getLogger(__name__)


class PodResolver(BaseResolver[PodVolumes]):
    """Resolves ``[namespace/]pod`` through every PersistentVolumeClaim it mounts.

    A single pod can expand to several resource names. Claims are resolved one
    at a time in the order the pod spec lists them; the first failure aborts
    the whole resolution.
    """

    reference_kind = ReferenceKind.POD

    def __init__(self, lookup: ResourceLookup, claim_resolver: ClaimResolver) -> None:
        super().__init__(lookup)
        self._claims = claim_resolver

    async def resolve(self, ref: NamespacedRef) -> PodVolumes:
        claim_names = await self._lookup.get_list(
            POD_RESOURCE,
            ref,
            POD_CLAIM_NAMES_JSONPATH,
            prefix=self.prefix,
            failure="could not convert Pod to PVCs",
        )

        volume_ids: list[str] = []
        for claim in claim_names:
            try:
                volume_ids.append(await self._claims.resolve(ref.requalify(claim)))
            except ResolutionError as exc:
                raise PodResolutionError(claim, exc) from exc

        logger.debug("Pod %s uses claims %s", ref, claim_names)
        return PodVolumes(volume_ids=tuple(volume_ids), claim_names=tuple(claim_names))
