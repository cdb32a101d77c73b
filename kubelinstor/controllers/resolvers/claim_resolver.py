"""Claim resolver - maps a PersistentVolumeClaim to its LINSTOR resource name."""

from __future__ import annotations

import logging

from kubelinstor.constants.enums import ReferenceKind
from kubelinstor.constants.values import PVC_RESOURCE, PVC_VOLUME_NAME_JSONPATH
from kubelinstor.controllers.base import BaseResolver
from kubelinstor.models.errors import EmptyResultError
from kubelinstor.models.refs import NamespacedRef

logger = logging.getLogger(__name__)


class ClaimResolver(BaseResolver[str]):
    """Resolves ``[namespace/]claim`` to the name of the bound PersistentVolume.

    LINSTOR resource names are the PV names created by the CSI driver, so the
    bound volume name is the LINSTOR resource name.
    """

    reference_kind = ReferenceKind.PVC

    async def resolve(self, ref: NamespacedRef) -> str:
        try:
            volume_name = await self._lookup.get_field(
                PVC_RESOURCE,
                ref,
                PVC_VOLUME_NAME_JSONPATH,
                prefix=self.prefix,
                failure="could not convert PVC to PV name",
            )
        except EmptyResultError as exc:
            raise EmptyResultError(f"could not find volume name for PVC '{ref}'") from exc
        logger.debug("PVC %s is bound to %s", ref, volume_name)
        return volume_name
