"""Controller endpoint model."""

from __future__ import annotations

from dataclasses import dataclass

from kubelinstor.constants.enums import EndpointKind


@dataclass(frozen=True, slots=True)
class ControllerEndpoint:
    """The single LINSTOR controller workload commands are executed in."""

    namespace: str
    name: str
    kind: EndpointKind = EndpointKind.DEPLOYMENT

    @property
    def exec_target(self) -> str:
        """Reference accepted by ``kubectl exec``, e.g. ``deployment/foo``."""
        return f"{self.kind.value}/{self.name}"

    def __str__(self) -> str:
        return f"{self.namespace}/{self.exec_target}"
