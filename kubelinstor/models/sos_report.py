"""Models for the LINSTOR machine-readable reply to ``sos-report create``."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class LinstorObjRefs(BaseModel):
    """Object references attached to a LINSTOR API message."""

    model_config = ConfigDict(extra="ignore")

    path: str = ""


class LinstorMessage(BaseModel):
    """A single LINSTOR API call response message (``-m --output-version v1``)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    ret_code: int = 0
    message: str = ""
    obj_refs: LinstorObjRefs = Field(default_factory=LinstorObjRefs)


LINSTOR_MESSAGES_ADAPTER: TypeAdapter[list[LinstorMessage]] = TypeAdapter(
    list[LinstorMessage]
)
