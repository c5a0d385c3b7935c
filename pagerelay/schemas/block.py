"""
Page Relay — Block Schemas
============================

What:  Pydantic models for the simplified, client-facing block description.
Who:   Used by the block transform, the page service, and block routes.

A BlockDescriptor is the flat `{type, content}` record the UI edits. Its
fields are lenient: a missing or non-string `type` reaches the outbound
mapper and is dropped there, and malformed `content` degrades to "", so one
bad entry never fails the whole request.
"""

from typing import Any, List, Mapping, Optional, Union

from pydantic import BaseModel, Field, field_validator


def only_block_objects(v: Any) -> Any:
    """Keep only the object entries of an incoming block list; null means empty."""
    if v is None:
        return []
    if isinstance(v, list):
        return [item for item in v if isinstance(item, (Mapping, BaseModel))]
    return v


class BlockDescriptor(BaseModel):
    """
    One block in document order, as the UI describes it.

    `id` is a local identifier meaningful only to the client. `upstream_id`
    is set for blocks that already exist upstream and unset for new ones.
    """

    id: Optional[Union[str, int]] = Field(default=None, description="Opaque local identifier")
    type: Optional[str] = Field(default=None, description="Block type, e.g. paragraph, heading_1, image")
    content: str = Field(default="", description="Text for text blocks, URL for media blocks")
    upstream_id: Optional[str] = Field(
        default=None,
        description="Upstream block ID when the block already exists",
    )

    @field_validator("content", mode="before")
    @classmethod
    def default_content(cls, v):
        """Missing, null or non-string content degrades to an empty string."""
        return v if isinstance(v, str) else ""

    @field_validator("type", "upstream_id", mode="before")
    @classmethod
    def string_or_none(cls, v):
        return v if isinstance(v, str) else None

    @field_validator("id", mode="before")
    @classmethod
    def local_id(cls, v):
        if isinstance(v, bool) or not isinstance(v, (str, int)):
            return None
        return v


class ExtractedBlock(BaseModel):
    """
    Inbound view of an upstream block.

    `upstream_id` carries the upstream block ID so the edited list can tag
    blocks that already exist. `supported` is False for types the relay
    cannot edit; the UI renders those through its generic "unsupported
    type" path.
    """

    id: Optional[str] = Field(default=None, description="Upstream block ID")
    upstream_id: Optional[str] = Field(default=None, description="Upstream block ID, echoed back on edit")
    type: str = Field(description="Upstream block type")
    content: str = Field(default="", description="Plain text or URL")
    supported: bool = Field(description="Whether the type is editable through the relay")


class AppendBlocksRequest(BaseModel):
    """Body of POST /api/blocks/{id}/append."""

    blocks: List[BlockDescriptor] = Field(default_factory=list)

    @field_validator("blocks", mode="before")
    @classmethod
    def drop_malformed_blocks(cls, v):
        return only_block_objects(v)


class BlockContentUpdate(BaseModel):
    type: str = Field(description="Block type of the block being updated")
    text: str = Field(default="", description="Replacement text")


class BlockUpdateRequest(BaseModel):
    """Body of PATCH /api/blocks/{id}."""

    content: BlockContentUpdate
