"""
Page Relay — Pydantic Request/Response Schemas
================================================

What:  Pydantic models defining the API contract between the UI and the relay.
How:   FastAPI validates request bodies against these models and serializes
       responses through them. Upstream objects (pages, query results, block
       lists) are relayed raw as dicts and have no model here.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from pagerelay.schemas.block import BlockDescriptor, ExtractedBlock, only_block_objects


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class PageCreateRequest(BaseModel):
    """
    Body of POST /api/page.

    Either a raw upstream `properties` bag or a `title` (plus optional
    `status`) that is expanded into the fixed Name/Status schema. `blocks`
    are sent as the new page's children in the create call itself.
    """
    properties: Optional[Dict[str, Any]] = Field(default=None, description="Upstream property bag")
    title: Optional[str] = Field(default=None, description="Page title (Name property)")
    status: Optional[str] = Field(default=None, description="Status property name")
    blocks: List[BlockDescriptor] = Field(default_factory=list, description="Initial content")

    @field_validator("blocks", mode="before")
    @classmethod
    def drop_malformed_blocks(cls, v):
        return only_block_objects(v)


class PageUpdateRequest(BaseModel):
    """Body of PATCH /api/page/{id}."""
    properties: Optional[Dict[str, Any]] = Field(default=None, description="Properties to replace")


class PageAction(str, Enum):
    UPDATE = "update"
    DELETE = "delete"


class PageActionRequest(BaseModel):
    """
    Body of POST /api/page/{id}.

    `action` stays a free string so an unknown value reaches the service and
    is answered with 400 "Invalid action" in the relay's own envelope.
    """
    action: Optional[str] = Field(default=None, description="'update' or 'delete'")
    properties: Optional[Dict[str, Any]] = Field(default=None)


class PageEditRequest(BaseModel):
    """Body of PUT /api/page/{id}/content: new properties plus the full block list."""
    title: Optional[str] = Field(default=None, description="Page title (required)")
    status: Optional[str] = Field(default=None, description="Status property name")
    blocks: List[BlockDescriptor] = Field(default_factory=list, description="Edited content in order")

    @field_validator("blocks", mode="before")
    @classmethod
    def drop_malformed_blocks(cls, v):
        return only_block_objects(v)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class PageSummary(BaseModel):
    """Compact page representation for list views."""
    id: str
    title: str = Field(description="Name/title property, 'Untitled' when absent")
    status: str = Field(description="Status property, 'No Status' when absent")
    created_time: Optional[datetime] = None
    last_edited_time: Optional[datetime] = None
    archived: bool = False


class PageListResponse(BaseModel):
    results: List[PageSummary]


class PageContentResponse(BaseModel):
    """Inbound view of a page's blocks, in document order."""
    page_id: str
    blocks: List[ExtractedBlock]


class ReconcileOutcome(str, Enum):
    RECONCILED = "reconciled"
    PARTIAL = "partial"


class FailedDelete(BaseModel):
    block_id: str
    error: str


class ReconcileResult(BaseModel):
    """
    Outcome of a delete-all/append-all content replacement.

    `partial` means at least one old block could not be deleted and is still
    on the page next to the newly appended content.
    """
    page_id: str
    outcome: ReconcileOutcome
    deleted: List[str] = Field(default_factory=list, description="Old block IDs removed, in order")
    failed_deletes: List[FailedDelete] = Field(default_factory=list)
    appended: int = Field(default=0, description="Blocks created by the append call")
    dropped: int = Field(default=0, description="Descriptors skipped as unsupported types")


class ErrorResponse(BaseModel):
    """
    Error envelope returned by every endpoint.

    Example:
        {"error": "Failed to fetch page", "details": "Could not find page with ID: ..."}
    """
    error: str = Field(description="What failed")
    details: Optional[str] = Field(default=None, description="Upstream or validation detail")


class HealthResponse(BaseModel):
    status: str = Field(description="'OK' while the process is serving")
    message: str
