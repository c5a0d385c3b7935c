"""
Page Relay — Page Service (Orchestrator)
==========================================

What:  Business logic between the routes and the upstream client: page CRUD,
       block append/delete/update, and the edit reconciliation flow.
How:   Composes an UpstreamClient with the pure block transform. Every
       upstream call is awaited in sequence; nothing runs concurrently.
Who:   Called by route handlers.

Edit Reconciliation (PUT /api/page/{id}/content):
    ┌──────────────┐    ┌───────────────┐    ┌──────────────┐    ┌──────────┐
    │ Update props │───▶│ List current  │───▶│ Delete each  │───▶│ Append   │
    │ (Name/Status)│    │ child blocks  │    │ old block    │    │ new list │
    └──────────────┘    └───────────────┘    └──────────────┘    └──────────┘

    The upstream offers no move/reorder primitive, so content is replaced
    wholesale instead of diffed:
    - a failed delete is logged and skipped; the result is marked `partial`
    - a failed append raises ReconciliationError; the deleted blocks stay
      gone until the edit is retried
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from pagerelay.config import settings
from pagerelay.exceptions import ReconciliationError, UpstreamError, ValidationError
from pagerelay.schemas.block import BlockDescriptor
from pagerelay.schemas.page import (
    FailedDelete,
    PageAction,
    PageContentResponse,
    PageCreateRequest,
    PageListResponse,
    ReconcileOutcome,
    ReconcileResult,
)
from pagerelay.services.block_transform import content_update_payload, extract_blocks, map_blocks
from pagerelay.services.notion_client import NotionClient
from pagerelay.services.properties import build_properties, summarize_page
from pagerelay.services.upstream_base import UpstreamClient

logger = logging.getLogger(__name__)


class PageService:
    """
    Page and block operations against the upstream workspace.

    The upstream client is created lazily on first use so importing the
    module never opens a connection pool. Pass `client` to substitute one.
    """

    def __init__(self, client: Optional[UpstreamClient] = None, database_id: Optional[str] = None):
        self._client = client
        self._database_id = database_id

    @property
    def client(self) -> UpstreamClient:
        if self._client is None:
            self._client = NotionClient()
        return self._client

    @property
    def database_id(self) -> str:
        return self._database_id if self._database_id is not None else settings.notion_database_id

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None

    def _require_database_id(self) -> str:
        database_id = self.database_id
        if not database_id:
            raise ValidationError(message="Database ID not configured", field="database_id")
        return database_id

    # ── Pages ─────────────────────────────────────────────────────────────

    async def query_database(self) -> Dict[str, Any]:
        """Raw upstream query result for the configured database."""
        database_id = self._require_database_id()
        return await self.client.query_database(database_id)

    async def list_pages(self) -> PageListResponse:
        """
        Summaries of every non-archived page in the database.

        Follows the upstream's `next_cursor` until `has_more` is false.
        """
        database_id = self._require_database_id()
        summaries = []
        cursor = None
        while True:
            response = await self.client.query_database(database_id, start_cursor=cursor)
            for page in response.get("results") or []:
                summary = summarize_page(page)
                if not summary.archived:
                    summaries.append(summary)
            cursor = response.get("next_cursor")
            if not response.get("has_more") or not cursor:
                break
        return PageListResponse(results=summaries)

    async def get_page(self, page_id: str) -> Dict[str, Any]:
        return await self.client.retrieve_page(page_id)

    async def create_page(self, request: PageCreateRequest) -> Dict[str, Any]:
        """
        Create a page in the configured database together with its blocks.

        The mapped blocks travel as `children` of the create call, so either
        the page exists with its content or nothing was created.

        Raises:
            ValidationError: database not configured, or neither properties
                nor a non-blank title supplied
            UpstreamError: create failed
        """
        database_id = self._require_database_id()

        if request.properties is not None:
            properties = request.properties
        elif request.title and request.title.strip():
            properties = build_properties(request.title, request.status)
        elif request.title is not None:
            raise ValidationError(message="Title is required", field="title")
        else:
            raise ValidationError(message="Properties are required", field="properties")

        children = map_blocks(request.blocks)
        page = await self.client.create_page(database_id, properties, children=children or None)
        logger.info("Page created: %s with %d block(s)", page.get("id"), len(children))
        return page

    async def update_page(self, page_id: str, properties: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        if properties is None:
            raise ValidationError(message="Properties are required", field="properties")
        return await self.client.update_page(page_id, properties=properties)

    async def archive_page(self, page_id: str) -> Dict[str, Any]:
        """Soft delete: set `archived: true`, leave properties untouched."""
        page = await self.client.update_page(page_id, archived=True)
        logger.info("Page archived: %s", page_id)
        return page

    async def apply_action(
        self,
        page_id: str,
        action: Optional[str],
        properties: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """POST-with-action form of update/delete."""
        if action == PageAction.UPDATE.value:
            return await self.update_page(page_id, properties)
        if action == PageAction.DELETE.value:
            return await self.archive_page(page_id)
        raise ValidationError(message="Invalid action", field="action", details=f"Unknown action: {action!r}")

    # ── Blocks ────────────────────────────────────────────────────────────

    async def get_blocks(self, block_id: str) -> Dict[str, Any]:
        return await self.client.list_block_children(block_id)

    async def list_all_children(self, block_id: str) -> List[Dict[str, Any]]:
        """Every child block of `block_id` in document order, across result pages."""
        blocks: List[Dict[str, Any]] = []
        cursor = None
        while True:
            response = await self.client.list_block_children(block_id, start_cursor=cursor)
            blocks.extend(response.get("results") or [])
            cursor = response.get("next_cursor")
            if not response.get("has_more") or not cursor:
                break
        return blocks

    async def get_page_content(self, page_id: str) -> PageContentResponse:
        blocks = await self.list_all_children(page_id)
        return PageContentResponse(page_id=page_id, blocks=extract_blocks(blocks))

    async def append_blocks(self, block_id: str, descriptors: Sequence[BlockDescriptor]) -> Dict[str, Any]:
        children = map_blocks(descriptors)
        dropped = len(descriptors) - len(children)
        if dropped:
            logger.info("Dropped %d unsupported block(s) appending to %s", dropped, block_id)
        return await self.client.append_block_children(block_id, children)

    async def delete_block(self, block_id: str) -> Dict[str, Any]:
        return await self.client.delete_block(block_id)

    async def update_block(self, block_id: str, block_type: str, text: str) -> Dict[str, Any]:
        payload = content_update_payload(block_type, text)
        if payload is None:
            raise ValidationError(
                message="Unsupported block type for content update",
                field="content.type",
                details=f"Block type {block_type!r} has no editable text",
            )
        return await self.client.update_block(block_id, payload)

    # ── Edit reconciliation ───────────────────────────────────────────────

    async def reconcile_blocks(
        self,
        page_id: str,
        current_blocks: Sequence[Dict[str, Any]],
        edited: Sequence[BlockDescriptor],
    ) -> ReconcileResult:
        """
        Replace a page's content: delete every current block, then append
        the edited list as new blocks.

        Args:
            page_id:        Page whose children are replaced
            current_blocks: The page's upstream child blocks, in order
            edited:         The full edited descriptor list, in order

        Returns:
            ReconcileResult; `partial` when any delete failed.

        Raises:
            ReconciliationError: the append failed after the deletes ran
        """
        deleted: List[str] = []
        failed: List[FailedDelete] = []

        for block in current_blocks:
            block_id = block.get("id")
            if not block_id:
                continue
            try:
                await self.client.delete_block(block_id)
                deleted.append(block_id)
            except UpstreamError as e:
                logger.warning(
                    "Failed to delete block %s on page %s: %s",
                    block_id,
                    page_id,
                    e.details or e.message,
                )
                failed.append(FailedDelete(block_id=block_id, error=e.details or e.message))

        children = map_blocks(edited)
        if children:
            try:
                await self.client.append_block_children(page_id, children)
            except UpstreamError as e:
                logger.error(
                    "Append failed on page %s after deleting %d block(s); content lost until retried",
                    page_id,
                    len(deleted),
                )
                raise ReconciliationError(page_id=page_id, blocks_lost=len(deleted), cause=e) from e

        outcome = ReconcileOutcome.PARTIAL if failed else ReconcileOutcome.RECONCILED
        logger.info(
            "Page %s content %s: %d deleted, %d failed, %d appended",
            page_id,
            outcome.value,
            len(deleted),
            len(failed),
            len(children),
        )
        return ReconcileResult(
            page_id=page_id,
            outcome=outcome,
            deleted=deleted,
            failed_deletes=failed,
            appended=len(children),
            dropped=len(edited) - len(children),
        )

    async def edit_page(
        self,
        page_id: str,
        title: Optional[str],
        status: Optional[str],
        blocks: Sequence[BlockDescriptor],
    ) -> ReconcileResult:
        """Update Name/Status, then reconcile the page's content with `blocks`."""
        if not title or not title.strip():
            raise ValidationError(message="Title is required", field="title")

        await self.client.update_page(page_id, properties=build_properties(title, status))
        current = await self.list_all_children(page_id)
        return await self.reconcile_blocks(page_id, current, blocks)


# ── Singleton Instance ────────────────────────────────────────────────────
page_service = PageService()


def get_page_service() -> PageService:
    """FastAPI dependency returning the shared PageService."""
    return page_service
