"""
Page Relay — Page Route Handlers
==================================

What:  Database listing and page create/read/update/archive, plus the
       content view and edit reconciliation endpoints.
How:   Each handler delegates to PageService and returns the upstream JSON
       unchanged unless a response model is declared.
Who:   Called by the UI's page list, create form and edit form.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends

from pagerelay.schemas.page import (
    ErrorResponse,
    PageActionRequest,
    PageContentResponse,
    PageCreateRequest,
    PageEditRequest,
    PageListResponse,
    PageUpdateRequest,
    ReconcileResult,
)
from pagerelay.services.page_service import PageService, get_page_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Pages"])

ERRORS = {
    400: {"description": "Missing field or configuration", "model": ErrorResponse},
    500: {"description": "Upstream call failed", "model": ErrorResponse},
}


@router.get(
    "/database",
    responses=ERRORS,
    summary="Query the configured database",
    description="Relays the upstream database query result unchanged.",
)
async def get_database(service: PageService = Depends(get_page_service)) -> Dict[str, Any]:
    return await service.query_database()


@router.get(
    "/pages",
    response_model=PageListResponse,
    responses=ERRORS,
    summary="List page summaries",
    description="Title, status and timestamps of every non-archived page, across all result pages.",
)
async def list_pages(service: PageService = Depends(get_page_service)) -> PageListResponse:
    return await service.list_pages()


@router.post(
    "/page",
    responses=ERRORS,
    summary="Create a page",
    description=(
        "Creates a page in the configured database from a raw `properties` bag or a "
        "`title`/`status` pair. Any `blocks` are created with the page in the same upstream call."
    ),
)
async def create_page(
    body: PageCreateRequest,
    service: PageService = Depends(get_page_service),
) -> Dict[str, Any]:
    return await service.create_page(body)


@router.get("/page/{page_id}", responses=ERRORS, summary="Retrieve a page")
async def get_page(page_id: str, service: PageService = Depends(get_page_service)) -> Dict[str, Any]:
    return await service.get_page(page_id)


@router.patch("/page/{page_id}", responses=ERRORS, summary="Replace page properties")
async def update_page(
    page_id: str,
    body: PageUpdateRequest,
    service: PageService = Depends(get_page_service),
) -> Dict[str, Any]:
    return await service.update_page(page_id, body.properties)


@router.post(
    "/page/{page_id}",
    responses=ERRORS,
    summary="Update or archive a page by action",
    description="`{action: 'update', properties}` replaces properties; `{action: 'delete'}` archives.",
)
async def page_action(
    page_id: str,
    body: PageActionRequest,
    service: PageService = Depends(get_page_service),
) -> Dict[str, Any]:
    return await service.apply_action(page_id, body.action, body.properties)


@router.delete(
    "/page/{page_id}",
    responses=ERRORS,
    summary="Archive a page",
    description="Soft delete: the page is archived, never destroyed, and can still be retrieved.",
)
async def delete_page(page_id: str, service: PageService = Depends(get_page_service)) -> Dict[str, Any]:
    return await service.archive_page(page_id)


@router.get(
    "/page/{page_id}/content",
    response_model=PageContentResponse,
    responses=ERRORS,
    summary="Page content as simplified blocks",
)
async def get_page_content(
    page_id: str,
    service: PageService = Depends(get_page_service),
) -> PageContentResponse:
    return await service.get_page_content(page_id)


@router.put(
    "/page/{page_id}/content",
    response_model=ReconcileResult,
    responses=ERRORS,
    summary="Save an edited page",
    description=(
        "Replaces Name/Status, deletes every existing content block and appends the "
        "submitted blocks in order. `outcome: partial` lists blocks that could not be deleted."
    ),
)
async def edit_page(
    page_id: str,
    body: PageEditRequest,
    service: PageService = Depends(get_page_service),
) -> ReconcileResult:
    return await service.edit_page(page_id, body.title, body.status, body.blocks)
