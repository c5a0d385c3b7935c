"""
Page Relay — Block Route Handlers
===================================

What:  List, append, delete and update blocks.
How:   Appends are mapped from simplified descriptors to upstream block JSON
       before being relayed; unsupported types are dropped.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends

from pagerelay.schemas.block import AppendBlocksRequest, BlockUpdateRequest
from pagerelay.schemas.page import ErrorResponse
from pagerelay.services.page_service import PageService, get_page_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/blocks", tags=["Blocks"])

ERRORS = {
    400: {"description": "Invalid block update", "model": ErrorResponse},
    500: {"description": "Upstream call failed", "model": ErrorResponse},
}


@router.get("/{block_id}", responses=ERRORS, summary="List child blocks")
async def get_blocks(block_id: str, service: PageService = Depends(get_page_service)) -> Dict[str, Any]:
    return await service.get_blocks(block_id)


@router.post(
    "/{block_id}/append",
    responses=ERRORS,
    summary="Append simplified blocks",
    description="Maps `{type, content}` descriptors to upstream blocks and appends them in order.",
)
async def append_blocks(
    block_id: str,
    body: AppendBlocksRequest,
    service: PageService = Depends(get_page_service),
) -> Dict[str, Any]:
    return await service.append_blocks(block_id, body.blocks)


@router.delete("/{block_id}", responses=ERRORS, summary="Delete a block")
async def delete_block(block_id: str, service: PageService = Depends(get_page_service)) -> Dict[str, Any]:
    return await service.delete_block(block_id)


@router.patch("/{block_id}", responses=ERRORS, summary="Replace a text block's content")
async def update_block(
    block_id: str,
    body: BlockUpdateRequest,
    service: PageService = Depends(get_page_service),
) -> Dict[str, Any]:
    return await service.update_block(block_id, body.content.type, body.content.text)
