"""
Page Relay — Health Check Route
=================================

What:  Liveness endpoint for monitoring and the UI's connectivity check.
How:   Answers from the process alone; it does not call the upstream API, so
       it stays green even when credentials are missing.
"""

import logging

from fastapi import APIRouter

from pagerelay.schemas.page import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="OK", message="Notion API server is running")
