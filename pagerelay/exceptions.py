"""
Page Relay — Custom Exception Hierarchy
=========================================

What:  Defines application-specific exceptions for the relay's error scenarios.
How:   Each exception carries a short `message` (returned as `error`) and an
       optional `details` string (returned as `details`) plus a context dict
       that is logged but never sent to the client. Global exception handlers
       registered in main.py turn these into the fixed error envelope:

           {"error": "<message>", "details": "<details>"}

Who:   Raised by the upstream client and services; caught by global handlers.

Exception Hierarchy:
    RelayError (base)                → 500 Internal Server Error
    ├── ValidationError              → 400 Bad Request (client can fix)
    └── UpstreamError                → 500 (upstream call failed)
        └── ReconciliationError      → 500 (append failed after deletes)
"""

from typing import Any, Dict, Optional


class RelayError(Exception):
    """
    Base exception for all relay errors.

    Attributes:
        message:  Short description returned as the envelope's `error`
        details:  Optional longer description returned as `details`
        context:  Additional debug info (logged, NOT returned to client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        details: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.details = details
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(RelayError):
    """
    Raised when client input or required configuration is missing.

    When:    No title on an edit, no properties on create, database ID not
             configured, unknown `action`, content update for a media block.
    HTTP:    400 Bad Request

    Example response:
        {"error": "Title is required"}
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        details: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, details=details, context=ctx)
        self.field = field


class UpstreamError(RelayError):
    """
    Raised when a call to the upstream document-database API fails.

    What:    Non-2xx response (auth, not-found, rate limit, validation) or a
             transport failure (DNS, connection reset, timeout).
    HTTP:    500 Internal Server Error, upstream message attached as `details`.

    There is no retry: the failure is surfaced to the caller immediately.

    Attributes:
        upstream_status: HTTP status returned by the upstream (None on transport errors)
        upstream_code:   Upstream error code, e.g. "object_not_found"
    """

    def __init__(
        self,
        message: str = "Upstream request failed",
        details: Optional[str] = None,
        upstream_status: Optional[int] = None,
        upstream_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if upstream_status is not None:
            ctx["upstream_status"] = upstream_status
        if upstream_code:
            ctx["upstream_code"] = upstream_code
        super().__init__(message=message, details=details, context=ctx)
        self.upstream_status = upstream_status
        self.upstream_code = upstream_code


class ReconciliationError(UpstreamError):
    """
    Raised when the bulk append fails after the old blocks were deleted.

    The page is left without the deleted content blocks until the edit is
    retried. `blocks_lost` records how many were removed.
    """

    def __init__(
        self,
        page_id: str,
        blocks_lost: int,
        cause: UpstreamError,
    ):
        details = (
            f"{blocks_lost} existing block(s) were deleted from page {page_id} "
            f"but the new content could not be appended: {cause.details or cause.message}. "
            f"Retry the edit to restore the page content."
        )
        super().__init__(
            message="Failed to reconcile page content",
            details=details,
            upstream_status=cause.upstream_status,
            upstream_code=cause.upstream_code,
            context={"page_id": page_id, "blocks_lost": blocks_lost},
        )
        self.page_id = page_id
        self.blocks_lost = blocks_lost
