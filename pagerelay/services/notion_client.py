"""
Page Relay — Notion REST Client
=================================

What:  Concrete UpstreamClient speaking the Notion REST API with httpx.
How:   One shared httpx.AsyncClient carries the base URL, bearer token and
       Notion-Version header. Each call names the operation it performs so a
       failure can be reported as e.g. "Failed to fetch page".
Who:   Created once in the app lifespan; used by PageService.

Endpoint mapping:
    query_database         POST   /databases/{id}/query
    retrieve_page          GET    /pages/{id}
    create_page            POST   /pages
    update_page            PATCH  /pages/{id}
    list_block_children    GET    /blocks/{id}/children
    append_block_children  PATCH  /blocks/{id}/children
    delete_block           DELETE /blocks/{id}
    update_block           PATCH  /blocks/{id}

There is no retry and, by default, no timeout: a hung upstream call hangs the
request until the caller gives up. Set UPSTREAM_TIMEOUT to bound it.
"""

import logging
import time
from typing import Any, Dict, List, Optional

import httpx

from pagerelay.config import settings
from pagerelay.exceptions import UpstreamError
from pagerelay.services.upstream_base import UpstreamClient

logger = logging.getLogger(__name__)


class NotionClient(UpstreamClient):
    """
    Notion API implementation of UpstreamClient.

    Args:
        api_key:   Integration token (defaults to settings.notion_api_key)
        base_url:  API root (defaults to settings.notion_api_url)
        transport: Optional httpx transport, used by tests to fake the API
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        notion_version: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.notion_api_url,
            headers={
                "Authorization": f"Bearer {api_key if api_key is not None else settings.notion_api_key}",
                "Notion-Version": notion_version or settings.notion_version,
                "Content-Type": "application/json",
            },
            timeout=timeout if timeout is not None else settings.upstream_timeout,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        action: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Send one request and return the decoded JSON body.

        Raises:
            UpstreamError: transport failure or any non-2xx status. `action`
                becomes the error message; the upstream's own message becomes
                the details.
        """
        start_time = time.perf_counter()
        try:
            response = await self._client.request(method, path, json=json, params=params)
        except httpx.HTTPError as e:
            logger.error("%s: %s %s transport error: %s", action, method, path, str(e))
            raise UpstreamError(
                message=action,
                details=str(e) or type(e).__name__,
                context={"method": method, "path": path},
            ) from e

        duration_ms = (time.perf_counter() - start_time) * 1000

        if response.is_error:
            body = _safe_json(response)
            details = body.get("message") or response.reason_phrase or f"HTTP {response.status_code}"
            code = body.get("code")
            logger.error(
                "%s: %s %s -> %d (%s) in %.0fms: %s",
                action,
                method,
                path,
                response.status_code,
                code,
                duration_ms,
                details,
            )
            raise UpstreamError(
                message=action,
                details=details,
                upstream_status=response.status_code,
                upstream_code=code,
                context={"method": method, "path": path},
            )

        logger.debug("%s %s -> %d in %.0fms", method, path, response.status_code, duration_ms)
        return _safe_json(response)

    async def query_database(self, database_id: str, start_cursor: Optional[str] = None) -> Dict[str, Any]:
        body = {"start_cursor": start_cursor} if start_cursor else {}
        return await self._request(
            "POST",
            f"/databases/{database_id}/query",
            action="Failed to fetch database",
            json=body,
        )

    async def retrieve_page(self, page_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/pages/{page_id}", action="Failed to fetch page")

    async def create_page(
        self,
        database_id: str,
        properties: Dict[str, Any],
        children: Optional[List[Dict[str, Any]]] = None,
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {"parent": {"database_id": database_id}, "properties": properties}
        if children:
            body["children"] = children
        return await self._request("POST", "/pages", action="Failed to create page", json=body)

    async def update_page(
        self,
        page_id: str,
        properties: Optional[Dict[str, Any]] = None,
        archived: Optional[bool] = None,
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {}
        if properties is not None:
            body["properties"] = properties
        if archived is not None:
            body["archived"] = archived
        action = "Failed to delete page" if archived else "Failed to update page"
        return await self._request("PATCH", f"/pages/{page_id}", action=action, json=body)

    async def list_block_children(self, block_id: str, start_cursor: Optional[str] = None) -> Dict[str, Any]:
        params = {"start_cursor": start_cursor} if start_cursor else None
        return await self._request(
            "GET",
            f"/blocks/{block_id}/children",
            action="Failed to fetch blocks",
            params=params,
        )

    async def append_block_children(self, block_id: str, children: List[Dict[str, Any]]) -> Dict[str, Any]:
        return await self._request(
            "PATCH",
            f"/blocks/{block_id}/children",
            action="Failed to append blocks",
            json={"children": children},
        )

    async def delete_block(self, block_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/blocks/{block_id}", action="Failed to delete block")

    async def update_block(self, block_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request(
            "PATCH",
            f"/blocks/{block_id}",
            action="Failed to update block",
            json=payload,
        )


def _safe_json(response: httpx.Response) -> Dict[str, Any]:
    """Decode a JSON object body; anything else becomes an empty dict."""
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}
