"""
Page Relay — Abstract Upstream Client Interface
=================================================

What:  Abstract base class defining the calls the relay makes to the
       document-database API.
How:   NotionClient implements it over httpx; tests substitute AsyncMock
       instances or a fake implementing the same methods.
Who:   Called by PageService.

Every method returns the upstream JSON unchanged and raises UpstreamError on
failure. None of them retries.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class UpstreamClient(ABC):
    """
    Contract for the document-database API.

    Implementations:
        - NotionClient: Notion REST API over httpx
    """

    @abstractmethod
    async def query_database(self, database_id: str, start_cursor: Optional[str] = None) -> Dict[str, Any]:
        """Query a database for its pages (one upstream result page)."""
        ...

    @abstractmethod
    async def retrieve_page(self, page_id: str) -> Dict[str, Any]:
        ...

    @abstractmethod
    async def create_page(
        self,
        database_id: str,
        properties: Dict[str, Any],
        children: Optional[List[Dict[str, Any]]] = None,
    ) -> Dict[str, Any]:
        """Create a page under `database_id`, with its initial child blocks; the upstream assigns its ID."""
        ...

    @abstractmethod
    async def update_page(
        self,
        page_id: str,
        properties: Optional[Dict[str, Any]] = None,
        archived: Optional[bool] = None,
    ) -> Dict[str, Any]:
        """Replace the given properties and/or set the archive flag."""
        ...

    @abstractmethod
    async def list_block_children(self, block_id: str, start_cursor: Optional[str] = None) -> Dict[str, Any]:
        """One result page of a block's (or page's) children, in document order."""
        ...

    @abstractmethod
    async def append_block_children(self, block_id: str, children: List[Dict[str, Any]]) -> Dict[str, Any]:
        ...

    @abstractmethod
    async def delete_block(self, block_id: str) -> Dict[str, Any]:
        ...

    @abstractmethod
    async def update_block(self, block_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        ...

    async def close(self) -> None:
        """Release any transport resources. No-op by default."""
        return None
