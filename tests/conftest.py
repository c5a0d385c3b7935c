"""
Page Relay — Test Configuration (conftest.py)
===============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_upstream: AsyncMock standing in for the Notion API client
    ├── page_service: PageService wired to mock_upstream
    ├── sample_page: Upstream page object with Name/Status properties
    └── test_client: HTTPX AsyncClient bound to the app, PageService overridden
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["NOTION_API_KEY"] = "secret_test_key_not_real"
os.environ["NOTION_DATABASE_ID"] = "test-database-id"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from pagerelay.services.page_service import PageService, get_page_service  # noqa: E402
from pagerelay.services.upstream_base import UpstreamClient  # noqa: E402


@pytest.fixture
def mock_upstream():
    """
    Provides a mock upstream client.

    Every UpstreamClient method is an AsyncMock; tests set return values or
    side effects per call.

    Usage:
        async def test_get_page(mock_upstream, page_service):
            mock_upstream.retrieve_page.return_value = {"id": "p1"}
    """
    return AsyncMock(spec=UpstreamClient)


@pytest.fixture
def page_service(mock_upstream):
    return PageService(client=mock_upstream, database_id="test-database-id")


@pytest.fixture
def sample_page():
    """An upstream page object as the API returns it."""
    return {
        "object": "page",
        "id": "page-1",
        "created_time": "2024-01-15T12:00:00.000Z",
        "last_edited_time": "2024-01-16T08:30:00.000Z",
        "archived": False,
        "properties": {
            "Name": {"id": "title", "type": "title", "title": [{"plain_text": "Launch plan"}]},
            "Status": {"id": "st", "type": "status", "status": {"name": "Done"}},
        },
    }


@pytest_asyncio.fixture
async def test_client(page_service):
    """
    Provides an async HTTP test client for endpoint testing.

    The app's PageService dependency is replaced with the mock-backed one.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/api/health")
            assert response.status_code == 200
    """
    from pagerelay.main import app

    app.dependency_overrides[get_page_service] = lambda: page_service
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()
