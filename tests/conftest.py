"""Pytest configuration and shared fixtures for firecrawl-local-mcp tests."""

from collections.abc import Callable
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from firecrawl_local_mcp.api_client import FirecrawlClient
from firecrawl_local_mcp.config import FirecrawlConfig

TEST_BASE_URL = "http://firecrawl.test:3002"


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Pure logic tests with no I/O or network")
    config.addinivalue_line("markers", "integration: Tests that drive the server through the MCP protocol")


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """
    Apply default markers to tests without explicit markers.

    Unmarked tests default to unit.
    """
    for item in items:
        marker_names = [m.name for m in item.iter_markers()]
        if any(m in marker_names for m in ("unit", "integration")):
            continue

        item.add_marker(pytest.mark.unit)


@pytest.fixture
def mock_api_client() -> MagicMock:
    """Create mock Firecrawl client with async backend operations."""
    mock = MagicMock(spec=FirecrawlClient)
    mock.base_url = TEST_BASE_URL
    mock.scrape = AsyncMock(return_value={"success": True, "data": {"markdown": "# Test Page"}})
    mock.crawl = AsyncMock(return_value={"success": True, "jobId": "job-123"})
    mock.get_crawl_status = AsyncMock(return_value={"status": "completed", "current": 3, "total": 3, "data": []})
    mock.map = AsyncMock(return_value={"success": True, "links": ["https://example.com/"]})
    mock.test_connection = AsyncMock(return_value=True)
    mock.close = AsyncMock()
    return mock


@pytest.fixture
def make_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], FirecrawlClient]:
    """
    Build a FirecrawlClient whose HTTP traffic goes to a handler function.

    Returns:
        Factory taking an ``httpx.MockTransport`` handler
    """

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> FirecrawlClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return FirecrawlClient(FirecrawlConfig(base_url=TEST_BASE_URL), http_client=http_client)

    return _make


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove backend URL variables so settings only see what a test sets."""
    for name in ("FIRECRAWL_URL", "FIRECRAWL_BASE_URL", "FIRECRAWL_LOG_LEVEL", "ALLOWED_ORIGINS", "ALLOWED_HOSTS"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
