"""Tests for MCP lifecycle - initialization, tool discovery, and tool execution.

These tests drive the Firecrawl server through FastMCP's in-memory client,
so they exercise the same code path as a real MCP session.
"""

import json
from unittest.mock import AsyncMock, patch

import pytest
from fastmcp import Client
from fastmcp.exceptions import ToolError
from pydantic import ValidationError
from starlette.testclient import TestClient

from firecrawl_local_mcp import __version__
from firecrawl_local_mcp.api_client import FirecrawlClient
from firecrawl_local_mcp.catalog import TOOL_CATALOG
from firecrawl_local_mcp.exceptions import FirecrawlConnectionError
from firecrawl_local_mcp.server import FirecrawlServer, main
from firecrawl_local_mcp.wiring import register_all_tools


@pytest.fixture
def registered_server(mock_api_client) -> FirecrawlServer:
    """Server with tools registered against the mock backend client."""
    server = FirecrawlServer()
    server.api_client = mock_api_client
    server.register_tools()
    return server


class TestMCPInitialization:
    """Test MCP server initialization lifecycle."""

    def test_server_creates_fastmcp_instance(self):
        server = FirecrawlServer()
        assert server.mcp is not None
        assert server.server_name == "firecrawl-local-mcp"
        assert server.server_version == __version__

    @pytest.mark.asyncio
    async def test_api_client_uses_explicit_url(self):
        """The --url value should win and lose its trailing slash."""
        server = FirecrawlServer(base_url="http://192.168.1.210:3002/")

        client = await server.create_api_client()
        try:
            assert isinstance(client, FirecrawlClient)
            assert server.config.base_url == "http://192.168.1.210:3002"
            assert client.base_url == "http://192.168.1.210:3002"
        finally:
            await client.close()

    @pytest.mark.asyncio
    async def test_invalid_url_fails_client_creation(self):
        server = FirecrawlServer(base_url="ftp://example.com")

        with pytest.raises(ValidationError):
            await server.initialize_client()

        assert server.api_client is None

    @pytest.mark.asyncio
    async def test_unreachable_backend_does_not_fail_startup(self, mock_api_client):
        """A failed connection probe only logs a warning."""
        mock_api_client.test_connection.side_effect = FirecrawlConnectionError("Connection test failed: refused")
        server = FirecrawlServer()

        with patch("firecrawl_local_mcp.server.create_firecrawl_client", AsyncMock(return_value=mock_api_client)):
            await server.initialize_client()

        assert server.api_client is mock_api_client
        mock_api_client.test_connection.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_cleanup_closes_client(self, mock_api_client):
        server = FirecrawlServer()
        server.api_client = mock_api_client

        await server.cleanup()

        mock_api_client.close.assert_awaited_once()
        assert server.api_client is None

    def test_health_route(self):
        server = FirecrawlServer()
        client = TestClient(server.mcp.http_app())

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["server"] == "firecrawl-local-mcp"

    def test_cors_origins_configured(self):
        server = FirecrawlServer()
        assert isinstance(server.get_allowed_origins(), list)
        assert isinstance(server.get_allowed_hosts(), list)

    def test_tool_registration_requires_api_client(self):
        server = FirecrawlServer()

        with pytest.raises(RuntimeError, match="API client must be initialized"):
            register_all_tools(server.mcp, None)


@pytest.mark.integration
class TestToolDiscovery:
    """Test MCP tool discovery."""

    @pytest.mark.asyncio
    async def test_lists_catalog_tools(self, registered_server):
        async with Client(registered_server.mcp) as client:
            tools = await client.list_tools()

        assert sorted(tool.name for tool in tools) == sorted(d.name for d in TOOL_CATALOG)

    @pytest.mark.asyncio
    async def test_schemas_advertised_verbatim(self, registered_server):
        """Discovery should return the camelCase catalog schemas unchanged."""
        async with Client(registered_server.mcp) as client:
            tools = {tool.name: tool for tool in await client.list_tools()}

        for descriptor in TOOL_CATALOG:
            advertised = tools[descriptor.name]
            assert advertised.description == descriptor.description
            assert advertised.inputSchema["properties"] == descriptor.inputSchema["properties"]
            assert advertised.inputSchema["required"] == descriptor.inputSchema["required"]

    @pytest.mark.asyncio
    async def test_server_info_resource(self, registered_server):
        async with Client(registered_server.mcp) as client:
            contents = await client.read_resource("server://info")

        info = json.loads(contents[0].text)
        assert info["name"] == "firecrawl-local-mcp"
        assert info["version"] == __version__


@pytest.mark.integration
class TestToolExecution:
    """Test tool invocation through the MCP protocol."""

    @pytest.mark.asyncio
    async def test_scrape_returns_pretty_json(self, registered_server, mock_api_client):
        mock_api_client.scrape.return_value = {"data": {"markdown": "hello"}}

        async with Client(registered_server.mcp) as client:
            result = await client.call_tool("firecrawl_scrape", {"url": "https://example.com"})

        assert result.content[0].text == '{\n  "data": {\n    "markdown": "hello"\n  }\n}'
        mock_api_client.scrape.assert_awaited_once_with(
            "https://example.com",
            {"formats": ["markdown"], "onlyMainContent": True},
        )

    @pytest.mark.asyncio
    async def test_crawl_then_status(self, registered_server, mock_api_client):
        mock_api_client.crawl.return_value = {"success": True, "jobId": "job-123"}

        async with Client(registered_server.mcp) as client:
            started = await client.call_tool("firecrawl_crawl", {"url": "https://example.com", "limit": 5})
            job_id = json.loads(started.content[0].text)["jobId"]
            status = await client.call_tool("firecrawl_crawl_status", {"jobId": job_id})

        mock_api_client.get_crawl_status.assert_awaited_once_with("job-123")
        assert json.loads(status.content[0].text)["status"] == "completed"

    @pytest.mark.asyncio
    async def test_backend_failure_reported_as_tool_error(self, registered_server, mock_api_client):
        mock_api_client.map.side_effect = FirecrawlConnectionError("Map failed: Connection refused", operation="Map")

        async with Client(registered_server.mcp) as client:
            with pytest.raises(ToolError, match="Map failed: Connection refused"):
                await client.call_tool("firecrawl_map", {"url": "https://example.com"})

    @pytest.mark.asyncio
    async def test_missing_required_argument(self, registered_server, mock_api_client):
        async with Client(registered_server.mcp) as client:
            with pytest.raises(ToolError, match="url"):
                await client.call_tool("firecrawl_scrape", {})

        mock_api_client.scrape.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_tool(self, registered_server, mock_api_client):
        async with Client(registered_server.mcp) as client:
            with pytest.raises(ToolError, match="Unknown tool"):
                await client.call_tool("firecrawl_search", {"query": "python"})

        mock_api_client.scrape.assert_not_called()


class TestCommandLine:
    """Entry point behaviour."""

    def test_help_exits_zero(self, capsys, monkeypatch):
        monkeypatch.setattr("sys.argv", ["firecrawl-local-mcp", "--help"])

        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == 0
        output = capsys.readouterr().out
        assert "--url" in output
        assert "FIRECRAWL_URL" in output
        assert "FIRECRAWL_BASE_URL" in output

    def test_invalid_url_exits_one(self):
        with patch.object(FirecrawlServer, "_setup_signal_handlers"):
            with pytest.raises(SystemExit) as exc_info:
                FirecrawlServer.main(
                    "Firecrawl Local MCP Server",
                    include_base_url=True,
                    argv=["--url", "ftp://example.com"],
                )

        assert exc_info.value.code == 1
