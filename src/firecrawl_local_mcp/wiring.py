"""Tool registration wiring for the Firecrawl Local MCP server.

Tools are registered from the static catalog rather than from function
signatures, so discovery advertises the catalog schemas exactly as written.
"""

from typing import Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools.tool import Tool, ToolResult
from mcp.types import Tool as ToolDescriptor

from firecrawl_local_mcp.api_client import FirecrawlClient
from firecrawl_local_mcp.catalog import TOOL_CATALOG
from firecrawl_local_mcp.config import logger
from firecrawl_local_mcp.dispatch import ToolDispatcher
from firecrawl_local_mcp.mcp_common.exceptions import MCPError


class CatalogTool(Tool):
    """
    FastMCP tool backed by a catalog descriptor.

    ``run()`` hands the raw argument mapping to the dispatcher, which does
    its own parsing and defaulting.
    """

    def __init__(self, dispatcher: ToolDispatcher, **kwargs: Any):
        super().__init__(**kwargs)
        self._dispatcher = dispatcher

    @classmethod
    def from_descriptor(cls, dispatcher: ToolDispatcher, descriptor: ToolDescriptor) -> "CatalogTool":
        return cls(
            dispatcher=dispatcher,
            name=descriptor.name,
            description=descriptor.description,
            parameters=descriptor.inputSchema,
        )

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        try:
            content = await self._dispatcher.dispatch(self.name, arguments)
        except MCPError as e:
            raise ToolError(str(e)) from e
        return ToolResult(content=content)


def register_all_tools(mcp: FastMCP, api_client: FirecrawlClient) -> None:
    """
    Register all Firecrawl tools.

    Args:
        mcp: FastMCP server instance
        api_client: Initialised Firecrawl client shared by every tool
    """
    if api_client is None:
        logger.error("Cannot register tools: API client is not initialized.")
        raise RuntimeError("API client must be initialized before registering tools.")

    dispatcher = ToolDispatcher(api_client)

    tool_count = 0
    for descriptor in TOOL_CATALOG:
        mcp.add_tool(CatalogTool.from_descriptor(dispatcher, descriptor))
        tool_count += 1

    logger.info(f"Registered {tool_count} Firecrawl tools")
