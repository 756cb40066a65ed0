"""
Firecrawl Local MCP Server - self-hosted Firecrawl via Model Context Protocol.

Exposes the scrape, crawl, crawl status and map endpoints of a local
Firecrawl instance as MCP tools for AI agents.
"""

from typing import Any

from firecrawl_local_mcp import __version__
from firecrawl_local_mcp.api_client import create_firecrawl_client
from firecrawl_local_mcp.config import ALLOWED_HOSTS, ALLOWED_ORIGINS, DEFAULT_BASE_URL, FirecrawlConfig, get_settings, logger
from firecrawl_local_mcp.mcp_common.server import BaseMCPServer
from firecrawl_local_mcp.wiring import register_all_tools

# Server instructions for LLMs
FIRECRAWL_INSTRUCTIONS = """\
Use these tools to fetch web content through a self-hosted Firecrawl instance.

Tool selection:
- firecrawl_scrape: Fetch one page as markdown (or other formats)
- firecrawl_map: List the URLs of a website
- firecrawl_crawl: Start a multi-page crawl; returns a job ID
- firecrawl_crawl_status: Poll a crawl job by its ID for progress and results
"""

HELP_EPILOG = f"""\
Environment Variables:
  FIRECRAWL_URL           Firecrawl instance URL (default: {DEFAULT_BASE_URL})
  FIRECRAWL_BASE_URL      Alternative environment variable for Firecrawl URL
  FIRECRAWL_LOG_LEVEL     Log level (default: INFO)
  ALLOWED_ORIGINS         Comma-separated CORS origins for HTTP transport
  ALLOWED_HOSTS           Comma-separated host headers for HTTP transport

Examples:
  firecrawl-local-mcp --url http://192.168.1.210:3002
  FIRECRAWL_URL=http://my-server:3002 firecrawl-local-mcp
"""


class FirecrawlServer(BaseMCPServer):
    """
    MCP Server exposing a Firecrawl instance.

    The backend URL is resolved once, when the API client is created.
    """

    # Use module-level logger
    logger = logger

    def __init__(self, server_name: str = "firecrawl-local-mcp", base_url: str | None = None):
        super().__init__(server_name, instructions=FIRECRAWL_INSTRUCTIONS, server_version=__version__)
        self.base_url = base_url
        self.config: FirecrawlConfig | None = None

    async def create_api_client(self) -> Any:
        """Resolve the backend configuration and create the Firecrawl client."""
        self.config = FirecrawlConfig.resolve(self.base_url, get_settings())
        return await create_firecrawl_client(self.config)

    def register_tools(self) -> None:
        """Register the four catalog tools."""
        register_all_tools(self.mcp, self.api_client)

    def get_allowed_origins(self) -> list[str]:
        """Return allowed CORS origins from config."""
        return ALLOWED_ORIGINS

    def get_allowed_hosts(self) -> list[str]:
        """Return allowed host headers from config."""
        return ALLOWED_HOSTS


def main() -> None:
    """Entry point for the firecrawl-local-mcp command."""
    FirecrawlServer.main(
        "Firecrawl Local MCP Server",
        default_transport="stdio",
        include_base_url=True,
        epilog=HELP_EPILOG,
    )


if __name__ == "__main__":
    main()
