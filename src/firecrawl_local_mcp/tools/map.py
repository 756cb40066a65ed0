"""
Map tool for the Firecrawl Local MCP server.

Forwards URL discovery to the backend's /v0/map endpoint.
"""

from typing import Any

from firecrawl_local_mcp.api_client import FirecrawlClient
from firecrawl_local_mcp.models import MapArguments
from firecrawl_local_mcp.validators import validate_url


async def firecrawl_map(api_client: FirecrawlClient, arguments: MapArguments) -> Any:
    """
    Map a website to get a list of all accessible URLs.

    Args:
        api_client: Injected FirecrawlClient instance
        arguments: Parsed tool arguments; ``search`` is forwarded only when
            non-empty, ``limit`` defaults to 5000

    Returns:
        Raw backend response, e.g.:
        {
            "success": true,
            "links": ["https://example.com/", "https://example.com/about"]
        }
    """
    url = validate_url(arguments.url)
    return await api_client.map(url, arguments.to_options())
