"""
Scrape tool for the Firecrawl Local MCP server.

Forwards a single-page scrape to the backend's /v0/scrape endpoint.
"""

from typing import Any

from firecrawl_local_mcp.api_client import FirecrawlClient
from firecrawl_local_mcp.models import ScrapeArguments
from firecrawl_local_mcp.validators import validate_url


async def firecrawl_scrape(api_client: FirecrawlClient, arguments: ScrapeArguments) -> Any:
    """
    Scrape a single webpage and return its content.

    Args:
        api_client: Injected FirecrawlClient instance
        arguments: Parsed tool arguments; ``formats`` defaults to
            ["markdown"] and ``onlyMainContent`` to true. ``includeTags`` and
            ``excludeTags`` are forwarded only when supplied.

    Returns:
        Raw backend response, e.g.:
        {
            "success": true,
            "data": {
                "markdown": "...",
                "metadata": {"title": "...", "sourceURL": "..."}
            }
        }
    """
    url = validate_url(arguments.url)
    return await api_client.scrape(url, arguments.to_options())
