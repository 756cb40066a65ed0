"""
Crawl tool for the Firecrawl Local MCP server.

Starts an asynchronous crawl job on the backend's /v0/crawl endpoint. The
backend answers with a job id; progress is polled with the crawl status
tool.
"""

from typing import Any

from firecrawl_local_mcp.api_client import FirecrawlClient
from firecrawl_local_mcp.models import CrawlArguments
from firecrawl_local_mcp.validators import validate_url


async def firecrawl_crawl(api_client: FirecrawlClient, arguments: CrawlArguments) -> Any:
    """
    Crawl a website starting from a URL.

    The crawl settings travel to the backend nested under ``crawlerOptions``:

        {
            "url": "https://docs.example.com",
            "crawlerOptions": {
                "maxDepth": 2,
                "limit": 10,
                "allowBackwardLinks": false,
                "allowExternalLinks": false,
                "includes": ["/docs/*"]   // only when supplied
            }
        }

    Args:
        api_client: Injected FirecrawlClient instance
        arguments: Parsed tool arguments

    Returns:
        Raw backend response, typically {"jobId": "..."}
    """
    url = validate_url(arguments.url)
    return await api_client.crawl(url, arguments.to_options())
