"""Crawl status tool for the Firecrawl Local MCP server."""

from typing import Any

from firecrawl_local_mcp.api_client import FirecrawlClient
from firecrawl_local_mcp.models import CrawlStatusArguments
from firecrawl_local_mcp.validators import validate_job_id


async def firecrawl_crawl_status(api_client: FirecrawlClient, arguments: CrawlStatusArguments) -> Any:
    """Check the status of a crawl job started with ``firecrawl_crawl``.

    Returns the backend's status document unchanged (status, current/total
    counts and, once finished, the crawled pages).
    """
    job_id = validate_job_id(arguments.job_id)
    return await api_client.get_crawl_status(job_id)
