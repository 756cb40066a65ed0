"""Firecrawl backend HTTP client.

Thin async wrapper around the Firecrawl v0 REST endpoints. Each operation is
exactly one HTTP request with its own timeout; there are no retries and no
response caching. Any failure surfaces as a FirecrawlInternalError.
"""

from typing import Any
from urllib.parse import quote

import httpx

from firecrawl_local_mcp.config import FirecrawlConfig, logger
from firecrawl_local_mcp.exceptions import map_exception
from firecrawl_local_mcp.mcp_common.correlation import get_correlation_id

# Per-operation timeouts in seconds
SCRAPE_TIMEOUT = 30.0
CRAWL_TIMEOUT = 30.0
MAP_TIMEOUT = 30.0
CRAWL_STATUS_TIMEOUT = 10.0
CONNECTION_TEST_TIMEOUT = 5.0


class FirecrawlClient:
    """
    Async client for a self-hosted Firecrawl instance.

    Responses are returned as parsed JSON, unexamined.

    Example usage:
        >>> client = FirecrawlClient(FirecrawlConfig(base_url="http://localhost:3002"))
        >>> result = await client.scrape("https://example.com", {"formats": ["markdown"]})
        >>> await client.close()
    """

    def __init__(self, config: FirecrawlConfig, http_client: httpx.AsyncClient | None = None):
        """
        Initialise client.

        Args:
            config: Resolved backend configuration
            http_client: Optional preconfigured httpx client (e.g. with a mock
                transport); the client takes ownership and closes it
        """
        self.config = config
        self._http_client = http_client or httpx.AsyncClient(headers={"Accept": "application/json"})

    @property
    def base_url(self) -> str:
        return self.config.base_url

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        timeout: float,
        payload: dict[str, Any] | None = None,
    ) -> Any:
        """
        Send one request to the backend and decode its JSON body.

        Args:
            operation: Operation name used in error messages
            method: HTTP method
            path: Path below the base URL
            timeout: Request timeout in seconds
            payload: JSON body for POST requests

        Returns:
            Decoded JSON response

        Raises:
            FirecrawlInternalError: On transport failure, timeout, non-2xx
                status or a body that is not JSON
        """
        logger.debug(f"Backend request: {method} {path}")
        try:
            response = await self._http_client.request(
                method,
                f"{self.base_url}{path}",
                json=payload,
                timeout=timeout,
            )
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise map_exception(e, operation, endpoint=path, correlation_id=get_correlation_id()) from e

    async def scrape(self, url: str, options: dict[str, Any] | None = None) -> Any:
        """POST /v0/scrape with ``{url, **options}``."""
        return await self._request(
            "Scrape",
            "POST",
            "/v0/scrape",
            timeout=SCRAPE_TIMEOUT,
            payload={"url": url, **(options or {})},
        )

    async def crawl(self, url: str, options: dict[str, Any] | None = None) -> Any:
        """POST /v0/crawl with ``{url, **options}``; returns the job handle."""
        return await self._request(
            "Crawl",
            "POST",
            "/v0/crawl",
            timeout=CRAWL_TIMEOUT,
            payload={"url": url, **(options or {})},
        )

    async def get_crawl_status(self, job_id: str) -> Any:
        """GET /v0/crawl/status/{job_id}."""
        return await self._request(
            "Get crawl status",
            "GET",
            f"/v0/crawl/status/{quote(job_id, safe='')}",
            timeout=CRAWL_STATUS_TIMEOUT,
        )

    async def map(self, url: str, options: dict[str, Any] | None = None) -> Any:
        """POST /v0/map with ``{url, **options}``."""
        return await self._request(
            "Map",
            "POST",
            "/v0/map",
            timeout=MAP_TIMEOUT,
            payload={"url": url, **(options or {})},
        )

    async def test_connection(self) -> bool:
        """
        Check that the backend answers HTTP at all.

        Any response, whatever its status, counts as reachable.

        Returns:
            True if the backend responded

        Raises:
            FirecrawlInternalError: If the backend could not be reached
        """
        try:
            response = await self._http_client.get(self.base_url, timeout=CONNECTION_TEST_TIMEOUT)
        except httpx.HTTPError as e:
            raise map_exception(e, "Connection test", endpoint="/") from e

        logger.info(f"Firecrawl instance at {self.base_url} answered with status {response.status_code}")
        return True

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._http_client.aclose()
        logger.info("Firecrawl client closed")


async def create_firecrawl_client(config: FirecrawlConfig) -> FirecrawlClient:
    """
    Factory function used by the server at startup.

    Args:
        config: Resolved backend configuration

    Returns:
        Ready-to-use FirecrawlClient
    """
    logger.info(f"Connecting to Firecrawl instance at: {config.base_url}")
    return FirecrawlClient(config)
