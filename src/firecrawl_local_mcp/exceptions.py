"""Custom exceptions for the Firecrawl Local MCP server.

All exceptions inherit from mcp_common.exceptions so the dispatcher can tell
structured errors (passed through unchanged) from unexpected ones (wrapped).
Every backend failure is an ``InternalError`` kind; the subclasses only
record what went wrong for logging.
"""

import json
from typing import Any

import httpx

from firecrawl_local_mcp.mcp_common.exceptions import (
    ErrorKind,
    MCPConnectionError,
    MCPError,
    MCPMethodNotFoundError,
    MCPServerError,
    MCPTimeoutError,
    MCPValidationError,
    log_tool_exception,
)


class FirecrawlMCPError(MCPError):
    """Base exception for all Firecrawl MCP errors."""

    pass


class FirecrawlInternalError(FirecrawlMCPError):
    """Backend call or tool execution failed.

    Attributes:
        operation: Backend operation that failed (e.g. "Scrape")
    """

    kind = ErrorKind.INTERNAL_ERROR

    def __init__(self, message: str, *, operation: str | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.operation = operation


class FirecrawlConnectionError(FirecrawlInternalError, MCPConnectionError):
    """Backend unreachable - connection refused, DNS failure, etc."""

    pass


class FirecrawlTimeoutError(FirecrawlInternalError, MCPTimeoutError):
    """Backend did not answer within the operation timeout."""

    pass


class FirecrawlBackendError(FirecrawlInternalError, MCPServerError):
    """Backend answered with a non-2xx status."""

    pass


class FirecrawlMethodNotFoundError(MCPMethodNotFoundError):
    """Invocation named a tool that is not in the catalog."""

    pass


class FirecrawlValidationError(MCPValidationError):
    """Validation error - invalid tool arguments."""

    pass


def _response_body(response: httpx.Response) -> dict[str, Any] | str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    return body if isinstance(body, dict) else response.text


def map_exception(
    exception: Exception,
    operation: str,
    endpoint: str | None = None,
    correlation_id: str | None = None,
) -> FirecrawlInternalError:
    """
    Map a failed backend call to a structured ``InternalError``.

    The message always reads ``"<operation> failed: <cause>"``.

    Args:
        exception: Exception raised while calling the backend
        operation: Human-readable operation name (e.g. "Get crawl status")
        endpoint: Backend path that was called
        correlation_id: Correlation ID for request tracking

    Returns:
        Mapped FirecrawlInternalError subclass
    """
    detail = str(exception) or type(exception).__name__
    message = f"{operation} failed: {detail}"
    common: dict[str, Any] = {
        "operation": operation,
        "endpoint": endpoint,
        "correlation_id": correlation_id,
    }

    if isinstance(exception, httpx.TimeoutException):
        return FirecrawlTimeoutError(message, **common)

    if isinstance(exception, httpx.HTTPStatusError):
        return FirecrawlBackendError(
            message,
            status_code=exception.response.status_code,
            response_body=_response_body(exception.response),
            **common,
        )

    if isinstance(exception, httpx.TransportError):
        return FirecrawlConnectionError(message, **common)

    if isinstance(exception, json.JSONDecodeError):
        return FirecrawlInternalError(f"{operation} failed: backend returned invalid JSON: {detail}", **common)

    return FirecrawlInternalError(message, **common)


__all__ = [
    "FirecrawlMCPError",
    "FirecrawlInternalError",
    "FirecrawlConnectionError",
    "FirecrawlTimeoutError",
    "FirecrawlBackendError",
    "FirecrawlMethodNotFoundError",
    "FirecrawlValidationError",
    "map_exception",
    "log_tool_exception",
]
