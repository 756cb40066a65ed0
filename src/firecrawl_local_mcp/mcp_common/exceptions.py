"""
Base exception hierarchy for MCP servers.

Every structured error carries an ``ErrorKind`` that maps onto a JSON-RPC
error code, plus the context needed to trace it (endpoint, status code,
correlation ID). Anything that is not an ``MCPError`` is considered
unstructured and must be wrapped before it reaches the transport.

Usage:
    >>> from firecrawl_local_mcp.mcp_common.exceptions import MCPMethodNotFoundError
    >>> raise MCPMethodNotFoundError("Unknown tool: foo", correlation_id="a1b2c3d4")
"""

import logging
from enum import Enum
from typing import Any

from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND, ErrorData

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    """Structured error kinds reported to MCP callers."""

    METHOD_NOT_FOUND = "MethodNotFound"
    INVALID_PARAMS = "InvalidParams"
    INTERNAL_ERROR = "InternalError"

    @property
    def code(self) -> int:
        """JSON-RPC error code for this kind."""
        return _KIND_CODES[self]


_KIND_CODES = {
    ErrorKind.METHOD_NOT_FOUND: METHOD_NOT_FOUND,
    ErrorKind.INVALID_PARAMS: INVALID_PARAMS,
    ErrorKind.INTERNAL_ERROR: INTERNAL_ERROR,
}


class MCPError(Exception):
    """
    Base exception for all structured MCP errors.

    Attributes:
        kind: Structured error kind (class level)
        message: Human-readable error message
        endpoint: Backend endpoint that caused the error
        status_code: HTTP status code (if applicable)
        correlation_id: Request correlation ID for tracing
        response_body: Raw response body from the backend
        context: Additional context for debugging
    """

    kind: ErrorKind = ErrorKind.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        *,
        endpoint: str | None = None,
        status_code: int | None = None,
        correlation_id: str | None = None,
        response_body: dict[str, Any] | str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.endpoint = endpoint
        self.status_code = status_code
        self.correlation_id = correlation_id
        self.response_body = response_body
        self.context = context or {}

        parts = [message]
        if correlation_id:
            parts.append(f"[cid={correlation_id}]")
        if endpoint:
            parts.append(f"(endpoint={endpoint})")
        if status_code:
            parts.append(f"(status={status_code})")

        super().__init__(" ".join(parts))

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"kind={self.kind.value!r}, "
            f"message={self.message!r}, "
            f"endpoint={self.endpoint!r}, "
            f"status_code={self.status_code!r}, "
            f"correlation_id={self.correlation_id!r}"
            f")"
        )

    @property
    def error_code(self) -> int:
        """JSON-RPC error code matching ``kind``."""
        return self.kind.code

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging and serialisation."""
        return {
            "error_type": self.__class__.__name__,
            "kind": self.kind.value,
            "message": self.message,
            "endpoint": self.endpoint,
            "status_code": self.status_code,
            "correlation_id": self.correlation_id,
            "context": self.context,
        }

    def to_error_data(self) -> ErrorData:
        """Convert exception to a JSON-RPC error payload."""
        return ErrorData(code=self.error_code, message=str(self), data=self.to_dict())


class MCPClientError(MCPError):
    """
    Client error - the caller sent something the server cannot act on.

    Logged at WARNING; never worth retrying.
    """

    pass


class MCPValidationError(MCPClientError):
    """
    Validation error - invalid tool arguments.

    Attributes:
        field: Name of the invalid field
        value: The invalid value
    """

    kind = ErrorKind.INVALID_PARAMS

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value


class MCPMethodNotFoundError(MCPClientError):
    """The requested tool or method does not exist."""

    kind = ErrorKind.METHOD_NOT_FOUND


class MCPServerError(MCPError):
    """Upstream server error - the backend answered with a failure status."""

    pass


class MCPConnectionError(MCPError):
    """Connection error - the backend could not be reached."""

    pass


class MCPTimeoutError(MCPError):
    """Timeout error - the backend did not answer in time."""

    pass


def log_tool_exception(
    tool_name: str,
    exception: Exception,
    correlation_id: str | None = None,
) -> None:
    """
    Log tool exception with a level matching its type.

    Client errors are expected and logged at WARNING without traceback.
    Backend and unexpected errors are logged at ERROR with traceback.

    Args:
        tool_name: Name of the tool that raised the exception
        exception: Exception that was raised
        correlation_id: Optional correlation ID for request tracking
    """
    correlation_msg = f"[{correlation_id}] " if correlation_id else ""

    if isinstance(exception, MCPClientError):
        logger.warning(f"{correlation_msg}TOOL ERROR: {tool_name} failed: {exception}")
    else:
        logger.error(
            f"{correlation_msg}TOOL ERROR: {tool_name} failed: {exception}",
            exc_info=exception,
        )
