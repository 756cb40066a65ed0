"""
MCP Common - shared building blocks for MCP servers.

- Correlation ID generation and tracking
- Structured error hierarchy with JSON-RPC error kinds
- Structured JSON logging
- Configuration validation
- Server lifecycle, transport and CLI utilities
"""

from .config import parse_comma_separated, validate_base_url, validate_log_level
from .correlation import (
    generate_correlation_id,
    get_correlation_id,
)
from .exceptions import (
    ErrorKind,
    MCPClientError,
    MCPConnectionError,
    MCPError,
    MCPMethodNotFoundError,
    MCPServerError,
    MCPTimeoutError,
    MCPValidationError,
    log_tool_exception,
)
from .logging import JSONFormatter, redact_sensitive_data, setup_server_logging
from .server import BaseMCPServer, create_argument_parser, create_middleware, setup_transport

__all__ = [
    # Correlation ID
    "generate_correlation_id",
    "get_correlation_id",
    # Exceptions
    "ErrorKind",
    "MCPError",
    "MCPClientError",
    "MCPValidationError",
    "MCPMethodNotFoundError",
    "MCPServerError",
    "MCPConnectionError",
    "MCPTimeoutError",
    "log_tool_exception",
    # Logging
    "JSONFormatter",
    "redact_sensitive_data",
    "setup_server_logging",
    # Config
    "parse_comma_separated",
    "validate_base_url",
    "validate_log_level",
    # Server
    "BaseMCPServer",
    "create_argument_parser",
    "create_middleware",
    "setup_transport",
]
