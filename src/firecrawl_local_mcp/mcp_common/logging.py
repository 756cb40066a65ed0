"""
Structured JSON logging for MCP servers.

Log records are written as one JSON object per line with correlation ID,
service metadata and sensitive-data redaction. Output goes to stderr: on the
stdio transport stdout is the protocol channel and must stay clean.

Usage:
    >>> logger = setup_server_logging("firecrawl-local-mcp", "1.0.0")
    >>> logger.info("Server starting...")
"""

import json
import logging
import re
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

from .correlation import get_correlation_id

# Patterns for sensitive data that should be redacted
SENSITIVE_PATTERNS = [
    # API keys and tokens
    re.compile(
        r"(api[_-]?key|token|secret|password|authorization|bearer)"
        r"([\"']?\s*[:=]\s*[\"']?)([^\"'\s,}\]]+)",
        re.IGNORECASE,
    ),
    # JWTs
    re.compile(r"eyJ[a-zA-Z0-9_-]*\.eyJ[a-zA-Z0-9_-]*\.[a-zA-Z0-9_-]*"),
]

# Third-party loggers that log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "asyncio")

# LogRecord attributes that are not user-supplied extras
_STANDARD_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "thread",
        "threadName",
        "taskName",
        "exc_info",
        "exc_text",
        "stack_info",
        "correlation_id",
    }
)


def redact_sensitive_data(message: str, replacement: str = "[REDACTED]") -> str:
    """
    Redact credentials and tokens from a string.

    Example:
        >>> redact_sensitive_data("api_key=secret123")
        'api_key=[REDACTED]'
    """
    if not isinstance(message, str):
        message = str(message)

    key_value, jwt = SENSITIVE_PATTERNS
    redacted = key_value.sub(lambda m: f"{m.group(1)}{m.group(2)}{replacement}", message)
    return jwt.sub(replacement, redacted)


class JSONFormatter(logging.Formatter):
    """
    Structured JSON formatter with correlation IDs and service metadata.

    Each entry carries timestamp, level, logger, redacted message,
    correlation ID, service name/version and a coarse log type.
    """

    def __init__(self, service_name: str, service_version: str):
        super().__init__()
        self.service_name = service_name
        self.service_version = service_version

    def _detect_log_type(self, record: logging.LogRecord) -> str:
        """Classify a record for log filtering."""
        if record.levelname in ("ERROR", "CRITICAL"):
            return "error"

        message = record.getMessage().lower()
        if "tool" in message:
            return "request"
        elif "starting" in message or "initialis" in message:
            return "startup"
        elif "shutdown" in message or "cleanup" in message or "exiting" in message:
            return "shutdown"
        return "application"

    def format(self, record: logging.LogRecord) -> str:
        correlation_id = getattr(record, "correlation_id", None) or get_correlation_id()

        log_entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": redact_sensitive_data(record.getMessage()),
            "correlation_id": correlation_id,
            "service_name": self.service_name,
            "service_version": self.service_version,
            "log_type": self._detect_log_type(record),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS and not key.startswith("_"):
                log_entry[key] = value

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class CorrelationIdFilter(logging.Filter):
    """Ensure every record has a ``correlation_id`` attribute."""

    def __init__(self, default_value: str = "-") -> None:
        super().__init__()
        self.default_value = default_value

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "correlation_id", None) is None:
            record.correlation_id = get_correlation_id() or self.default_value
        return True


def setup_logging(
    formatter: logging.Formatter,
    level: int = logging.INFO,
    stream: TextIO | None = None,
) -> logging.Logger:
    """
    Replace root logger handlers with a single formatted stream handler.

    Args:
        formatter: Formatter for the handler
        level: Logging level
        stream: Output stream (default: sys.stderr)

    Returns:
        Root logger instance
    """
    if stream is None:
        stream = sys.stderr

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(CorrelationIdFilter())
    root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root_logger


def setup_server_logging(
    service_name: str,
    service_version: str,
    level: str | int = logging.INFO,
) -> logging.Logger:
    """
    Set up JSON logging for an MCP server and return its named logger.

    Args:
        service_name: Name of the MCP service
        service_version: Version of the service
        level: Level name (e.g. "DEBUG") or logging constant

    Returns:
        Named logger instance for the service
    """
    if isinstance(level, str):
        level = logging.getLevelNamesMapping().get(level.upper(), logging.INFO)
    formatter = JSONFormatter(service_name=service_name, service_version=service_version)
    setup_logging(formatter, level=level)
    return logging.getLogger(service_name)
