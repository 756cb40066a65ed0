"""
Correlation ID tracking for tool invocations.

Every tool call gets an 8-character id that is attached to its log lines and
to any structured error it raises, so a failure reported to the MCP client
can be matched with the server-side log entry.

Usage:
    >>> corr_id = generate_correlation_id()
    >>> get_correlation_id() == corr_id
    True
"""

import contextvars
import uuid

# Per-task storage; each asyncio task handling a tool call sees its own id
_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar("correlation_id", default=None)


def generate_correlation_id() -> str:
    """
    Generate a new correlation ID and make it current.

    Returns:
        First 8 hex characters of a random UUID
    """
    corr_id = uuid.uuid4().hex[:8]
    _correlation_id.set(corr_id)
    return corr_id


def get_correlation_id() -> str | None:
    """Return the correlation ID of the current context, if any."""
    return _correlation_id.get()
