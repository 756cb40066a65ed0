"""
Configuration validation helpers for MCP servers.

Plain functions that Pydantic field validators delegate to.

Usage:
    >>> validate_base_url("http://localhost:3002/", strip_trailing_slash=True)
    'http://localhost:3002'
    >>> parse_comma_separated("a, b, c")
    ['a', 'b', 'c']
"""

from urllib.parse import urlparse

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


def parse_comma_separated(v: str | list[str]) -> list[str]:
    """
    Parse comma-separated string into list.

    Args:
        v: Either a comma-separated string or already a list of strings

    Returns:
        List of trimmed, non-empty strings
    """
    if isinstance(v, str):
        return [item.strip() for item in v.split(",") if item.strip()]
    return v


def validate_base_url(
    v: str,
    field_name: str = "base_url",
    strip_trailing_slash: bool = False,
) -> str:
    """
    Validate a base URL.

    The URL must be non-empty, use http or https, and name a host.

    Args:
        v: The URL value to validate
        field_name: Name of the field for error messages
        strip_trailing_slash: Strip trailing slashes from the result

    Returns:
        Validated URL

    Raises:
        ValueError: If URL is invalid
    """
    if not v or not v.strip():
        raise ValueError(f"{field_name.upper()} cannot be empty")

    v = v.strip()
    parsed = urlparse(v)
    if parsed.scheme not in ("http", "https"):
        raise ValueError(f"{field_name.upper()} must use http or https: {v}")
    if not parsed.netloc:
        raise ValueError(f"Invalid {field_name.upper()} format: {v}")

    return v.rstrip("/") if strip_trailing_slash else v


def validate_log_level(v: str) -> str:
    """Normalise a log level name, rejecting unknown levels."""
    upper = v.upper()
    if upper not in VALID_LOG_LEVELS:
        raise ValueError(f"Invalid log level: {v}. Must be one of {sorted(VALID_LOG_LEVELS)}")
    return upper
