"""Validation utilities for Firecrawl Local MCP tools.

Run after the arguments have been parsed into their typed models, so they
only check values, not presence or type.
"""

import re
from urllib.parse import urlparse

from firecrawl_local_mcp.exceptions import FirecrawlValidationError

# Firecrawl job ids are UUIDs; anything path-like is refused
JOB_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


def validate_url(value: str, field_name: str = "url") -> str:
    """
    Validate a target URL.

    Bare hosts such as ``example.com`` are left for the backend to
    interpret, but an explicit scheme must be http or https.

    Args:
        value: The value to validate
        field_name: Name of the field for error messages

    Returns:
        The URL with surrounding whitespace removed

    Raises:
        FirecrawlValidationError: If the URL is empty or has another scheme
    """
    url = value.strip()
    if not url:
        raise FirecrawlValidationError(
            f"{field_name} cannot be empty",
            field=field_name,
            value=value,
        )

    if "://" in url and urlparse(url).scheme.lower() not in ("http", "https"):
        raise FirecrawlValidationError(
            f"{field_name} must use http:// or https://, got '{url[:40]}'",
            field=field_name,
            value=value,
        )

    return url


def validate_job_id(value: str, field_name: str = "jobId") -> str:
    """
    Validate a crawl job id.

    Args:
        value: The value to validate
        field_name: Name of the field for error messages

    Returns:
        The job id with surrounding whitespace removed

    Raises:
        FirecrawlValidationError: If the id is empty or contains other
            characters than letters, digits, "-" and "_"
    """
    job_id = value.strip()
    if not job_id:
        raise FirecrawlValidationError(
            f"{field_name} cannot be empty",
            field=field_name,
            value=value,
        )

    if not JOB_ID_PATTERN.match(job_id):
        raise FirecrawlValidationError(
            f"{field_name} contains invalid characters, got '{job_id[:40]}'",
            field=field_name,
            value=value,
        )

    return job_id
