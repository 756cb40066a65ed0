"""Tests for Firecrawl MCP error handling."""

import json
import logging

import httpx
import pytest
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND

from firecrawl_local_mcp.exceptions import (
    FirecrawlBackendError,
    FirecrawlConnectionError,
    FirecrawlInternalError,
    FirecrawlMethodNotFoundError,
    FirecrawlTimeoutError,
    FirecrawlValidationError,
    map_exception,
)
from firecrawl_local_mcp.mcp_common.exceptions import MCPClientError, MCPError, log_tool_exception

REQUEST = httpx.Request("POST", "http://firecrawl.test:3002/v0/scrape")


class TestErrorKinds:
    """Each structured error maps onto its JSON-RPC code."""

    @pytest.mark.parametrize(
        ("error", "code"),
        [
            (FirecrawlMethodNotFoundError("Unknown tool: x"), METHOD_NOT_FOUND),
            (FirecrawlValidationError("url cannot be empty", field="url"), INVALID_PARAMS),
            (FirecrawlInternalError("Tool execution failed: boom"), INTERNAL_ERROR),
            (FirecrawlConnectionError("Scrape failed: refused"), INTERNAL_ERROR),
            (FirecrawlBackendError("Map failed: 502", status_code=502), INTERNAL_ERROR),
        ],
    )
    def test_error_codes(self, error, code):
        assert error.error_code == code
        assert error.to_error_data().code == code

    def test_client_errors_are_client_errors(self):
        assert isinstance(FirecrawlValidationError("bad"), MCPClientError)
        assert isinstance(FirecrawlMethodNotFoundError("Unknown tool: x"), MCPClientError)
        assert not isinstance(FirecrawlInternalError("boom"), MCPClientError)

    def test_message_carries_context(self):
        error = FirecrawlBackendError(
            "Crawl failed: 500",
            endpoint="/v0/crawl",
            status_code=500,
            correlation_id="a1b2c3d4",
        )

        assert error.message == "Crawl failed: 500"
        assert str(error) == "Crawl failed: 500 [cid=a1b2c3d4] (endpoint=/v0/crawl) (status=500)"
        assert error.to_dict()["kind"] == "InternalError"
        assert error.to_error_data().data["correlation_id"] == "a1b2c3d4"


class TestMapException:
    """httpx failures become InternalError subclasses naming the operation."""

    def test_connect_error(self):
        error = map_exception(httpx.ConnectError("Connection refused", request=REQUEST), "Scrape", "/v0/scrape")

        assert isinstance(error, FirecrawlConnectionError)
        assert error.message == "Scrape failed: Connection refused"
        assert error.endpoint == "/v0/scrape"

    def test_timeout(self):
        error = map_exception(httpx.ConnectTimeout("timed out", request=REQUEST), "Map")
        assert isinstance(error, FirecrawlTimeoutError)
        assert error.message == "Map failed: timed out"

    def test_status_error_with_text_body(self):
        response = httpx.Response(502, text="Bad Gateway", request=REQUEST)
        status_error = httpx.HTTPStatusError("Server error '502 Bad Gateway'", request=REQUEST, response=response)

        error = map_exception(status_error, "Crawl", "/v0/crawl")

        assert isinstance(error, FirecrawlBackendError)
        assert error.status_code == 502
        assert error.response_body == "Bad Gateway"
        assert error.operation == "Crawl"

    def test_invalid_json(self):
        try:
            json.loads("<html>")
        except json.JSONDecodeError as e:
            error = map_exception(e, "Get crawl status")

        assert type(error) is FirecrawlInternalError
        assert error.message.startswith("Get crawl status failed: backend returned invalid JSON")

    def test_message_never_empty(self):
        error = map_exception(httpx.ReadError("", request=REQUEST), "Scrape")
        assert error.message == "Scrape failed: ReadError"


class TestLogToolException:
    """Log level depends on who is at fault."""

    def test_client_error_logged_as_warning(self, caplog):
        with caplog.at_level(logging.DEBUG):
            log_tool_exception("firecrawl_scrape", FirecrawlValidationError("url cannot be empty"), "a1b2c3d4")

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.exc_info is None
        assert "[a1b2c3d4]" in record.getMessage()

    def test_backend_error_logged_with_traceback(self, caplog):
        error: MCPError = FirecrawlConnectionError("Scrape failed: Connection refused")

        with caplog.at_level(logging.DEBUG):
            log_tool_exception("firecrawl_scrape", error)

        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert record.exc_info is not None
