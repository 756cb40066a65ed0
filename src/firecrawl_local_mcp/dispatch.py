"""Tool dispatch for the Firecrawl Local MCP server.

Turns a tool invocation (name plus argument mapping) into one backend call
and the backend's answer into MCP text content. This is the error boundary:
structured errors pass through unchanged, anything else leaves as an
``InternalError``.
"""

import json
from collections.abc import Awaitable, Callable
from typing import Any, TypeAlias

from mcp.types import TextContent
from pydantic import ValidationError

from firecrawl_local_mcp.api_client import FirecrawlClient
from firecrawl_local_mcp.catalog import get_descriptor
from firecrawl_local_mcp.config import logger
from firecrawl_local_mcp.exceptions import (
    FirecrawlInternalError,
    FirecrawlMethodNotFoundError,
    FirecrawlValidationError,
    log_tool_exception,
)
from firecrawl_local_mcp.mcp_common.correlation import generate_correlation_id
from firecrawl_local_mcp.mcp_common.exceptions import MCPError
from firecrawl_local_mcp.models import ARGUMENT_MODELS, ToolArguments, ToolName
from firecrawl_local_mcp.tools import crawl, crawl_status, scrape
from firecrawl_local_mcp.tools import map as map_module

ToolHandler: TypeAlias = Callable[[FirecrawlClient, Any], Awaitable[Any]]

TOOL_HANDLERS: dict[ToolName, ToolHandler] = {
    ToolName.SCRAPE: scrape.firecrawl_scrape,
    ToolName.CRAWL: crawl.firecrawl_crawl,
    ToolName.CRAWL_STATUS: crawl_status.firecrawl_crawl_status,
    ToolName.MAP: map_module.firecrawl_map,
}


def resolve_tool(name: str, correlation_id: str | None = None) -> ToolName:
    """
    Match a tool name against the catalog.

    Raises:
        FirecrawlMethodNotFoundError: If no descriptor has this exact name
    """
    if get_descriptor(name) is None:
        raise FirecrawlMethodNotFoundError(f"Unknown tool: {name}", correlation_id=correlation_id)
    return ToolName(name)


def _describe_validation_error(error: ValidationError) -> tuple[str, str | None]:
    details = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "arguments"
        details.append(f"{location}: {item['msg']}")
    first_loc = error.errors()[0]["loc"] if error.errors() else ()
    field = str(first_loc[0]) if first_loc else None
    return "; ".join(details), field


def parse_arguments(
    tool: ToolName,
    arguments: dict[str, Any] | None,
    correlation_id: str | None = None,
) -> ToolArguments:
    """
    Parse raw arguments into the tool's typed model, filling defaults.

    Unknown keys are logged and dropped.

    Raises:
        FirecrawlValidationError: If a required field is missing or a value
            has the wrong type
    """
    model = ARGUMENT_MODELS[tool]
    if arguments is None:
        arguments = {}

    if isinstance(arguments, dict):
        unknown = model.unknown_fields(arguments)
        if unknown:
            logger.warning(f"[{correlation_id}] Ignoring unknown arguments for {tool.value}: {', '.join(unknown)}")

    try:
        return model.model_validate(arguments)
    except ValidationError as e:
        details, field = _describe_validation_error(e)
        raise FirecrawlValidationError(
            f"Invalid arguments for {tool.value}: {details}",
            field=field,
            value=arguments.get(field) if field and isinstance(arguments, dict) else None,
            correlation_id=correlation_id,
        ) from e


def format_result(result: Any) -> str:
    """Serialise a backend response as 2-space indented JSON."""
    return json.dumps(result, indent=2, ensure_ascii=False)


class ToolDispatcher:
    """
    Routes tool invocations to their handlers.

    Stateless apart from the injected client, so concurrent invocations do
    not interact.
    """

    def __init__(self, api_client: FirecrawlClient):
        self.api_client = api_client

    async def dispatch(self, name: str, arguments: dict[str, Any] | None) -> list[TextContent]:
        """
        Execute one tool invocation.

        Args:
            name: Tool name as sent by the MCP client
            arguments: Raw argument mapping (may be None)

        Returns:
            A single text content block holding the pretty-printed backend
            response

        Raises:
            MCPError: Structured error (MethodNotFound, InvalidParams or
                InternalError); never anything else
        """
        correlation_id = generate_correlation_id()
        logger.info(f"[{correlation_id}] Tool call: {name}")

        try:
            tool = resolve_tool(name, correlation_id)
            parsed = parse_arguments(tool, arguments, correlation_id)
            result = await TOOL_HANDLERS[tool](self.api_client, parsed)
        except MCPError as e:
            log_tool_exception(name, e, correlation_id)
            raise
        except Exception as e:
            log_tool_exception(name, e, correlation_id)
            raise FirecrawlInternalError(f"Tool execution failed: {e}", correlation_id=correlation_id) from e

        return [TextContent(type="text", text=format_result(result))]
