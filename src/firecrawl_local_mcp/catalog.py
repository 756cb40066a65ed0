"""
Static tool catalog for the Firecrawl Local MCP server.

The descriptors below are the wire contract advertised on tool discovery.
They are returned verbatim and never change at runtime; defaults must stay
in step with the argument models in ``models.py``.
"""

from mcp.types import Tool

from firecrawl_local_mcp.models import ToolName

_STRING_ARRAY = {"type": "array", "items": {"type": "string"}}

SCRAPE_TOOL = Tool(
    name=ToolName.SCRAPE.value,
    description="Scrape a single webpage and return its content in markdown format",
    inputSchema={
        "type": "object",
        "properties": {
            "url": {
                "type": "string",
                "description": "The URL to scrape",
            },
            "formats": {
                **_STRING_ARRAY,
                "description": "Output formats (markdown, html, rawHtml, screenshot, links, extract)",
                "default": ["markdown"],
            },
            "onlyMainContent": {
                "type": "boolean",
                "description": "Extract only main content, removing headers, navs, footers",
                "default": True,
            },
            "includeTags": {
                **_STRING_ARRAY,
                "description": "HTML tags to include in the output",
            },
            "excludeTags": {
                **_STRING_ARRAY,
                "description": "HTML tags to exclude from the output",
            },
        },
        "required": ["url"],
    },
)

CRAWL_TOOL = Tool(
    name=ToolName.CRAWL.value,
    description="Crawl a website starting from a URL and return content from multiple pages",
    inputSchema={
        "type": "object",
        "properties": {
            "url": {
                "type": "string",
                "description": "The starting URL to crawl",
            },
            "includes": {
                **_STRING_ARRAY,
                "description": "URL patterns to include (supports wildcards)",
            },
            "excludes": {
                **_STRING_ARRAY,
                "description": "URL patterns to exclude (supports wildcards)",
            },
            "maxDepth": {
                "type": "number",
                "description": "Maximum crawl depth",
                "default": 2,
            },
            "limit": {
                "type": "number",
                "description": "Maximum number of pages to crawl",
                "default": 10,
            },
            "allowBackwardLinks": {
                "type": "boolean",
                "description": "Allow crawling backward links",
                "default": False,
            },
            "allowExternalLinks": {
                "type": "boolean",
                "description": "Allow crawling external links",
                "default": False,
            },
        },
        "required": ["url"],
    },
)

CRAWL_STATUS_TOOL = Tool(
    name=ToolName.CRAWL_STATUS.value,
    description="Check the status of a crawl job",
    inputSchema={
        "type": "object",
        "properties": {
            "jobId": {
                "type": "string",
                "description": "The job ID returned from a crawl request",
            },
        },
        "required": ["jobId"],
    },
)

MAP_TOOL = Tool(
    name=ToolName.MAP.value,
    description="Map a website to get a list of all accessible URLs",
    inputSchema={
        "type": "object",
        "properties": {
            "url": {
                "type": "string",
                "description": "The URL to map",
            },
            "search": {
                "type": "string",
                "description": "Search query to filter URLs",
            },
            "ignoreSitemap": {
                "type": "boolean",
                "description": "Ignore the website's sitemap",
                "default": False,
            },
            "includeSubdomains": {
                "type": "boolean",
                "description": "Include subdomains in the map",
                "default": False,
            },
            "limit": {
                "type": "number",
                "description": "Maximum number of URLs to return",
                "default": 5000,
            },
        },
        "required": ["url"],
    },
)

TOOL_CATALOG: tuple[Tool, ...] = (SCRAPE_TOOL, CRAWL_TOOL, CRAWL_STATUS_TOOL, MAP_TOOL)


def get_descriptor(name: str) -> Tool | None:
    """Return the descriptor for ``name``, or None if there is no such tool."""
    for descriptor in TOOL_CATALOG:
        if descriptor.name == name:
            return descriptor
    return None
