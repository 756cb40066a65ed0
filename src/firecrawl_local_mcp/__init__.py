"""Firecrawl Local MCP Server - Firecrawl scraping tools over the Model Context Protocol.

Exposes a self-hosted Firecrawl instance's scrape, crawl, crawl status and
map endpoints as MCP tools.
"""

__version__ = "1.0.0"
