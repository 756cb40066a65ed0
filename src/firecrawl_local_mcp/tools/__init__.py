"""Tool handlers: one module per Firecrawl tool."""
