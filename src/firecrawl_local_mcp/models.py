"""Data models for Firecrawl Local MCP tools."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# =============================================================================
# Tool Names
# =============================================================================


class ToolName(str, Enum):
    """The four tools exposed by the server."""

    SCRAPE = "firecrawl_scrape"
    CRAWL = "firecrawl_crawl"
    CRAWL_STATUS = "firecrawl_crawl_status"
    MAP = "firecrawl_map"


# =============================================================================
# Tool Arguments
# =============================================================================


class ToolArguments(BaseModel):
    """Base for typed tool arguments.

    Fields are snake_case in Python and camelCase on the wire. Unknown
    fields are dropped; the dispatcher logs them before parsing.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @classmethod
    def unknown_fields(cls, arguments: dict[str, Any]) -> list[str]:
        """Return argument keys that match no field (by alias or name)."""
        known = set(cls.model_fields)
        known.update(field.alias for field in cls.model_fields.values() if field.alias)
        return sorted(key for key in arguments if key not in known)


class ScrapeArguments(ToolArguments):
    """Arguments for ``firecrawl_scrape``."""

    url: str
    formats: list[str] = Field(default_factory=lambda: ["markdown"])
    only_main_content: bool = True
    include_tags: list[str] | None = None
    exclude_tags: list[str] | None = None

    def to_options(self) -> dict[str, Any]:
        """Build the /v0/scrape options; tag filters only when given."""
        options: dict[str, Any] = {
            "formats": self.formats,
            "onlyMainContent": self.only_main_content,
        }
        if self.include_tags is not None:
            options["includeTags"] = self.include_tags
        if self.exclude_tags is not None:
            options["excludeTags"] = self.exclude_tags
        return options


class CrawlArguments(ToolArguments):
    """Arguments for ``firecrawl_crawl``."""

    url: str
    includes: list[str] | None = None
    excludes: list[str] | None = None
    max_depth: int = Field(default=2, ge=0)
    limit: int = Field(default=10, ge=1)
    allow_backward_links: bool = False
    allow_external_links: bool = False

    def to_options(self) -> dict[str, Any]:
        """Build the /v0/crawl options.

        The backend expects crawl settings nested under ``crawlerOptions``.
        """
        crawler_options: dict[str, Any] = {
            "maxDepth": self.max_depth,
            "limit": self.limit,
            "allowBackwardLinks": self.allow_backward_links,
            "allowExternalLinks": self.allow_external_links,
        }
        if self.includes is not None:
            crawler_options["includes"] = self.includes
        if self.excludes is not None:
            crawler_options["excludes"] = self.excludes
        return {"crawlerOptions": crawler_options}


class CrawlStatusArguments(ToolArguments):
    """Arguments for ``firecrawl_crawl_status``."""

    job_id: str


class MapArguments(ToolArguments):
    """Arguments for ``firecrawl_map``."""

    url: str
    search: str | None = None
    ignore_sitemap: bool = False
    include_subdomains: bool = False
    limit: int = Field(default=5000, ge=1)

    def to_options(self) -> dict[str, Any]:
        """Build the /v0/map options; ``search`` only when non-empty."""
        options: dict[str, Any] = {
            "ignoreSitemap": self.ignore_sitemap,
            "includeSubdomains": self.include_subdomains,
            "limit": self.limit,
        }
        if self.search:
            options["search"] = self.search
        return options


ARGUMENT_MODELS: dict[ToolName, type[ToolArguments]] = {
    ToolName.SCRAPE: ScrapeArguments,
    ToolName.CRAWL: CrawlArguments,
    ToolName.CRAWL_STATUS: CrawlStatusArguments,
    ToolName.MAP: MapArguments,
}
