"""
Configuration for the Firecrawl Local MCP server.

Uses Pydantic Settings for type-safe environment variable loading. The
backend URL is resolved once at startup into an immutable FirecrawlConfig
that is handed to the API client explicitly.
"""

from functools import lru_cache
from typing import Annotated

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

import firecrawl_local_mcp
from firecrawl_local_mcp.mcp_common.config import parse_comma_separated, validate_base_url, validate_log_level
from firecrawl_local_mcp.mcp_common.logging import setup_server_logging

load_dotenv()

DEFAULT_BASE_URL = "http://localhost:3002"


class FirecrawlSettings(BaseSettings):
    """Firecrawl Local MCP server settings."""

    model_config = SettingsConfigDict(
        env_prefix="FIRECRAWL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Backend location (FIRECRAWL_URL wins over FIRECRAWL_BASE_URL)
    url: str | None = Field(default=None, description="Firecrawl instance URL")
    base_url: str | None = Field(default=None, description="Alternative Firecrawl instance URL")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    # MCP Server Configuration (without FIRECRAWL_ prefix)
    allowed_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["*"],
        alias="ALLOWED_ORIGINS",
    )
    allowed_hosts: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["*"],
        alias="ALLOWED_HOSTS",
    )
    service_name: str = Field(default="firecrawl-local-mcp", alias="SERVICE_NAME")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        return validate_log_level(v)

    @field_validator("allowed_origins", "allowed_hosts", mode="before")
    @classmethod
    def validate_comma_separated(cls, v: str | list[str]) -> list[str]:
        """Parse comma-separated string into list."""
        return parse_comma_separated(v)


class FirecrawlConfig(BaseModel):
    """Backend configuration, fixed for the lifetime of the process."""

    model_config = ConfigDict(frozen=True)

    base_url: str

    @field_validator("base_url")
    @classmethod
    def normalise_base_url(cls, v: str) -> str:
        """Require an http(s) URL and drop trailing slashes."""
        return validate_base_url(v, field_name="firecrawl_url", strip_trailing_slash=True)

    @classmethod
    def resolve(
        cls,
        explicit_url: str | None = None,
        settings: FirecrawlSettings | None = None,
    ) -> "FirecrawlConfig":
        """
        Resolve the backend URL.

        Priority: explicit value (--url), FIRECRAWL_URL, FIRECRAWL_BASE_URL,
        then the default. Empty values are skipped.

        Args:
            explicit_url: URL given on the command line
            settings: Settings to read the environment values from

        Returns:
            Validated configuration
        """
        if settings is None:
            settings = get_settings()
        return cls(base_url=explicit_url or settings.url or settings.base_url or DEFAULT_BASE_URL)


@lru_cache
def get_settings() -> FirecrawlSettings:
    """Get cached settings instance."""
    return FirecrawlSettings()


settings = get_settings()

# Export module-level constants for explicit imports
ALLOWED_ORIGINS = settings.allowed_origins
ALLOWED_HOSTS = settings.allowed_hosts
SERVICE_NAME = settings.service_name
SERVICE_VERSION = firecrawl_local_mcp.__version__

logger = setup_server_logging(SERVICE_NAME, SERVICE_VERSION, level=settings.log_level)
