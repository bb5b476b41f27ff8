"""
Configuration for the sitemap-scout MCP server.

Uses Pydantic Settings for type-safe environment variable loading. Settings
are read once at startup; the core receives an immutable ``FetchConfig``.
"""

from functools import lru_cache
from typing import Annotated

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

import sitemapscout
from sitemapscout.config import (
    DEFAULT_MAX_CONCURRENT_REQUESTS,
    DEFAULT_TIMEOUT_MS,
    DEFAULT_USER_AGENT,
    FetchConfig,
)
from sitemapscout.mcp.mcp_common.config import parse_comma_separated, parse_log_level
from sitemapscout.mcp.mcp_common.logging import setup_server_logging

load_dotenv()


class ScoutSettings(BaseSettings):
    """sitemap-scout MCP server settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Outbound HTTP
    request_timeout: int = Field(
        default=DEFAULT_TIMEOUT_MS,
        ge=1000,
        le=300000,
        description="Per-request timeout for sitemap fetches (ms)",
    )
    max_concurrent_requests: int = Field(
        default=DEFAULT_MAX_CONCURRENT_REQUESTS,
        ge=1,
        le=100,
        description="Cap on concurrent outbound requests across all tool calls",
    )
    user_agent: str = Field(default=DEFAULT_USER_AGENT, description="User-Agent header for fetches")

    # Server
    port: int = Field(default=8080, ge=1, le=65535, description="HTTP transport port")
    log_level: str = Field(default="INFO", description="Logging level")
    allowed_origins: Annotated[list[str], NoDecode] = Field(default_factory=lambda: ["*"])
    allowed_hosts: Annotated[list[str], NoDecode] = Field(default_factory=lambda: ["*"])
    service_name: str = Field(default="sitemap-scout")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper

    @field_validator("allowed_origins", "allowed_hosts", mode="before")
    @classmethod
    def validate_comma_separated(cls, v: str | list[str]) -> list[str]:
        """Parse comma-separated string into list."""
        return parse_comma_separated(v)

    def to_fetch_config(self) -> FetchConfig:
        """Build the immutable fetch configuration handed to the core."""
        return FetchConfig(
            timeout_ms=self.request_timeout,
            max_concurrent_requests=self.max_concurrent_requests,
            user_agent=self.user_agent,
        )


@lru_cache
def get_settings() -> ScoutSettings:
    """Get cached settings instance."""
    return ScoutSettings()


settings = get_settings()

ALLOWED_ORIGINS = settings.allowed_origins
ALLOWED_HOSTS = settings.allowed_hosts
SERVICE_NAME = settings.service_name
SERVICE_VERSION = sitemapscout.__version__

logger = setup_server_logging(SERVICE_NAME, SERVICE_VERSION, level=parse_log_level(settings.log_level))
