"""
sitemap-scout MCP Server - sitemap discovery via Model Context Protocol.

Exposes sitemap discovery, paginated sitemap listing and crawl frontier
assembly as MCP tools for AI agents.
"""

from collections.abc import Sequence
from typing import Any

from sitemapscout.mcp.api_client import create_scout_services
from sitemapscout.mcp.config import ALLOWED_HOSTS, ALLOWED_ORIGINS, SERVICE_NAME, SERVICE_VERSION, logger, settings
from sitemapscout.mcp.mcp_common.server import BaseMCPServer
from sitemapscout.mcp.wiring import register_all_tools, register_prompts, register_resources

# Server instructions for LLMs
SITEMAP_SCOUT_INSTRUCTIONS = """\
Use sitemap-scout to find what pages a website publishes via its sitemaps.

Tool selection:
- discover_sitemaps: Find the sitemaps of a domain
- list_sitemap_urls: Page through the entries of one sitemap (cursor pagination)
- build_crawl_frontier: Get a filtered, deduplicated list of page URLs to crawl
"""


class SitemapScoutServer(BaseMCPServer):
    """MCP Server exposing sitemap tools."""

    logger = logger

    def __init__(self, server_name: str = SERVICE_NAME):
        super().__init__(server_name, SERVICE_VERSION, instructions=SITEMAP_SCOUT_INSTRUCTIONS)

    async def create_api_client(self) -> Any:
        """Create and return the sitemap-scout services wrapper."""
        return await create_scout_services()

    def register_tools(self) -> None:
        """Register all MCP tools, resources, and prompts."""
        register_all_tools(self.mcp, self.api_client)
        register_resources(self.mcp, self.api_client)
        register_prompts(self.mcp)

    def get_allowed_origins(self) -> list[str]:
        """Return allowed CORS origins from config."""
        return ALLOWED_ORIGINS

    def get_allowed_hosts(self) -> list[str]:
        """Return allowed host headers from config."""
        return ALLOWED_HOSTS


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point for the sitemap-scout-mcp command."""
    SitemapScoutServer.main(
        "sitemap-scout - MCP server for sitemap discovery and crawl frontier building",
        argv=argv,
        default_port=settings.port,
    )


if __name__ == "__main__":
    main()
