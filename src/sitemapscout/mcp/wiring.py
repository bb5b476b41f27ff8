"""Tool registration wiring for the sitemap-scout MCP server.

Handles registration of MCP tools, resources and prompts.
"""

import inspect

from fastmcp import FastMCP

from sitemapscout.mcp.api_client import ScoutServices
from sitemapscout.mcp.config import logger
from sitemapscout.mcp.mcp_common.tool_registration import create_tool_wrapper
from sitemapscout.mcp.tools import discover, frontier, health, listing


def register_all_tools(mcp: FastMCP, api_client: ScoutServices) -> None:
    """
    Register all sitemap-scout MCP tools.

    Args:
        mcp: FastMCP server instance
        api_client: ScoutServices wrapper injected into every tool
    """
    if api_client is None:
        logger.error("Cannot register tools: services are not initialised.")
        raise RuntimeError("Services must be initialised before registering tools.")

    tool_functions = [
        discover.discover_sitemaps,
        listing.list_sitemap_urls,
        frontier.build_crawl_frontier,
        health.sitemap_scout_health,
    ]

    tool_count = 0
    for tool_func in tool_functions:
        if not inspect.iscoroutinefunction(tool_func):
            logger.warning("Skipping %s: not an async function", tool_func.__name__)
            continue
        mcp.tool(create_tool_wrapper(tool_func, api_client))
        tool_count += 1

    logger.info("Registered %d sitemap-scout tools", tool_count)


def register_resources(mcp: FastMCP, api_client: ScoutServices | None = None) -> None:
    """
    Register MCP resources for discoverability.

    Args:
        mcp: FastMCP server instance
        api_client: Optional ScoutServices for the active configuration
    """
    from sitemapscout.mcp import resources

    @mcp.resource("sitemap-scout://capabilities")
    async def capabilities_resource() -> str:
        """Get server capabilities, limits and error codes."""
        return await resources.get_capabilities_resource(api_client)

    logger.info("Registered 1 MCP resource")


def register_prompts(mcp: FastMCP) -> None:
    """
    Register MCP prompts for workflow guidance.

    Args:
        mcp: FastMCP server instance
    """
    from sitemapscout.mcp import prompts

    @mcp.prompt()
    async def explore_site() -> str:
        """Guide for exploring a site's sitemaps."""
        return await prompts.get_explore_site_prompt()

    @mcp.prompt()
    async def paginate_sitemap() -> str:
        """Guide for paging through a large sitemap with cursors."""
        return await prompts.get_paginate_sitemap_prompt()

    @mcp.prompt()
    async def build_frontier() -> str:
        """Guide for building a filtered crawl frontier."""
        return await prompts.get_build_frontier_prompt()

    logger.info("Registered 3 MCP prompts")
