"""
Discover tool for the sitemap-scout MCP server.

Wraps SitemapDiscoverer for MCP consumption.
"""

from typing import Any

from sitemapscout.mcp.api_client import ScoutServices
from sitemapscout.mcp.exceptions import error_response_for, log_tool_exception
from sitemapscout.mcp.mcp_common.correlation import generate_correlation_id, get_correlation_id
from sitemapscout.models import create_success_response


async def discover_sitemaps(api_client: ScoutServices, url: str) -> dict[str, Any]:
    """
    Find all sitemaps for a website.

    Checks /sitemap.xml, Sitemap: directives in robots.txt, and common
    alternative locations (/sitemap_index.xml, /sitemap.xml.gz,
    /sitemaps/sitemap.xml). Sitemap indexes are expanded recursively.

    **When to use this tool:**
    - Before listing or crawling a site, to see which sitemaps exist
    - To check whether a site publishes a sitemap index

    **Prefer other tools when:**
    - You already know the sitemap URL → use list_sitemap_urls
    - You want page URLs rather than sitemap URLs → use build_crawl_frontier

    Args:
        api_client: Injected ScoutServices instance
        url: Domain or URL of the site (e.g. "example.com" or "https://example.com/page")

    Returns:
        Envelope with data:
        {
            "domain": "https://example.com",
            "sitemaps": [
                {"url": "...", "type": "sitemap" | "sitemap_index",
                 "discovered_from": "standard_location" | "robots_txt" | "sitemap_index"}
            ],
            "robots_txt_found": true
        }
    """
    correlation_id = get_correlation_id() or generate_correlation_id()

    try:
        result = await api_client.discoverer.discover(url)
    except Exception as e:
        log_tool_exception("discover_sitemaps", e, correlation_id)
        return error_response_for(e, correlation_id)

    return create_success_response(result.to_data(), source=result.source, warnings=result.warnings)
