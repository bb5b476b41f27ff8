"""MCP resources for the sitemap-scout server.

Provides discoverable resources describing the server's tools, limits and
defaults.
"""

import json
from typing import TYPE_CHECKING

from sitemapscout.discovery.sitemap import ALTERNATIVE_SITEMAP_PATHS, STANDARD_SITEMAP_PATH
from sitemapscout.models import DEFAULT_MAX_URLS, MAX_FRONTIER_URLS
from sitemapscout.services.listing import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT

if TYPE_CHECKING:
    from sitemapscout.mcp.api_client import ScoutServices

ERROR_CODES = {
    "INVALID_INPUT": "Missing or malformed argument (URL, cursor, patterns, limits). Fix the input.",
    "UPSTREAM_ERROR": "The sitemap responded with a non-2xx status or could not be reached.",
    "RATE_LIMITED": "The site answered 429 Too Many Requests. Retry later.",
    "TIMEOUT": "The fetch exceeded the configured request timeout.",
    "PARSE_ERROR": "The document is not a valid sitemap or sitemap index.",
    "INTERNAL_ERROR": "Unexpected server failure.",
}


async def get_capabilities_resource(api_client: "ScoutServices | None" = None) -> str:
    """Get server capabilities, limits and defaults as JSON."""
    capabilities: dict = {
        "tools": {
            "discover_sitemaps": "Find sitemaps via standard locations, robots.txt and index expansion",
            "list_sitemap_urls": "Paginate over the entries of one sitemap or sitemap index",
            "build_crawl_frontier": "Collect, filter, deduplicate and cap page URLs from all sitemaps",
            "sitemap_scout_health": "Server health and configuration",
        },
        "discovery": {
            "standard_location": STANDARD_SITEMAP_PATH,
            "alternative_locations": ALTERNATIVE_SITEMAP_PATHS,
            "robots_txt": True,
            "gzip": True,
        },
        "limits": {
            "list_default_limit": DEFAULT_PAGE_LIMIT,
            "list_max_limit": MAX_PAGE_LIMIT,
            "frontier_default_max_urls": DEFAULT_MAX_URLS,
            "frontier_max_urls": MAX_FRONTIER_URLS,
        },
        "patterns": {
            "syntax": "glob, '*' matches any characters, anchored, case-insensitive",
            "examples": ["*/blog/*", "https://example.com/docs/*", "*.pdf"],
        },
        "error_codes": ERROR_CODES,
    }

    if api_client is not None:
        capabilities["fetch"] = {
            "timeout_ms": api_client.config.timeout_ms,
            "max_concurrent_requests": api_client.config.max_concurrent_requests,
            "user_agent": api_client.config.user_agent,
        }

    return json.dumps(capabilities, indent=2)
