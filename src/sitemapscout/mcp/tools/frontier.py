"""
Frontier tool for the sitemap-scout MCP server.

Wraps FrontierService for MCP consumption.
"""

from typing import Any

from sitemapscout.mcp.api_client import ScoutServices
from sitemapscout.mcp.exceptions import error_response_for, log_tool_exception
from sitemapscout.mcp.mcp_common.correlation import generate_correlation_id, get_correlation_id
from sitemapscout.mcp.validators import validate_optional_int, validate_rules
from sitemapscout.models import create_success_response


async def build_crawl_frontier(
    api_client: ScoutServices,
    seed_url: str,
    rules: dict[str, Any] | None = None,
    limit: int | None = None,
) -> dict[str, Any]:
    """
    Build a deduplicated list of page URLs to crawl from a site's sitemaps.

    Discovers the site's sitemaps, expands every sitemap index, keeps URLs
    matching the include patterns and none of the exclude patterns, removes
    duplicates and caps the result. Sitemaps that fail to load are skipped
    and reported in ``meta.warnings``.

    **Patterns** are globs matched against the whole URL, case-insensitively;
    ``*`` matches anything. Examples: ``"*/blog/*"``, ``"https://example.com/docs/*"``.

    Args:
        api_client: Injected ScoutServices instance
        seed_url: Domain or URL of the site
        rules: Optional filtering rules:
            - include: list of patterns, URL must match at least one
            - exclude: list of patterns, URL must match none
            - max_urls: cap on collected URLs (default 5000, max 10000)
        limit: Optional result size, never above max_urls

    Returns:
        Envelope with data:
        {
            "seed_url": "https://example.com",
            "frontier": [{"url": "...", "source_sitemap": "...", "last_modified": "...", "priority": "..."}],
            "total_urls": 42,
            "sitemaps_processed": 3,
            "rules_applied": {"include": [], "exclude": [], "max_urls": 5000}
        }
    """
    correlation_id = get_correlation_id() or generate_correlation_id()

    try:
        result = await api_client.frontier_service.build(
            seed_url,
            rules=validate_rules(rules),
            limit=validate_optional_int(limit, "limit"),
        )
    except Exception as e:
        log_tool_exception("build_crawl_frontier", e, correlation_id)
        return error_response_for(e, correlation_id)

    return create_success_response(result.to_data(), source=result.seed_url, warnings=result.warnings)
