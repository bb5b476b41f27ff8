"""
Listing tool for the sitemap-scout MCP server.

Wraps SitemapListService for MCP consumption.
"""

from typing import Any

from sitemapscout.mcp.api_client import ScoutServices
from sitemapscout.mcp.exceptions import error_response_for, log_tool_exception
from sitemapscout.mcp.mcp_common.correlation import generate_correlation_id, get_correlation_id
from sitemapscout.mcp.validators import validate_optional_int
from sitemapscout.models import create_success_response


async def list_sitemap_urls(
    api_client: ScoutServices,
    sitemap_url: str,
    limit: int = 100,
    cursor: str | None = None,
) -> dict[str, Any]:
    """
    List the URLs in one sitemap, a page at a time.

    For a sitemap index the entries are the child sitemaps, and
    ``is_index`` is true. Pass ``meta.pagination.next_cursor`` back as
    ``cursor`` to fetch the next page; it is null on the last page.

    Args:
        api_client: Injected ScoutServices instance
        sitemap_url: Absolute http(s) URL of the sitemap
        limit: Page size, 1-1000 (default: 100)
        cursor: Continuation token from a previous call

    Returns:
        Envelope with data:
        {
            "sitemap_url": "...",
            "urls": [{"loc": "...", "lastmod": "...", "changefreq": "...", "priority": "..."}],
            "total_in_page": 100,
            "is_index": false
        }
        and ``meta.pagination.next_cursor``.
    """
    correlation_id = get_correlation_id() or generate_correlation_id()

    try:
        page = await api_client.list_service.list_urls(
            sitemap_url,
            limit=validate_optional_int(limit, "limit"),
            cursor=cursor,
        )
    except Exception as e:
        log_tool_exception("list_sitemap_urls", e, correlation_id)
        return error_response_for(e, correlation_id)

    return create_success_response(
        page.to_data(),
        source=page.sitemap_url,
        paginated=True,
        next_cursor=page.next_cursor,
    )
