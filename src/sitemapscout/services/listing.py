"""Paginated listing of a single sitemap document."""

import logging
from typing import Any

from sitemapscout.discovery.fetcher import SitemapFetcher
from sitemapscout.exceptions import ValidationError
from sitemapscout.models import CursorState, SitemapPage
from sitemapscout.utils import decode_cursor, encode_cursor, is_valid_url

LOGGER = logging.getLogger(__name__)

DEFAULT_PAGE_LIMIT = 100
MAX_PAGE_LIMIT = 1000


def clamp_page_limit(limit: int | None) -> int:
    """
    Clamp a requested page size into ``1..MAX_PAGE_LIMIT``.

    Args:
        limit: Requested page size, or None for the default.

    Returns:
        Page size to use.

    Raises:
        ValidationError: If ``limit`` is not an integer.
    """
    if limit is None:
        return DEFAULT_PAGE_LIMIT
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise ValidationError("limit must be an integer", field="limit", value=limit)
    return min(max(1, limit), MAX_PAGE_LIMIT)


class SitemapListService:
    """Enumerate the entries of one sitemap document, one page at a time.

    Pagination is positional over the document fetched in each call; nothing
    is cached between calls.

    Usage:
        service = SitemapListService(fetcher)
        page = await service.list_urls("https://example.com/sitemap.xml", limit=100)
        while page.next_cursor:
            page = await service.list_urls(page.sitemap_url, cursor=page.next_cursor)
    """

    def __init__(self, fetcher: SitemapFetcher) -> None:
        self.fetcher = fetcher

    async def list_urls(
        self,
        sitemap_url: Any,
        limit: int | None = None,
        cursor: str | None = None,
    ) -> SitemapPage:
        """
        Return one page of entries from a sitemap or sitemap index.

        Args:
            sitemap_url: Absolute http(s) URL of the document.
            limit: Page size, clamped to 1..1000 (default 100).
            cursor: Continuation token from a previous page.

        Returns:
            SitemapPage with the entries and a ``next_cursor`` when more remain.

        Raises:
            ValidationError: If the URL or cursor is invalid (before any fetch).
            FetchError: If the document cannot be fetched or parsed.
        """
        if not isinstance(sitemap_url, str) or not sitemap_url:
            raise ValidationError(
                "sitemap_url is required and must be a string", field="sitemap_url", value=sitemap_url
            )
        if not is_valid_url(sitemap_url):
            raise ValidationError(
                "Invalid sitemap URL format. Please provide a valid HTTP or HTTPS URL.",
                field="sitemap_url",
                value=sitemap_url,
            )

        page_limit = clamp_page_limit(limit)

        offset = 0
        if cursor:
            state = decode_cursor(cursor)
            if state is None:
                raise ValidationError("Invalid cursor format", field="cursor", value=cursor)
            offset = state.offset

        document = await self.fetcher.fetch_document(sitemap_url)
        entries = document.entries
        page = entries[offset : offset + page_limit]

        next_cursor = None
        if offset + page_limit < len(entries):
            next_cursor = encode_cursor(CursorState(offset=offset + page_limit))

        LOGGER.debug(
            "Listed %d of %d entries from %s at offset %d",
            len(page),
            len(entries),
            sitemap_url,
            offset,
        )
        return SitemapPage(
            sitemap_url=sitemap_url,
            urls=list(page),
            total_in_page=len(page),
            is_index=document.is_index,
            next_cursor=next_cursor,
        )
