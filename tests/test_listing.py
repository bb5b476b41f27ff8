"""Tests for paginated sitemap listing."""

import base64

import httpx
import pytest
from fakes import FakeSite, sitemapindex, urlset

from sitemapscout.exceptions import FetchTimeoutError, ParseError, UpstreamError, ValidationError
from sitemapscout.models import CursorState
from sitemapscout.services.listing import SitemapListService, clamp_page_limit
from sitemapscout.utils import decode_cursor, encode_cursor

SITEMAP_URL = "https://example.com/sitemap.xml"


def _site_with(count: int) -> FakeSite:
    return FakeSite({SITEMAP_URL: urlset(*(f"https://example.com/page-{i}" for i in range(count)))})


class TestClampPageLimit:
    """Tests for clamp_page_limit."""

    def test_default(self) -> None:
        assert clamp_page_limit(None) == 100

    @pytest.mark.parametrize(("requested", "expected"), [(0, 1), (-5, 1), (1, 1), (500, 500), (1000, 1000), (5000, 1000)])
    def test_clamps(self, requested: int, expected: int) -> None:
        assert clamp_page_limit(requested) == expected

    def test_rejects_non_integer(self) -> None:
        with pytest.raises(ValidationError):
            clamp_page_limit("10")  # type: ignore[arg-type]
        with pytest.raises(ValidationError):
            clamp_page_limit(True)


@pytest.mark.integration
class TestSitemapListService:
    """Tests for SitemapListService."""

    @pytest.mark.asyncio
    async def test_pages_through_sitemap(self, make_fetcher) -> None:
        service = SitemapListService(make_fetcher(_site_with(150)))

        first = await service.list_urls(SITEMAP_URL)

        assert first.total_in_page == 100
        assert first.urls[0].loc == "https://example.com/page-0"
        assert first.urls[-1].loc == "https://example.com/page-99"
        assert first.is_index is False
        assert first.next_cursor is not None
        assert decode_cursor(first.next_cursor).offset == 100

        second = await service.list_urls(SITEMAP_URL, cursor=first.next_cursor)

        assert second.total_in_page == 50
        assert second.urls[0].loc == "https://example.com/page-100"
        assert second.next_cursor is None

    @pytest.mark.asyncio
    async def test_exact_page_has_no_cursor(self, make_fetcher) -> None:
        service = SitemapListService(make_fetcher(_site_with(10)))

        page = await service.list_urls(SITEMAP_URL, limit=10)

        assert page.total_in_page == 10
        assert page.next_cursor is None

    @pytest.mark.asyncio
    async def test_limit_is_clamped(self, make_fetcher) -> None:
        service = SitemapListService(make_fetcher(_site_with(3)))

        page = await service.list_urls(SITEMAP_URL, limit=0)

        assert page.total_in_page == 1
        assert page.next_cursor is not None

    @pytest.mark.asyncio
    async def test_offset_past_end_returns_empty_page(self, make_fetcher) -> None:
        service = SitemapListService(make_fetcher(_site_with(5)))

        page = await service.list_urls(SITEMAP_URL, cursor=encode_cursor(CursorState(offset=50)))

        assert page.urls == []
        assert page.total_in_page == 0
        assert page.next_cursor is None

    @pytest.mark.asyncio
    async def test_lists_index_children(self, make_fetcher) -> None:
        site = FakeSite({SITEMAP_URL: sitemapindex("https://example.com/a.xml", "https://example.com/b.xml")})

        page = await SitemapListService(make_fetcher(site)).list_urls(SITEMAP_URL)

        assert page.is_index is True
        assert [entry.loc for entry in page.urls] == ["https://example.com/a.xml", "https://example.com/b.xml"]
        assert page.to_data()["urls"] == [{"loc": "https://example.com/a.xml"}, {"loc": "https://example.com/b.xml"}]

    @pytest.mark.asyncio
    async def test_missing_url(self, make_fetcher) -> None:
        site = FakeSite()

        with pytest.raises(ValidationError, match="sitemap_url is required and must be a string"):
            await SitemapListService(make_fetcher(site)).list_urls(None)

        assert site.requests == []

    @pytest.mark.asyncio
    async def test_invalid_url(self, make_fetcher) -> None:
        site = FakeSite()

        with pytest.raises(ValidationError, match="Invalid sitemap URL format"):
            await SitemapListService(make_fetcher(site)).list_urls("example.com/sitemap.xml")

        assert site.requests == []

    @pytest.mark.asyncio
    async def test_invalid_cursor_makes_no_request(self, make_fetcher) -> None:
        site = _site_with(5)

        with pytest.raises(ValidationError, match="Invalid cursor format") as exc_info:
            await SitemapListService(make_fetcher(site)).list_urls(SITEMAP_URL, cursor="garbage")

        assert exc_info.value.field == "cursor"
        assert site.requests == []

    @pytest.mark.asyncio
    async def test_deeply_nested_cursor_is_invalid(self, make_fetcher) -> None:
        site = _site_with(5)
        nested = ("[" * 100000 + "]" * 100000).encode("utf-8")
        cursor = base64.urlsafe_b64encode(nested).decode("ascii").rstrip("=")

        with pytest.raises(ValidationError, match="Invalid cursor format"):
            await SitemapListService(make_fetcher(site)).list_urls(SITEMAP_URL, cursor=cursor)

        assert site.requests == []

    @pytest.mark.asyncio
    async def test_fetch_failures_propagate(self, make_fetcher) -> None:
        service = SitemapListService(make_fetcher(FakeSite({SITEMAP_URL: "<html></html>"})))
        with pytest.raises(ParseError):
            await service.list_urls(SITEMAP_URL)

        service = SitemapListService(make_fetcher(FakeSite()))
        with pytest.raises(UpstreamError):
            await service.list_urls(SITEMAP_URL)

    @pytest.mark.asyncio
    async def test_timeout_propagates(self, make_fetcher) -> None:
        site = FakeSite({SITEMAP_URL: httpx.ReadTimeout("timed out")})

        with pytest.raises(FetchTimeoutError) as exc_info:
            await SitemapListService(make_fetcher(site)).list_urls(SITEMAP_URL)

        assert exc_info.value.code == "TIMEOUT"
