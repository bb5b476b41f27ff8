"""Tests for sitemap discovery."""

import httpx
import pytest
from fakes import FakeSite, gzipped, sitemapindex, urlset

from sitemapscout.discovery.sitemap import NO_SITEMAPS_WARNING, SitemapDiscoverer, validate_seed_url
from sitemapscout.exceptions import ValidationError

ORIGIN = "https://example.com"
STANDARD = f"{ORIGIN}/sitemap.xml"
ROBOTS = f"{ORIGIN}/robots.txt"


def _summary(result) -> list[tuple[str, str, str]]:
    return [(s.url, s.type, s.discovered_from) for s in result.sitemaps]


class TestValidateSeedUrl:
    """Tests for validate_seed_url."""

    def test_normalises_bare_domain(self) -> None:
        assert validate_seed_url("example.com") == "https://example.com"

    @pytest.mark.parametrize("value", [None, "", "   ", 123])
    def test_rejects_missing(self, value) -> None:
        with pytest.raises(ValidationError, match="URL is required and must be a string") as exc_info:
            validate_seed_url(value)
        assert exc_info.value.code == "INVALID_INPUT"
        assert exc_info.value.field == "url"

    def test_rejects_invalid(self) -> None:
        with pytest.raises(ValidationError, match="Invalid URL format"):
            validate_seed_url("not a domain")

    def test_custom_field_and_messages(self) -> None:
        with pytest.raises(ValidationError, match="seed_url is required") as exc_info:
            validate_seed_url(None, field_name="seed_url", required_message="seed_url is required")
        assert exc_info.value.field == "seed_url"


@pytest.mark.integration
class TestSitemapDiscoverer:
    """Tests for SitemapDiscoverer over a fake site."""

    @pytest.mark.asyncio
    async def test_standard_location_only(self, make_fetcher) -> None:
        site = FakeSite({STANDARD: urlset(f"{ORIGIN}/a")})

        result = await SitemapDiscoverer(make_fetcher(site)).discover("example.com")

        assert result.domain == ORIGIN
        assert _summary(result) == [(STANDARD, "sitemap", "standard_location")]
        assert result.robots_txt_found is False
        assert result.warnings == []

    @pytest.mark.asyncio
    async def test_probe_order_and_index_expansion(self, make_fetcher) -> None:
        site = FakeSite(
            {
                STANDARD: urlset(f"{ORIGIN}/a"),
                ROBOTS: f"User-agent: *\nSitemap: {ORIGIN}/index.xml\n",
                f"{ORIGIN}/index.xml": sitemapindex(f"{ORIGIN}/posts.xml", f"{ORIGIN}/pages.xml"),
                f"{ORIGIN}/posts.xml": urlset(f"{ORIGIN}/p1"),
                f"{ORIGIN}/pages.xml": urlset(f"{ORIGIN}/about"),
                f"{ORIGIN}/sitemaps/sitemap.xml": urlset(f"{ORIGIN}/z"),
            }
        )

        result = await SitemapDiscoverer(make_fetcher(site)).discover(ORIGIN)

        assert result.robots_txt_found is True
        assert _summary(result) == [
            (STANDARD, "sitemap", "standard_location"),
            (f"{ORIGIN}/index.xml", "sitemap_index", "robots_txt"),
            (f"{ORIGIN}/posts.xml", "sitemap", "sitemap_index"),
            (f"{ORIGIN}/pages.xml", "sitemap", "sitemap_index"),
            (f"{ORIGIN}/sitemaps/sitemap.xml", "sitemap", "standard_location"),
        ]

    @pytest.mark.asyncio
    async def test_robots_duplicate_of_standard_is_fetched_once(self, make_fetcher) -> None:
        site = FakeSite({STANDARD: urlset(f"{ORIGIN}/a"), ROBOTS: f"Sitemap: {STANDARD}\n"})

        result = await SitemapDiscoverer(make_fetcher(site)).discover(ORIGIN)

        assert _summary(result) == [(STANDARD, "sitemap", "standard_location")]
        assert site.count(STANDARD) == 1

    @pytest.mark.asyncio
    async def test_cyclic_indexes_terminate(self, make_fetcher) -> None:
        a = f"{ORIGIN}/a.xml"
        b = f"{ORIGIN}/b.xml"
        site = FakeSite(
            {
                STANDARD: sitemapindex(a),
                a: sitemapindex(b),
                b: sitemapindex(a, STANDARD),
            }
        )

        result = await SitemapDiscoverer(make_fetcher(site)).discover(ORIGIN)

        assert [s.url for s in result.sitemaps] == [STANDARD, a, b]
        assert all(s.type == "sitemap_index" for s in result.sitemaps)
        assert site.count(STANDARD) == 1
        assert site.count(a) == 1
        assert site.count(b) == 1

    @pytest.mark.asyncio
    async def test_gzipped_alternative_location(self, make_fetcher) -> None:
        gz_url = f"{ORIGIN}/sitemap.xml.gz"
        site = FakeSite({gz_url: gzipped(urlset(f"{ORIGIN}/a"))})

        result = await SitemapDiscoverer(make_fetcher(site)).discover(ORIGIN)

        assert _summary(result) == [(gz_url, "sitemap", "standard_location")]

    @pytest.mark.asyncio
    async def test_no_sitemaps(self, make_fetcher) -> None:
        site = FakeSite()

        result = await SitemapDiscoverer(make_fetcher(site)).discover(ORIGIN)

        assert result.sitemaps == []
        assert result.robots_txt_found is False
        assert result.warnings == [NO_SITEMAPS_WARNING]
        # Standard location plus three alternatives
        assert len(result.skipped) == 4
        assert all(skip.code == "UPSTREAM_ERROR" for skip in result.skipped)

    @pytest.mark.asyncio
    async def test_broken_child_is_skipped(self, make_fetcher) -> None:
        site = FakeSite(
            {
                STANDARD: sitemapindex(f"{ORIGIN}/good.xml", f"{ORIGIN}/broken.xml", "not-a-url"),
                f"{ORIGIN}/good.xml": urlset(f"{ORIGIN}/a"),
                f"{ORIGIN}/broken.xml": "<html>oops</html>",
            }
        )

        result = await SitemapDiscoverer(make_fetcher(site)).discover(ORIGIN)

        assert [s.url for s in result.sitemaps] == [STANDARD, f"{ORIGIN}/good.xml"]
        broken = [skip for skip in result.skipped if skip.url == f"{ORIGIN}/broken.xml"]
        assert len(broken) == 1
        assert broken[0].code == "PARSE_ERROR"

    @pytest.mark.asyncio
    async def test_timed_out_child_is_skipped(self, make_fetcher) -> None:
        slow = f"{ORIGIN}/slow.xml"
        site = FakeSite(
            {
                STANDARD: sitemapindex(f"{ORIGIN}/good.xml", slow),
                f"{ORIGIN}/good.xml": urlset(f"{ORIGIN}/a"),
                slow: httpx.ReadTimeout("timed out"),
            }
        )

        result = await SitemapDiscoverer(make_fetcher(site)).discover(ORIGIN)

        assert [s.url for s in result.sitemaps] == [STANDARD, f"{ORIGIN}/good.xml"]
        assert [(skip.url, skip.code) for skip in result.skipped if skip.url == slow] == [(slow, "TIMEOUT")]

    @pytest.mark.asyncio
    async def test_domain_from_page_url(self, make_fetcher) -> None:
        site = FakeSite({STANDARD: urlset(f"{ORIGIN}/a")})

        result = await SitemapDiscoverer(make_fetcher(site)).discover("https://example.com/blog/post?x=1")

        assert result.domain == ORIGIN
        assert result.source == "https://example.com/blog/post?x=1"
        assert result.to_data() == {
            "domain": ORIGIN,
            "sitemaps": [{"url": STANDARD, "type": "sitemap", "discovered_from": "standard_location"}],
            "robots_txt_found": False,
        }

    @pytest.mark.asyncio
    async def test_invalid_input_makes_no_requests(self, make_fetcher) -> None:
        site = FakeSite()

        with pytest.raises(ValidationError):
            await SitemapDiscoverer(make_fetcher(site)).discover("")

        assert site.requests == []
