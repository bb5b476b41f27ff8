"""Pytest configuration and fixtures for sitemap-scout MCP server tests."""

import pytest
from fakes import FakeSite, sitemapindex, urlset

from sitemapscout.config import FetchConfig
from sitemapscout.mcp.api_client import ScoutServices

ORIGIN = "https://example.com"


@pytest.fixture
def site() -> FakeSite:
    """Fake site with an index, two child sitemaps and a robots.txt."""
    return FakeSite(
        {
            f"{ORIGIN}/robots.txt": f"User-agent: *\nSitemap: {ORIGIN}/news.xml\n",
            f"{ORIGIN}/sitemap.xml": sitemapindex(f"{ORIGIN}/posts.xml", f"{ORIGIN}/pages.xml"),
            f"{ORIGIN}/posts.xml": urlset(*(f"{ORIGIN}/blog/post-{i}" for i in range(150))),
            f"{ORIGIN}/pages.xml": urlset(f"{ORIGIN}/about", f"{ORIGIN}/contact"),
            f"{ORIGIN}/news.xml": urlset(f"{ORIGIN}/news/today", f"{ORIGIN}/about"),
        }
    )


@pytest.fixture
def mock_api_client(site: FakeSite) -> ScoutServices:
    """Create ScoutServices backed by the fake site."""
    return ScoutServices(config=FetchConfig(), http_client=site.client())
