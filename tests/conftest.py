"""Pytest configuration and shared fixtures for sitemap-scout tests."""

from collections.abc import Callable

import pytest
from fakes import FakeSite

from sitemapscout.config import FetchConfig
from sitemapscout.discovery.fetcher import SitemapFetcher


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Pure logic tests with no I/O or network")
    config.addinivalue_line("markers", "integration: Tests that exercise several layers over a mocked HTTP transport")
    config.addinivalue_line("markers", "e2e: End-to-end tests with live network")


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """
    Apply default markers to tests without explicit markers.

    Tests should use explicit markers (@pytest.mark.unit, @pytest.mark.integration).
    Unmarked tests default to unit.
    """
    for item in items:
        marker_names = [m.name for m in item.iter_markers()]
        if any(m in marker_names for m in ("unit", "integration", "e2e")):
            continue

        # Default unmarked tests to unit
        item.add_marker(pytest.mark.unit)


@pytest.fixture
def make_fetcher() -> Callable[..., SitemapFetcher]:
    """Factory building a fetcher whose client is backed by a fake site."""

    def _make(site: FakeSite, config: FetchConfig | None = None) -> SitemapFetcher:
        return SitemapFetcher(config or FetchConfig(), client=site.client())

    return _make
