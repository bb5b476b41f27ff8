"""Sitemap discovery, fetching and parsing.

This package finds sitemap documents for a domain and classifies them as
leaf sitemaps or sitemap indexes.
"""

from sitemapscout.discovery.fetcher import (
    FetchOutcome,
    LeafSitemap,
    SitemapDocument,
    SitemapFetcher,
    SitemapIndex,
    create_http_client,
    parse_sitemap_content,
)
from sitemapscout.discovery.robots import RobotsSitemaps, fetch_robots_sitemaps, parse_sitemap_directives
from sitemapscout.discovery.sitemap import SitemapDiscoverer, TraversalContext, validate_seed_url

__all__ = [
    # Fetcher
    "FetchOutcome",
    "LeafSitemap",
    "SitemapDocument",
    "SitemapFetcher",
    "SitemapIndex",
    "create_http_client",
    "parse_sitemap_content",
    # Robots
    "RobotsSitemaps",
    "fetch_robots_sitemaps",
    "parse_sitemap_directives",
    # Discovery
    "SitemapDiscoverer",
    "TraversalContext",
    "validate_seed_url",
]
