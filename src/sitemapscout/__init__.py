"""sitemap-scout: sitemap discovery and crawl frontier assembly."""

__version__ = "1.0.0"
