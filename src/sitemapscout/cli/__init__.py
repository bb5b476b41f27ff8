"""Command-line interface for sitemap-scout.

Commands are organised into modules by functionality:

- discover: Sitemap discovery for a domain
- listing: Paginated listing of one sitemap (``sitemap-scout list``)
- frontier: Crawl frontier assembly
"""

# Import all command modules to register them with the app
from sitemapscout.cli import (
    discover,  # noqa: F401
    frontier,  # noqa: F401
    listing,  # noqa: F401
)
from sitemapscout.cli._common import app

__all__ = ["app"]
