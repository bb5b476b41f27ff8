"""Services for sitemap-scout."""

from sitemapscout.services.frontier import FrontierService
from sitemapscout.services.listing import SitemapListService

__all__ = ["FrontierService", "SitemapListService"]
