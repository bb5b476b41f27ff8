"""MCP services wrapper for sitemap-scout.

Provides a single object holding the shared HTTP client and the discovery,
listing and frontier services, injected into every MCP tool.
"""

import httpx

from sitemapscout.config import FetchConfig
from sitemapscout.discovery.fetcher import SitemapFetcher, create_http_client
from sitemapscout.discovery.sitemap import SitemapDiscoverer
from sitemapscout.mcp.config import ScoutSettings, logger, settings
from sitemapscout.services.frontier import FrontierService
from sitemapscout.services.listing import SitemapListService


class ScoutServices:
    """
    MCP wrapper providing unified access to the sitemap services.

    All tool calls share one ``httpx.AsyncClient``; its connection pool size
    is the outbound concurrency cap. Traversal state is never shared: each
    service call allocates its own.
    """

    def __init__(self, config: FetchConfig, http_client: httpx.AsyncClient):
        """
        Initialise services wrapper.

        Args:
            config: Immutable fetch configuration
            http_client: Shared HTTP client (owned by this wrapper)
        """
        self.config = config
        self.http_client = http_client
        self.fetcher = SitemapFetcher(config, client=http_client)
        self.discoverer = SitemapDiscoverer(self.fetcher)
        self.list_service = SitemapListService(self.fetcher)
        self.frontier_service = FrontierService(self.fetcher, self.discoverer)

        logger.info("sitemap-scout services wrapper initialised")

    async def test_connection(self) -> bool:
        """
        Self-test used at startup and by the health tool.

        No network request is made; sitemap hosts are only known per call.

        Returns:
            True if every service is wired and the HTTP client is open

        Raises:
            RuntimeError: If a service is missing or the client is closed
        """
        if not all(self.get_service_status().values()):
            raise RuntimeError("One or more services not initialised")
        return True

    def get_service_status(self) -> dict[str, bool]:
        """
        Get status of all services for health reporting.

        Returns:
            Dict mapping service names to availability status
        """
        return {
            "http_client": self.http_client is not None and not self.http_client.is_closed,
            "discovery": self.discoverer is not None,
            "listing": self.list_service is not None,
            "frontier": self.frontier_service is not None,
        }

    async def close(self) -> None:
        """Close the shared HTTP client."""
        await self.http_client.aclose()
        logger.info("sitemap-scout services closed")


async def create_scout_services(
    scout_settings: ScoutSettings | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> ScoutServices:
    """
    Factory function to create the services wrapper.

    Args:
        scout_settings: Settings to use (default: the cached process settings)
        http_client: Optional preconfigured client, used by tests

    Returns:
        Initialised ScoutServices wrapper
    """
    config = (scout_settings or settings).to_fetch_config()
    client = http_client or create_http_client(config)
    logger.info(
        "Fetch config: timeout=%dms, max_concurrent_requests=%d",
        config.timeout_ms,
        config.max_concurrent_requests,
    )
    return ScoutServices(config=config, http_client=client)
