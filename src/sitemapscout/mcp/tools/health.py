"""Health check tool for the sitemap-scout MCP server."""

from typing import Any

import sitemapscout
from sitemapscout.mcp.api_client import ScoutServices


async def sitemap_scout_health(api_client: ScoutServices) -> dict[str, Any]:
    """Get sitemap-scout server health status.

    Returns service availability, the active fetch configuration and the
    server version. Use this to verify the server is ready.
    """
    try:
        service_status = api_client.get_service_status()
        all_healthy = all(service_status.values())
        return {
            "status": "healthy" if all_healthy else "degraded",
            "services": service_status,
            "fetch": {
                "timeout_ms": api_client.config.timeout_ms,
                "max_concurrent_requests": api_client.config.max_concurrent_requests,
                "user_agent": api_client.config.user_agent,
            },
            "version": sitemapscout.__version__,
        }
    except Exception as e:
        return {
            "status": "unhealthy",
            "error": str(e),
            "services": {},
            "version": sitemapscout.__version__,
        }
