"""Fetch configuration shared by the discovery and frontier services."""

from dataclasses import dataclass

from sitemapscout.exceptions import ValidationError

DEFAULT_TIMEOUT_MS = 30000
DEFAULT_MAX_CONCURRENT_REQUESTS = 5
DEFAULT_USER_AGENT = "sitemap-scout/1.0 (MCP Server; +https://github.com/dedalus/sitemap-scout)"


@dataclass(frozen=True)
class FetchConfig:
    """Immutable outbound HTTP configuration.

    Built once at process start (see ``ScoutSettings.to_fetch_config``) and
    passed to every component that fetches documents.
    """

    timeout_ms: int = DEFAULT_TIMEOUT_MS
    max_concurrent_requests: int = DEFAULT_MAX_CONCURRENT_REQUESTS
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self) -> None:
        """Validate configuration after initialisation."""
        if self.timeout_ms <= 0:
            raise ValidationError("timeout_ms must be positive", field="timeout_ms", value=self.timeout_ms)
        if self.max_concurrent_requests <= 0:
            raise ValidationError(
                "max_concurrent_requests must be positive",
                field="max_concurrent_requests",
                value=self.max_concurrent_requests,
            )

    @property
    def timeout_seconds(self) -> float:
        """Request timeout in seconds, as httpx expects it."""
        return self.timeout_ms / 1000
