"""Data models for sitemap-scout."""

from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictInt

ErrorCode = Literal[
    "INVALID_INPUT",
    "UPSTREAM_ERROR",
    "RATE_LIMITED",
    "TIMEOUT",
    "PARSE_ERROR",
    "INTERNAL_ERROR",
]
SitemapType = Literal["sitemap", "sitemap_index"]
DiscoverySource = Literal["robots_txt", "standard_location", "sitemap_index"]

# Frontier limits
DEFAULT_MAX_URLS = 5000
MAX_FRONTIER_URLS = 10000

# =============================================================================
# Sitemap documents
# =============================================================================


class SitemapEntry(BaseModel):
    """One ``<url>`` record of a sitemap.

    ``lastmod`` and ``priority`` are kept as the strings found in the document.
    """

    model_config = ConfigDict(frozen=True)

    loc: str
    lastmod: str | None = None
    changefreq: str | None = None
    priority: str | None = None


class IndexEntry(BaseModel):
    """One ``<sitemap>`` record of a sitemap index."""

    model_config = ConfigDict(frozen=True)

    loc: str
    lastmod: str | None = None


class SitemapReference(BaseModel):
    """A sitemap document found during discovery."""

    model_config = ConfigDict(frozen=True)

    url: str
    type: SitemapType
    discovered_from: DiscoverySource

    @property
    def is_index(self) -> bool:
        return self.type == "sitemap_index"


class SkippedDocument(BaseModel):
    """A sitemap document that was excluded because it could not be fetched or parsed."""

    url: str
    reason: str
    code: ErrorCode


# =============================================================================
# Pagination
# =============================================================================


class CursorState(BaseModel):
    """Decoded pagination cursor."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    offset: StrictInt = Field(ge=0)
    sitemap_url: str | None = None


class SitemapPage(BaseModel):
    """One page of entries from a single sitemap document."""

    sitemap_url: str
    urls: list[SitemapEntry | IndexEntry]
    total_in_page: int
    is_index: bool
    next_cursor: str | None = None

    def to_data(self) -> dict[str, Any]:
        """Response payload, without the pagination cursor (it travels in meta)."""
        return {
            "sitemap_url": self.sitemap_url,
            "urls": [entry.model_dump(exclude_none=True) for entry in self.urls],
            "total_in_page": self.total_in_page,
            "is_index": self.is_index,
        }


# =============================================================================
# Discovery
# =============================================================================


class DiscoveryResult(BaseModel):
    """Result of sitemap discovery for one domain."""

    domain: str
    source: str
    sitemaps: list[SitemapReference] = Field(default_factory=list)
    robots_txt_found: bool = False
    skipped: list[SkippedDocument] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    def to_data(self) -> dict[str, Any]:
        return {
            "domain": self.domain,
            "sitemaps": [sitemap.model_dump() for sitemap in self.sitemaps],
            "robots_txt_found": self.robots_txt_found,
        }


# =============================================================================
# Crawl frontier
# =============================================================================


class FrontierRules(BaseModel):
    """Normalised filtering rules for a frontier build."""

    include: list[str] = Field(default_factory=list)
    exclude: list[str] = Field(default_factory=list)
    max_urls: int = DEFAULT_MAX_URLS


class FrontierUrl(BaseModel):
    """An accepted page URL in the crawl frontier."""

    model_config = ConfigDict(frozen=True)

    url: str
    source_sitemap: str
    last_modified: str | None = None
    priority: str | None = None


class FrontierResult(BaseModel):
    """Result of a frontier build."""

    seed_url: str
    frontier: list[FrontierUrl] = Field(default_factory=list)
    total_urls: int = 0
    sitemaps_processed: int = 0
    rules_applied: FrontierRules
    skipped: list[SkippedDocument] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    def to_data(self) -> dict[str, Any]:
        return {
            "seed_url": self.seed_url,
            "frontier": [entry.model_dump(exclude_none=True) for entry in self.frontier],
            "total_urls": self.total_urls,
            "sitemaps_processed": self.sitemaps_processed,
            "rules_applied": self.rules_applied.model_dump(),
        }


# =============================================================================
# Response envelopes
# =============================================================================


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def create_success_response(
    data: dict[str, Any],
    *,
    source: str | None = None,
    next_cursor: str | None = None,
    paginated: bool = False,
    warnings: list[str] | None = None,
) -> dict[str, Any]:
    """Build a success envelope.

    Args:
        data: Operation payload.
        source: URL the data was retrieved from.
        next_cursor: Continuation token, only emitted when ``paginated`` is set.
        paginated: Whether to include pagination metadata (``next_cursor`` may be None).
        warnings: Non-fatal warnings for the caller.

    Returns:
        ``{"ok": True, "data": ..., "meta": ...}`` dictionary.
    """
    meta: dict[str, Any] = {"retrieved_at": _timestamp(), "warnings": list(warnings or [])}
    if source is not None:
        meta["source"] = source
    if paginated:
        meta["pagination"] = {"next_cursor": next_cursor}
    return {"ok": True, "data": data, "meta": meta}


def create_error_response(
    code: ErrorCode,
    message: str,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build an error envelope."""
    error: dict[str, Any] = {"code": code, "message": message}
    if details:
        error["details"] = details
    return {"ok": False, "error": error, "meta": {"retrieved_at": _timestamp()}}
