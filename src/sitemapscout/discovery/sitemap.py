"""Sitemap discovery.

Finds every sitemap document reachable for a domain from the standard
location, robots.txt ``Sitemap:`` directives and a few common alternative
locations, expanding sitemap indexes recursively.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from sitemapscout.discovery.fetcher import FetchOutcome, SitemapFetcher, SitemapIndex
from sitemapscout.discovery.robots import fetch_robots_sitemaps
from sitemapscout.exceptions import ValidationError
from sitemapscout.models import DiscoveryResult, DiscoverySource, SitemapReference, SkippedDocument
from sitemapscout.utils import is_valid_url, normalise_url, url_origin

LOGGER = logging.getLogger(__name__)

STANDARD_SITEMAP_PATH = "/sitemap.xml"

# Probed after robots.txt, even when the standard location succeeded
ALTERNATIVE_SITEMAP_PATHS = [
    "/sitemap_index.xml",
    "/sitemap.xml.gz",
    "/sitemaps/sitemap.xml",
]

NO_SITEMAPS_WARNING = "No sitemaps found for this domain"


@dataclass
class TraversalContext:
    """
    Per-call traversal state.

    Attributes:
        visited: Sitemap URLs already attempted in this call.
        skipped: Documents excluded because their fetch or parse failed.
    """

    visited: set[str] = field(default_factory=set)
    skipped: list[SkippedDocument] = field(default_factory=list)

    def claim(self, url: str) -> bool:
        """Mark ``url`` as visited, returning False if it already was."""
        if url in self.visited:
            return False
        self.visited.add(url)
        return True

    def record_skip(self, outcome: FetchOutcome) -> None:
        if outcome.error is None:
            return
        self.skipped.append(
            SkippedDocument(url=outcome.url, reason=outcome.error.message, code=outcome.error.code)
        )


def validate_seed_url(
    value: Any,
    *,
    field_name: str = "url",
    required_message: str = "URL is required and must be a string",
    invalid_message: str = "Invalid URL format. Please provide a valid HTTP or HTTPS URL.",
) -> str:
    """
    Validate and normalise a domain or URL supplied by the caller.

    Args:
        value: Raw caller input.
        field_name: Argument name reported in the error.
        required_message: Message when the value is missing or not a string.
        invalid_message: Message when no valid http(s) URL can be formed.

    Returns:
        Normalised absolute URL.

    Raises:
        ValidationError: If the value is empty, not a string or not a valid URL.
    """
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(required_message, field=field_name, value=value)
    normalised = normalise_url(value)
    if normalised is None:
        raise ValidationError(invalid_message, field=field_name, value=value)
    return normalised


class SitemapDiscoverer:
    """Discovers the sitemap documents of a domain."""

    def __init__(self, fetcher: SitemapFetcher) -> None:
        self.fetcher = fetcher

    async def discover(self, domain_or_url: Any) -> DiscoveryResult:
        """
        Discover all sitemaps reachable for a domain.

        Probes ``/sitemap.xml``, then robots.txt directives, then the
        alternative locations. Index documents are expanded depth-first.
        No URL is fetched twice in one call, so cyclic indexes terminate.

        Args:
            domain_or_url: Domain (``example.com``) or any URL on the site.

        Returns:
            DiscoveryResult with the sitemaps found in probe order.

        Raises:
            ValidationError: If the input is empty or not a valid URL.
        """
        normalised = validate_seed_url(domain_or_url)
        domain = url_origin(normalised)
        context = TraversalContext()
        sitemaps: list[SitemapReference] = []

        LOGGER.info("Discovering sitemaps for %s", domain)

        await self._probe(f"{domain}{STANDARD_SITEMAP_PATH}", "standard_location", context, sitemaps)

        robots = await fetch_robots_sitemaps(self.fetcher, domain)
        for sitemap_url in robots.sitemaps:
            await self._probe(sitemap_url, "robots_txt", context, sitemaps)

        for path in ALTERNATIVE_SITEMAP_PATHS:
            await self._probe(f"{domain}{path}", "standard_location", context, sitemaps)

        warnings = [] if sitemaps else [NO_SITEMAPS_WARNING]
        LOGGER.info(
            "Discovered %d sitemaps for %s (%d skipped, robots.txt found: %s)",
            len(sitemaps),
            domain,
            len(context.skipped),
            robots.found,
        )
        return DiscoveryResult(
            domain=domain,
            source=normalised,
            sitemaps=sitemaps,
            robots_txt_found=robots.found,
            skipped=context.skipped,
            warnings=warnings,
        )

    async def _probe(
        self,
        url: str,
        discovered_from: DiscoverySource,
        context: TraversalContext,
        sitemaps: list[SitemapReference],
    ) -> None:
        """Fetch one candidate, record it, and expand it if it is an index."""
        if not context.claim(url):
            return

        outcome = await self.fetcher.try_fetch_document(url)
        if outcome.document is None:
            context.record_skip(outcome)
            return

        document = outcome.document
        sitemaps.append(
            SitemapReference(
                url=url,
                type="sitemap_index" if document.is_index else "sitemap",
                discovered_from=discovered_from,
            )
        )

        if isinstance(document, SitemapIndex):
            for child_url in document.child_urls:
                if is_valid_url(child_url):
                    await self._probe(child_url, "sitemap_index", context, sitemaps)
