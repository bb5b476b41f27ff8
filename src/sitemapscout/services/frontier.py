"""Crawl frontier assembly.

Discovers a domain's sitemaps, walks every sitemap index depth-first,
filters page URLs by include/exclude glob patterns, then deduplicates and
caps the result.
"""

import logging
from collections.abc import Mapping
from typing import Any

from sitemapscout.discovery.fetcher import SitemapFetcher, SitemapIndex
from sitemapscout.discovery.sitemap import SitemapDiscoverer, TraversalContext, validate_seed_url
from sitemapscout.exceptions import ValidationError
from sitemapscout.models import (
    DEFAULT_MAX_URLS,
    MAX_FRONTIER_URLS,
    FrontierResult,
    FrontierRules,
    FrontierUrl,
)
from sitemapscout.utils import is_valid_url, matches_any

LOGGER = logging.getLogger(__name__)

EMPTY_FRONTIER_WARNING = "No sitemaps found for this domain. Frontier is empty."


def _validate_patterns(patterns: Any, label: str) -> list[str]:
    if patterns is None:
        return []
    message = f"{label} patterns must be non-empty strings"
    if isinstance(patterns, str) or not isinstance(patterns, (list, tuple)):
        raise ValidationError(message, field=label.lower(), value=patterns)
    for pattern in patterns:
        if not isinstance(pattern, str) or not pattern:
            raise ValidationError(message, field=label.lower(), value=pattern)
    return list(patterns)


def _validate_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError(f"{field_name} must be a positive integer", field=field_name, value=value)
    return value


def normalise_rules(rules: FrontierRules | Mapping[str, Any] | None) -> FrontierRules:
    """
    Validate caller rules and fill in defaults.

    Args:
        rules: Rules object, a mapping with ``include``/``exclude``/``max_urls``, or None.

    Returns:
        The rules actually applied, with ``max_urls`` capped at 10000.

    Raises:
        ValidationError: If a pattern list contains an empty or non-string
            pattern, or ``max_urls`` is not a positive integer.
    """
    if rules is None:
        rules = {}
    elif isinstance(rules, FrontierRules):
        rules = rules.model_dump()
    elif not isinstance(rules, Mapping):
        raise ValidationError("rules must be an object", field="rules", value=rules)

    include = _validate_patterns(rules.get("include"), "Include")
    exclude = _validate_patterns(rules.get("exclude"), "Exclude")

    max_urls = rules.get("max_urls")
    if max_urls is None:
        max_urls = DEFAULT_MAX_URLS
    max_urls = min(_validate_positive_int(max_urls, "max_urls"), MAX_FRONTIER_URLS)

    return FrontierRules(include=include, exclude=exclude, max_urls=max_urls)


def resolve_limit(limit: int | None, max_urls: int) -> int:
    """
    Compute the effective result size for one build.

    Args:
        limit: Requested limit, or None to use ``max_urls``.
        max_urls: Normalised ``max_urls`` from the rules.

    Returns:
        ``min(limit or max_urls, max_urls, 10000)``.
    """
    requested = max_urls if limit is None else _validate_positive_int(limit, "limit")
    return min(requested, max_urls, MAX_FRONTIER_URLS)


def passes_filters(url: str, rules: FrontierRules) -> bool:
    """Return True if ``url`` matches an include pattern (when any) and no exclude pattern."""
    if rules.include and not matches_any(url, rules.include):
        return False
    if rules.exclude and matches_any(url, rules.exclude):
        return False
    return True


class FrontierService:
    """Build a crawl frontier for a site.

    Usage:
        service = FrontierService(fetcher)
        result = await service.build(
            "example.com",
            rules={"include": ["*/blog/*"], "exclude": ["*/tag/*"], "max_urls": 500},
        )
        for entry in result.frontier:
            print(entry.url, entry.source_sitemap)
    """

    def __init__(self, fetcher: SitemapFetcher, discoverer: SitemapDiscoverer | None = None) -> None:
        """Initialise frontier service.

        Args:
            fetcher: Fetcher used for document retrieval.
            discoverer: Optional discoverer (created from ``fetcher`` if not provided).
        """
        self.fetcher = fetcher
        self.discoverer = discoverer or SitemapDiscoverer(fetcher)

    async def build(
        self,
        seed_url: Any,
        rules: FrontierRules | Mapping[str, Any] | None = None,
        limit: int | None = None,
    ) -> FrontierResult:
        """
        Build a filtered, deduplicated and capped frontier.

        Args:
            seed_url: Domain or URL of the site.
            rules: Include/exclude glob patterns and ``max_urls`` cap.
            limit: Optional result size, never above ``max_urls``.

        Returns:
            FrontierResult. Per-document failures are recorded in ``skipped``
            and never fail the build.

        Raises:
            ValidationError: If the seed URL, rules or limit are invalid.
        """
        normalised = validate_seed_url(
            seed_url,
            field_name="seed_url",
            required_message="seed_url is required and must be a string",
            invalid_message="Invalid seed URL format. Please provide a valid HTTP or HTTPS URL.",
        )
        applied = normalise_rules(rules)
        effective_limit = resolve_limit(limit, applied.max_urls)

        discovery = await self.discoverer.discover(normalised)
        if not discovery.sitemaps:
            return FrontierResult(
                seed_url=normalised,
                rules_applied=applied,
                skipped=discovery.skipped,
                warnings=[EMPTY_FRONTIER_WARNING],
            )

        warnings = list(discovery.warnings)
        context = TraversalContext()
        collected: list[FrontierUrl] = []
        sitemaps_processed = 0

        for sitemap in discovery.sitemaps:
            if len(collected) >= effective_limit:
                break
            urls, processed = await self._collect(
                sitemap.url, context, applied, effective_limit - len(collected)
            )
            collected.extend(urls)
            sitemaps_processed += processed

        seen: set[str] = set()
        deduped: list[FrontierUrl] = []
        for entry in collected:
            if entry.url not in seen:
                seen.add(entry.url)
                deduped.append(entry)

        frontier = deduped[:effective_limit]
        # Guard only: collection already stops at the budget
        if len(deduped) > effective_limit:
            warnings.append(f"Result truncated to {effective_limit} URLs. Total available: {len(deduped)}")
        if context.skipped:
            warnings.append(
                f"Skipped {len(context.skipped)} sitemap document(s) that could not be fetched or parsed"
            )

        LOGGER.info(
            "Built frontier for %s: %d URLs from %d sitemaps",
            normalised,
            len(frontier),
            sitemaps_processed,
        )
        return FrontierResult(
            seed_url=normalised,
            frontier=frontier,
            total_urls=len(frontier),
            sitemaps_processed=sitemaps_processed,
            rules_applied=applied,
            skipped=context.skipped,
            warnings=warnings,
        )

    async def _collect(
        self,
        sitemap_url: str,
        context: TraversalContext,
        rules: FrontierRules,
        budget: int,
    ) -> tuple[list[FrontierUrl], int]:
        """
        Collect page URLs below one sitemap document.

        Args:
            sitemap_url: Document to expand.
            context: Shared per-build traversal state.
            rules: Filtering rules.
            budget: Maximum number of URLs to collect from this subtree.

        Returns:
            Tuple of collected URLs and the number of documents fetched successfully.
        """
        if not is_valid_url(sitemap_url):
            LOGGER.debug("Ignoring invalid sitemap URL %s", sitemap_url)
            return [], 0
        if not context.claim(sitemap_url):
            return [], 0

        outcome = await self.fetcher.try_fetch_document(sitemap_url)
        if outcome.document is None:
            context.record_skip(outcome)
            return [], 0

        document = outcome.document
        urls: list[FrontierUrl] = []
        processed = 1

        if isinstance(document, SitemapIndex):
            for child_url in document.child_urls:
                if len(urls) >= budget:
                    break
                child_urls, child_processed = await self._collect(
                    child_url, context, rules, budget - len(urls)
                )
                urls.extend(child_urls)
                processed += child_processed
        else:
            for entry in document.entries:
                if len(urls) >= budget:
                    break
                if passes_filters(entry.loc, rules):
                    urls.append(
                        FrontierUrl(
                            url=entry.loc,
                            source_sitemap=sitemap_url,
                            last_modified=entry.lastmod,
                            priority=entry.priority,
                        )
                    )

        return urls, processed
