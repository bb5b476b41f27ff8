"""Sitemap document fetching and parsing.

A fetched document is classified once, at parse time, as either a
:class:`LeafSitemap` (page entries) or a :class:`SitemapIndex` (child sitemap
entries). Callers branch on ``document.kind``.
"""

import gzip
import logging
import zlib
from dataclasses import dataclass, field
from typing import Literal, TypeAlias
from xml.etree import ElementTree

import httpx

from sitemapscout.config import FetchConfig
from sitemapscout.exceptions import (
    FetchTimeoutError,
    ParseError,
    RateLimitedError,
    SitemapScoutError,
    UpstreamError,
)
from sitemapscout.models import IndexEntry, SitemapEntry

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class LeafSitemap:
    """A ``<urlset>`` document."""

    entries: list[SitemapEntry] = field(default_factory=list)
    kind: Literal["leaf"] = "leaf"

    @property
    def is_index(self) -> bool:
        return False


@dataclass(frozen=True)
class SitemapIndex:
    """A ``<sitemapindex>`` document with at least one child sitemap."""

    entries: list[IndexEntry] = field(default_factory=list)
    kind: Literal["index"] = "index"

    @property
    def is_index(self) -> bool:
        return True

    @property
    def child_urls(self) -> list[str]:
        """Child sitemap URLs in document order."""
        return [entry.loc for entry in self.entries]


SitemapDocument: TypeAlias = LeafSitemap | SitemapIndex


@dataclass(frozen=True)
class FetchOutcome:
    """
    Result of a fetch that is allowed to fail.

    Exactly one of ``document`` and ``error`` is set.
    """

    url: str
    document: SitemapDocument | None = None
    error: SitemapScoutError | None = None

    @property
    def ok(self) -> bool:
        return self.document is not None

    @property
    def reason(self) -> str | None:
        return self.error.message if self.error is not None else None


# =============================================================================
# Parsing
# =============================================================================


def _strip_namespace(tag: str) -> str:
    """Remove XML namespace from tag name."""
    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


def _children(elem: ElementTree.Element, name: str) -> list[ElementTree.Element]:
    return [child for child in elem if _strip_namespace(child.tag) == name]


def _child_text(elem: ElementTree.Element, name: str) -> str | None:
    for child in _children(elem, name):
        if child.text and child.text.strip():
            return child.text.strip()
    return None


def parse_sitemap_content(content: bytes | str, url: str | None = None) -> SitemapDocument:
    """
    Parse sitemap XML into a leaf sitemap or a sitemap index.

    Namespaces are ignored, so documents without the sitemaps.org namespace
    are accepted. Records without a ``loc`` are skipped. A ``sitemapindex``
    without any usable ``<sitemap><loc>`` is treated as an empty leaf.

    Args:
        content: Raw XML document.
        url: Source URL, used for error context.

    Returns:
        The classified document.

    Raises:
        ParseError: If the XML is malformed or the root is neither
            ``urlset`` nor ``sitemapindex``.
    """
    try:
        root = ElementTree.fromstring(content)
    except ElementTree.ParseError as e:
        raise ParseError(f"Failed to parse sitemap XML: {e}", url=url) from e

    tag_name = _strip_namespace(root.tag)

    if tag_name == "sitemapindex":
        index_entries = []
        for sitemap_elem in _children(root, "sitemap"):
            loc = _child_text(sitemap_elem, "loc")
            if loc:
                index_entries.append(IndexEntry(loc=loc, lastmod=_child_text(sitemap_elem, "lastmod")))
        if index_entries:
            return SitemapIndex(entries=index_entries)
        LOGGER.debug("Sitemap index without children at %s", url)
        return LeafSitemap()

    if tag_name == "urlset":
        entries = []
        for url_elem in _children(root, "url"):
            loc = _child_text(url_elem, "loc")
            if not loc:
                continue
            entries.append(
                SitemapEntry(
                    loc=loc,
                    lastmod=_child_text(url_elem, "lastmod"),
                    changefreq=_child_text(url_elem, "changefreq"),
                    priority=_child_text(url_elem, "priority"),
                )
            )
        return LeafSitemap(entries=entries)

    raise ParseError(f"Unknown sitemap root element: {tag_name}", url=url)


def _maybe_decompress(url: str, response: httpx.Response) -> bytes:
    content = response.content
    content_type = response.headers.get("content-type", "")
    if url.endswith(".gz") or "gzip" in content_type:
        try:
            content = gzip.decompress(content)
        except (gzip.BadGzipFile, EOFError, zlib.error):
            # Not actually gzipped, use as-is
            LOGGER.debug("Body of %s is not gzip data, using as-is", url)
    return content


# =============================================================================
# Fetching
# =============================================================================


class SitemapFetcher:
    """
    Fetches sitemap documents and robots.txt files over HTTP.

    Uses an injected ``httpx.AsyncClient`` when one is given (the caller keeps
    ownership), otherwise creates one sized from ``config`` and closes it in
    :meth:`close`.
    """

    def __init__(self, config: FetchConfig | None = None, client: httpx.AsyncClient | None = None) -> None:
        """
        Initialise the fetcher.

        Args:
            config: Outbound HTTP configuration. Defaults to ``FetchConfig()``.
            client: Optional shared HTTP client.
        """
        self.config = config or FetchConfig()
        self._owns_client = client is None
        self._client = client or create_http_client(self.config)

    async def close(self) -> None:
        """Close the HTTP client if this fetcher created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "SitemapFetcher":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def get(self, url: str) -> httpx.Response:
        """
        GET a URL with the configured user-agent and timeout.

        Args:
            url: Absolute URL.

        Returns:
            A successful (2xx) response.

        Raises:
            FetchTimeoutError: If the request exceeds the timeout.
            RateLimitedError: If the server answers 429.
            UpstreamError: On any other non-2xx status or transport failure.
        """
        try:
            response = await self._client.get(
                url,
                headers={"User-Agent": self.config.user_agent},
                timeout=self.config.timeout_seconds,
                follow_redirects=True,
            )
        except httpx.TimeoutException as e:
            raise FetchTimeoutError(f"Request timed out while fetching {url}", url=url) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise UpstreamError(f"Failed to fetch {url}: {e}", url=url) from e

        if response.status_code == 429:
            raise RateLimitedError(
                f"HTTP 429: {response.reason_phrase or 'Too Many Requests'}",
                url=url,
                status_code=429,
            )
        if not response.is_success:
            message = f"HTTP {response.status_code}"
            if response.reason_phrase:
                message = f"{message}: {response.reason_phrase}"
            raise UpstreamError(
                message,
                url=url,
                status_code=response.status_code,
            )
        return response

    async def fetch_text(self, url: str) -> str:
        """Fetch a URL and return its decoded text body."""
        response = await self.get(url)
        return response.text

    async def fetch_document(self, url: str) -> SitemapDocument:
        """
        Fetch and classify one sitemap document.

        Args:
            url: Absolute sitemap URL.

        Returns:
            The parsed leaf sitemap or sitemap index.

        Raises:
            FetchError: If the fetch or parse fails (see :meth:`get`).
        """
        response = await self.get(url)
        document = parse_sitemap_content(_maybe_decompress(url, response), url=url)
        LOGGER.debug(
            "Fetched %s sitemap %s with %d entries",
            document.kind,
            url,
            len(document.entries),
        )
        return document

    async def try_fetch_document(self, url: str) -> FetchOutcome:
        """
        Fetch a document, turning library failures into an excluded outcome.

        Args:
            url: Absolute sitemap URL.

        Returns:
            FetchOutcome with either the document or the error that excluded it.
        """
        try:
            document = await self.fetch_document(url)
        except SitemapScoutError as e:
            LOGGER.debug("Excluding sitemap %s: %s", url, e.message)
            return FetchOutcome(url=url, error=e)
        return FetchOutcome(url=url, document=document)


def create_http_client(config: FetchConfig) -> httpx.AsyncClient:
    """
    Create an HTTP client honouring the configured limits.

    The connection pool size caps concurrent outbound requests.

    Args:
        config: Outbound HTTP configuration.

    Returns:
        A new ``httpx.AsyncClient``.
    """
    return httpx.AsyncClient(
        headers={"User-Agent": config.user_agent},
        timeout=config.timeout_seconds,
        follow_redirects=True,
        limits=httpx.Limits(
            max_connections=config.max_concurrent_requests,
            max_keepalive_connections=config.max_concurrent_requests,
        ),
    )
