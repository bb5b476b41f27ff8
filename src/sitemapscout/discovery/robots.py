"""robots.txt sitemap directive discovery."""

import logging
import re
from dataclasses import dataclass, field

from sitemapscout.discovery.fetcher import SitemapFetcher
from sitemapscout.exceptions import SitemapScoutError
from sitemapscout.utils import is_valid_url

LOGGER = logging.getLogger(__name__)

_SITEMAP_DIRECTIVE = re.compile(r"^\s*sitemap:\s*(.+?)\s*$", re.IGNORECASE)


@dataclass
class RobotsSitemaps:
    """
    Sitemap directives found in a robots.txt file.

    Attributes:
        found: Whether robots.txt was fetched successfully.
        sitemaps: Valid http(s) sitemap URLs, in file order.
    """

    found: bool = False
    sitemaps: list[str] = field(default_factory=list)


def parse_sitemap_directives(robots_content: str) -> list[str]:
    """
    Extract ``Sitemap:`` URLs from robots.txt content.

    The directive name is case-insensitive. Values that are not absolute
    http(s) URLs are ignored.

    Args:
        robots_content: The content of robots.txt.

    Returns:
        List of sitemap URLs found.
    """
    sitemaps: list[str] = []
    for line in robots_content.splitlines():
        match = _SITEMAP_DIRECTIVE.match(line)
        if not match:
            continue
        sitemap_url = match.group(1).strip()
        if is_valid_url(sitemap_url):
            sitemaps.append(sitemap_url)
        else:
            LOGGER.debug("Ignoring invalid Sitemap directive: %s", sitemap_url)
    return sitemaps


async def fetch_robots_sitemaps(fetcher: SitemapFetcher, origin: str) -> RobotsSitemaps:
    """
    Fetch ``{origin}/robots.txt`` and collect its sitemap directives.

    A missing or unreachable robots.txt is reported as not found, never raised.

    Args:
        fetcher: Fetcher used for the request.
        origin: Site origin, e.g. ``https://example.com``.

    Returns:
        RobotsSitemaps describing what was found.
    """
    robots_url = f"{origin}/robots.txt"
    try:
        content = await fetcher.fetch_text(robots_url)
    except SitemapScoutError as e:
        LOGGER.debug("Could not fetch robots.txt from %s: %s", origin, e.message)
        return RobotsSitemaps()

    sitemaps = parse_sitemap_directives(content)
    LOGGER.debug("Found %d sitemaps in robots.txt for %s", len(sitemaps), origin)
    return RobotsSitemaps(found=True, sitemaps=sitemaps)
