"""Sitemap discovery command."""

from pathlib import Path
from typing import Any

import click

from sitemapscout.cli._common import app, configure_logging, emit, fetch_options, run_operation
from sitemapscout.config import FetchConfig


def _text_lines(data: dict[str, Any]) -> list[str]:
    lines = [f"{sitemap['url']}\t{sitemap['type']}\t{sitemap['discovered_from']}" for sitemap in data["sitemaps"]]
    lines.append(f"robots.txt found: {'yes' if data['robots_txt_found'] else 'no'}")
    return lines


@app.command("discover", help="Find the sitemaps of a website.")
@click.argument("url")
@click.option(
    "--output",
    "-o",
    type=click.Path(file_okay=True, dir_okay=False, path_type=Path),
    default=None,
    help="Output file path. If omitted, prints to stdout.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "text"], case_sensitive=False),
    default="text",
    show_default=True,
    help="Output format: json (full envelope) or text (one sitemap per line).",
)
@fetch_options
def discover_cmd(
    url: str,
    output: Path | None,
    output_format: str,
    timeout_ms: int,
    max_concurrent_requests: int,
    user_agent: str,
    verbose: bool,
) -> None:
    """Discover sitemaps for a domain.

    Examples:
        sitemap-scout discover example.com
        sitemap-scout discover https://example.com --format json
    """
    from sitemapscout.discovery.sitemap import SitemapDiscoverer
    from sitemapscout.models import create_success_response

    configure_logging(verbose=verbose)
    config = FetchConfig(timeout_ms, max_concurrent_requests, user_agent)

    async def operation(fetcher):
        result = await SitemapDiscoverer(fetcher).discover(url)
        return create_success_response(result.to_data(), source=result.source, warnings=result.warnings)

    emit(run_operation(config, operation), output_format.lower(), _text_lines, output)
