"""Crawl frontier command."""

from pathlib import Path
from typing import Any

import click

from sitemapscout.cli._common import app, configure_logging, emit, fetch_options, run_operation
from sitemapscout.config import FetchConfig


def _text_lines(data: dict[str, Any]) -> list[str]:
    return [entry["url"] for entry in data["frontier"]]


@app.command("frontier", help="Build a filtered, deduplicated crawl frontier from a site's sitemaps.")
@click.argument("seed_url")
@click.option(
    "--include",
    "-i",
    "include",
    multiple=True,
    help="Glob pattern a URL must match (repeatable, OR-combined).",
)
@click.option(
    "--exclude",
    "-e",
    "exclude",
    multiple=True,
    help="Glob pattern a URL must not match (repeatable).",
)
@click.option(
    "--max-urls",
    type=int,
    default=None,
    help="Cap on collected URLs (default 5000, max 10000).",
)
@click.option(
    "--limit",
    type=int,
    default=None,
    help="Result size, never above --max-urls.",
)
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
    help="Output format: json (full envelope) or text (URLs only).",
)
@fetch_options
def frontier_cmd(
    seed_url: str,
    include: tuple[str, ...],
    exclude: tuple[str, ...],
    max_urls: int | None,
    limit: int | None,
    output: Path | None,
    output_format: str,
    timeout_ms: int,
    max_concurrent_requests: int,
    user_agent: str,
    verbose: bool,
) -> None:
    """Build a crawl frontier.

    Examples:
        sitemap-scout frontier example.com
        sitemap-scout frontier example.com -i '*/blog/*' -e '*/tag/*' --max-urls 500
        sitemap-scout frontier example.com --format json --output frontier.json
    """
    from sitemapscout.models import create_success_response
    from sitemapscout.services.frontier import FrontierService

    configure_logging(verbose=verbose)
    config = FetchConfig(timeout_ms, max_concurrent_requests, user_agent)
    rules = {"include": list(include), "exclude": list(exclude), "max_urls": max_urls}

    async def operation(fetcher):
        result = await FrontierService(fetcher).build(seed_url, rules=rules, limit=limit)
        return create_success_response(result.to_data(), source=result.seed_url, warnings=result.warnings)

    emit(run_operation(config, operation), output_format.lower(), _text_lines, output)
