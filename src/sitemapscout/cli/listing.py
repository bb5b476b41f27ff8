"""Sitemap listing command."""

from pathlib import Path
from typing import Any

import click

from sitemapscout.cli._common import app, configure_logging, emit, fetch_options, run_operation
from sitemapscout.config import FetchConfig


def _text_lines(data: dict[str, Any]) -> list[str]:
    return [entry["loc"] for entry in data["urls"]]


@app.command("list", help="List the entries of one sitemap, a page at a time.")
@click.argument("sitemap_url")
@click.option(
    "--limit",
    type=int,
    default=100,
    show_default=True,
    help="Page size (clamped to 1-1000).",
)
@click.option(
    "--cursor",
    type=str,
    default=None,
    help="Continuation token printed by a previous call.",
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
def list_cmd(
    sitemap_url: str,
    limit: int,
    cursor: str | None,
    output: Path | None,
    output_format: str,
    timeout_ms: int,
    max_concurrent_requests: int,
    user_agent: str,
    verbose: bool,
) -> None:
    """List URLs from a sitemap.

    Examples:
        sitemap-scout list https://example.com/sitemap.xml
        sitemap-scout list https://example.com/sitemap.xml --limit 500 --format json
    """
    from sitemapscout.models import create_success_response
    from sitemapscout.services.listing import SitemapListService

    configure_logging(verbose=verbose)
    config = FetchConfig(timeout_ms, max_concurrent_requests, user_agent)

    async def operation(fetcher):
        page = await SitemapListService(fetcher).list_urls(sitemap_url, limit=limit, cursor=cursor)
        return create_success_response(
            page.to_data(),
            source=page.sitemap_url,
            paginated=True,
            next_cursor=page.next_cursor,
        )

    envelope = run_operation(config, operation)
    if envelope["ok"] and output_format.lower() == "text":
        next_cursor = envelope["meta"]["pagination"]["next_cursor"]
        if next_cursor:
            click.echo(f"Next cursor: {next_cursor}", err=True)
    emit(envelope, output_format.lower(), _text_lines, output)
