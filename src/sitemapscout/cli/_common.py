"""Common CLI utilities and the main app group."""

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable, Iterable
from pathlib import Path
from typing import Any

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from sitemapscout.config import (
    DEFAULT_MAX_CONCURRENT_REQUESTS,
    DEFAULT_TIMEOUT_MS,
    DEFAULT_USER_AGENT,
    FetchConfig,
)
from sitemapscout.discovery.fetcher import SitemapFetcher
from sitemapscout.exceptions import SitemapScoutError
from sitemapscout.models import create_error_response

console = Console(stderr=True)
_configured = False

# Load .env file when CLI module is imported
load_dotenv()


def configure_logging(*, verbose: bool = False) -> None:
    """Configure logging with Rich handler. Call once at startup."""
    global _configured
    if _configured:
        return

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=console,
                rich_tracebacks=True,
                tracebacks_show_locals=verbose,
            )
        ],
        force=True,
    )

    # Suppress noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    _configured = True


def fetch_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add the outbound HTTP options shared by every command."""
    options = [
        click.option(
            "--timeout",
            "timeout_ms",
            type=click.IntRange(1000, 300000),
            envvar="REQUEST_TIMEOUT",
            default=DEFAULT_TIMEOUT_MS,
            show_default=True,
            help="Per-request timeout in milliseconds. Also reads REQUEST_TIMEOUT env.",
        ),
        click.option(
            "--max-concurrent-requests",
            type=click.IntRange(1, 100),
            envvar="MAX_CONCURRENT_REQUESTS",
            default=DEFAULT_MAX_CONCURRENT_REQUESTS,
            show_default=True,
            help="Cap on concurrent outbound requests. Also reads MAX_CONCURRENT_REQUESTS env.",
        ),
        click.option(
            "--user-agent",
            type=str,
            envvar="USER_AGENT",
            default=DEFAULT_USER_AGENT,
            help="User-Agent header. Also reads USER_AGENT env.",
        ),
        click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def run_operation(
    config: FetchConfig,
    operation: Callable[[SitemapFetcher], Awaitable[dict[str, Any]]],
) -> dict[str, Any]:
    """
    Run one async operation with a fetcher and return its envelope.

    Library errors become error envelopes; anything else propagates.

    Args:
        config: Fetch configuration for this invocation.
        operation: Coroutine function producing a success envelope.

    Returns:
        Success or error envelope.
    """

    async def run() -> dict[str, Any]:
        async with SitemapFetcher(config) as fetcher:
            try:
                return await operation(fetcher)
            except SitemapScoutError as e:
                return create_error_response(e.code, e.message, e.context or None)  # type: ignore[arg-type]

    return asyncio.run(run())


def emit(
    envelope: dict[str, Any],
    output_format: str,
    text_lines: Callable[[dict[str, Any]], Iterable[str]],
    output: Path | None = None,
) -> None:
    """
    Print or write an envelope, exiting with status 1 on an error envelope.

    Args:
        envelope: Success or error envelope.
        output_format: "json" (full envelope) or "text".
        text_lines: Renders the ``data`` of a success envelope as lines of text.
        output: Optional output file path.
    """
    if not envelope["ok"]:
        error = envelope["error"]
        if output_format == "json":
            click.echo(json.dumps(envelope, indent=2))
        else:
            click.echo(f"Error [{error['code']}]: {error['message']}", err=True)
        raise SystemExit(1)

    for warning in envelope["meta"].get("warnings", []):
        console.print(f"[yellow]Warning:[/yellow] {warning}")

    if output_format == "json":
        content = json.dumps(envelope, indent=2)
    else:
        content = "\n".join(text_lines(envelope["data"]))

    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(content)
            if not content.endswith("\n"):
                f.write("\n")
        click.echo(f"Wrote output to {output}")
    else:
        click.echo(content)


@click.group(help="Sitemap discovery and crawl frontier building.")
def app() -> None:
    """
    Entry point for the sitemap-scout CLI.

    Provides commands to discover sitemaps, list sitemap entries and build
    crawl frontiers.
    """
