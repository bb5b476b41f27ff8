"""Allow running the CLI with ``python -m sitemapscout``."""

from sitemapscout.cli import app

if __name__ == "__main__":
    app()
