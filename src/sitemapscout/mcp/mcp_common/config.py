"""
Configuration helpers for the MCP server settings.

Usage:
    >>> from sitemapscout.mcp.mcp_common.config import parse_comma_separated
    >>> parse_comma_separated("a, b, c")
    ['a', 'b', 'c']
"""

import logging

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def parse_comma_separated(v: str | list[str]) -> list[str]:
    """
    Parse a comma-separated string into a list.

    Used as a ``mode="before"`` field validator for ALLOWED_ORIGINS and
    ALLOWED_HOSTS.

    Args:
        v: Either a comma-separated string or already a list of strings

    Returns:
        List of trimmed, non-empty strings

    Examples:
        >>> parse_comma_separated("http://localhost,http://example.com")
        ['http://localhost', 'http://example.com']

        >>> parse_comma_separated("  spaced , values  ")
        ['spaced', 'values']
    """
    if isinstance(v, str):
        return [item.strip() for item in v.split(",") if item.strip()]
    return v


def parse_log_level(name: str) -> int:
    """
    Convert a level name to a logging level constant.

    Args:
        name: DEBUG, INFO, WARNING, ERROR or CRITICAL (case-insensitive)

    Returns:
        Logging level constant, INFO for unknown names
    """
    return LOG_LEVELS.get(name.upper(), logging.INFO)
