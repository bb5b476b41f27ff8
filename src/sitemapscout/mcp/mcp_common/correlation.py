"""
Correlation ID tracking for tool calls.

Each tool call gets an 8-character correlation ID that is stored in a context
variable, so log lines emitted anywhere during the call can be tied together.

Usage:
    >>> from sitemapscout.mcp.mcp_common.correlation import generate_correlation_id
    >>> corr_id = generate_correlation_id()
    >>> get_correlation_id() == corr_id
    True
"""

import contextvars
import uuid

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar("correlation_id", default=None)


def generate_correlation_id() -> str:
    """
    Generate a correlation ID and make it current for this async context.

    Returns:
        8-character correlation ID (first 8 characters of UUID hex)
    """
    corr_id = uuid.uuid4().hex[:8]
    _correlation_id.set(corr_id)
    return corr_id


def get_correlation_id() -> str | None:
    """Return the correlation ID of the current context, if any."""
    return _correlation_id.get()


def set_correlation_id(corr_id: str) -> None:
    """
    Set a correlation ID in the current context.

    Args:
        corr_id: Correlation ID to set (8 characters for consistency)
    """
    _correlation_id.set(corr_id)


def clear_correlation_id() -> None:
    """Clear the correlation ID from the current context."""
    _correlation_id.set(None)
