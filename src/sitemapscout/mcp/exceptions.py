"""Error mapping for sitemap-scout MCP tools.

Tools never raise to the protocol layer: every failure becomes an error
envelope whose ``code`` comes from the library exception that caused it.
"""

import logging
from typing import Any

import httpx

from sitemapscout.exceptions import SitemapScoutError
from sitemapscout.models import ErrorCode, create_error_response

logger = logging.getLogger(__name__)

_CLIENT_CODES = {"INVALID_INPUT"}


def map_exception(exception: Exception) -> tuple[ErrorCode, str]:
    """
    Map an exception to an envelope error code and message.

    Args:
        exception: Exception raised while running a tool

    Returns:
        Tuple of error code and caller-facing message
    """
    if isinstance(exception, SitemapScoutError):
        return exception.code, exception.message  # type: ignore[return-value]
    if isinstance(exception, httpx.TimeoutException):
        return "TIMEOUT", f"Request timed out: {exception!s}"
    if isinstance(exception, httpx.HTTPError):
        return "UPSTREAM_ERROR", str(exception)
    return "INTERNAL_ERROR", f"An unexpected error occurred: {exception!s}"


def log_tool_exception(
    tool_name: str,
    exception: Exception,
    correlation_id: str | None = None,
) -> None:
    """
    Log a tool failure at a level matching its kind.

    Invalid input is expected and logged at WARNING; anything else is logged
    at ERROR, with a traceback for unexpected exceptions.

    Args:
        tool_name: Name of the tool that failed
        exception: Exception that was raised
        correlation_id: Correlation ID of the call
    """
    correlation_msg = f"[{correlation_id}] " if correlation_id else ""
    code, _ = map_exception(exception)
    if code in _CLIENT_CODES:
        logger.warning("%sTOOL ERROR: %s failed: %s", correlation_msg, tool_name, exception)
    elif isinstance(exception, SitemapScoutError):
        logger.error("%sTOOL ERROR: %s failed: %s", correlation_msg, tool_name, exception)
    else:
        logger.error("%sTOOL ERROR: %s failed: %s", correlation_msg, tool_name, exception, exc_info=True)


def error_response_for(exception: Exception, correlation_id: str | None = None) -> dict[str, Any]:
    """
    Build the error envelope for an exception.

    Args:
        exception: Exception raised while running a tool
        correlation_id: Correlation ID of the call, added to ``details``

    Returns:
        Error envelope dictionary
    """
    code, message = map_exception(exception)
    details: dict[str, Any] = {}
    if isinstance(exception, SitemapScoutError):
        details.update(exception.context)
    if correlation_id:
        details["correlation_id"] = correlation_id
    return create_error_response(code, message, details or None)
