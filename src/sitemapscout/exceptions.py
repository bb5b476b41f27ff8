"""Custom exceptions for sitemap-scout with context support.

Every exception carries the envelope error ``code`` it maps to, so callers can
turn any library failure into an error response without inspecting messages.
"""

import uuid
from typing import Any


def generate_correlation_id() -> str:
    """
    Generate an 8-character UUID-based correlation ID.

    Returns:
        8-character correlation ID string.
    """
    return str(uuid.uuid4())[:8]


class SitemapScoutError(Exception):
    """Base exception for sitemap-scout with context and correlation ID support."""

    code = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        correlation_id: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialise exception with message, correlation ID, and context.

        Args:
            message: Error message.
            correlation_id: Optional correlation ID. If None, generates a new one.
            context: Optional context dictionary for debugging.
        """
        self.message = message
        self.correlation_id = correlation_id or generate_correlation_id()
        self.context = context or {}
        super().__init__(f"{message} [correlation_id={self.correlation_id}]")


class ValidationError(SitemapScoutError):
    """Raised when caller-supplied input is missing or malformed."""

    code = "INVALID_INPUT"

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
        correlation_id: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialise validation error with field and value context.

        Args:
            message: Error message.
            field: Optional field name that failed validation.
            value: Optional value that failed validation.
            correlation_id: Optional correlation ID. If None, generates a new one.
            context: Optional context dictionary for debugging.
        """
        if context is None:
            context = {}
        if field is not None:
            context["field"] = field
        if value is not None:
            context["value"] = str(value)
        self.field = field
        super().__init__(message, correlation_id=correlation_id, context=context)


class FetchError(SitemapScoutError):
    """Base class for failures while retrieving a document."""

    code = "UPSTREAM_ERROR"

    def __init__(
        self,
        message: str,
        url: str | None = None,
        correlation_id: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialise fetch error with the URL that failed.

        Args:
            message: Error message.
            url: Optional URL of the document being fetched.
            correlation_id: Optional correlation ID. If None, generates a new one.
            context: Optional context dictionary for debugging.
        """
        if context is None:
            context = {}
        if url is not None:
            context["url"] = url
        self.url = url
        super().__init__(message, correlation_id=correlation_id, context=context)


class UpstreamError(FetchError):
    """Raised when a document responds with a non-2xx status or cannot be reached."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
        correlation_id: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        if context is None:
            context = {}
        if status_code is not None:
            context["status_code"] = status_code
        self.status_code = status_code
        super().__init__(message, url=url, correlation_id=correlation_id, context=context)


class RateLimitedError(UpstreamError):
    """Raised when the upstream host answers 429 Too Many Requests."""

    code = "RATE_LIMITED"


class FetchTimeoutError(FetchError):
    """Raised when a fetch exceeds the configured request timeout."""

    code = "TIMEOUT"


class ParseError(FetchError):
    """Raised when a document cannot be interpreted as a sitemap or sitemap index."""

    code = "PARSE_ERROR"
