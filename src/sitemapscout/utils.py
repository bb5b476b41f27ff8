"""Utility functions for sitemap-scout."""

import base64
import binascii
import json
import logging
import re
from typing import Any
from urllib.parse import urlsplit

from pydantic import ValidationError as PydanticValidationError

from sitemapscout.exceptions import generate_correlation_id
from sitemapscout.models import CursorState

LOGGER = logging.getLogger(__name__)

_SCHEME_PREFIX = re.compile(r"^https?://", re.IGNORECASE)


def log_with_correlation(
    logger: logging.Logger,
    level: int,
    message: str,
    correlation_id: str | None = None,
    **kwargs: Any,
) -> None:
    """
    Log a message with correlation ID and additional context.

    Args:
        logger: Logger instance to use.
        level: Logging level (e.g., logging.INFO, logging.ERROR).
        message: Log message.
        correlation_id: Optional correlation ID. If None, generates a new one.
        **kwargs: Additional context to include in log extra fields.
    """
    corr_id = correlation_id or generate_correlation_id()
    extra = {"correlation_id": corr_id, **kwargs}
    logger.log(level, message, extra=extra)


# URL utilities


def is_valid_url(url: Any) -> bool:
    """
    Check whether a value is an absolute http(s) URL.

    Args:
        url: Candidate value.

    Returns:
        True when ``url`` is a string with scheme http or https and a host.
    """
    if not isinstance(url, str) or not url or any(ch.isspace() for ch in url):
        return False
    try:
        parts = urlsplit(url)
        # Accessing port validates it
        parts.port
    except ValueError:
        return False
    return parts.scheme.lower() in ("http", "https") and bool(parts.hostname)


def normalise_url(raw_url: str) -> str | None:
    """
    Normalise a user-supplied domain or URL to an absolute URL.

    Trims whitespace and prepends ``https://`` when no http(s) scheme is present.

    Args:
        raw_url: Domain or URL as typed by the caller.

    Returns:
        The normalised URL, or None when no valid URL can be produced.
    """
    candidate = raw_url.strip()
    if not _SCHEME_PREFIX.match(candidate):
        candidate = f"https://{candidate}"
    if not is_valid_url(candidate):
        return None
    return candidate


def url_origin(url: str) -> str:
    """
    Return the origin (scheme, host and non-default port) of a URL.

    Args:
        url: Absolute http(s) URL.

    Returns:
        Origin string such as ``https://example.com`` or ``http://localhost:8080``.
    """
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    host = parts.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    port = parts.port
    if port is not None and port != {"http": 80, "https": 443}.get(scheme):
        return f"{scheme}://{host}:{port}"
    return f"{scheme}://{host}"


# Pattern matching


def match_pattern(url: str, pattern: str) -> bool:
    """
    Match a URL against a glob pattern.

    ``*`` matches any run of characters (including none); everything else is
    literal. Matching is case-insensitive and anchored at both ends.

    Args:
        url: URL to test.
        pattern: Glob pattern, e.g. ``*/blog/*``.

    Returns:
        True when the whole URL matches the pattern.
    """
    regex = ".*".join(re.escape(part) for part in pattern.split("*"))
    return re.fullmatch(regex, url, re.IGNORECASE) is not None


def matches_any(url: str, patterns: list[str]) -> bool:
    """Return True if ``url`` matches at least one of ``patterns``."""
    return any(match_pattern(url, pattern) for pattern in patterns)


# Pagination cursors


def encode_cursor(state: CursorState) -> str:
    """
    Encode a cursor state as an opaque URL-safe token.

    Args:
        state: Cursor state to encode.

    Returns:
        Base64url string (unpadded) of the compact JSON form of ``state``.
    """
    payload = json.dumps(state.model_dump(exclude_none=True), separators=(",", ":"))
    return base64.urlsafe_b64encode(payload.encode("utf-8")).decode("ascii").rstrip("=")


def decode_cursor(token: str) -> CursorState | None:
    """
    Decode a cursor token produced by :func:`encode_cursor`.

    Args:
        token: Opaque cursor token.

    Returns:
        The cursor state, or None when the token is not a valid cursor.
    """
    if not isinstance(token, str) or not token:
        return None
    try:
        raw = base64.urlsafe_b64decode(token + "=" * (-len(token) % 4))
        data = json.loads(raw.decode("utf-8"))
        if not isinstance(data, dict):
            return None
        return CursorState.model_validate(data)
    except (binascii.Error, ValueError, RecursionError, PydanticValidationError):
        LOGGER.debug("Rejected cursor token %r", token)
        return None
