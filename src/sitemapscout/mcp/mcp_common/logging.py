"""
Structured JSON logging for the MCP server.

Every line is a single JSON object carrying the correlation ID of the tool
call that produced it plus the service name and version. Logs go to stderr
because stdout carries the protocol when the server runs over stdio.

Usage:
    >>> from sitemapscout.mcp.mcp_common.logging import setup_server_logging
    >>> logger = setup_server_logging("sitemap-scout", "1.0.0")
    >>> logger.info("Server starting...")
"""

import json
import logging
import os
import re
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

from .config import parse_log_level
from .correlation import get_correlation_id

# Query parameters that may carry credentials in sitemap URLs
SENSITIVE_QUERY_PATTERN = re.compile(
    r"(?i)\b(api[_-]?key|token|secret|password|signature|sig|auth)=([^&\s\"']+)"
)

# Attributes every LogRecord has; anything else was passed via ``extra``
_STANDARD_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "thread",
        "threadName",
        "taskName",
        "exc_info",
        "exc_text",
        "stack_info",
        "correlation_id",
    }
)


def redact_sensitive_data(message: str, replacement: str = "[REDACTED]") -> str:
    """
    Redact credential-like query parameters from a string.

    Example:
        >>> redact_sensitive_data("https://example.com/sitemap.xml?token=abc")
        'https://example.com/sitemap.xml?token=[REDACTED]'
    """
    if not isinstance(message, str):
        return str(message)
    return SENSITIVE_QUERY_PATTERN.sub(lambda m: f"{m.group(1)}={replacement}", message)


class JSONFormatter(logging.Formatter):
    """Structured JSON formatter with correlation IDs and service metadata."""

    def __init__(self, service_name: str, service_version: str, include_location: bool = False):
        """
        Initialise JSON formatter.

        Args:
            service_name: Name of the service (e.g., "sitemap-scout")
            service_version: Version of the service
            include_location: Include module, function and line in log entries
        """
        super().__init__()
        self.service_name = service_name
        self.service_version = service_version
        self.include_location = include_location

    def _detect_log_type(self, record: logging.LogRecord) -> str:
        if record.levelname in ("ERROR", "CRITICAL"):
            return "error"
        message = record.getMessage().lower()
        if "tool" in message:
            return "request"
        if "starting" in message or "initialis" in message:
            return "startup"
        if "shutdown" in message or "cleanup" in message:
            return "shutdown"
        return "application"

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        correlation_id = getattr(record, "correlation_id", None)
        if not isinstance(correlation_id, str):
            correlation_id = get_correlation_id()

        log_entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": redact_sensitive_data(record.getMessage()),
            "correlation_id": correlation_id,
            "service_name": self.service_name,
            "service_version": self.service_version,
            "log_type": self._detect_log_type(record),
        }

        if self.include_location:
            log_entry["module"] = record.module
            log_entry["function"] = record.funcName
            log_entry["line"] = record.lineno

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS and not key.startswith("_"):
                log_entry[key] = value

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class CorrelationIdFilter(logging.Filter):
    """Ensure ``correlation_id`` is present on every record."""

    def __init__(self, default_value: str = "-") -> None:
        super().__init__()
        self.default_value = default_value

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "correlation_id", None) is None:
            record.correlation_id = get_correlation_id() or self.default_value
        return True


def setup_logging(
    formatter: logging.Formatter,
    level: int = logging.INFO,
    stream: TextIO | None = None,
) -> logging.Logger:
    """
    Replace the root logger's handlers with a single formatted stream handler.

    Args:
        formatter: Formatter for the handler
        level: Logging level (default: INFO)
        stream: Output stream (default: sys.stderr)

    Returns:
        Root logger instance
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(CorrelationIdFilter())
    root_logger.addHandler(handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
    logging.getLogger("httpcore").setLevel(max(level, logging.WARNING))

    return root_logger


def get_log_level_from_env() -> int:
    """Read the logging level from the LOG_LEVEL environment variable (default INFO)."""
    return parse_log_level(os.environ.get("LOG_LEVEL", "INFO"))


def setup_server_logging(
    service_name: str,
    service_version: str,
    level: int | None = None,
) -> logging.Logger:
    """
    Set up JSON logging for the MCP server and return a named logger.

    Args:
        service_name: Name of the MCP service
        service_version: Service version
        level: Logging level (default: from LOG_LEVEL env var, or INFO)

    Returns:
        Named logger instance for the service
    """
    if level is None:
        level = get_log_level_from_env()
    formatter = JSONFormatter(service_name=service_name, service_version=service_version)
    setup_logging(formatter, level=level)
    return logging.getLogger(service_name)
