"""
MCP Common - shared server plumbing.

This package provides:
- Correlation ID generation and tracking
- Structured JSON logging
- Configuration helpers
- Server utilities (transport, CLI, health route, server info resource)
- Tool registration with argument normalisation
"""

from .config import parse_comma_separated, parse_log_level
from .correlation import (
    clear_correlation_id,
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from .logging import CorrelationIdFilter, JSONFormatter, redact_sensitive_data, setup_server_logging
from .server import BaseMCPServer, create_argument_parser, create_middleware, setup_transport
from .tool_registration import create_tool_wrapper, normalize_value

__all__ = [
    # Correlation ID
    "generate_correlation_id",
    "get_correlation_id",
    "set_correlation_id",
    "clear_correlation_id",
    # Logging
    "CorrelationIdFilter",
    "JSONFormatter",
    "redact_sensitive_data",
    "setup_server_logging",
    # Config
    "parse_comma_separated",
    "parse_log_level",
    # Server
    "BaseMCPServer",
    "create_argument_parser",
    "create_middleware",
    "setup_transport",
    # Tool Registration
    "create_tool_wrapper",
    "normalize_value",
]
