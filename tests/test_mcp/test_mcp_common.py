"""Tests for shared MCP server plumbing: logging, correlation IDs and the health route."""

import io
import json
import logging

import httpx
import pytest

from sitemapscout.mcp.mcp_common.correlation import (
    clear_correlation_id,
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from sitemapscout.mcp.mcp_common.logging import JSONFormatter, redact_sensitive_data, setup_logging
from sitemapscout.mcp.server import SitemapScoutServer


class TestCorrelationId:
    """Test correlation ID context helpers."""

    def test_generate(self):
        assert len(generate_correlation_id()) == 8

    def test_set_get_clear(self):
        set_correlation_id("abcd1234")
        assert get_correlation_id() == "abcd1234"
        clear_correlation_id()
        assert get_correlation_id() is None


class TestLogging:
    """Test structured JSON logging."""

    def test_redacts_credentials(self):
        message = "Fetched https://example.com/sitemap.xml?token=secret123&page=2"
        assert redact_sensitive_data(message) == "Fetched https://example.com/sitemap.xml?token=[REDACTED]&page=2"

    def test_json_formatter(self):
        formatter = JSONFormatter(service_name="sitemap-scout", service_version="1.0.0")
        record = logging.LogRecord(
            name="sitemapscout.test",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg="Listed %d entries",
            args=(3,),
            exc_info=None,
        )
        record.correlation_id = "abcd1234"
        record.sitemap_url = "https://example.com/sitemap.xml"

        entry = json.loads(formatter.format(record))

        assert entry["message"] == "Listed 3 entries"
        assert entry["level"] == "INFO"
        assert entry["correlation_id"] == "abcd1234"
        assert entry["service_name"] == "sitemap-scout"
        assert entry["sitemap_url"] == "https://example.com/sitemap.xml"

    def test_setup_logging_writes_json_lines(self):
        stream = io.StringIO()
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            setup_logging(JSONFormatter("sitemap-scout", "1.0.0"), level=logging.INFO, stream=stream)
            logging.getLogger("sitemapscout.test").info("hello")
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

        entry = json.loads(stream.getvalue().strip())
        assert entry["message"] == "hello"
        assert entry["correlation_id"] == "-"


class TestHealthRoute:
    """Test the HTTP /health route."""

    @pytest.mark.asyncio
    async def test_health_payload(self):
        server = SitemapScoutServer()
        transport = httpx.ASGITransport(app=server.mcp.http_app())

        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
            response = await client.get("/health")

        assert response.status_code == 200
        payload = response.json()
        assert payload["status"] == "healthy"
        assert payload["server"] == "sitemap-scout"
        assert payload["version"] == "1.0.0"
        assert "timestamp" in payload
