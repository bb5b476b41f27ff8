"""Tests for sitemap-scout MCP server initialisation."""

import json

import pytest
from fastmcp import Client

from sitemapscout.mcp.config import ScoutSettings, get_settings
from sitemapscout.mcp.mcp_common.server import create_argument_parser
from sitemapscout.mcp.server import SITEMAP_SCOUT_INSTRUCTIONS, SitemapScoutServer


class TestServerInitialization:
    """Test server initialisation and configuration."""

    def test_server_creates_with_default_name(self):
        """Server should create with default name 'sitemap-scout'."""
        server = SitemapScoutServer()
        assert server.server_name == "sitemap-scout"

    def test_server_creates_with_custom_name(self):
        """Server should accept custom name."""
        server = SitemapScoutServer(server_name="custom")
        assert server.server_name == "custom"

    def test_server_has_mcp_instance(self):
        """Server should have FastMCP instance."""
        server = SitemapScoutServer()
        assert server.mcp is not None

    def test_api_client_initially_none(self):
        """API client should be None before initialisation."""
        server = SitemapScoutServer()
        assert server.api_client is None

    def test_instructions_name_tools(self):
        """Server instructions should mention every tool."""
        for tool in ("discover_sitemaps", "list_sitemap_urls", "build_crawl_frontier"):
            assert tool in SITEMAP_SCOUT_INSTRUCTIONS

    @pytest.mark.asyncio
    async def test_initialize_and_cleanup(self):
        """Initialisation should create services; cleanup should close them."""
        server = SitemapScoutServer()

        await server.initialize_client()
        client = server.api_client
        assert client is not None
        assert all(client.get_service_status().values())

        await server.cleanup()
        assert server.api_client is None
        assert client.http_client.is_closed

    @pytest.mark.asyncio
    async def test_register_tools(self):
        """All four tools should be registered after initialisation."""
        server = SitemapScoutServer()
        await server.initialize_client()
        try:
            server.register_tools()
            async with Client(server.mcp) as client:
                tools = await client.list_tools()
        finally:
            await server.cleanup()

        assert {tool.name for tool in tools} == {
            "discover_sitemaps",
            "list_sitemap_urls",
            "build_crawl_frontier",
            "sitemap_scout_health",
        }

    def test_register_tools_requires_services(self):
        """Registering tools before initialisation should fail."""
        server = SitemapScoutServer()
        with pytest.raises(RuntimeError, match="Services must be initialised"):
            server.register_tools()


class TestArgumentParser:
    """Test server command-line arguments."""

    def test_defaults(self):
        """HTTP transport on the configured port is the default."""
        args = create_argument_parser("test", default_port=8080).parse_args([])
        assert args.transport == "http"
        assert args.port == 8080
        assert args.path == "/mcp"

    def test_stdio_flags(self):
        """--stdio and -s should select the stdio transport."""
        parser = create_argument_parser("test")
        assert parser.parse_args(["--stdio"]).transport == "stdio"
        assert parser.parse_args(["-s"]).transport == "stdio"
        assert parser.parse_args(["--transport", "stdio"]).transport == "stdio"

    def test_port_flags(self):
        """--port and -p should set the HTTP port."""
        parser = create_argument_parser("test")
        assert parser.parse_args(["--port", "9000"]).port == 9000
        assert parser.parse_args(["-p", "9001"]).port == 9001


class TestConfiguration:
    """Test configuration loading."""

    def test_settings_loads_defaults(self, monkeypatch):
        """Settings should load with defaults."""
        for name in ("REQUEST_TIMEOUT", "MAX_CONCURRENT_REQUESTS", "USER_AGENT", "PORT", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        settings = ScoutSettings(_env_file=None)
        assert settings.request_timeout == 30000
        assert settings.max_concurrent_requests == 5
        assert settings.port == 8080
        assert settings.log_level == "INFO"
        assert settings.user_agent.startswith("sitemap-scout/")

    def test_get_settings_is_cached(self):
        """get_settings should return the same instance."""
        assert get_settings() is get_settings()

    def test_settings_validates_log_level(self):
        """Settings should normalise log level case."""
        settings = ScoutSettings(log_level="debug")
        assert settings.log_level == "DEBUG"

    def test_settings_rejects_invalid_log_level(self):
        """Settings should reject invalid log level."""
        with pytest.raises(ValueError, match="Invalid log level"):
            ScoutSettings(log_level="INVALID")

    def test_settings_timeout_bounds(self):
        """Settings should enforce timeout bounds."""
        assert ScoutSettings(request_timeout=60000).request_timeout == 60000
        with pytest.raises(ValueError):
            ScoutSettings(request_timeout=10)
        with pytest.raises(ValueError):
            ScoutSettings(max_concurrent_requests=0)

    def test_settings_from_environment(self, monkeypatch):
        """Settings should read environment variables."""
        monkeypatch.setenv("REQUEST_TIMEOUT", "5000")
        monkeypatch.setenv("MAX_CONCURRENT_REQUESTS", "12")
        monkeypatch.setenv("USER_AGENT", "my-bot/1.0")
        monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example")

        settings = ScoutSettings()

        assert settings.request_timeout == 5000
        assert settings.max_concurrent_requests == 12
        assert settings.allowed_origins == ["https://a.example", "https://b.example"]

        config = settings.to_fetch_config()
        assert config.timeout_ms == 5000
        assert config.max_concurrent_requests == 12
        assert config.user_agent == "my-bot/1.0"


class TestResources:
    """Test resources and prompts."""

    @pytest.mark.asyncio
    async def test_capabilities_resource(self, mock_api_client):
        """Capabilities should describe limits, error codes and fetch config."""
        from sitemapscout.mcp.resources import get_capabilities_resource

        capabilities = json.loads(await get_capabilities_resource(mock_api_client))

        assert capabilities["limits"]["list_max_limit"] == 1000
        assert capabilities["limits"]["frontier_max_urls"] == 10000
        assert "RATE_LIMITED" in capabilities["error_codes"]
        assert capabilities["fetch"]["max_concurrent_requests"] == 5

    @pytest.mark.asyncio
    async def test_prompts_mention_tools(self):
        """Prompts should reference the tools they guide."""
        from sitemapscout.mcp import prompts

        assert "discover_sitemaps" in await prompts.get_explore_site_prompt()
        assert "cursor" in await prompts.get_paginate_sitemap_prompt()
        assert "build_crawl_frontier" in await prompts.get_build_frontier_prompt()
