"""MCP tool implementations for sitemap-scout."""
