"""MCP server for sitemap-scout - Model Context Protocol integration.

Run with: sitemap-scout-mcp [--stdio] [--port PORT]
"""
