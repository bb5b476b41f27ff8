"""MCP prompts for the sitemap-scout server.

Workflow guidance for AI agents using the sitemap tools.
"""


async def get_explore_site_prompt() -> str:
    """Guide for exploring a site's sitemaps."""
    return """# Exploring a Site's Sitemaps

1. Call `discover_sitemaps(url="example.com")`.
2. Inspect `data.sitemaps`. Entries with `type="sitemap_index"` list other
   sitemaps; their children are already included with
   `discovered_from="sitemap_index"`.
3. Call `list_sitemap_urls(sitemap_url=...)` on a leaf sitemap to see its pages.

An empty `sitemaps` list is not an error: check `meta.warnings`.
"""


async def get_paginate_sitemap_prompt() -> str:
    """Guide for paging through a large sitemap."""
    return """# Paging Through a Sitemap

```
page = list_sitemap_urls(sitemap_url="https://example.com/sitemap.xml", limit=500)
while page.meta.pagination.next_cursor:
    page = list_sitemap_urls(
        sitemap_url="https://example.com/sitemap.xml",
        limit=500,
        cursor=page.meta.pagination.next_cursor,
    )
```

- `limit` is clamped to 1-1000.
- Always pass the same `sitemap_url` and `limit` with a cursor.
- Cursors are opaque; do not construct them by hand.
"""


async def get_build_frontier_prompt() -> str:
    """Guide for building a filtered crawl frontier."""
    return """# Building a Crawl Frontier

```
build_crawl_frontier(
    seed_url="example.com",
    rules={
        "include": ["*/blog/*", "*/docs/*"],
        "exclude": ["*/tag/*", "*.pdf"],
        "max_urls": 1000
    },
    limit=200
)
```

- Patterns match the whole URL, so use a leading `*` for path patterns.
- Include patterns are OR-combined; exclude patterns are applied after include.
- Empty pattern strings are rejected with INVALID_INPUT.
- `max_urls` defaults to 5000 and is capped at 10000.
- Sitemaps that fail to load are skipped; see `meta.warnings`.
"""
