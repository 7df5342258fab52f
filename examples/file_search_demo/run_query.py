#!/usr/bin/env python3
"""
Demo: Query Gemini File Search stores.

This script demonstrates both client operations:
- Listing the File Search stores visible to your API key
- Asking a grounded question against one or more stores

Usage:
    # List stores only:
    python examples/file_search_demo/run_query.py

    # Query specific stores:
    python examples/file_search_demo/run_query.py "How do refunds work?" my-store other-store

Requirements:
    - GEMINI_API_KEY (or GOOGLE_API_KEY) in the environment or .env
"""

import asyncio
import sys

from gemini_file_search.clients.file_search import FileSearchClient
from gemini_file_search.tools import format_query_result, format_stores
from gemini_file_search.utils.config import configure_logging, settings


async def main(query: str | None, stores: list[str]) -> None:
    """Run the File Search demo."""
    configure_logging(settings)
    client = FileSearchClient()
    host_config = settings.host_config()
    plugin_config = settings.plugin_config()

    print(f"\n{'=' * 60}")
    print("Gemini File Search Demo")
    print(f"{'=' * 60}\n")

    available = await client.list_stores(host_config=host_config, plugin_config=plugin_config)
    print(format_stores(available))

    if not query:
        return

    targets = stores or [s.name for s in available]
    print(f"\n{'=' * 60}")
    print(f"Query: {query}")
    print(f"Stores: {', '.join(targets)}")
    print(f"{'=' * 60}\n")

    result = await client.query(
        query, targets, host_config=host_config, plugin_config=plugin_config
    )
    print(format_query_result(result))


if __name__ == "__main__":
    query_arg = sys.argv[1] if len(sys.argv) > 1 else None
    asyncio.run(main(query_arg, sys.argv[2:]))
