#!/usr/bin/env python3
"""Example: Sharing a Catalog Cache

Catalogs are cached per URL for five minutes by default, so looking up
several items from the same repository downloads the catalog only once.

To run:
    python main.py https://example.org/artwork
"""

from __future__ import annotations

import asyncio
import sys
import time

from remote_artwork import ArtworkClient, ArtworkConfig, ItemType, MemoryCache


async def main() -> None:
    if len(sys.argv) < 2:
        print("Usage: python main.py <repository_url>")
        sys.exit(1)

    # Options:
    # - max_size: Maximum number of cached catalogs (default: 1000)
    # - default_ttl: How long catalogs stay cached in seconds (default: 300)
    cache = MemoryCache(max_size=100, default_ttl=600)
    config = ArtworkConfig(repositories=[sys.argv[1]])

    async with ArtworkClient(config, cache=cache) as client:
        for imdb_id in ["tt0133093", "tt0234215", "tt0242653"]:
            start = time.time()
            images = await client.get_image_infos("movies", ItemType.GENERAL, {"IMDB": imdb_id})
            elapsed = time.time() - start
            print(f"{imdb_id}: {len(images)} images in {elapsed:.3f}s")

        stats = await cache.get_stats()
        print("\nCache Stats:")
        print(f"  Size: {stats['size']} / {stats['max_size']}")
        print(f"  Hits: {stats['hits']}")
        print(f"  Misses: {stats['misses']}")

    await cache.close()


if __name__ == "__main__":
    asyncio.run(main())
