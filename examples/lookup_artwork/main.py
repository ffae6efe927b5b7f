#!/usr/bin/env python3
"""Example: Look Up Artwork for a Movie

This example asks every repository given on the command line for artwork
of a movie identified by its TMDB ID.

To run:
    python main.py 603 https://example.org/artwork https://other.org/art
"""

from __future__ import annotations

import asyncio
import logging
import sys

from remote_artwork import ArtworkClient, ArtworkConfig, ItemType


async def main() -> None:
    if len(sys.argv) < 3:
        print("Usage: python main.py <tmdb_id> <repository_url> [<repository_url> ...]")
        sys.exit(1)

    tmdb_id, *repositories = sys.argv[1:]

    # Repository failures are only reported through logging
    logging.basicConfig(level=logging.WARNING)

    config = ArtworkConfig(repositories=repositories, timeout=10)

    async with ArtworkClient(config) as client:
        images = await client.get_image_infos("movies", ItemType.GENERAL, {"TMDB": tmdb_id})

    if not images:
        print(f"No artwork found for TMDB {tmdb_id}")
        return

    print(f"Found {len(images)} images for TMDB {tmdb_id}:\n")
    for image in images:
        print(f"  {image.type:<8} {image.url}")


if __name__ == "__main__":
    asyncio.run(main())
