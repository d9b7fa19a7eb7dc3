#!/usr/bin/env python3
"""
Alpine Peaks Demo -- chuk-mcp-hgt

Looks up elevation for a few Alpine summits, first one at a time and then
as a single concurrent batch. The second pass reads only from the local
tile cache.

Usage:
    python examples/alpine_peaks_demo.py

Requirements:
    pip install chuk-mcp-hgt
    (Requires network access to the elevation-tiles-prod S3 bucket on first run)
"""

import asyncio
import sys

from tool_runner import ToolRunner

# -- Configuration -----------------------------------------------------------

PEAKS = [
    {"name": "Mont Blanc", "lat": 45.833641, "lon": 6.864594, "known_m": 4806},
    {"name": "Matterhorn", "lat": 45.976389, "lon": 7.658333, "known_m": 4478},
    {"name": "Eiger", "lat": 46.5775, "lon": 8.005278, "known_m": 3967},
    {"name": "Grossglockner", "lat": 47.074531, "lon": 12.694608, "known_m": 3798},
]


# -- Main pipeline -----------------------------------------------------------


async def main() -> None:
    runner = ToolRunner()

    print("=" * 60)
    print("Alpine Peaks -- SRTM Elevation Queries")
    print("=" * 60)

    # Step 1: Where will the tiles come from?
    print("\nStep 1: Tile lookup (no download)")
    for p in PEAKS:
        info = await runner.run("hgt_tile_info", lat=p["lat"], lon=p["lon"])
        state = "cached" if info["cached"] else "not cached"
        print(f"  {p['name']:<14} {info['name']} ({state})")

    # Step 2: Single-point queries
    print("\nStep 2: Single-point queries")
    for p in PEAKS:
        r = await runner.run("hgt_get_elevation", lat=p["lat"], lon=p["lon"])
        if "error" in r:
            print(f"  {p['name']}: ERROR - {r['error']}")
            sys.exit(1)
        diff = r["elevation_m"] - p["known_m"]
        print(f"  {p['name']:<14} {r['elevation_m']:>5}m  (known {p['known_m']}m, {diff:+d}m)")

    # Step 3: Batch query, served from the cache
    print("\nStep 3: Batch query")
    text = await runner.run_text(
        "hgt_get_elevations", points=[[p["lat"], p["lon"]] for p in PEAKS]
    )
    for line in text.strip().split("\n"):
        print(f"    {line}")

    status = await runner.run("hgt_status")
    print(f"\nCache: {status['cached_tiles']} tiles, {status['cache_size_mb']} MB")


if __name__ == "__main__":
    asyncio.run(main())
