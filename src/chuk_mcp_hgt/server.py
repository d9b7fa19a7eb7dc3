#!/usr/bin/env python3
"""
HGT MCP Server - Entry Point

This module provides the async MCP server for SRTM/HGT point elevation
lookups. Supports both stdio (for Claude Desktop) and HTTP (for API access)
transports.
"""

import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from .constants import DEFAULT_CACHE_DIR, EnvVar

# Load environment variables from .env file
env_path = Path(__file__).parent.parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)

logger = logging.getLogger(__name__)


def _init_cache_dir() -> bool:
    """
    Make sure the tile cache directory from the environment exists.

    Returns:
        True if the cache directory is usable, False otherwise
    """
    cache_dir = os.environ.get(EnvVar.CACHE_DIR, DEFAULT_CACHE_DIR)
    try:
        Path(cache_dir).mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Failed to create tile cache directory {cache_dir}: {e}")
        return False

    logger.info(f"Tile cache directory ready: {cache_dir}")
    return True


# Import mcp instance and all registered tools from async server
from .async_server import mcp  # noqa: F401, E402


def main() -> None:
    """Main entry point for the MCP server."""
    import argparse

    # Prepare the cache at startup, not at import time
    _init_cache_dir()

    parser = argparse.ArgumentParser(description="HGT MCP Server")
    parser.add_argument(
        "mode",
        nargs="?",
        choices=["stdio", "http"],
        default=None,
        help="Transport mode (stdio for Claude Desktop, http for API)",
    )
    parser.add_argument(
        "--host", default="localhost", help="Host for HTTP mode (default: localhost)"
    )
    parser.add_argument("--port", type=int, default=8004, help="Port for HTTP mode (default: 8004)")

    args = parser.parse_args()

    if args.mode == "stdio":
        print("HGT MCP Server starting in STDIO mode", file=sys.stderr)
        mcp.run(stdio=True)
    elif args.mode == "http":
        print(
            f"HGT MCP Server starting in HTTP mode on {args.host}:{args.port}",
            file=sys.stderr,
        )
        mcp.run(host=args.host, port=args.port, stdio=False)
    else:
        if os.environ.get(EnvVar.MCP_STDIO) or (not sys.stdin.isatty()):
            print("HGT MCP Server starting in STDIO mode (auto-detected)", file=sys.stderr)
            mcp.run(stdio=True)
        else:
            print(
                f"HGT MCP Server starting in HTTP mode on {args.host}:{args.port}",
                file=sys.stderr,
            )
            mcp.run(host=args.host, port=args.port, stdio=False)


if __name__ == "__main__":
    main()
