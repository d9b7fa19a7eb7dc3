#!/usr/bin/env python3
"""
Async HGT MCP Server using chuk-mcp-server

Point elevation lookups from SRTM/HGT Skadi tiles. Tiles are fetched from
the public elevation-tiles bucket on first use and cached on local disk.
"""

import logging

from chuk_mcp_server import ChukMCPServer

from .core.elevation_manager import ElevationManager
from .tools.discovery import register_discovery_tools
from .tools.elevation import register_elevation_tools

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-mcp-hgt")

# Create elevation manager instance (cache root from HGT_CACHE_DIR)
manager = ElevationManager.from_env()

# Register all tool modules
register_discovery_tools(mcp, manager)
register_elevation_tools(mcp, manager)

# Run the server
if __name__ == "__main__":
    logger.info("Starting HGT MCP Server...")
    logger.info(f"Tile cache: {manager.cache_dir}")
    mcp.run(stdio=True)
