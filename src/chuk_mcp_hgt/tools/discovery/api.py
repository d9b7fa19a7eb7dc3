"""
Discovery tools — tile lookup, cache status, capabilities.

These tools require no network I/O and report on tile naming and the
local cache.
"""

import logging

from ...constants import (
    DISCOVERY_TOOLS,
    ELEVATION_TOOLS,
    HGT_FORMATS,
    VOID_VALUE,
    ServerConfig,
    SuccessMessages,
)
from ...models.responses import (
    CapabilitiesResponse,
    ErrorResponse,
    StatusResponse,
    TileInfoResponse,
    format_response,
)

logger = logging.getLogger(__name__)


def register_discovery_tools(mcp, manager):
    """Register discovery tools with the MCP server."""

    @mcp.tool()
    async def hgt_tile_info(lat: float, lon: float, output_mode: str = "json") -> str:
        """Show which SRTM tile holds a point, its download URL, and whether it is cached.

        Does not download anything.

        Args:
            lat: Latitude (-90 to 90)
            lon: Longitude (-180 to 180)
            output_mode: "json" for structured data, "text" for human-readable summary

        Returns:
            Tile name, folder, URL, cache path and cache state
        """
        try:
            info = manager.describe_tile(lat, lon)

            if info.cached:
                message = SuccessMessages.TILE_CACHED.format(info.name, info.format or "unknown")
            else:
                message = SuccessMessages.TILE_NOT_CACHED.format(info.name)

            response = TileInfoResponse(
                lat=lat,
                lon=lon,
                name=info.name,
                folder=info.folder,
                file_name=info.file_name,
                cache_path=info.cache_path,
                url=info.url,
                cached=info.cached,
                grid_size=info.grid_size,
                format=info.format,
                size_bytes=info.size_bytes,
                message=message,
            )
            return format_response(response, output_mode)

        except Exception as e:
            logger.error(f"hgt_tile_info failed: {e}")
            return format_response(ErrorResponse(error=str(e)), output_mode)

    @mcp.tool()
    async def hgt_status(output_mode: str = "json") -> str:
        """Get server status including version and local tile cache usage.

        Args:
            output_mode: "json" for structured data, "text" for human-readable summary

        Returns:
            Server status information
        """
        try:
            stats = manager.cache_stats()
            cache_mb = stats["total_bytes"] / (1024 * 1024)

            response = StatusResponse(
                server=ServerConfig.NAME,
                version=ServerConfig.VERSION,
                cache_dir=str(manager.cache_dir),
                base_url=manager.store.base_url,
                cached_tiles=stats["tiles"],
                cache_size_mb=round(cache_mb, 1),
            )
            return format_response(response, output_mode)

        except Exception as e:
            logger.error(f"hgt_status failed: {e}")
            return format_response(ErrorResponse(error=str(e)), output_mode)

    @mcp.tool()
    async def hgt_capabilities(output_mode: str = "json") -> str:
        """Get full server capabilities including supported tile formats and tools.

        Args:
            output_mode: "json" for structured data, "text" for human-readable summary

        Returns:
            Complete server capabilities
        """
        try:
            tools = ELEVATION_TOOLS + DISCOVERY_TOOLS

            response = CapabilitiesResponse(
                server=ServerConfig.NAME,
                version=ServerConfig.VERSION,
                formats=list(HGT_FORMATS.keys()),
                grid_sizes=[fmt["grid_size"] for fmt in HGT_FORMATS.values()],
                void_value=VOID_VALUE,
                tools=tools,
                tool_count=len(tools),
                llm_guidance=(
                    "Use hgt_get_elevation for a single point and hgt_get_elevations "
                    "for several. Elevations are whole metres from the nearest SRTM "
                    "sample; -32768 means no data. Use hgt_tile_info to check whether "
                    "a tile is cached before a lookup that would download it."
                ),
                message=f"{ServerConfig.NAME} v{ServerConfig.VERSION} capabilities",
            )
            return format_response(response, output_mode)

        except Exception as e:
            logger.error(f"hgt_capabilities failed: {e}")
            return format_response(ErrorResponse(error=str(e)), output_mode)
