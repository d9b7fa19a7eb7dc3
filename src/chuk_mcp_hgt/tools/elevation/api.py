"""
Elevation tools — single and multi-point elevation lookups.

These tools may perform network I/O to download a tile on first use;
later lookups in the same tile read only from the local cache.
"""

import logging

from ...constants import SuccessMessages
from ...models.responses import (
    ErrorResponse,
    MultiPointResponse,
    PointElevationResponse,
    PointInfo,
    format_response,
)

logger = logging.getLogger(__name__)


def register_elevation_tools(mcp, manager):
    """Register elevation tools with the MCP server."""

    @mcp.tool()
    async def hgt_get_elevation(
        lat: float,
        lon: float,
        output_mode: str = "json",
    ) -> str:
        """Get ground elevation at a single geographic point from SRTM tiles.

        The nearest grid sample is returned (no interpolation). The tile is
        downloaded and cached on first use.

        Args:
            lat: Latitude (-90 to 90)
            lon: Longitude (-180 to 180)
            output_mode: "json" or "text"

        Returns:
            Elevation in whole metres and the tile it came from
        """
        try:
            result = await manager.fetch_point(lat=lat, lon=lon)

            if result.is_void:
                message = SuccessMessages.POINT_VOID.format(result.elevation_m)
            else:
                message = SuccessMessages.POINT_ELEVATION.format(result.elevation_m)

            response = PointElevationResponse(
                lat=lat,
                lon=lon,
                elevation_m=result.elevation_m,
                tile=result.tile,
                is_void=result.is_void,
                message=message,
            )
            return format_response(response, output_mode)

        except Exception as e:
            logger.error(f"hgt_get_elevation failed: {e}")
            return format_response(
                ErrorResponse(error=str(e), error_type=type(e).__name__), output_mode
            )

    @mcp.tool()
    async def hgt_get_elevations(
        points: list[list[float]],
        output_mode: str = "json",
    ) -> str:
        """Get ground elevation at multiple points. Points are resolved concurrently.

        Args:
            points: List of [lat, lon] pairs
            output_mode: "json" or "text"

        Returns:
            Per-point elevations and the overall elevation range
        """
        try:
            result = await manager.fetch_points(points)

            point_infos = [
                PointInfo(
                    lat=p.lat,
                    lon=p.lon,
                    elevation_m=p.elevation_m,
                    tile=p.tile,
                    is_void=p.is_void,
                )
                for p in result.points
            ]

            response = MultiPointResponse(
                point_count=len(point_infos),
                points=point_infos,
                elevation_range=result.elevation_range,
                void_count=sum(1 for p in point_infos if p.is_void),
                message=SuccessMessages.POINTS_ELEVATION.format(len(point_infos)),
            )
            return format_response(response, output_mode)

        except Exception as e:
            logger.error(f"hgt_get_elevations failed: {e}")
            return format_response(
                ErrorResponse(error=str(e), error_type=type(e).__name__), output_mode
            )
