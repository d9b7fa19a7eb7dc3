"""Response models for chuk-mcp-hgt."""

from .responses import (
    CapabilitiesResponse,
    ErrorResponse,
    MultiPointResponse,
    PointElevationResponse,
    PointInfo,
    StatusResponse,
    TileInfoResponse,
    format_response,
)

__all__ = [
    "ErrorResponse",
    "PointElevationResponse",
    "PointInfo",
    "MultiPointResponse",
    "TileInfoResponse",
    "StatusResponse",
    "CapabilitiesResponse",
    "format_response",
]
