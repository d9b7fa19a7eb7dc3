"""
chuk-mcp-hgt: SRTM/HGT Skadi Point Elevation MCP Server

Answers "what is the ground elevation at (lat, lon)?" by fetching SRTM
tiles from the Skadi archive, caching them locally, and decoding the
nearest grid sample.
"""

from .core.elevation_manager import ElevationManager, get_elevation
from .errors import DecodeError, HGTError, InvalidResolutionError, NetworkError, TileIOError

__all__ = [
    "ElevationManager",
    "get_elevation",
    "HGTError",
    "NetworkError",
    "TileIOError",
    "DecodeError",
    "InvalidResolutionError",
]
