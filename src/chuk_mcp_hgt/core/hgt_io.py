"""
HGT tile I/O.

All functions are synchronous — callers wrap them in asyncio.to_thread().
Handles grid size inference, coordinate-to-sample projection, and
single-sample decoding from a cached tile file.
"""

import logging
import math
from pathlib import Path

import numpy as np

from ..constants import (
    ARC_SECONDS_PER_DEGREE,
    GRID_SIZE_BY_BYTES,
    HGT_DTYPE,
    HGT_FORMATS,
    SAMPLE_BYTES,
    ErrorMessages,
)
from ..errors import InvalidResolutionError, TileIOError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Grid size
# ---------------------------------------------------------------------------


def grid_size_for(size: int, name: str = "<tile>") -> int:
    """
    Infer samples-per-side from a tile's byte size.

    Args:
        size: File size in bytes
        name: Tile name, used in the error message

    Returns:
        3601 for SRTM1 or 1201 for SRTM3

    Raises:
        InvalidResolutionError: if the size matches neither layout
    """
    grid_size = GRID_SIZE_BY_BYTES.get(size)
    if grid_size is None:
        expected = ", ".join(str(b) for b in sorted(GRID_SIZE_BY_BYTES))
        raise InvalidResolutionError(
            ErrorMessages.INVALID_RESOLUTION.format(name, size, expected), size
        )
    return grid_size


def tile_grid_size(path: Path) -> int:
    """Grid size of a tile file on disk, from its byte size."""
    try:
        size = path.stat().st_size
    except OSError as e:
        raise TileIOError(ErrorMessages.READ_ERROR.format(path, e)) from e
    return grid_size_for(size, path.name)


def format_for_grid_size(grid_size: int) -> str | None:
    """Format ID (srtm1/srtm3) for a grid size, or None if unknown."""
    for fmt in HGT_FORMATS.values():
        if fmt["grid_size"] == grid_size:
            return str(fmt["id"])
    return None


# ---------------------------------------------------------------------------
# Projection
# ---------------------------------------------------------------------------


def grid_position(lat: float, lon: float, grid_size: int) -> tuple[int, int]:
    """
    Row and column of the sample for a coordinate.

    Whole arc-seconds into the cell are scaled onto the grid and floored.
    Row 0 is the northern edge, so row counts down as latitude rises.
    No interpolation.

    Args:
        lat: Latitude in degrees
        lon: Longitude in degrees
        grid_size: Samples per side (3601 or 1201)

    Returns:
        (row, col), both zero-based
    """
    lat_seconds = int(math.floor((lat - math.floor(lat)) * ARC_SECONDS_PER_DEGREE))
    lon_seconds = int(math.floor((lon - math.floor(lon)) * ARC_SECONDS_PER_DEGREE))

    last = grid_size - 1
    row = last - (lat_seconds * last) // ARC_SECONDS_PER_DEGREE
    col = (lon_seconds * last) // ARC_SECONDS_PER_DEGREE
    return row, col


def sample_offset(row: int, col: int, grid_size: int) -> int:
    """Byte offset of a sample in a row-major tile."""
    return SAMPLE_BYTES * (row * grid_size + col)


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def read_sample(path: Path, offset: int) -> int:
    """
    Read one big-endian int16 sample at a byte offset.

    Raises:
        TileIOError: if the file cannot be read or holds fewer than
            offset + 2 bytes
    """
    try:
        with open(path, "rb") as f:
            f.seek(offset)
            raw = f.read(SAMPLE_BYTES)
    except OSError as e:
        raise TileIOError(ErrorMessages.READ_ERROR.format(path, e)) from e

    if len(raw) < SAMPLE_BYTES:
        raise TileIOError(ErrorMessages.TRUNCATED_TILE.format(path, offset, len(raw)))

    return int(np.frombuffer(raw, dtype=HGT_DTYPE)[0])


def read_elevation(path: Path, lat: float, lon: float) -> int:
    """
    Decode the elevation nearest a coordinate from a cached tile.

    Args:
        path: Tile file holding (lat, lon)
        lat: Latitude in degrees
        lon: Longitude in degrees

    Returns:
        Elevation in metres (may be the -32768 void value)
    """
    grid_size = tile_grid_size(path)
    row, col = grid_position(lat, lon, grid_size)
    offset = sample_offset(row, col, grid_size)
    logger.debug(f"{path.name}: ({lat}, {lon}) -> row {row}, col {col} @ {offset}")
    return read_sample(path, offset)
