"""
Constants for chuk-mcp-hgt server.

All magic strings, tile format metadata, and configuration values live here.
"""


class ServerConfig:
    NAME = "chuk-mcp-hgt"
    VERSION = "0.1.0"
    DESCRIPTION = "SRTM/HGT Skadi Point Elevation MCP Server"


class EnvVar:
    CACHE_DIR = "HGT_CACHE_DIR"
    BASE_URL = "HGT_BASE_URL"
    FETCH_TIMEOUT = "HGT_FETCH_TIMEOUT"
    NETWORK_TESTS = "HGT_NETWORK_TESTS"
    MCP_STDIO = "MCP_STDIO"


class HGTFormat:
    SRTM1 = "srtm1"
    SRTM3 = "srtm3"


# Remote archive & local cache
SKADI_BASE_URL = "https://elevation-tiles-prod.s3.amazonaws.com/skadi"
DEFAULT_CACHE_DIR = "/tmp/hgt"
DEFAULT_FETCH_TIMEOUT = 60.0  # seconds
DOWNLOAD_CHUNK_SIZE = 64 * 1024

HGT_SUFFIX = ".hgt"
ARCHIVE_SUFFIX = ".gz"

# Grid layout
ARC_SECONDS_PER_DEGREE = 3600
SAMPLE_BYTES = 2
HGT_DTYPE = ">i2"  # big-endian signed 16-bit
VOID_VALUE = -32768
MAX_BAND = 2**31 - 1  # tile bands saturate here for non-finite input
TILE_FILE_MODE = 0o644

HGT_FORMATS: dict[str, dict] = {
    HGTFormat.SRTM1: {
        "id": HGTFormat.SRTM1,
        "name": "SRTM 1 arc-second",
        "grid_size": 3601,
        "arc_seconds": 1,
        "file_bytes": 3601 * 3601 * SAMPLE_BYTES,
    },
    HGTFormat.SRTM3: {
        "id": HGTFormat.SRTM3,
        "name": "SRTM 3 arc-second",
        "grid_size": 1201,
        "arc_seconds": 3,
        "file_bytes": 1201 * 1201 * SAMPLE_BYTES,
    },
}

# file size in bytes -> grid size (samples per side)
GRID_SIZE_BY_BYTES: dict[int, int] = {
    fmt["file_bytes"]: fmt["grid_size"] for fmt in HGT_FORMATS.values()
}

# MCP tool names
ELEVATION_TOOLS = ["hgt_get_elevation", "hgt_get_elevations"]
DISCOVERY_TOOLS = ["hgt_tile_info", "hgt_status", "hgt_capabilities"]


class ErrorMessages:
    NETWORK_ERROR = "Failed to fetch tile {} from {}: {}"
    HTTP_STATUS = "Fetching tile {} from {} returned HTTP {}"
    CACHE_DIR_ERROR = "Cannot create tile folder {}: {}"
    WRITE_ERROR = "Cannot write tile {} to {}: {}"
    DECODE_ERROR = "Malformed gzip archive for tile {}: {}"
    INVALID_RESOLUTION = (
        "Tile {} has {} bytes, which matches no known HGT layout (expected one of: {})"
    )
    READ_ERROR = "Cannot read tile {}: {}"
    TRUNCATED_TILE = "Tile {} is truncated: needed 2 bytes at offset {}, got {}"
    EMPTY_POINTS = "points must contain at least one [lat, lon] pair"
    INVALID_POINT = "Each point must be a [lat, lon] pair, got {}"
    INVALID_TIMEOUT = "{} must be a positive number of seconds, got {!r}"


class SuccessMessages:
    POINT_ELEVATION = "Elevation at point: {}m"
    POINT_VOID = "No data at point (void sample {})"
    POINTS_ELEVATION = "Retrieved elevation for {} points"
    TILE_CACHED = "Tile {} is cached ({})"
    TILE_NOT_CACHED = "Tile {} is not cached yet"
