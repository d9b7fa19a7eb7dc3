"""
Tile naming for the Skadi HGT layout.

Maps a coordinate to the 1x1 degree tile that holds it. Pure functions,
no I/O.
"""

import math
from dataclasses import dataclass
from pathlib import Path

from ..constants import ARCHIVE_SUFFIX, DEFAULT_CACHE_DIR, HGT_SUFFIX, MAX_BAND


@dataclass(frozen=True)
class TileIdentity:
    """Identity of a single HGT tile and where it lives in the local cache."""

    lat_prefix: str
    lat_band: int
    lon_prefix: str
    lon_band: int
    cache_path: Path

    @property
    def name(self) -> str:
        """Tile name without extension, e.g. N47E005."""
        return f"{self.lat_prefix}{self.lat_band:02d}{self.lon_prefix}{self.lon_band:03d}"

    @property
    def file_name(self) -> str:
        return f"{self.name}{HGT_SUFFIX}"

    @property
    def folder_name(self) -> str:
        # Skadi folders are not zero-padded: N5, not N05
        return f"{self.lat_prefix}{self.lat_band}"

    def archive_url(self, base_url: str) -> str:
        """URL of the gzip archive for this tile under a Skadi base URL."""
        return f"{base_url.rstrip('/')}/{self.folder_name}/{self.file_name}{ARCHIVE_SUFFIX}"


def _band(value: float) -> int:
    """floor(abs(value)), saturating at MAX_BAND; NaN maps to 0."""
    magnitude = abs(value)
    if math.isnan(magnitude):
        return 0
    if magnitude >= MAX_BAND:
        return MAX_BAND
    return int(math.floor(magnitude))


def locate(
    lat: float,
    lon: float,
    cache_dir: str | Path = DEFAULT_CACHE_DIR,
) -> TileIdentity:
    """
    Find the tile holding a coordinate.

    Bands are floor(abs(value)) with a hemisphere prefix taken from the sign,
    so -0.5 falls in S0 and 46.0 falls in N46. Ranges are not validated:
    NaN lands in band 0 and infinities saturate at MAX_BAND.

    Args:
        lat: Latitude in degrees
        lon: Longitude in degrees
        cache_dir: Root of the local tile cache

    Returns:
        TileIdentity with its cache path under cache_dir
    """
    lat_prefix = "N" if lat >= 0 else "S"
    lon_prefix = "E" if lon >= 0 else "W"
    lat_band = _band(lat)
    lon_band = _band(lon)

    folder = f"{lat_prefix}{lat_band}"
    file_name = f"{lat_prefix}{lat_band:02d}{lon_prefix}{lon_band:03d}{HGT_SUFFIX}"

    return TileIdentity(
        lat_prefix=lat_prefix,
        lat_band=lat_band,
        lon_prefix=lon_prefix,
        lon_band=lon_band,
        cache_path=Path(cache_dir) / folder / file_name,
    )
