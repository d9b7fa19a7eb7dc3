"""
Elevation Manager — central orchestrator for point elevation lookups.

Resolves coordinates to tiles, makes sure tiles are cached locally, and
decodes the nearest sample. All blocking file I/O runs via asyncio.to_thread().
"""

import asyncio
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from ..constants import (
    DEFAULT_CACHE_DIR,
    DEFAULT_FETCH_TIMEOUT,
    SKADI_BASE_URL,
    VOID_VALUE,
    EnvVar,
    ErrorMessages,
)
from ..errors import InvalidResolutionError
from . import hgt_io
from .tile_locator import TileIdentity, locate
from .tile_store import TileStore

logger = logging.getLogger(__name__)


@dataclass
class PointResult:
    """Result of a single-point elevation query."""

    lat: float
    lon: float
    elevation_m: int
    tile: str

    @property
    def is_void(self) -> bool:
        return self.elevation_m == VOID_VALUE


@dataclass
class MultiPointResult:
    """Result of a multi-point elevation query."""

    points: list[PointResult]
    elevation_range: list[int]


@dataclass
class TileInfo:
    """What is known locally about the tile holding a coordinate."""

    name: str
    folder: str
    file_name: str
    cache_path: str
    url: str
    cached: bool
    grid_size: int | None
    format: str | None
    size_bytes: int | None


def _settings_from_env() -> tuple[str, str, float]:
    """Cache dir, base URL and fetch timeout from HGT_* environment variables."""
    cache_dir = os.environ.get(EnvVar.CACHE_DIR, DEFAULT_CACHE_DIR)
    base_url = os.environ.get(EnvVar.BASE_URL, SKADI_BASE_URL)
    raw_timeout = os.environ.get(EnvVar.FETCH_TIMEOUT)

    timeout = DEFAULT_FETCH_TIMEOUT
    if raw_timeout:
        message = ErrorMessages.INVALID_TIMEOUT.format(EnvVar.FETCH_TIMEOUT, raw_timeout)
        try:
            timeout = float(raw_timeout)
        except ValueError as e:
            raise ValueError(message) from e
        if timeout <= 0:
            raise ValueError(message)
    return cache_dir, base_url, timeout


class ElevationManager:
    """Central manager for HGT elevation lookups."""

    def __init__(
        self,
        cache_dir: str | Path = DEFAULT_CACHE_DIR,
        base_url: str = SKADI_BASE_URL,
        timeout: float = DEFAULT_FETCH_TIMEOUT,
        store: TileStore | None = None,
    ) -> None:
        self.store = store or TileStore(cache_dir=cache_dir, base_url=base_url, timeout=timeout)

    @classmethod
    def from_env(cls) -> "ElevationManager":
        """Build a manager from HGT_* environment variables."""
        cache_dir, base_url, timeout = _settings_from_env()
        logger.info(f"Tile cache: {cache_dir} (source: {base_url}, timeout: {timeout}s)")
        return cls(cache_dir=cache_dir, base_url=base_url, timeout=timeout)

    @property
    def cache_dir(self) -> Path:
        return self.store.cache_dir

    # ------------------------------------------------------------------
    # Lookups (async)
    # ------------------------------------------------------------------

    def locate(self, lat: float, lon: float) -> TileIdentity:
        return locate(lat, lon, self.cache_dir)

    async def resolve(self, lat: float, lon: float) -> int:
        """
        Elevation in metres at a coordinate, from the nearest grid sample.

        Raises:
            NetworkError, TileIOError, DecodeError, InvalidResolutionError
        """
        identity = self.locate(lat, lon)
        path = await self.store.ensure(identity)
        return await asyncio.to_thread(hgt_io.read_elevation, path, lat, lon)

    async def fetch_point(self, lat: float, lon: float) -> PointResult:
        """Get elevation at a single point."""
        elevation = await self.resolve(lat, lon)
        return PointResult(
            lat=lat,
            lon=lon,
            elevation_m=elevation,
            tile=self.locate(lat, lon).name,
        )

    async def fetch_points(self, points: list[list[float]]) -> MultiPointResult:
        """Get elevations at multiple [lat, lon] points, resolved concurrently."""
        if not points:
            raise ValueError(ErrorMessages.EMPTY_POINTS)
        for p in points:
            if len(p) != 2:
                raise ValueError(ErrorMessages.INVALID_POINT.format(p))

        results = await asyncio.gather(*(self.fetch_point(lat, lon) for lat, lon in points))

        valid = [r.elevation_m for r in results if not r.is_void]
        if valid:
            elevation_range = [min(valid), max(valid)]
        else:
            elevation_range = [VOID_VALUE, VOID_VALUE]

        return MultiPointResult(points=list(results), elevation_range=elevation_range)

    # ------------------------------------------------------------------
    # Discovery (no network)
    # ------------------------------------------------------------------

    def describe_tile(self, lat: float, lon: float) -> TileInfo:
        """Describe the tile for a coordinate without fetching it."""
        identity = self.locate(lat, lon)
        cached = self.store.is_cached(identity)

        grid_size = None
        fmt = None
        size_bytes = None
        if cached:
            size_bytes = identity.cache_path.stat().st_size
            try:
                grid_size = hgt_io.grid_size_for(size_bytes, identity.file_name)
                fmt = hgt_io.format_for_grid_size(grid_size)
            except InvalidResolutionError as e:
                logger.warning(f"Cached tile has unknown layout: {e}")

        return TileInfo(
            name=identity.name,
            folder=identity.folder_name,
            file_name=identity.file_name,
            cache_path=str(identity.cache_path),
            url=identity.archive_url(self.store.base_url),
            cached=cached,
            grid_size=grid_size,
            format=fmt,
            size_bytes=size_bytes,
        )

    def cache_stats(self) -> dict:
        return self.store.cache_stats()


_default_managers: dict[tuple[str, str, float], ElevationManager] = {}


def default_manager(cache_dir: str | Path | None = None) -> ElevationManager:
    """
    Shared manager for a cache root, built once per settings.

    Base URL and timeout come from the environment; cache_dir overrides
    HGT_CACHE_DIR. Repeated calls reuse the same TileStore and HTTP session.
    """
    env_cache_dir, base_url, timeout = _settings_from_env()
    key = (str(cache_dir if cache_dir is not None else env_cache_dir), base_url, timeout)
    manager = _default_managers.get(key)
    if manager is None:
        logger.info(f"Tile cache: {key[0]} (source: {base_url}, timeout: {timeout}s)")
        manager = ElevationManager(cache_dir=key[0], base_url=base_url, timeout=timeout)
        _default_managers[key] = manager
    return manager


async def get_elevation(
    latitude: float,
    longitude: float,
    cache_dir: str | Path | None = None,
) -> int:
    """
    Ground elevation in whole metres at a coordinate.

    Tiles are cached under cache_dir (default: HGT_CACHE_DIR or /tmp/hgt)
    and fetched from the Skadi archive on first use.
    """
    return await default_manager(cache_dir).resolve(latitude, longitude)
