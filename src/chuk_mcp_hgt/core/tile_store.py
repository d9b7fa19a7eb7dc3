"""
Tile store — keeps decompressed HGT tiles in a local cache directory.

On a cache miss the gzip archive is streamed from the Skadi bucket into a
temp file, gunzipped into a second temp file, set to mode 0644, and
renamed onto the cache path only once complete. A file at the cache path is
therefore always a whole tile. The blocking download runs in asyncio.to_thread().
"""

import asyncio
import gzip
import logging
import os
import shutil
import tempfile
import zlib
from pathlib import Path
from typing import Any

import requests

from ..constants import (
    DEFAULT_CACHE_DIR,
    DEFAULT_FETCH_TIMEOUT,
    DOWNLOAD_CHUNK_SIZE,
    HGT_SUFFIX,
    SKADI_BASE_URL,
    TILE_FILE_MODE,
    ErrorMessages,
)
from ..errors import DecodeError, NetworkError, TileIOError
from .tile_locator import TileIdentity

logger = logging.getLogger(__name__)


class TileStore:
    """Local cache of HGT tiles backed by the remote Skadi archive."""

    def __init__(
        self,
        cache_dir: str | Path = DEFAULT_CACHE_DIR,
        base_url: str = SKADI_BASE_URL,
        timeout: float = DEFAULT_FETCH_TIMEOUT,
        session: Any | None = None,
    ) -> None:
        self.cache_dir = Path(cache_dir)
        self.base_url = base_url
        self.timeout = timeout
        self._session = session or requests.Session()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def is_cached(self, identity: TileIdentity) -> bool:
        return identity.cache_path.is_file()

    async def ensure(self, identity: TileIdentity) -> Path:
        """
        Make sure the tile is on disk and return its path.

        An existing file is trusted as-is. Otherwise the archive is fetched
        and decompressed; there is no retry.

        Raises:
            NetworkError: transport failure, timeout, or non-2xx status
            TileIOError: the cache folder or tile file cannot be written
            DecodeError: the archive is not valid gzip
        """
        if self.is_cached(identity):
            return identity.cache_path

        await asyncio.to_thread(self._download, identity)
        return identity.cache_path

    def cache_stats(self) -> dict:
        """Count and total size of tiles currently in the cache."""
        tiles = 0
        total_bytes = 0
        if self.cache_dir.is_dir():
            for path in self.cache_dir.glob(f"*/*{HGT_SUFFIX}"):
                tiles += 1
                total_bytes += path.stat().st_size
        return {"tiles": tiles, "total_bytes": total_bytes}

    # ------------------------------------------------------------------
    # Download pipeline (sync, runs in a worker thread)
    # ------------------------------------------------------------------

    def _download(self, identity: TileIdentity) -> None:
        url = identity.archive_url(self.base_url)
        folder = identity.cache_path.parent
        logger.info(f"Fetching tile {identity.name} from {url}")

        response = self._open_response(identity, url)
        try:
            try:
                folder.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise TileIOError(ErrorMessages.CACHE_DIR_ERROR.format(folder, e)) from e

            archive_path = self._temp_path(folder, f"{identity.name}.", ".gz.part")
            try:
                self._write_archive(identity, url, response, archive_path)
                self._extract(identity, archive_path)
            finally:
                self._remove_quietly(archive_path)
        finally:
            response.close()

        logger.info(f"Cached tile {identity.name} at {identity.cache_path}")

    def _open_response(self, identity: TileIdentity, url: str) -> Any:
        try:
            response = self._session.get(url, stream=True, timeout=self.timeout)
        except requests.RequestException as e:
            raise NetworkError(ErrorMessages.NETWORK_ERROR.format(identity.name, url, e), url) from e

        if not 200 <= response.status_code < 300:
            response.close()
            raise NetworkError(
                ErrorMessages.HTTP_STATUS.format(identity.name, url, response.status_code),
                url,
                status_code=response.status_code,
            )
        return response

    def _write_archive(
        self, identity: TileIdentity, url: str, response: Any, archive_path: Path
    ) -> None:
        try:
            with open(archive_path, "wb") as f:
                for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
        except requests.RequestException as e:
            raise NetworkError(ErrorMessages.NETWORK_ERROR.format(identity.name, url, e), url) from e
        except OSError as e:
            raise TileIOError(ErrorMessages.WRITE_ERROR.format(identity.name, archive_path, e)) from e

    def _extract(self, identity: TileIdentity, archive_path: Path) -> None:
        target = identity.cache_path
        partial = self._temp_path(target.parent, f"{identity.name}.", ".hgt.part")
        try:
            try:
                with gzip.open(archive_path, "rb") as src, open(partial, "wb") as dst:
                    shutil.copyfileobj(src, dst, DOWNLOAD_CHUNK_SIZE)
            except (gzip.BadGzipFile, EOFError, zlib.error) as e:
                raise DecodeError(ErrorMessages.DECODE_ERROR.format(identity.name, e)) from e
            except OSError as e:
                raise TileIOError(ErrorMessages.WRITE_ERROR.format(identity.name, partial, e)) from e

            try:
                os.chmod(partial, TILE_FILE_MODE)
                os.replace(partial, target)
            except OSError as e:
                raise TileIOError(ErrorMessages.WRITE_ERROR.format(identity.name, target, e)) from e
        except Exception:
            self._remove_quietly(partial)
            raise

    @staticmethod
    def _temp_path(folder: Path, prefix: str, suffix: str) -> Path:
        """Create an empty temp file unique to this fetch."""
        try:
            fd, name = tempfile.mkstemp(prefix=prefix, suffix=suffix, dir=folder)
        except OSError as e:
            raise TileIOError(ErrorMessages.CACHE_DIR_ERROR.format(folder, e)) from e
        os.close(fd)
        return Path(name)

    @staticmethod
    def _remove_quietly(path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Failed to remove temp file {path}: {e}")
