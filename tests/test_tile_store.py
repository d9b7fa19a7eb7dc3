"""
Tests for TileStore — cache hits, download pipeline, and failure cleanup.

Tests cover:
- Cache hit skips the network
- Download, gunzip, and atomic placement on a miss
- Network, HTTP status, gzip, and filesystem failures
- No partial tile or temp file left behind after a failure
"""

import asyncio
import logging
import stat
from pathlib import Path
from unittest.mock import patch

import numpy as np
import pytest
import requests

from chuk_mcp_hgt.constants import (
    DEFAULT_CACHE_DIR,
    DEFAULT_FETCH_TIMEOUT,
    SKADI_BASE_URL,
    TILE_FILE_MODE,
)
from chuk_mcp_hgt.core.tile_locator import locate
from chuk_mcp_hgt.core.tile_store import TileStore
from chuk_mcp_hgt.errors import DecodeError, NetworkError, TileIOError
from conftest import make_response, make_session, write_tile


def folder_contents(identity) -> list[str]:
    folder = identity.cache_path.parent
    if not folder.exists():
        return []
    return sorted(p.name for p in folder.iterdir())


class TestInit:
    def test_defaults(self):
        store = TileStore()
        assert store.cache_dir == Path(DEFAULT_CACHE_DIR)
        assert store.base_url == SKADI_BASE_URL
        assert store.timeout == DEFAULT_FETCH_TIMEOUT
        assert isinstance(store._session, requests.Session)

    def test_custom_session(self, cache_dir):
        session = make_session()
        store = TileStore(cache_dir=cache_dir, session=session)
        assert store._session is session


class TestCacheHit:
    @pytest.mark.asyncio
    async def test_existing_file_returned_without_fetch(self, cache_dir, srtm3_grid):
        identity = locate(46.5, 6.5, cache_dir)
        write_tile(identity.cache_path, srtm3_grid)
        session = make_session()
        store = TileStore(cache_dir=cache_dir, session=session)

        path = await store.ensure(identity)

        assert path == identity.cache_path
        session.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_existing_file_not_validated(self, cache_dir):
        identity = locate(46.5, 6.5, cache_dir)
        identity.cache_path.parent.mkdir(parents=True)
        identity.cache_path.write_bytes(b"junk")
        store = TileStore(cache_dir=cache_dir, session=make_session())

        assert await store.ensure(identity) == identity.cache_path
        assert identity.cache_path.read_bytes() == b"junk"

    def test_is_cached(self, cache_dir, srtm3_grid):
        identity = locate(46.5, 6.5, cache_dir)
        store = TileStore(cache_dir=cache_dir, session=make_session())
        assert store.is_cached(identity) is False
        write_tile(identity.cache_path, srtm3_grid)
        assert store.is_cached(identity) is True


class TestDownload:
    @pytest.mark.asyncio
    async def test_fetches_and_decompresses(self, cache_dir, srtm3_grid, srtm3_gz):
        identity = locate(47.0592, 5.7181, cache_dir)
        session = make_session(make_response(srtm3_gz))
        store = TileStore(cache_dir=cache_dir, session=session, timeout=5.0)

        path = await store.ensure(identity)

        assert path == cache_dir / "N47" / "N47E005.hgt"
        data = np.fromfile(path, dtype=">i2").reshape(1201, 1201)
        np.testing.assert_array_equal(data, srtm3_grid)
        session.get.assert_called_once_with(
            "https://elevation-tiles-prod.s3.amazonaws.com/skadi/N47/N47E005.hgt.gz",
            stream=True,
            timeout=5.0,
        )

    @pytest.mark.asyncio
    async def test_custom_base_url(self, cache_dir, srtm3_gz):
        identity = locate(-0.5, -0.5, cache_dir)
        session = make_session(make_response(srtm3_gz))
        store = TileStore(cache_dir=cache_dir, base_url="http://mirror.local/skadi", session=session)

        await store.ensure(identity)

        url = session.get.call_args[0][0]
        assert url == "http://mirror.local/skadi/S0/S00W000.hgt.gz"

    @pytest.mark.asyncio
    async def test_no_temp_files_left(self, cache_dir, srtm3_gz):
        identity = locate(47.5, 5.5, cache_dir)
        store = TileStore(cache_dir=cache_dir, session=make_session(make_response(srtm3_gz)))

        await store.ensure(identity)

        assert folder_contents(identity) == ["N47E005.hgt"]

    @pytest.mark.asyncio
    async def test_cached_tile_is_readable_by_others(self, cache_dir, srtm3_gz):
        identity = locate(47.5, 5.5, cache_dir)
        store = TileStore(cache_dir=cache_dir, session=make_session(make_response(srtm3_gz)))

        path = await store.ensure(identity)

        assert stat.S_IMODE(path.stat().st_mode) == TILE_FILE_MODE == 0o644

    @pytest.mark.asyncio
    async def test_response_closed(self, cache_dir, srtm3_gz):
        identity = locate(47.5, 5.5, cache_dir)
        response = make_response(srtm3_gz)
        store = TileStore(cache_dir=cache_dir, session=make_session(response))

        await store.ensure(identity)

        response.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_second_ensure_uses_cache(self, cache_dir, srtm3_gz):
        identity = locate(47.5, 5.5, cache_dir)
        session = make_session(make_response(srtm3_gz))
        store = TileStore(cache_dir=cache_dir, session=session)

        await store.ensure(identity)
        await store.ensure(locate(47.1, 5.9, cache_dir))

        assert session.get.call_count == 1

    @pytest.mark.asyncio
    async def test_concurrent_same_tile_is_benign(self, cache_dir, srtm3_grid, srtm3_gz):
        identity = locate(47.5, 5.5, cache_dir)
        session = make_session(make_response(srtm3_gz), make_response(srtm3_gz))
        store = TileStore(cache_dir=cache_dir, session=session)

        paths = await asyncio.gather(store.ensure(identity), store.ensure(identity))

        assert paths[0] == paths[1] == identity.cache_path
        data = np.fromfile(identity.cache_path, dtype=">i2").reshape(1201, 1201)
        np.testing.assert_array_equal(data, srtm3_grid)
        assert folder_contents(identity) == ["N47E005.hgt"]

    @pytest.mark.asyncio
    async def test_temp_cleanup_failure_is_logged(self, cache_dir, srtm3_gz, caplog):
        identity = locate(47.5, 5.5, cache_dir)
        store = TileStore(cache_dir=cache_dir, session=make_session(make_response(srtm3_gz)))

        with patch.object(Path, "unlink", side_effect=OSError("busy")):
            with caplog.at_level(logging.WARNING):
                path = await store.ensure(identity)

        assert path.stat().st_size == 1201 * 1201 * 2
        assert "Failed to remove temp file" in caplog.text


class TestNetworkFailures:
    @pytest.mark.asyncio
    async def test_http_status(self, cache_dir):
        identity = locate(47.5, 5.5, cache_dir)
        response = make_response(b"", status_code=404)
        store = TileStore(cache_dir=cache_dir, session=make_session(response))

        with pytest.raises(NetworkError) as exc_info:
            await store.ensure(identity)

        assert exc_info.value.status_code == 404
        assert exc_info.value.url.endswith("N47/N47E005.hgt.gz")
        assert not identity.cache_path.exists()
        response.close.assert_called_once()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "exc",
        [requests.ConnectionError("refused"), requests.Timeout("timed out")],
    )
    async def test_transport_error(self, cache_dir, exc):
        identity = locate(47.5, 5.5, cache_dir)
        store = TileStore(cache_dir=cache_dir, session=make_session(exc))

        with pytest.raises(NetworkError) as exc_info:
            await store.ensure(identity)

        assert exc_info.value.status_code is None
        assert not identity.cache_path.exists()

    @pytest.mark.asyncio
    async def test_stream_interrupted(self, cache_dir):
        identity = locate(47.5, 5.5, cache_dir)
        response = make_response()
        response.iter_content.side_effect = requests.exceptions.ChunkedEncodingError("reset")
        store = TileStore(cache_dir=cache_dir, session=make_session(response))

        with pytest.raises(NetworkError, match="reset"):
            await store.ensure(identity)

        assert folder_contents(identity) == []

    @pytest.mark.asyncio
    async def test_failure_is_not_retried(self, cache_dir):
        identity = locate(47.5, 5.5, cache_dir)
        session = make_session(make_response(status_code=503))
        store = TileStore(cache_dir=cache_dir, session=session)

        with pytest.raises(NetworkError):
            await store.ensure(identity)

        assert session.get.call_count == 1


class TestDecodeFailures:
    @pytest.mark.asyncio
    async def test_not_gzip(self, cache_dir):
        identity = locate(47.5, 5.5, cache_dir)
        store = TileStore(cache_dir=cache_dir, session=make_session(make_response(b"<html>")))

        with pytest.raises(DecodeError):
            await store.ensure(identity)

        assert folder_contents(identity) == []

    @pytest.mark.asyncio
    async def test_truncated_gzip_leaves_no_tile(self, cache_dir, srtm3_gz):
        identity = locate(47.5, 5.5, cache_dir)
        body = srtm3_gz[: len(srtm3_gz) // 2]
        store = TileStore(cache_dir=cache_dir, session=make_session(make_response(body)))

        with pytest.raises(DecodeError):
            await store.ensure(identity)

        assert not identity.cache_path.exists()
        assert folder_contents(identity) == []

    @pytest.mark.asyncio
    async def test_retry_after_failure_succeeds(self, cache_dir, srtm3_gz):
        identity = locate(47.5, 5.5, cache_dir)
        session = make_session(make_response(b"garbage"), make_response(srtm3_gz))
        store = TileStore(cache_dir=cache_dir, session=session)

        with pytest.raises(DecodeError):
            await store.ensure(identity)
        path = await store.ensure(identity)

        assert path.stat().st_size == 1201 * 1201 * 2


class TestFilesystemFailures:
    @pytest.mark.asyncio
    async def test_mkdir_failure(self, cache_dir, srtm3_gz):
        identity = locate(47.5, 5.5, cache_dir)
        response = make_response(srtm3_gz)
        store = TileStore(cache_dir=cache_dir, session=make_session(response))

        with patch.object(Path, "mkdir", side_effect=PermissionError("read-only")):
            with pytest.raises(TileIOError, match="read-only"):
                await store.ensure(identity)

        response.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_rename_failure_leaves_no_tile(self, cache_dir, srtm3_gz):
        identity = locate(47.5, 5.5, cache_dir)
        store = TileStore(cache_dir=cache_dir, session=make_session(make_response(srtm3_gz)))

        with patch("chuk_mcp_hgt.core.tile_store.os.replace", side_effect=OSError("cross-device")):
            with pytest.raises(TileIOError, match="cross-device"):
                await store.ensure(identity)

        assert folder_contents(identity) == []


class TestCacheStats:
    def test_empty(self, cache_dir):
        store = TileStore(cache_dir=cache_dir, session=make_session())
        assert store.cache_stats() == {"tiles": 0, "total_bytes": 0}

    def test_counts_tiles_only(self, cache_dir, srtm3_grid):
        write_tile(locate(46.5, 6.5, cache_dir).cache_path, srtm3_grid)
        write_tile(locate(-12.5, 130.5, cache_dir).cache_path, srtm3_grid)
        (cache_dir / "N46" / "N46E006.abc.gz.part").write_bytes(b"x")
        store = TileStore(cache_dir=cache_dir, session=make_session())

        stats = store.cache_stats()

        assert stats["tiles"] == 2
        assert stats["total_bytes"] == 2 * 1201 * 1201 * 2
