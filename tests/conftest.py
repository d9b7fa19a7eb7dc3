"""Shared test fixtures for chuk-mcp-hgt."""

import gzip
import os
from pathlib import Path
from unittest.mock import MagicMock

import numpy as np
import pytest

from chuk_mcp_hgt.constants import EnvVar

SRTM3_SIZE = 1201


def write_tile(path: Path, grid: np.ndarray) -> Path:
    """Write a grid as a raw big-endian int16 HGT file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    grid.astype(">i2").tofile(path)
    return path


def make_response(body: bytes = b"", status_code: int = 200, chunk_size: int = 4096):
    """Mock of a streamed requests.Response."""
    response = MagicMock(name="response")
    response.status_code = status_code
    response.iter_content = MagicMock(
        side_effect=lambda chunk_size=chunk_size: iter(
            [body[i : i + chunk_size] for i in range(0, len(body), chunk_size)]
        )
    )
    return response


def make_session(*responses):
    """Mock requests.Session whose get() returns the given responses in order."""
    session = MagicMock(name="session")
    session.get = MagicMock(side_effect=list(responses))
    return session


@pytest.fixture
def cache_dir(tmp_path):
    """Empty tile cache root, isolated per test."""
    return tmp_path / "hgt"


@pytest.fixture
def srtm3_grid():
    """1201x1201 SRTM3 grid with a distinct value at each corner."""
    grid = np.zeros((SRTM3_SIZE, SRTM3_SIZE), dtype=np.int16)
    grid[0, 0] = 1000  # north-west
    grid[0, -1] = 1001  # north-east
    grid[-1, 0] = 1002  # south-west
    grid[-1, -1] = 1003  # south-east
    return grid


@pytest.fixture
def srtm3_gz(srtm3_grid):
    """The SRTM3 grid as a gzip archive, as served by the Skadi bucket."""
    return gzip.compress(srtm3_grid.astype(">i2").tobytes())


@pytest.fixture
def network_enabled():
    if not os.environ.get(EnvVar.NETWORK_TESTS):
        pytest.skip("set HGT_NETWORK_TESTS=1 to run live download tests")
