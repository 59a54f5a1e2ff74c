"""Shared fixtures for shapefile reader tests."""

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from shp_builder import shapefile


@pytest.fixture
def write_shp(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a synthetic .shp file and returning its path."""

    def _write(
        shape_type: int, bodies: Sequence[bytes], name: str = "test.shp"
    ) -> Path:
        path = tmp_path / name
        path.write_bytes(shapefile(shape_type, bodies))
        return path

    return _write
