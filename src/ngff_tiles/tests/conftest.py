from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from ngff_tiles.tests._helpers.zarr_fixtures import write_test_zarr


@pytest.fixture
def write_pyramid(tmp_path: Path) -> Callable[..., Path]:
    def _write(**kwargs) -> Path:
        return write_test_zarr(tmp_path / "output.zarr", **kwargs)

    return _write
