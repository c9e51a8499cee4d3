"""Helpers for resolving the multiscale image group inside a Zarr container."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple

from ngff_tiles.config import TileConfig, load_tile_config

from .errors import PyramidOpenError
from .multiscales import read_group_attrs
from .types import ImageDimensions
from .zarr_pixel_buffer import ZarrPixelBuffer

logger = logging.getLogger(__name__)


LAYOUT_KEY = "bioformats2raw.layout"


def is_image_root(path: Path) -> bool:
    """Return True if ``path`` is a group carrying ``multiscales`` metadata."""

    try:
        if not path.is_dir():
            return False
    except OSError:
        return False
    try:
        attrs = read_group_attrs(path)
    except PyramidOpenError:
        return False
    multiscales = attrs.get("multiscales")
    return isinstance(multiscales, list) and bool(multiscales)


def list_series(path: Path) -> Tuple[str, ...]:
    """Return the series group names beneath a ``bioformats2raw`` container."""

    names: list[str] = []
    try:
        children = list(path.iterdir())
    except OSError:
        return ()
    for child in children:
        if child.name.isdigit() and is_image_root(child):
            names.append(child.name)
    return tuple(sorted(names, key=int))


def resolve_image_root(path: str | Path, series: int = 0) -> Path:
    """Return the image group for ``series`` at or beneath ``path``.

    A group that already carries ``multiscales`` is returned unchanged. A
    ``bioformats2raw`` container resolves to its ``<series>`` child group.
    """

    root = Path(path)
    if not root.exists():
        raise PyramidOpenError(f"Zarr root does not exist: {root}")

    attrs = read_group_attrs(root)
    if isinstance(attrs.get("multiscales"), list) and attrs.get("multiscales"):
        return root

    if LAYOUT_KEY in attrs:
        if int(series) < 0:
            raise PyramidOpenError(f"Series index must be >= 0, got {series}")
        candidate = root / str(int(series))
        if not is_image_root(candidate):
            raise PyramidOpenError(
                f"Series {series} not found under {root} (available: {list_series(root)})"
            )
        logger.debug("zarr_discovery: %s layout=%s series=%d", root, attrs[LAYOUT_KEY], int(series))
        return candidate

    raise PyramidOpenError(f"No OME-Zarr image found at {root}")


def open_pixel_buffer(
    path: str | Path,
    dimensions: ImageDimensions,
    config: Optional[TileConfig] = None,
    *,
    series: Optional[int] = None,
) -> ZarrPixelBuffer:
    """Resolve the image group under ``path`` and open a pixel buffer for it."""

    cfg = config if config is not None else load_tile_config()
    image_root = resolve_image_root(path, cfg.series if series is None else int(series))
    return ZarrPixelBuffer(
        dimensions,
        image_root,
        cfg.max_tile_size,
        log_tile_reads=cfg.logging.log_tile_reads,
        log_pyramid_open=cfg.logging.log_pyramid_open,
    )


__all__ = [
    "LAYOUT_KEY",
    "is_image_root",
    "list_series",
    "open_pixel_buffer",
    "resolve_image_root",
]
