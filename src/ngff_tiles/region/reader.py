"""Region read path: resolve, fetch, mirror."""

from __future__ import annotations

import logging
from typing import Optional

from ngff_tiles.data.types import ImageDimensions, PixelData
from ngff_tiles.data.zarr_pixel_buffer import ZarrPixelBuffer

from .mirror import mirror_pixel_data
from .region_def import RegionDef, RegionRequestContext
from .resolver import resolve_region_def

logger = logging.getLogger(__name__)


def region_def_for(
    buffer: ZarrPixelBuffer,
    ctx: RegionRequestContext,
    dims: ImageDimensions,
) -> RegionDef:
    """Select the request's resolution level on ``buffer`` and resolve its rectangle.

    The full-resolution level is sized by the nominal ``dims``; downsampled
    levels use their own stored extents.
    """

    top = buffer.get_resolution_levels() - 1
    level = int(ctx.tile.resolution) if ctx.tile is not None else top
    buffer.set_resolution_level(level)

    if level == top:
        size_x, size_y = dims.size_x, dims.size_y
    else:
        size_x, size_y = buffer.get_size_x(), buffer.get_size_y()
    tile_width, tile_height = buffer.get_tile_size()
    return resolve_region_def(ctx, size_x, size_y, tile_width, tile_height)


def read_region(
    buffer: ZarrPixelBuffer,
    ctx: RegionRequestContext,
    dims: ImageDimensions,
    c: int = 0,
) -> Optional[PixelData]:
    """Return the pixels for ``ctx`` in channel ``c``, or ``None`` if oversized."""

    region = region_def_for(buffer, ctx, dims)
    pixel_data = buffer.get_tile(ctx.t, c, ctx.z, region.y, region.x, region.width, region.height)
    if pixel_data is None:
        logger.debug("read_region: %s rejected by tile size policy", region)
        return None
    if ctx.mirror_x or ctx.mirror_y:
        pixel_data = mirror_pixel_data(pixel_data, ctx.mirror_x, ctx.mirror_y)
    return pixel_data


__all__ = ["read_region", "region_def_for"]
