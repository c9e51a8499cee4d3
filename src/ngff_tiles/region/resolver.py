"""Resolve a region request into the pixel rectangle to fetch.

Clipping to the image bounds always happens before mirroring, so a partial
edge tile mirrors onto the matching partial rectangle at the opposite edge
instead of a full-size rectangle that would overrun the image.
"""

from __future__ import annotations

from .region_def import RegionDef, RegionRequestContext


def raw_region_def(
    ctx: RegionRequestContext,
    size_x: int,
    size_y: int,
    tile_width: int,
    tile_height: int,
) -> RegionDef:
    """Return the requested rectangle before clipping or mirroring."""

    if ctx.tile is not None:
        width = int(ctx.tile.width) or int(tile_width)
        height = int(ctx.tile.height) or int(tile_height)
        return RegionDef(int(ctx.tile.x) * width, int(ctx.tile.y) * height, width, height)
    if ctx.region is not None:
        return ctx.region
    return RegionDef(0, 0, int(size_x), int(size_y))


def truncate_region_def(region: RegionDef, size_x: int, size_y: int) -> RegionDef:
    """Shrink ``region`` so it does not extend past ``size_x``/``size_y``."""

    return RegionDef(
        region.x,
        region.y,
        min(region.width, int(size_x) - region.x),
        min(region.height, int(size_y) - region.y),
    )


def flip_region_def(
    region: RegionDef,
    size_x: int,
    size_y: int,
    mirror_x: bool,
    mirror_y: bool,
) -> RegionDef:
    x = int(size_x) - region.x - region.width if mirror_x else region.x
    y = int(size_y) - region.y - region.height if mirror_y else region.y
    return RegionDef(x, y, region.width, region.height)


def resolve_region_def(
    ctx: RegionRequestContext,
    size_x: int,
    size_y: int,
    tile_width: int,
    tile_height: int,
) -> RegionDef:
    """Return the clipped, mirrored rectangle for ``ctx``.

    ``size_x``/``size_y`` are the image extents the request addresses and
    ``tile_width``/``tile_height`` the storage's native tile size.
    """

    region = raw_region_def(ctx, size_x, size_y, tile_width, tile_height)
    region = truncate_region_def(region, size_x, size_y)
    return flip_region_def(region, size_x, size_y, ctx.mirror_x, ctx.mirror_y)


__all__ = [
    "flip_region_def",
    "raw_region_def",
    "resolve_region_def",
    "truncate_region_def",
]
