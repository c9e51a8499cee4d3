from __future__ import annotations

import pytest

from ngff_tiles.data.errors import InvalidArgumentError
from ngff_tiles.region.region_def import RegionDef, RegionRequestContext, TileIndex
from ngff_tiles.region.resolver import resolve_region_def


def _resolve(ctx: RegionRequestContext, size: int, tile: int) -> RegionDef:
    return resolve_region_def(ctx, size, size, tile, tile)


def test_region_def_from_tile() -> None:
    ctx = RegionRequestContext(tile=TileIndex(resolution=0, x=2, y=2))
    assert _resolve(ctx, 1024, 256) == RegionDef(512, 512, 256, 256)


def test_region_def_from_tile_with_explicit_size() -> None:
    ctx = RegionRequestContext(tile=TileIndex(resolution=0, x=1, y=0, width=100, height=50))
    assert _resolve(ctx, 1024, 256) == RegionDef(100, 0, 100, 50)


def test_region_def_from_region() -> None:
    region = RegionDef(512, 512, 256, 256)
    ctx = RegionRequestContext(region=region)
    assert _resolve(ctx, 1024, 256) == region


def test_region_def_without_tile_or_region() -> None:
    assert _resolve(RegionRequestContext(), 1024, 256) == RegionDef(0, 0, 1024, 1024)


@pytest.mark.parametrize(
    ("mirror_x", "mirror_y", "expected"),
    [
        (True, False, RegionDef(624, 200, 300, 400)),
        (False, True, RegionDef(100, 424, 300, 400)),
        (True, True, RegionDef(624, 424, 300, 400)),
    ],
)
def test_mirror_region_def(mirror_x: bool, mirror_y: bool, expected: RegionDef) -> None:
    ctx = RegionRequestContext(region=RegionDef(100, 200, 300, 400), mirror_x=mirror_x, mirror_y=mirror_y)
    assert _resolve(ctx, 1024, 256) == expected


# 768x768 image on a 512 tile grid: tiles in the last row/column are partial.
EDGE_REGIONS = {
    "0,0": RegionDef(0, 0, 512, 512),
    "1,0": RegionDef(512, 0, 512, 512),
    "0,1": RegionDef(0, 512, 512, 512),
    "1,1": RegionDef(512, 512, 512, 512),
}


@pytest.mark.parametrize(
    ("mirror_x", "mirror_y", "expected"),
    [
        (
            True,
            False,
            {
                "0,0": RegionDef(256, 0, 512, 512),
                "1,0": RegionDef(0, 0, 256, 512),
                "0,1": RegionDef(256, 512, 512, 256),
                "1,1": RegionDef(0, 512, 256, 256),
            },
        ),
        (
            False,
            True,
            {
                "0,0": RegionDef(0, 256, 512, 512),
                "1,0": RegionDef(512, 256, 256, 512),
                "0,1": RegionDef(0, 0, 512, 256),
                "1,1": RegionDef(512, 0, 256, 256),
            },
        ),
        (
            True,
            True,
            {
                "0,0": RegionDef(256, 256, 512, 512),
                "1,0": RegionDef(0, 256, 256, 512),
                "0,1": RegionDef(256, 0, 512, 256),
                "1,1": RegionDef(0, 0, 256, 256),
            },
        ),
    ],
)
def test_mirror_region_def_at_edges(mirror_x: bool, mirror_y: bool, expected: dict) -> None:
    for key, region in EDGE_REGIONS.items():
        ctx = RegionRequestContext(region=region, mirror_x=mirror_x, mirror_y=mirror_y)
        assert _resolve(ctx, 768, 512) == expected[key], key


def test_mirror_x_oversized_region_clips_to_whole_image() -> None:
    ctx = RegionRequestContext(region=RegionDef(0, 0, 1024, 1024), mirror_x=True)
    assert _resolve(ctx, 768, 512) == RegionDef(0, 0, 768, 768)


def test_edge_tile_index_clips_then_mirrors() -> None:
    ctx = RegionRequestContext(tile=TileIndex(resolution=0, x=1, y=1), mirror_x=True, mirror_y=True)
    assert _resolve(ctx, 768, 512) == RegionDef(0, 0, 256, 256)


def test_tile_and_region_are_exclusive() -> None:
    with pytest.raises(InvalidArgumentError):
        RegionRequestContext(tile=TileIndex(0, 0, 0), region=RegionDef(0, 0, 1, 1))


def test_context_from_params() -> None:
    ctx = RegionRequestContext.from_params(
        {"imageId": "1", "theZ": "2", "theT": "3", "tile": "1,4,5", "flip": "HV"}
    )
    assert ctx.tile == TileIndex(resolution=1, x=4, y=5)
    assert ctx.region is None
    assert (ctx.z, ctx.t) == (2, 3)
    assert ctx.mirror_x is True
    assert ctx.mirror_y is True


def test_context_from_params_region_and_tile_size() -> None:
    ctx = RegionRequestContext.from_params({"thez": "0", "thet": "0", "region": "1,2,3,4", "flip": "v"})
    assert ctx.region == RegionDef(1, 2, 3, 4)
    assert (ctx.mirror_x, ctx.mirror_y) == (False, True)

    ctx = RegionRequestContext.from_params({"theZ": "0", "theT": "0", "tile": "0,1,1,256,128"})
    assert ctx.tile == TileIndex(0, 1, 1, 256, 128)
    assert (ctx.mirror_x, ctx.mirror_y) == (False, False)


@pytest.mark.parametrize(
    "params",
    [
        {"theT": "0"},
        {"theZ": "a", "theT": "0"},
        {"theZ": "0", "theT": "0", "tile": "1,2"},
        {"theZ": "0", "theT": "0", "region": "1,2,3"},
        {"theZ": "0", "theT": "0", "region": "1,x,3,4"},
        {"theZ": "0", "theT": "0", "tile": "0,0,0", "region": "0,0,1,1"},
    ],
)
def test_context_from_params_rejects_malformed(params: dict) -> None:
    with pytest.raises(InvalidArgumentError):
        RegionRequestContext.from_params(params)
