"""Region resolution and mirroring for tile requests."""

from __future__ import annotations

from .mirror import mirror, mirror_pixel_data
from .reader import read_region, region_def_for
from .region_def import RegionDef, RegionRequestContext, TileIndex
from .resolver import resolve_region_def

__all__ = [
    "RegionDef",
    "RegionRequestContext",
    "TileIndex",
    "mirror",
    "mirror_pixel_data",
    "read_region",
    "region_def_for",
    "resolve_region_def",
]
