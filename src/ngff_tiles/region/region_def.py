"""Request-side value types for region resolution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, Optional

from ngff_tiles.data.errors import InvalidArgumentError


@dataclass(frozen=True)
class RegionDef:
    """Pixel rectangle ``(x, y, width, height)`` in level coordinates."""

    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class TileIndex:
    """Tile grid position at ``resolution``.

    ``width``/``height`` of 0 mean "use the storage's native tile size".
    """

    resolution: int
    x: int
    y: int
    width: int = 0
    height: int = 0


@dataclass(frozen=True)
class RegionRequestContext:
    """One incoming region request: a tile index, a region, or neither."""

    tile: Optional[TileIndex] = None
    region: Optional[RegionDef] = None
    mirror_x: bool = False
    mirror_y: bool = False
    z: int = 0
    t: int = 0

    def __post_init__(self) -> None:
        if self.tile is not None and self.region is not None:
            raise InvalidArgumentError("tile and region are mutually exclusive")

    @classmethod
    def from_params(cls, params: Mapping[str, str]) -> "RegionRequestContext":
        """Build a context from request query parameters.

        Recognised keys (case-insensitive): ``theZ``, ``theT`` (required),
        ``tile=res,x,y[,w,h]``, ``region=x,y,w,h`` and ``flip`` (any of
        ``h``/``v``).
        """

        lowered = {str(k).lower(): v for k, v in params.items()}
        z = _required_int(lowered, "thez")
        t = _required_int(lowered, "thet")

        tile: Optional[TileIndex] = None
        raw_tile = lowered.get("tile")
        if raw_tile:
            parts = _int_list("tile", raw_tile)
            if len(parts) not in (3, 5):
                raise InvalidArgumentError(f"tile must be res,x,y[,w,h]: {raw_tile!r}")
            tile = TileIndex(*parts)

        region: Optional[RegionDef] = None
        raw_region = lowered.get("region")
        if raw_region:
            parts = _int_list("region", raw_region)
            if len(parts) != 4:
                raise InvalidArgumentError(f"region must be x,y,w,h: {raw_region!r}")
            region = RegionDef(*parts)

        flip = (lowered.get("flip") or "").lower()
        return cls(
            tile=tile,
            region=region,
            mirror_x="h" in flip,
            mirror_y="v" in flip,
            z=z,
            t=t,
        )


def _required_int(params: Mapping[str, str], key: str) -> int:
    raw = params.get(key)
    if raw is None or str(raw).strip() == "":
        raise InvalidArgumentError(f"Missing required parameter {key}")
    try:
        return int(str(raw).strip())
    except ValueError:
        raise InvalidArgumentError(f"Parameter {key} is not an integer: {raw!r}") from None


def _int_list(key: str, raw: str) -> List[int]:
    try:
        return [int(part.strip()) for part in str(raw).split(",")]
    except ValueError:
        raise InvalidArgumentError(f"Parameter {key} must be comma-separated integers: {raw!r}") from None


__all__ = ["RegionDef", "RegionRequestContext", "TileIndex"]
