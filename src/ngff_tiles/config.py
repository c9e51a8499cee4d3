"""Typed configuration for ngff-tiles.

All environment parsing happens here so the pixel buffer and region helpers
depend on a structured, immutable config instead of scattered ``os.getenv``
calls. Unparseable values fall back to their defaults.

Environment variables:
    NGFF_TILES_MAX_TILE_SIZE: largest tile (width * height) served (default 2048*2048)
    NGFF_TILES_SERIES: series opened inside a bioformats2raw container (default 0)
    NGFF_TILES_LOG_LEVEL: level used by :func:`configure_logging` (default INFO)
    NGFF_TILES_LOG_TILE_READS: log every tile read at DEBUG (default off)
    NGFF_TILES_LOG_PYRAMID_OPEN: log pyramid open summaries at INFO (default on)
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import os
from typing import Mapping, Optional


logger = logging.getLogger(__name__)


DEFAULT_MAX_TILE_SIZE = 2048 * 2048

ENV_PREFIX = "NGFF_TILES_"
_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off"})


# ---- Helpers -----------------------------------------------------------------

def _raw(env: Mapping[str, str], key: str) -> Optional[str]:
    """Stripped value of ``NGFF_TILES_<key>``; unset and blank both read as None."""

    value = env.get(ENV_PREFIX + key)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _flag(env: Mapping[str, str], key: str, default: bool) -> bool:
    value = _raw(env, key)
    if value is None:
        return default
    if value.lower() in _TRUE:
        return True
    if value.lower() in _FALSE:
        return False
    logger.warning("Invalid boolean %s%s=%r, using %s", ENV_PREFIX, key, value, default)
    return default


def _count(env: Mapping[str, str], key: str, default: int, minimum: int) -> int:
    """Integer setting clamped to ``minimum``."""

    value = _raw(env, key)
    if value is None:
        return default
    try:
        parsed = int(value, 10)
    except ValueError:
        logger.warning("Invalid integer %s%s=%r, using %d", ENV_PREFIX, key, value, default)
        return default
    if parsed < minimum:
        logger.warning("%s%s=%d is below %d, clamping", ENV_PREFIX, key, parsed, minimum)
        return minimum
    return parsed


def _level_name(env: Mapping[str, str], key: str, default: str) -> str:
    value = (_raw(env, key) or default).upper()
    if not isinstance(logging.getLevelName(value), int):
        logger.warning("Unknown %s%s=%r, using %s", ENV_PREFIX, key, value, default)
        return default
    return value


# ---- Config ------------------------------------------------------------------

@dataclass(frozen=True)
class LoggingToggles:
    """Logging flags consumed by the pixel buffer."""

    log_tile_reads: bool = False
    log_pyramid_open: bool = True


@dataclass(frozen=True)
class TileConfig:
    """Construction parameters for pixel buffers opened by this package."""

    max_tile_size: int = DEFAULT_MAX_TILE_SIZE
    series: int = 0
    log_level: str = "INFO"
    logging: LoggingToggles = field(default_factory=LoggingToggles)


def load_tile_config(env: Optional[Mapping[str, str]] = None) -> TileConfig:
    """Read tile settings from the provided environment mapping."""

    if env is None:
        env = os.environ

    return TileConfig(
        max_tile_size=_count(env, "MAX_TILE_SIZE", DEFAULT_MAX_TILE_SIZE, minimum=1),
        series=_count(env, "SERIES", 0, minimum=0),
        log_level=_level_name(env, "LOG_LEVEL", "INFO"),
        logging=LoggingToggles(
            log_tile_reads=_flag(env, "LOG_TILE_READS", False),
            log_pyramid_open=_flag(env, "LOG_PYRAMID_OPEN", True),
        ),
    )


def configure_logging(config: TileConfig) -> None:
    """Apply ``config`` to the ``ngff_tiles`` logger hierarchy.

    Intended for embedding processes; library modules never add handlers.
    """

    logging.getLogger("ngff_tiles").setLevel(config.log_level)
    if config.logging.log_tile_reads:
        logging.getLogger("ngff_tiles.data.zarr_pixel_buffer").setLevel(logging.DEBUG)


__all__ = [
    "DEFAULT_MAX_TILE_SIZE",
    "ENV_PREFIX",
    "LoggingToggles",
    "TileConfig",
    "configure_logging",
    "load_tile_config",
]
