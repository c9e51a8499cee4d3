"""Value types shared by the pixel buffer and the region helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .errors import InvalidArgumentError
from .pixel_types import PixelType


AXES = ("t", "c", "z", "y", "x")


@dataclass(frozen=True)
class ImageDimensions:
    """Nominal image size as declared by the image's authoritative record."""

    size_x: int
    size_y: int
    size_z: int = 1
    size_c: int = 1
    size_t: int = 1

    def __post_init__(self) -> None:
        for name in ("size_x", "size_y", "size_z", "size_c", "size_t"):
            value = getattr(self, name)
            if int(value) < 1:
                raise InvalidArgumentError(f"{name} must be >= 1, got {value}")


@dataclass(frozen=True)
class LevelDescriptor:
    """Metadata for a single resolution level (T, C, Z, Y, X ordering)."""

    index: int
    path: str
    shape: Tuple[int, int, int, int, int]
    chunks: Tuple[int, int, int, int, int]

    @property
    def size_x(self) -> int:
        return int(self.shape[4])

    @property
    def size_y(self) -> int:
        return int(self.shape[3])


@dataclass(frozen=True)
class PixelData:
    """Raw big-endian samples for one tile, row-major over (Y, X)."""

    data: bytes
    pixel_type: PixelType
    width: int
    height: int

    def __len__(self) -> int:
        return len(self.data)

    @property
    def bytes_per_pixel(self) -> int:
        return self.pixel_type.byte_width

    def as_array(self) -> np.ndarray:
        """Decode the buffer into a ``(height, width)`` array."""

        flat = np.frombuffer(self.data, dtype=self.pixel_type.dtype)
        return flat.reshape(self.height, self.width)


__all__ = ["AXES", "ImageDimensions", "LevelDescriptor", "PixelData"]
