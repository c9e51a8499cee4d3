"""In-memory horizontal/vertical flips of row-major pixel arrays."""

from __future__ import annotations

from typing import Any

import numpy as np

from ngff_tiles.data.errors import InvalidArgumentError
from ngff_tiles.data.types import PixelData


def mirror(pixels: Any, size_x: int, size_y: int, mirror_x: bool, mirror_y: bool) -> np.ndarray:
    """Return a flipped copy of ``pixels``, a flat row-major ``size_y`` x ``size_x`` array.

    The element at linear index ``n`` (column ``n % size_x``, row
    ``n // size_x``) moves to column ``size_x - 1 - col`` when ``mirror_x``
    and to row ``size_y - 1 - row`` when ``mirror_y``. With neither flag set
    the result is a plain copy.
    """

    if pixels is None:
        raise InvalidArgumentError("Attempted to mirror null image")
    if int(size_x) <= 0 or int(size_y) <= 0:
        raise InvalidArgumentError(f"Invalid image size {size_x}x{size_y}")

    flat = np.asarray(pixels).reshape(-1)
    if flat.size != int(size_x) * int(size_y):
        raise InvalidArgumentError(
            f"Pixel count {flat.size} does not match {size_x}x{size_y}"
        )

    plane = flat.reshape(int(size_y), int(size_x))
    if mirror_x:
        plane = plane[:, ::-1]
    if mirror_y:
        plane = plane[::-1, :]
    return np.ascontiguousarray(plane).reshape(-1)


def mirror_pixel_data(pixel_data: PixelData, mirror_x: bool, mirror_y: bool) -> PixelData:
    """Apply :func:`mirror` to a big-endian tile buffer."""

    if pixel_data is None:
        raise InvalidArgumentError("Attempted to mirror null image")
    flat = np.frombuffer(pixel_data.data, dtype=pixel_data.pixel_type.dtype)
    flipped = mirror(flat, pixel_data.width, pixel_data.height, mirror_x, mirror_y)
    return PixelData(
        data=flipped.tobytes(),
        pixel_type=pixel_data.pixel_type,
        width=pixel_data.width,
        height=pixel_data.height,
    )


__all__ = ["mirror", "mirror_pixel_data"]
