"""Error taxonomy shared by the pixel buffer and region helpers."""

from __future__ import annotations

from typing import Optional


class PixelBufferError(RuntimeError):
    """Base class for every failure raised by ngff-tiles."""


class InvalidArgumentError(PixelBufferError, ValueError):
    """Raised for malformed arguments (mirror input, level selection, params)."""


class DimensionsOutOfBoundsError(PixelBufferError, IndexError):
    """Raised when a tile request falls outside the active level's extents."""

    def __init__(self, *, axis: str, value: int, bound: int, message: Optional[str] = None) -> None:
        if message is None:
            message = f"{axis}={value} is out of bounds (limit {bound})"
        super().__init__(message)
        self.axis = axis
        self.value = value
        self.bound = bound


class PyramidOpenError(PixelBufferError):
    """Raised when a pyramid cannot be opened; no partial buffer is produced."""


class StorageReadError(PixelBufferError):
    """Raised when the chunked store fails to return requested samples."""


class PixelBufferClosedError(PixelBufferError):
    """Raised when a closed pixel buffer is used."""


__all__ = [
    "DimensionsOutOfBoundsError",
    "InvalidArgumentError",
    "PixelBufferClosedError",
    "PixelBufferError",
    "PyramidOpenError",
    "StorageReadError",
]
