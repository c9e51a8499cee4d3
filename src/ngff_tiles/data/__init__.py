"""Pyramid access: descriptor parsing, element types and the pixel buffer."""

from __future__ import annotations

from .errors import (
    DimensionsOutOfBoundsError,
    InvalidArgumentError,
    PixelBufferClosedError,
    PixelBufferError,
    PyramidOpenError,
    StorageReadError,
)
from .multiscales import Multiscales, parse_multiscales, read_multiscales
from .pixel_types import PixelType
from .types import ImageDimensions, LevelDescriptor, PixelData
from .zarr_discovery import open_pixel_buffer, resolve_image_root
from .zarr_pixel_buffer import ZarrPixelBuffer

__all__ = [
    "DimensionsOutOfBoundsError",
    "ImageDimensions",
    "InvalidArgumentError",
    "LevelDescriptor",
    "Multiscales",
    "PixelBufferClosedError",
    "PixelBufferError",
    "PixelData",
    "PixelType",
    "PyramidOpenError",
    "StorageReadError",
    "ZarrPixelBuffer",
    "open_pixel_buffer",
    "parse_multiscales",
    "read_multiscales",
    "resolve_image_root",
]
