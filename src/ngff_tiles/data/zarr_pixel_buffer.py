"""Pixel buffer over an OME-NGFF multiscale pyramid of 5-D Zarr arrays.

A :class:`ZarrPixelBuffer` owns one open pyramid: a Zarr array handle (and a
lazy ``dask.array`` view of it) per resolution level. The ``multiscales``
descriptor lists datasets from highest to lowest resolution and that order is
authoritative: level ``i`` reads dataset ``n - 1 - i``, so level 0 is the
coarsest and the last level is full resolution, matching the nominal image
size in Y/X.

Reads are synchronous and blocking. The active resolution level is instance
state; callers sharing one buffer across threads must serialise
:meth:`ZarrPixelBuffer.set_resolution_level` against reads that depend on it.
"""

from __future__ import annotations

import copy
import logging
from pathlib import Path
import threading
from typing import Any, Dict, List, Optional, Tuple

import dask.array as da
import numpy as np
import zarr

from .errors import (
    DimensionsOutOfBoundsError,
    InvalidArgumentError,
    PixelBufferClosedError,
    PyramidOpenError,
    StorageReadError,
)
from .multiscales import Multiscales, read_multiscales
from .pixel_types import PixelType
from .types import AXES, ImageDimensions, LevelDescriptor, PixelData

logger = logging.getLogger(__name__)


class ZarrPixelBuffer:
    """Bounded 5-D tile reads against a multiscale Zarr pyramid."""

    def __init__(
        self,
        dimensions: ImageDimensions,
        root: str | Path,
        max_tile_size: int,
        *,
        log_tile_reads: bool = False,
        log_pyramid_open: bool = True,
    ) -> None:
        self._dimensions = dimensions
        self._root = Path(root)
        self._max_tile_size = int(max_tile_size)
        self._log_tile_reads = bool(log_tile_reads)
        self._arrays: List[Any] = []
        self._levels: List[da.Array] = []
        self._level_descriptors: List[LevelDescriptor] = []
        self._lock = threading.Lock()
        self._closed = False

        if not self._root.exists():
            raise PyramidOpenError(f"Pyramid root does not exist: {self._root}")

        self._multiscales: Multiscales = read_multiscales(self._root)
        axes = self._multiscales.axes
        if axes and axes != AXES:
            raise PyramidOpenError(f"Unsupported axis order {axes}; expected {AXES}")

        try:
            self._open_levels()
        except BaseException:
            self._release()
            raise

        self._current_level = len(self._level_descriptors) - 1
        logger.log(
            logging.INFO if log_pyramid_open else logging.DEBUG,
            "zarr_pixel_buffer: opened %s levels=%d type=%s full=%s",
            self._root,
            len(self._level_descriptors),
            self._pixel_type.name,
            self._level_descriptors[-1].shape,
        )

    def _open_levels(self) -> None:
        pixel_type: Optional[PixelType] = None
        # Descriptor lists datasets finest first; level 0 is the coarsest.
        for idx, rel_path in enumerate(reversed(self._multiscales.paths)):
            arr_path = self._root / rel_path
            if not arr_path.exists():
                raise PyramidOpenError(f"Missing dataset path: {arr_path}")
            try:
                array = zarr.open_array(str(arr_path), mode="r")
            except Exception as exc:
                raise PyramidOpenError(f"Failed to open dataset {arr_path}: {exc}") from exc
            self._arrays.append(array)

            if array.ndim != len(AXES):
                raise PyramidOpenError(
                    f"Dataset {rel_path} has {array.ndim} dimensions; expected {len(AXES)}"
                )
            level_type = PixelType.from_dtype(array.dtype)
            if pixel_type is None:
                pixel_type = level_type
            elif level_type != pixel_type:
                raise PyramidOpenError(
                    f"Dataset {rel_path} stores {level_type.name}; other levels store {pixel_type.name}"
                )

            self._levels.append(da.from_zarr(array))
            self._level_descriptors.append(
                LevelDescriptor(
                    index=idx,
                    path=rel_path,
                    shape=tuple(int(s) for s in array.shape),  # type: ignore[arg-type]
                    chunks=tuple(int(c) for c in array.chunks),  # type: ignore[arg-type]
                )
            )

        assert pixel_type is not None
        self._pixel_type = pixel_type

        for lower, upper in zip(self._level_descriptors, self._level_descriptors[1:]):
            if upper.size_x < lower.size_x or upper.size_y < lower.size_y:
                raise PyramidOpenError(
                    f"Datasets in {self._root} are not ordered from highest to lowest resolution "
                    f"({upper.path}={upper.size_x}x{upper.size_y}, {lower.path}={lower.size_x}x{lower.size_y})"
                )

        full = self._level_descriptors[-1]
        dims = self._dimensions
        if full.size_x != dims.size_x or full.size_y != dims.size_y:
            raise PyramidOpenError(
                f"Full resolution level is {full.size_x}x{full.size_y}; "
                f"image is {dims.size_x}x{dims.size_y}"
            )

    # ------------------------------------------------------------------
    # Lifecycle

    def close(self) -> None:
        """Release every store handle; idempotent."""

        if self._closed:
            return
        self._closed = True
        self._release()
        logger.debug("zarr_pixel_buffer: closed %s", self._root)

    def _release(self) -> None:
        for array in self._arrays:
            store = getattr(array, "store", None)
            close = getattr(store, "close", None)
            if callable(close):
                try:
                    close()
                except Exception:
                    logger.debug("zarr_pixel_buffer: store close failed", exc_info=True)
        self._arrays = []
        self._levels = []

    def __enter__(self) -> "ZarrPixelBuffer":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------
    # Resolution levels

    def get_resolution_levels(self) -> int:
        return len(self._level_descriptors)

    def get_resolution_level(self) -> int:
        with self._lock:
            return self._current_level

    def set_resolution_level(self, level: int) -> None:
        self._ensure_open()
        lvl = int(level)
        if not 0 <= lvl < len(self._level_descriptors):
            raise InvalidArgumentError(
                f"Resolution level {lvl} out of range [0, {len(self._level_descriptors)})"
            )
        with self._lock:
            self._current_level = lvl
        logger.debug("zarr_pixel_buffer: resolution level -> %d", lvl)

    def get_resolution_descriptions(self) -> List[List[int]]:
        return [[d.size_x, d.size_y] for d in self._level_descriptors]

    def get_chunks(self) -> List[Tuple[int, ...]]:
        return [tuple(d.chunks) for d in self._level_descriptors]

    def get_datasets(self) -> List[Dict[str, Any]]:
        return self._multiscales.dataset_list()

    @property
    def multiscales(self) -> Multiscales:
        """Parsed descriptor, returned as a detached copy."""

        return copy.deepcopy(self._multiscales)

    @property
    def level_descriptors(self) -> List[LevelDescriptor]:
        return list(self._level_descriptors)

    @property
    def dimensions(self) -> ImageDimensions:
        return self._dimensions

    @property
    def max_tile_size(self) -> int:
        return self._max_tile_size

    # ------------------------------------------------------------------
    # Active-level geometry

    def _descriptor(self) -> LevelDescriptor:
        with self._lock:
            return self._level_descriptors[self._current_level]

    def get_size_t(self) -> int:
        return int(self._descriptor().shape[0])

    def get_size_c(self) -> int:
        return int(self._descriptor().shape[1])

    def get_size_z(self) -> int:
        return int(self._descriptor().shape[2])

    def get_size_y(self) -> int:
        return int(self._descriptor().shape[3])

    def get_size_x(self) -> int:
        return int(self._descriptor().shape[4])

    def get_tile_size(self) -> Tuple[int, int]:
        """Native (width, height) of the active level's chunks."""

        chunks = self._descriptor().chunks
        return int(chunks[4]), int(chunks[3])

    def get_pixels_type(self) -> PixelType:
        return self._pixel_type

    def get_byte_width(self) -> int:
        return self._pixel_type.byte_width

    def is_signed(self) -> bool:
        return self._pixel_type.signed

    def is_float(self) -> bool:
        return self._pixel_type.is_float

    def get_row_size(self) -> int:
        return self.get_size_x() * self.get_byte_width()

    def get_plane_size(self) -> int:
        return self.get_size_x() * self.get_size_y() * self.get_byte_width()

    # ------------------------------------------------------------------
    # Reads

    def get_tile(self, t: int, c: int, z: int, y: int, x: int, w: int, h: int) -> Optional[PixelData]:
        """Return the ``w`` x ``h`` block at (``x``, ``y``) of plane (t, c, z).

        Returns ``None`` when ``w * h`` exceeds the configured maximum tile
        size; callers are expected to re-request smaller tiles.
        """

        self._ensure_open()
        if int(w) * int(h) > self._max_tile_size:
            logger.debug(
                "zarr_pixel_buffer: tile %dx%d exceeds max tile size %d",
                int(w),
                int(h),
                self._max_tile_size,
            )
            return None

        with self._lock:
            lvl = self._current_level
            descriptor = self._level_descriptors[lvl]
            array = self._levels[lvl]
        self._check_bounds(descriptor, t=t, c=c, z=z, x=x, y=y, w=w, h=h)

        indexer = (
            int(t),
            int(c),
            int(z),
            slice(int(y), int(y) + int(h)),
            slice(int(x), int(x) + int(w)),
        )
        try:
            block = np.asarray(array[indexer].compute(scheduler="synchronous"))
        except Exception as exc:
            raise StorageReadError(
                f"Failed to read level {lvl} ({descriptor.path}) at "
                f"t={t} c={c} z={z} y={y} x={x} h={h} w={w}: {exc}"
            ) from exc

        data = np.ascontiguousarray(block, dtype=self._pixel_type.dtype).tobytes()
        if self._log_tile_reads:
            logger.debug(
                "zarr_pixel_buffer: read level=%d t=%d c=%d z=%d y=%d x=%d h=%d w=%d bytes=%d",
                lvl, t, c, z, y, x, h, w, len(data),
            )
        return PixelData(data=data, pixel_type=self._pixel_type, width=int(w), height=int(h))

    def get_plane(self, t: int, c: int, z: int) -> Optional[PixelData]:
        """Return the whole active-level plane, subject to the tile size policy."""

        return self.get_tile(t, c, z, 0, 0, self.get_size_x(), self.get_size_y())

    @staticmethod
    def _check_bounds(
        descriptor: LevelDescriptor,
        *,
        t: int,
        c: int,
        z: int,
        x: int,
        y: int,
        w: int,
        h: int,
    ) -> None:
        size_t, size_c, size_z, size_y, size_x = descriptor.shape
        for axis, value, size in (("t", t, size_t), ("c", c, size_c), ("z", z, size_z)):
            if not 0 <= int(value) < int(size):
                raise DimensionsOutOfBoundsError(axis=axis, value=int(value), bound=int(size))

        for axis, offset, extent, size in (("x", x, w, size_x), ("y", y, h, size_y)):
            if int(offset) < 0:
                raise DimensionsOutOfBoundsError(axis=axis, value=int(offset), bound=int(size))
            if int(extent) < 1:
                extent_axis = "width" if axis == "x" else "height"
                raise DimensionsOutOfBoundsError(
                    axis=extent_axis,
                    value=int(extent),
                    bound=int(size),
                    message=f"{extent_axis}={int(extent)} must be >= 1",
                )
            if int(offset) + int(extent) > int(size):
                raise DimensionsOutOfBoundsError(
                    axis=axis,
                    value=int(offset) + int(extent),
                    bound=int(size),
                    message=(
                        f"{axis}+{'width' if axis == 'x' else 'height'}="
                        f"{int(offset) + int(extent)} exceeds level size {int(size)}"
                    ),
                )

    def _ensure_open(self) -> None:
        if self._closed:
            raise PixelBufferClosedError(f"Pixel buffer for {self._root} is closed")


__all__ = ["ZarrPixelBuffer"]
