"""Element-type descriptors for stored pyramid samples.

Every supported sample type is one :class:`PixelType` value describing its
kind (integer or floating point), byte width and signedness. Reads and the
big-endian conversion go through a single code path parameterised by this
descriptor instead of per-type branches.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np

from .errors import PyramidOpenError


INTEGER = "integer"
FLOAT = "float"


@dataclass(frozen=True)
class PixelType:
    """Closed description of a stored sample type."""

    kind: str
    byte_width: int
    signed: bool

    @property
    def is_float(self) -> bool:
        return self.kind == FLOAT

    @property
    def name(self) -> str:
        """OME pixel type name (``uint16``, ``float``, ``double`` ...)."""

        if self.is_float:
            return "float" if self.byte_width == 4 else "double"
        prefix = "int" if self.signed else "uint"
        return f"{prefix}{self.byte_width * 8}"

    @property
    def dtype(self) -> np.dtype:
        """Big-endian numpy dtype used for returned buffers."""

        if self.is_float:
            code = "f"
        else:
            code = "i" if self.signed else "u"
        return np.dtype(f">{code}{self.byte_width}")

    @classmethod
    def from_dtype(cls, dtype: np.dtype | str) -> "PixelType":
        dt = np.dtype(dtype)
        key = (dt.kind, int(dt.itemsize))
        try:
            return _SUPPORTED[key]
        except KeyError:
            raise PyramidOpenError(f"Unsupported pixel type: {dt.str}") from None


_SUPPORTED: Dict[Tuple[str, int], PixelType] = {}
for _width in (1, 2, 4, 8):
    _SUPPORTED[("i", _width)] = PixelType(INTEGER, _width, True)
    _SUPPORTED[("u", _width)] = PixelType(INTEGER, _width, False)
for _width in (4, 8):
    _SUPPORTED[("f", _width)] = PixelType(FLOAT, _width, True)
del _width


__all__ = ["FLOAT", "INTEGER", "PixelType"]
