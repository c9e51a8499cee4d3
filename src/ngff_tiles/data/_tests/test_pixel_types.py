from __future__ import annotations

import numpy as np
import pytest

from ngff_tiles.data.errors import PyramidOpenError
from ngff_tiles.data.pixel_types import FLOAT, INTEGER, PixelType


@pytest.mark.parametrize(
    ("dtype", "name", "width", "signed", "kind"),
    [
        ("int8", "int8", 1, True, INTEGER),
        ("uint8", "uint8", 1, False, INTEGER),
        ("<i2", "int16", 2, True, INTEGER),
        ("<u2", "uint16", 2, False, INTEGER),
        ("int32", "int32", 4, True, INTEGER),
        ("uint32", "uint32", 4, False, INTEGER),
        ("int64", "int64", 8, True, INTEGER),
        ("uint64", "uint64", 8, False, INTEGER),
        ("<f4", "float", 4, True, FLOAT),
        ("float64", "double", 8, True, FLOAT),
    ],
)
def test_from_dtype(dtype: str, name: str, width: int, signed: bool, kind: str) -> None:
    pixel_type = PixelType.from_dtype(dtype)
    assert pixel_type.name == name
    assert pixel_type.byte_width == width
    assert pixel_type.signed is signed
    assert pixel_type.kind == kind
    assert pixel_type.is_float is (kind == FLOAT)
    assert pixel_type.dtype.itemsize == width
    if width > 1:
        assert pixel_type.dtype.byteorder == ">"


@pytest.mark.parametrize("dtype", ["bool", "float16", "complex64", "U4"])
def test_from_dtype_rejects_unsupported(dtype: str) -> None:
    with pytest.raises(PyramidOpenError):
        PixelType.from_dtype(np.dtype(dtype))
