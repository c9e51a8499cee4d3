from __future__ import annotations

import pytest

from ngff_tiles.data.errors import PyramidOpenError
from ngff_tiles.data.multiscales import parse_multiscales


def test_parse_multiscales_keeps_declared_order() -> None:
    attrs = {
        "multiscales": [
            {
                "version": "0.4",
                "name": "image",
                "axes": [
                    {"name": "T", "type": "time"},
                    {"name": "c", "type": "channel"},
                    "z",
                    {"name": "y"},
                    {"name": "x"},
                ],
                "datasets": [{"path": "full", "extra": [1]}, {"path": "half"}],
                "metadata": {"method": "mean"},
            }
        ]
    }
    parsed = parse_multiscales(attrs)
    assert parsed.paths == ("full", "half")
    assert parsed.axes == ("t", "c", "z", "y", "x")
    assert parsed.version == "0.4"
    assert parsed.name == "image"
    assert parsed.metadata == {"method": "mean"}


def test_dataset_list_is_detached() -> None:
    attrs = {"multiscales": [{"datasets": [{"path": "0", "extra": [1]}]}]}
    parsed = parse_multiscales(attrs)
    datasets = parsed.dataset_list()
    datasets[0]["extra"].append(2)
    attrs["multiscales"][0]["datasets"][0]["extra"].append(3)
    assert parsed.dataset_list() == [{"path": "0", "extra": [1]}]


def test_parse_multiscales_without_optional_fields() -> None:
    parsed = parse_multiscales({"multiscales": [{"datasets": [{"path": "0"}]}]})
    assert parsed.version is None
    assert parsed.name is None
    assert parsed.axes == ()
    assert parsed.metadata == {}


@pytest.mark.parametrize(
    "attrs",
    [
        {},
        {"multiscales": []},
        {"multiscales": {"datasets": []}},
        {"multiscales": ["oops"]},
        {"multiscales": [{}]},
        {"multiscales": [{"datasets": []}]},
        {"multiscales": [{"datasets": ["0"]}]},
        {"multiscales": [{"datasets": [{"path": ""}]}]},
        {"multiscales": [{"datasets": [{"path": 0}]}]},
    ],
)
def test_parse_multiscales_rejects_malformed(attrs: dict) -> None:
    with pytest.raises(PyramidOpenError):
        parse_multiscales(attrs, source="test")
