"""Parsing of the OME-NGFF ``multiscales`` pyramid descriptor.

The descriptor's dataset order is authoritative for the level index to
storage path mapping. Nothing here infers resolution order from path names.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import zarr

from .errors import PyramidOpenError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Multiscales:
    """First ``multiscales`` entry of an image group, read-only once parsed."""

    datasets: Tuple[Dict[str, Any], ...]
    version: Optional[str] = None
    name: Optional[str] = None
    axes: Tuple[str, ...] = ()
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def paths(self) -> Tuple[str, ...]:
        return tuple(str(entry["path"]) for entry in self.datasets)

    def dataset_list(self) -> List[Dict[str, Any]]:
        """Return the datasets exactly as declared, detached from this object."""

        return copy.deepcopy(list(self.datasets))


def read_group_attrs(root: str | Path) -> Dict[str, Any]:
    """Return the attributes of the Zarr group at ``root``."""

    try:
        group = zarr.open_group(str(root), mode="r")
        return dict(group.attrs.asdict())
    except Exception as exc:
        raise PyramidOpenError(f"Failed to open Zarr group at {root}: {exc}") from exc


def read_multiscales(root: str | Path) -> Multiscales:
    """Read and parse the pyramid descriptor of the image group at ``root``."""

    return parse_multiscales(read_group_attrs(root), source=str(root))


def parse_multiscales(attrs: Mapping[str, Any], *, source: str = "<attrs>") -> Multiscales:
    entries = attrs.get("multiscales") if isinstance(attrs, Mapping) else None
    if not isinstance(entries, list) or not entries:
        raise PyramidOpenError(f"No multiscales metadata found in {source}")
    if len(entries) > 1:
        logger.debug("multiscales: %s declares %d entries; using the first", source, len(entries))

    entry = entries[0]
    if not isinstance(entry, Mapping):
        raise PyramidOpenError(f"Malformed multiscales entry in {source}")

    datasets = entry.get("datasets")
    if not isinstance(datasets, list) or not datasets:
        raise PyramidOpenError(f"multiscales in {source} lists no datasets")

    parsed: List[Dict[str, Any]] = []
    for idx, dataset in enumerate(datasets):
        if not isinstance(dataset, Mapping):
            raise PyramidOpenError(f"Dataset {idx} in {source} is not an object")
        path = dataset.get("path")
        if not isinstance(path, str) or path == "":
            raise PyramidOpenError(f"Dataset {idx} in {source} has no path")
        parsed.append(copy.deepcopy(dict(dataset)))

    metadata = entry.get("metadata")
    version = entry.get("version")
    name = entry.get("name")
    return Multiscales(
        datasets=tuple(parsed),
        version=str(version) if version is not None else None,
        name=str(name) if name is not None else None,
        axes=_parse_axes(entry.get("axes")),
        metadata=copy.deepcopy(dict(metadata)) if isinstance(metadata, Mapping) else {},
    )


def _parse_axes(axes_meta: object) -> Tuple[str, ...]:
    if not isinstance(axes_meta, list):
        return ()
    axes: List[str] = []
    for entry in axes_meta:
        if isinstance(entry, Mapping):
            name = entry.get("name")
        else:
            name = entry
        axes.append(str(name or "").lower())
    return tuple(axes)


__all__ = ["Multiscales", "parse_multiscales", "read_group_attrs", "read_multiscales"]
