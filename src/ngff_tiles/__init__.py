"""
ngff-tiles: pyramidal tile access for OME-NGFF microscopy images

This package reads rectangular pixel regions out of multiscale Zarr
pyramids, resolving tile/region requests (including mirrored views)
into exact, big-endian pixel buffers.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
