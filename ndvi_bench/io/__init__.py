# -*- coding: utf-8 -*-
"""
IO subpackage — raster models and codec contracts.

``JP2BandReader`` / ``JP2ImageWriter`` are imported lazily because they
require glymur and a linked OpenJPEG library.

License
-------
MIT License
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

from ndvi_bench.io.models import BandRaster, ColorRaster, ReadTimings
from ndvi_bench.io.base import BandReader, CodecError, ImageWriter

__all__ = [
    "BandRaster",
    "BandReader",
    "CodecError",
    "ColorRaster",
    "ImageWriter",
    "JP2BandReader",
    "JP2ImageWriter",
    "ReadTimings",
]


def __getattr__(name: str):
    """Lazy import for the glymur-backed codec."""
    if name in ("JP2BandReader", "JP2ImageWriter"):
        from ndvi_bench.io import jpeg2000
        return getattr(jpeg2000, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
