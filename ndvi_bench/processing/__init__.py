# -*- coding: utf-8 -*-
"""
Processing subpackage — the concurrent NDVI computation engine.

Provides the chunked fork/join primitive, the gradient colorizer, the
NDVI calculator, and the parallel colorization stage.

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

from ndvi_bench.processing.parallel import chunk_bounds, parallel_chunks
from ndvi_bench.processing.gradient import (
    DEFAULT_GRADIENT,
    Breakpoint,
    GradientTable,
)
from ndvi_bench.processing.ndvi import (
    DimensionMismatchError,
    NDVIStatistics,
    calculate,
)
from ndvi_bench.processing.colorize import (
    ColorStatistics,
    Colorizer,
    colorize,
)

__all__ = [
    "Breakpoint",
    "ColorStatistics",
    "Colorizer",
    "DEFAULT_GRADIENT",
    "DimensionMismatchError",
    "GradientTable",
    "NDVIStatistics",
    "calculate",
    "chunk_bounds",
    "colorize",
    "parallel_chunks",
]
