# -*- coding: utf-8 -*-
"""
NDVI Bench — concurrent NDVI computation and codec benchmarking.

Computes NDVI from JPEG2000 NIR/RED band pairs with a parallel
map-reduce engine, colorizes the result, and reports per-stage
bottlenecks and thread scalability across CPU and GPU codecs.

Dependencies
------------
numpy
glymur

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

from ndvi_bench.benchmarking import (
    AggregatedMetrics,
    BandPair,
    BenchmarkResult,
    Metrics,
    MetricsAccumulator,
    MetricsCollector,
    NDVIBenchmark,
    run_suite,
)
from ndvi_bench.io import BandRaster, BandReader, CodecError, ColorRaster, ImageWriter
from ndvi_bench.processing import (
    DEFAULT_GRADIENT,
    Breakpoint,
    Colorizer,
    DimensionMismatchError,
    GradientTable,
    NDVIStatistics,
    calculate,
)

__all__ = [
    "AggregatedMetrics",
    "BandPair",
    "BandRaster",
    "BandReader",
    "BenchmarkResult",
    "Breakpoint",
    "CodecError",
    "ColorRaster",
    "Colorizer",
    "DEFAULT_GRADIENT",
    "DimensionMismatchError",
    "GradientTable",
    "ImageWriter",
    "Metrics",
    "MetricsAccumulator",
    "MetricsCollector",
    "NDVIBenchmark",
    "NDVIStatistics",
    "calculate",
    "run_suite",
]
