# -*- coding: utf-8 -*-
"""
Benchmark Data Models — per-iteration metrics and timing distributions.

``Metrics`` is the record one NDVI pipeline iteration produces (and, once
averaged, the record a benchmark configuration reports).
``AggregatedMetrics`` computes distribution statistics across repeated
measurements of a single quantity.

Dependencies
------------
numpy

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

# Standard library
import dataclasses
from dataclasses import dataclass
from typing import List, Tuple

# Third-party
import numpy as np

CPU = "CPU"
GPU = "GPU"
PROCESSOR_KINDS = (CPU, GPU)

#: Duration fields, in nanoseconds, summed then averaged across iterations.
DURATION_FIELDS: Tuple[str, ...] = (
    "total_time_ns",
    "reading_time_ns",
    "ndvi_time_ns",
    "color_time_ns",
    "save_time_ns",
    "file_time_nir_ns",
    "decode_time_nir_ns",
    "file_time_red_ns",
    "decode_time_red_ns",
)

#: Integer count fields, summed then floor-divided across iterations.
COUNT_FIELDS: Tuple[str, ...] = (
    "pixels",
    "no_data_pixels",
    "image_size_bytes",
    "num_tiles_nir",
    "num_tiles_red",
)


@dataclass
class Metrics:
    """Timings and statistics of one NDVI pipeline run.

    Attributes
    ----------
    resolution : str
        Resolution label of the band pair (e.g. ``"10m"``).
    processor : str
        ``"CPU"`` or ``"GPU"``.
    num_threads : int
        Worker threads used for compute and codec hints.
    total_time_ns : int
        Wall-clock time of the whole iteration.
    reading_time_ns : int
        Sum of both band reads.
    ndvi_time_ns, color_time_ns, save_time_ns : int
        Stage durations.
    file_time_nir_ns, decode_time_nir_ns : int
        NIR band file-open and decode durations.
    file_time_red_ns, decode_time_red_ns : int
        RED band file-open and decode durations.
    pixels : int
        Pixels per band.
    no_data_pixels : int
        Pixels with ``NIR + RED <= 0``.
    image_size_bytes : int
        Size of the RGBA output buffer.
    num_tiles_nir, num_tiles_red : int
        Codestream tiles per band.
    ndvi_min, ndvi_max, ndvi_average : float
        NDVI statistics.
    """

    resolution: str = ""
    processor: str = CPU
    num_threads: int = 1
    total_time_ns: int = 0
    reading_time_ns: int = 0
    ndvi_time_ns: int = 0
    color_time_ns: int = 0
    save_time_ns: int = 0
    file_time_nir_ns: int = 0
    decode_time_nir_ns: int = 0
    file_time_red_ns: int = 0
    decode_time_red_ns: int = 0
    pixels: int = 0
    no_data_pixels: int = 0
    image_size_bytes: int = 0
    num_tiles_nir: int = 0
    num_tiles_red: int = 0
    ndvi_min: float = 0.0
    ndvi_max: float = 0.0
    ndvi_average: float = 0.0

    def copy(self) -> 'Metrics':
        """Return an independent copy."""
        return dataclasses.replace(self)

    @property
    def label(self) -> str:
        """Processor label used in reports (``"CPU 4"`` or ``"GPU"``)."""
        if self.processor == GPU:
            return GPU
        return f"{self.processor} {self.num_threads}"

    @property
    def total_time_s(self) -> float:
        """Total time in seconds."""
        return self.total_time_ns / 1e9


@dataclass(frozen=True)
class AggregatedMetrics:
    """Statistical aggregation of a metric across N measurements.

    Attributes
    ----------
    count : int
        Number of measurements.
    min : float
        Minimum value.
    max : float
        Maximum value.
    mean : float
        Arithmetic mean.
    median : float
        Median value.
    stddev : float
        Sample standard deviation (ddof=1 when N > 1, else 0).
    p95 : float
        95th percentile.
    values : tuple
        Raw measurement values (tuple for immutability).
    """

    count: int
    min: float
    max: float
    mean: float
    median: float
    stddev: float
    p95: float
    values: tuple

    @classmethod
    def from_values(cls, values: List[float]) -> 'AggregatedMetrics':
        """Compute aggregated statistics from raw values.

        Parameters
        ----------
        values : List[float]
            Raw measurement values.  Must contain at least one element.

        Returns
        -------
        AggregatedMetrics

        Raises
        ------
        ValueError
            If *values* is empty.
        """
        if not values:
            raise ValueError("Cannot aggregate empty values list.")

        arr = np.asarray(values, dtype=np.float64)
        ddof = 1 if len(arr) > 1 else 0

        return cls(
            count=len(arr),
            min=float(np.min(arr)),
            max=float(np.max(arr)),
            mean=float(np.mean(arr)),
            median=float(np.median(arr)),
            stddev=float(np.std(arr, ddof=ddof)),
            p95=float(np.percentile(arr, 95)),
            values=tuple(float(v) for v in arr),
        )

    @property
    def cv(self) -> float:
        """Coefficient of variation (stddev / mean), 0 for a zero mean."""
        if self.mean == 0:
            return 0.0
        return self.stddev / self.mean


@dataclass(frozen=True)
class BenchmarkResult:
    """Outcome of one benchmark configuration.

    Attributes
    ----------
    metrics : Metrics
        Per-iteration average over the completed iterations.
    total_time : AggregatedMetrics
        Distribution of total time (seconds) across completed iterations.
    iterations : int
        Completed measurement iterations.
    failures : int
        Iterations that failed and were excluded.
    """

    metrics: Metrics
    total_time: AggregatedMetrics
    iterations: int
    failures: int = 0
