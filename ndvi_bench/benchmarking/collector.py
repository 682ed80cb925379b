# -*- coding: utf-8 -*-
"""
Metrics Collector — per-iteration accumulator of stage timings.

One ``MetricsCollector`` lives for exactly one benchmark iteration.  The
orchestrator feeds it each stage's result once; ``get_metrics()`` hands
back an independent snapshot for aggregation.

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
import time

# Internal
from ndvi_bench.benchmarking.models import Metrics
from ndvi_bench.io.models import ReadTimings
from ndvi_bench.processing.colorize import ColorStatistics
from ndvi_bench.processing.ndvi import NDVIStatistics


class MetricsCollector:
    """Mutable metrics record for a single iteration.

    Setters perform no validation.

    Parameters
    ----------
    resolution : str
        Resolution label of the band pair.
    processor : str
        ``"CPU"`` or ``"GPU"``.
    num_threads : int
        Worker threads for this configuration.
    """

    def __init__(
        self,
        resolution: str,
        processor: str,
        num_threads: int,
    ) -> None:
        self._metrics = Metrics(
            resolution=resolution,
            processor=processor,
            num_threads=num_threads,
        )

    def start_timing(self) -> int:
        """Return a start mark for ``stop_timing``."""
        return time.perf_counter_ns()

    def stop_timing(self, start: int) -> None:
        """Record the total time elapsed since *start*."""
        self._metrics.total_time_ns = time.perf_counter_ns() - start

    def set_total_time(self, elapsed_ns: int) -> None:
        self._metrics.total_time_ns = elapsed_ns

    def set_band_read_metrics(
        self,
        nir: ReadTimings,
        red: ReadTimings,
    ) -> None:
        """Record per-band file and decode timings.

        Reading time is the sum of both bands' total read times.
        """
        m = self._metrics
        m.file_time_nir_ns = nir.file_time_ns
        m.decode_time_nir_ns = nir.decode_time_ns
        m.file_time_red_ns = red.file_time_ns
        m.decode_time_red_ns = red.decode_time_ns
        m.reading_time_ns = nir.total_time_ns + red.total_time_ns

    def set_num_tiles(self, nir_tiles: int, red_tiles: int) -> None:
        self._metrics.num_tiles_nir = nir_tiles
        self._metrics.num_tiles_red = red_tiles

    def set_ndvi_metrics(self, stats: NDVIStatistics, elapsed_ns: int) -> None:
        """Record NDVI compute time, pixel counts and statistics."""
        m = self._metrics
        m.ndvi_time_ns = elapsed_ns
        m.pixels = stats.total_pixels
        m.no_data_pixels = stats.no_data_pixels
        m.ndvi_min = stats.min
        m.ndvi_max = stats.max
        m.ndvi_average = stats.average

    def set_color_metrics(
        self,
        stats: ColorStatistics,
        elapsed_ns: int,
    ) -> None:
        self._metrics.color_time_ns = elapsed_ns
        self._metrics.image_size_bytes = stats.image_size

    def set_save_time(self, elapsed_ns: int) -> None:
        self._metrics.save_time_ns = elapsed_ns

    def get_metrics(self) -> Metrics:
        """Return an independent snapshot of the collected metrics."""
        return self._metrics.copy()
