# -*- coding: utf-8 -*-
"""
NDVI Benchmark Suite — run the pipeline across resolutions and threads.

``NDVIBenchmark`` drives one configuration (band pair, processor kind,
thread count) through N iterations of read -> NDVI -> colorize -> write,
collecting and averaging metrics.  ``run_suite()`` sweeps the matrix of
resolutions x processors x thread counts and prints the result tables.

Dependencies
------------
numpy
glymur (default CPU codec)

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
import gc
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple

# Internal
from ndvi_bench.benchmarking.aggregate import MetricsAccumulator
from ndvi_bench.benchmarking.collector import MetricsCollector
from ndvi_bench.benchmarking.models import (
    CPU,
    GPU,
    PROCESSOR_KINDS,
    BenchmarkResult,
    Metrics,
)
from ndvi_bench.benchmarking.report import (
    print_metrics_table,
    print_scalability_analysis,
    print_variability_table,
)
from ndvi_bench.io.base import BandReader, CodecError, ImageWriter
from ndvi_bench.processing.colorize import Colorizer
from ndvi_bench.processing.gradient import DEFAULT_GRADIENT, GradientTable
from ndvi_bench.processing.ndvi import DimensionMismatchError, calculate

# ---------------------------------------------------------------------------
# Configuration defaults
# ---------------------------------------------------------------------------
DEFAULT_ITERATIONS = 10
DEFAULT_WARMUP = 0
DEFAULT_THREAD_COUNTS = (1, 2, 4, 8, 12, 16)
DEFAULT_OUTPUT_DIR = Path("ndvi_output")

#: Per-iteration failures that exclude the iteration but not the run.
ITERATION_ERRORS = (DimensionMismatchError, CodecError, OSError)


@dataclass(frozen=True)
class BandPair:
    """NIR and RED band files of one resolution.

    Attributes
    ----------
    resolution : str
        Label used to group results (e.g. ``"10m"``).
    nir_path : Path
    red_path : Path
    """

    resolution: str
    nir_path: Path
    red_path: Path


class NDVIBenchmark:
    """Benchmark one (band pair, processor, thread count) configuration.

    Parameters
    ----------
    pair : BandPair
        Input bands.
    processor : str
        ``"CPU"`` or ``"GPU"``.
    num_threads : int
        Workers for NDVI and colorization, and codec thread hint.
    reader : BandReader
        Decoder for both bands.
    writer : ImageWriter
        Encoder for the colorized output.
    output_path : Path
        Where the colorized image is written every iteration.
    iterations : int
        Number of measurement iterations.  Default 10.
    warmup : int
        Number of warmup iterations (discarded).  Default 0.
    gradient : GradientTable
        Colorization table.  Defaults to ``DEFAULT_GRADIENT``.

    Raises
    ------
    ValueError
        If *processor* is unknown, *num_threads* < 1, *iterations* < 1
        or *warmup* < 0.
    """

    def __init__(
        self,
        pair: BandPair,
        processor: str,
        num_threads: int,
        reader: BandReader,
        writer: ImageWriter,
        output_path: Path,
        iterations: int = DEFAULT_ITERATIONS,
        warmup: int = DEFAULT_WARMUP,
        gradient: GradientTable = DEFAULT_GRADIENT,
    ) -> None:
        if processor not in PROCESSOR_KINDS:
            raise ValueError(
                f"processor must be one of {PROCESSOR_KINDS}, got {processor!r}"
            )
        if num_threads < 1:
            raise ValueError(f"num_threads must be >= 1, got {num_threads}")
        if iterations < 1:
            raise ValueError(f"iterations must be >= 1, got {iterations}")
        if warmup < 0:
            raise ValueError(f"warmup must be >= 0, got {warmup}")

        self._pair = pair
        self._processor = processor
        self._num_threads = num_threads
        self._reader = reader
        self._writer = writer
        self._output_path = Path(output_path)
        self._iterations = iterations
        self._warmup = warmup
        self._colorizer = Colorizer(gradient)

    @property
    def name(self) -> str:
        """Configuration label, e.g. ``"10m CPU 4"``."""
        if self._processor == GPU:
            return f"{self._pair.resolution} {GPU}"
        return f"{self._pair.resolution} {self._processor} {self._num_threads}"

    def run_iteration(self) -> Metrics:
        """Run the pipeline once and return its metrics.

        The decoded bands are released as soon as NDVI values exist, and
        on any failure.

        Returns
        -------
        Metrics

        Raises
        ------
        DimensionMismatchError
            If the bands differ in shape.
        CodecError, OSError
            Propagated from the reader or writer.
        """
        threads = self._num_threads
        collector = MetricsCollector(
            self._pair.resolution, self._processor, threads
        )
        start = collector.start_timing()

        nir, nir_timings = self._reader.read(self._pair.nir_path, threads)
        try:
            red, red_timings = self._reader.read(self._pair.red_path, threads)
            try:
                collector.set_band_read_metrics(nir_timings, red_timings)
                collector.set_num_tiles(
                    nir_timings.num_tiles, red_timings.num_tiles
                )

                t0 = time.perf_counter_ns()
                ndvi_stats, ndvi = calculate(nir, red, threads)
                collector.set_ndvi_metrics(
                    ndvi_stats, time.perf_counter_ns() - t0
                )
                width, height = nir.width, nir.height
            finally:
                red.release()
        finally:
            nir.release()

        t0 = time.perf_counter_ns()
        color_stats, image = self._colorizer.colorize(
            ndvi, width, height, threads
        )
        collector.set_color_metrics(color_stats, time.perf_counter_ns() - t0)
        del ndvi

        save_ns = self._writer.write(image, self._output_path, threads)
        collector.set_save_time(save_ns)

        collector.stop_timing(start)
        return collector.get_metrics()

    def run(
        self,
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> Optional[BenchmarkResult]:
        """Run warmups and measurement iterations, then average.

        Failed iterations are reported and excluded from the average.

        Parameters
        ----------
        progress_callback : callable, optional
            Called with ``(current_iteration, total_iterations)`` after
            each measurement iteration, failed or not.

        Returns
        -------
        BenchmarkResult or None
            ``None`` if no measurement iteration completed.
        """
        for _ in range(self._warmup):
            try:
                self.run_iteration()
            except ITERATION_ERRORS as exc:
                print(f"  FAIL  {self.name} warmup: {exc}")
            gc.collect()

        accumulator: Optional[MetricsAccumulator] = None
        failures = 0
        for i in range(self._iterations):
            try:
                metrics = self.run_iteration()
            except ITERATION_ERRORS as exc:
                failures += 1
                print(f"  FAIL  {self.name} iteration "
                      f"{i + 1}/{self._iterations}: {exc}")
            else:
                print(f"  OK    {self.name} iteration "
                      f"{i + 1}/{self._iterations}  "
                      f"total={metrics.total_time_s:.4f}s")
                if accumulator is None:
                    accumulator = MetricsAccumulator.initialize(metrics)
                else:
                    accumulator.aggregate(metrics)
            gc.collect()
            if progress_callback is not None:
                progress_callback(i + 1, self._iterations)

        if accumulator is None:
            return None

        return BenchmarkResult(
            metrics=accumulator.finalize(),
            total_time=accumulator.total_time_stats(),
            iterations=accumulator.iterations,
            failures=failures,
        )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------
def _section(title: str) -> None:
    """Print a section header."""
    print(f"\n{'=' * 72}")
    print(f"  {title}")
    print(f"{'=' * 72}")


def _default_codecs() -> Dict[str, Tuple[BandReader, ImageWriter]]:
    """CPU codec backed by glymur/OpenJPEG."""
    from ndvi_bench.io.jpeg2000 import JP2BandReader, JP2ImageWriter

    return {CPU: (JP2BandReader(), JP2ImageWriter())}


def _output_path(output_dir: Path, pair: BandPair, processor: str,
                 threads: int) -> Path:
    if processor == GPU:
        return output_dir / f"ndvi_{pair.resolution}_gpu.jp2"
    return output_dir / f"ndvi_{pair.resolution}_{processor.lower()}_{threads}t.jp2"


# ---------------------------------------------------------------------------
# Public API: run_suite()
# ---------------------------------------------------------------------------
def run_suite(
    pairs: Sequence[BandPair],
    *,
    thread_counts: Sequence[int] = DEFAULT_THREAD_COUNTS,
    codecs: Optional[Dict[str, Tuple[BandReader, ImageWriter]]] = None,
    iterations: int = DEFAULT_ITERATIONS,
    warmup: int = DEFAULT_WARMUP,
    output_dir: Path = DEFAULT_OUTPUT_DIR,
    gradient: GradientTable = DEFAULT_GRADIENT,
    max_threads: Optional[int] = None,
) -> List[BenchmarkResult]:
    """Benchmark every resolution x processor x thread-count configuration.

    Parameters
    ----------
    pairs : Sequence[BandPair]
        Band pairs, one per resolution.
    thread_counts : Sequence[int]
        CPU thread counts to sweep.  GPU codecs always run once with one
        thread.
    codecs : Dict[str, Tuple[BandReader, ImageWriter]], optional
        Reader/writer per processor kind.  Defaults to the glymur CPU
        codec only.
    iterations, warmup : int
        Benchmark repetition counts.
    output_dir : Path
        Directory for colorized outputs.
    gradient : GradientTable
        Colorization table.
    max_threads : int, optional
        Thread counts above this are skipped.  Defaults to
        ``os.cpu_count()``.

    Returns
    -------
    List[BenchmarkResult]
        All configurations that completed at least one iteration.
    """
    if codecs is None:
        codecs = _default_codecs()
    if max_threads is None:
        max_threads = os.cpu_count() or 1
    output_dir = Path(output_dir)

    print("NDVI Benchmark Suite")
    print(f"  Resolutions: {', '.join(p.resolution for p in pairs)}")
    print(f"  Processors:  {', '.join(codecs)}")
    print(f"  Threads:     {list(thread_counts)} (max {max_threads})")
    print(f"  Iterations:  {iterations}")
    print(f"  Warmup:      {warmup}")
    print(f"  Output:      {output_dir}")

    results: List[BenchmarkResult] = []
    for pair in pairs:
        _section(f"Resolution {pair.resolution}")
        for processor, (reader, writer) in codecs.items():
            counts = (1,) if processor == GPU else thread_counts
            for threads in counts:
                if threads > max_threads:
                    print(f"  SKIP  {pair.resolution} {processor} {threads}  "
                          f"(max available: {max_threads})")
                    continue

                bench = NDVIBenchmark(
                    pair, processor, threads, reader, writer,
                    _output_path(output_dir, pair, processor, threads),
                    iterations=iterations,
                    warmup=warmup,
                    gradient=gradient,
                )
                result = bench.run()
                if result is None:
                    print(f"  FAIL  {bench.name}: no iteration completed")
                    continue
                print(f"  AVG   {bench.name:<20s}  "
                      f"total={result.metrics.total_time_s:.4f}s  "
                      f"({result.iterations} ok, {result.failures} failed)")
                results.append(result)

    print_summary(results)
    return results


def print_summary(results: Sequence[BenchmarkResult]) -> None:
    """Print all result tables for the completed configurations."""
    _section("BENCHMARK RESULTS")

    if not results:
        print("  No benchmarks completed.")
        return

    records = [r.metrics for r in results]
    print_metrics_table(records)
    print_variability_table([(r.metrics, r.total_time) for r in results])
    print_scalability_analysis(records)
