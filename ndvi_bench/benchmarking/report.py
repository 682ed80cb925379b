# -*- coding: utf-8 -*-
"""
Benchmark Reports — bottleneck, reading, variability and scalability tables.

Row builders (``bottleneck_rows``, ``reading_breakdown_rows``,
``scalability_rows``) derive percentages, unit scaling and speedups from
finalized ``Metrics`` records without mutating them.  The ``print_*``
functions render those rows as fixed-width text tables on stdout.

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
import math
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

# Internal
from ndvi_bench.benchmarking.models import CPU, AggregatedMetrics, Metrics

_NS_PER_US = 1_000
_NS_PER_MS = 1_000_000
_NS_PER_S = 1_000_000_000


def magnitude_and_unit(duration_ns: int) -> Tuple[float, str]:
    """Rescale a duration to its most readable unit.

    Parameters
    ----------
    duration_ns : int
        Duration in nanoseconds.

    Returns
    -------
    Tuple[float, str]
        Value and one of ``"ns"``, ``"µs"``, ``"ms"``, ``"s"``.
    """
    if duration_ns < _NS_PER_US:
        return float(duration_ns), "ns"
    if duration_ns < _NS_PER_MS:
        return duration_ns / _NS_PER_US, "µs"
    if duration_ns < _NS_PER_S:
        return duration_ns / _NS_PER_MS, "ms"
    return duration_ns / _NS_PER_S, "s"


def format_number(num: float, width: int) -> str:
    """Format *num* with about *width* significant characters.

    Decimals fill whatever the integer part leaves (one character is
    kept for the point); numbers whose integer part already fills
    *width* are printed as integers.
    """
    if not math.isfinite(num):
        return str(num)
    integer_len = len(str(int(math.floor(abs(num)))))
    precision = max(width - integer_len - 1, 0)
    if precision > 0:
        return f"{num:.{precision}f}"
    return str(int(num))


def _percent(part: float, whole: float) -> float:
    return part / whole * 100.0 if whole > 0 else 0.0


@dataclass(frozen=True)
class StageShare:
    """One stage's duration and share of the total time."""

    duration_ns: int
    percent: float

    def render(self) -> str:
        value, unit = magnitude_and_unit(self.duration_ns)
        return (f"{format_number(value, 5):>7s}{unit:<2s} "
                f"{format_number(self.percent, 5):>6s}%")


@dataclass(frozen=True)
class BottleneckRow:
    """Per-stage time breakdown of one configuration."""

    resolution: str
    label: str
    nir_read: StageShare
    red_read: StageShare
    ndvi: StageShare
    color: StageShare
    save: StageShare
    total: StageShare


@dataclass(frozen=True)
class ReadingRow:
    """Reading and output-size breakdown of one configuration."""

    resolution: str
    label: str
    no_data_mp: float
    no_data_percent: float
    tiles_nir: int
    tiles_red: int
    pixels_value: float
    pixels_unit: str
    image_size_mb: float


@dataclass(frozen=True)
class ScalabilityRow:
    """Speedup and efficiency of one configuration against its baseline.

    ``baseline_fallback`` is ``True`` when the resolution group had no
    single-thread CPU record and its first record served as baseline.
    """

    resolution: str
    label: str
    processor: str
    num_threads: int
    time_s: float
    speedup: float
    efficiency: float
    baseline_fallback: bool


def bottleneck_rows(records: Sequence[Metrics]) -> List[BottleneckRow]:
    """Compute each stage's share of total time.

    The total is reported as exactly 100 %.
    """
    rows = []
    for m in records:
        total = m.total_time_ns

        def share(ns: int) -> StageShare:
            return StageShare(ns, _percent(ns, total))

        rows.append(BottleneckRow(
            resolution=m.resolution,
            label=m.label,
            nir_read=share(m.file_time_nir_ns + m.decode_time_nir_ns),
            red_read=share(m.file_time_red_ns + m.decode_time_red_ns),
            ndvi=share(m.ndvi_time_ns),
            color=share(m.color_time_ns),
            save=share(m.save_time_ns),
            total=StageShare(total, 100.0),
        ))
    return rows


def _scale_pixels(pixels: int) -> Tuple[float, str]:
    if pixels >= 1_000_000:
        return pixels / 1_000_000, "MP"
    if pixels >= 1_000:
        return pixels / 1_000, "KP"
    return float(pixels), "P"


def reading_breakdown_rows(records: Sequence[Metrics]) -> List[ReadingRow]:
    """Summarize no-data coverage, tiling, pixel count and output size."""
    rows = []
    for m in records:
        value, unit = _scale_pixels(m.pixels)
        rows.append(ReadingRow(
            resolution=m.resolution,
            label=m.label,
            no_data_mp=m.no_data_pixels / 1_000_000,
            no_data_percent=_percent(m.no_data_pixels, m.pixels),
            tiles_nir=m.num_tiles_nir,
            tiles_red=m.num_tiles_red,
            pixels_value=value,
            pixels_unit=unit,
            image_size_mb=m.image_size_bytes / (1024 * 1024),
        ))
    return rows


def group_by_resolution(
    records: Sequence[Metrics],
) -> Dict[str, List[Metrics]]:
    """Group records by resolution label, in first-seen order."""
    groups: Dict[str, List[Metrics]] = {}
    for m in records:
        groups.setdefault(m.resolution, []).append(m)
    return groups


def scalability_rows(records: Sequence[Metrics]) -> List[ScalabilityRow]:
    """Compute speedup and efficiency per resolution group.

    The baseline of a group is its first CPU record with one thread.  If
    the group has none, its first record is used and every row of the
    group is flagged with ``baseline_fallback``.  GPU efficiency equals
    its speedup (no thread-count denominator).
    """
    rows = []
    for resolution, group in group_by_resolution(records).items():
        baseline = next(
            (m for m in group if m.processor == CPU and m.num_threads == 1),
            None,
        )
        fallback = baseline is None
        if fallback:
            baseline = group[0]
        base_time = baseline.total_time_s

        for m in group:
            time_s = m.total_time_s
            speedup = base_time / time_s if time_s > 0 else math.inf
            if m.processor == CPU:
                efficiency = speedup / m.num_threads
            else:
                efficiency = speedup
            rows.append(ScalabilityRow(
                resolution=resolution,
                label=m.label,
                processor=m.processor,
                num_threads=m.num_threads,
                time_s=time_s,
                speedup=speedup,
                efficiency=efficiency,
                baseline_fallback=fallback,
            ))
    return rows


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------
_STAGE_W = 17


def print_metrics_table(records: Sequence[Metrics]) -> None:
    """Print the bottleneck analysis and image reading breakdown."""
    stages = ("TTR NIR", "TTR RED", "NDVI", "Color Proc.", "Saving", "Total")

    print("\n  Bottleneck Analysis")
    print(f"  {'Res':<8s}  {'Processor':<10s}  "
          + "  ".join(f"{s:>{_STAGE_W}s}" for s in stages))
    print(f"  {'-' * 8}  {'-' * 10}  "
          + "  ".join("-" * _STAGE_W for _ in stages))
    for row in bottleneck_rows(records):
        cells = (row.nir_read, row.red_read, row.ndvi, row.color,
                 row.save, row.total)
        print(f"  {row.resolution:<8s}  {row.label:<10s}  "
              + "  ".join(f"{c.render():>{_STAGE_W}s}" for c in cells))

    print("\n  Image Reading Breakdown")
    print(f"  {'Res':<8s}  {'Processor':<10s}  {'Uncovered Region':>18s}  "
          f"{'NIR Tiles':>9s}  {'RED Tiles':>9s}  {'Total':>9s}  "
          f"{'Img Size':>10s}")
    print(f"  {'-' * 8}  {'-' * 10}  {'-' * 18}  {'-' * 9}  {'-' * 9}  "
          f"{'-' * 9}  {'-' * 10}")
    for row in reading_breakdown_rows(records):
        uncovered = (f"{format_number(row.no_data_mp, 5)}MP "
                     f"{format_number(row.no_data_percent, 5)}%")
        total = f"{format_number(row.pixels_value, 5)} {row.pixels_unit}"
        size = f"{format_number(row.image_size_mb, 5)} MB"
        print(f"  {row.resolution:<8s}  {row.label:<10s}  {uncovered:>18s}  "
              f"{row.tiles_nir:>9d}  {row.tiles_red:>9d}  {total:>9s}  "
              f"{size:>10s}")


def print_variability_table(
    entries: Sequence[Tuple[Metrics, AggregatedMetrics]],
) -> None:
    """Print the spread of total time across iterations per configuration."""
    print("\n  Run-to-Run Variability (total time)")
    print(f"  {'Res':<8s}  {'Processor':<10s}  {'Runs':>5s}  "
          f"{'Mean (s)':>10s}  {'Stddev (s)':>10s}  {'P95 (s)':>10s}  "
          f"{'CV':>6s}")
    print(f"  {'-' * 8}  {'-' * 10}  {'-' * 5}  {'-' * 10}  {'-' * 10}  "
          f"{'-' * 10}  {'-' * 6}")
    for m, stats in entries:
        print(f"  {m.resolution:<8s}  {m.label:<10s}  {stats.count:>5d}  "
              f"{stats.mean:>10.4f}  {stats.stddev:>10.4f}  "
              f"{stats.p95:>10.4f}  {stats.cv:>6.2%}")


def print_scalability_analysis(records: Sequence[Metrics]) -> None:
    """Print speedup and efficiency tables, one per resolution."""
    print("\n--- SCALABILITY ANALYSIS ---")

    rows = scalability_rows(records)
    by_res: Dict[str, List[ScalabilityRow]] = {}
    for row in rows:
        by_res.setdefault(row.resolution, []).append(row)

    for resolution, group in by_res.items():
        print(f"\nResolution: {resolution}")
        if group[0].baseline_fallback:
            print(f"  (no CPU 1 run; baseline is {group[0].label})")
        print(f"  {'Processor':<10s}  {'Time (s)':>10s}  {'Speedup':>7s}  "
              f"{'Efficiency':>10s}")
        print(f"  {'-' * 10}  {'-' * 10}  {'-' * 7}  {'-' * 10}")
        for row in group:
            print(f"  {row.label:<10s}  {row.time_s:>10.3f}  "
                  f"{row.speedup:>7.2f}  {row.efficiency:>10.2f}")
