# -*- coding: utf-8 -*-
"""
Benchmarking subpackage — metrics collection, aggregation and reporting.

Provides the per-iteration ``Metrics`` record and its collector, the
accumulator that averages repeated runs, the text reports, and the
``NDVIBenchmark`` orchestrator with its ``run_suite()`` sweep.

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

from ndvi_bench.benchmarking.models import (
    CPU,
    GPU,
    AggregatedMetrics,
    BenchmarkResult,
    Metrics,
)
from ndvi_bench.benchmarking.collector import MetricsCollector
from ndvi_bench.benchmarking.aggregate import MetricsAccumulator
from ndvi_bench.benchmarking.report import (
    bottleneck_rows,
    print_metrics_table,
    print_scalability_analysis,
    print_variability_table,
    reading_breakdown_rows,
    scalability_rows,
)
from ndvi_bench.benchmarking.suite import BandPair, NDVIBenchmark, run_suite

__all__ = [
    "AggregatedMetrics",
    "BandPair",
    "BenchmarkResult",
    "CPU",
    "GPU",
    "Metrics",
    "MetricsAccumulator",
    "MetricsCollector",
    "NDVIBenchmark",
    "bottleneck_rows",
    "print_metrics_table",
    "print_scalability_analysis",
    "print_variability_table",
    "reading_breakdown_rows",
    "run_suite",
    "scalability_rows",
]
