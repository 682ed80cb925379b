# -*- coding: utf-8 -*-
"""
CLI entry point for the NDVI benchmark suite.

Run with::

    python -m ndvi_bench --band 10m B08_10m.jp2 B04_10m.jp2
    python -m ndvi_bench --band 10m B08_10m.jp2 B04_10m.jp2 \\
        --band 20m B08_20m.jp2 B04_20m.jp2 -n 5 --threads 1 2 4

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
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from ndvi_bench.benchmarking.suite import (
    DEFAULT_ITERATIONS,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_THREAD_COUNTS,
    DEFAULT_WARMUP,
    BandPair,
    run_suite,
)


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="python -m ndvi_bench",
        description="NDVI CPU/GPU Codec Benchmark",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Each --band adds one resolution: a label, the NIR file and the RED file.
Thread counts above the number of available CPUs are skipped.

Examples:
  python -m ndvi_bench --band 10m B08_10m.jp2 B04_10m.jp2
  python -m ndvi_bench --band 60m B08_60m.jp2 B04_60m.jp2 -n 3
  python -m ndvi_bench --band 10m B08.jp2 B04.jp2 --threads 1 4 8
""",
    )
    parser.add_argument(
        "--band", nargs=3, action="append", required=True,
        metavar=("RES", "NIR", "RED"),
        help="Resolution label, NIR band file and RED band file",
    )
    parser.add_argument(
        "--threads", type=int, nargs="+", default=list(DEFAULT_THREAD_COUNTS),
        help=("CPU thread counts "
              f"(default: {' '.join(map(str, DEFAULT_THREAD_COUNTS))})"),
    )
    parser.add_argument(
        "-n", "--iterations", type=int, default=DEFAULT_ITERATIONS,
        help=f"Measurement iterations (default: {DEFAULT_ITERATIONS})",
    )
    parser.add_argument(
        "--warmup", type=int, default=DEFAULT_WARMUP,
        help=f"Warmup iterations (default: {DEFAULT_WARMUP})",
    )
    parser.add_argument(
        "--output-dir", type=Path, default=DEFAULT_OUTPUT_DIR,
        help=f"Directory for colorized outputs (default: {DEFAULT_OUTPUT_DIR})",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Parse arguments and run the benchmark suite."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.iterations < 1:
        parser.error(f"iterations must be >= 1, got {args.iterations}")
    if args.warmup < 0:
        parser.error(f"warmup must be >= 0, got {args.warmup}")
    if any(t < 1 for t in args.threads):
        parser.error(f"thread counts must be >= 1, got {args.threads}")

    pairs = [
        BandPair(resolution=res, nir_path=Path(nir), red_path=Path(red))
        for res, nir, red in args.band
    ]

    results = run_suite(
        pairs,
        thread_counts=args.threads,
        iterations=args.iterations,
        warmup=args.warmup,
        output_dir=args.output_dir,
    )

    sys.exit(0 if results else 1)


if __name__ == "__main__":
    main()
