# -*- coding: utf-8 -*-
"""
Metrics Aggregation — running sums across iterations, then averages.

``MetricsAccumulator`` is seeded from the first completed iteration,
folds every further iteration into running sums (and running NDVI
extremes), and finalizes into a per-iteration average record.  It also
keeps each iteration's total time so the spread across runs can be
reported.

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
from typing import List, Optional

# Internal
from ndvi_bench.benchmarking.models import (
    COUNT_FIELDS,
    DURATION_FIELDS,
    AggregatedMetrics,
    Metrics,
)


def _fold_extremes(acc: Metrics, other: Metrics) -> None:
    """Widen the running NDVI extremes of *acc* to cover *other*."""
    acc.ndvi_min = min(acc.ndvi_min, other.ndvi_min)
    acc.ndvi_max = max(acc.ndvi_max, other.ndvi_max)


class MetricsAccumulator:
    """Running totals over the iterations of one benchmark configuration.

    Use ``initialize()`` to create one; the constructor is internal.

    Examples
    --------
    >>> acc = MetricsAccumulator.initialize(first)
    >>> acc.aggregate(second)
    >>> averaged = acc.finalize()
    """

    def __init__(self, totals: Metrics, samples: List[int]) -> None:
        self._totals = totals
        self._samples = samples

    @classmethod
    def initialize(cls, first: Metrics) -> 'MetricsAccumulator':
        """Seed an accumulator from the first iteration's record.

        The NDVI extremes are reset to +/- infinity before *first* is
        folded in, so every real observation takes part in the
        comparison.

        Parameters
        ----------
        first : Metrics
            Copied; never mutated.

        Returns
        -------
        MetricsAccumulator
        """
        totals = first.copy()
        # Empty range; the first record widens it like any later one.
        totals.ndvi_min = math.inf
        totals.ndvi_max = -math.inf
        _fold_extremes(totals, first)
        return cls(totals, [first.total_time_ns])

    @property
    def iterations(self) -> int:
        """Number of records folded in so far."""
        return len(self._samples)

    @property
    def totals(self) -> Metrics:
        """Copy of the running totals."""
        return self._totals.copy()

    def aggregate(self, other: Metrics) -> None:
        """Fold another iteration's record into the running totals.

        Durations, counts and the NDVI average are summed; NDVI min and
        max are combined elementwise.

        Parameters
        ----------
        other : Metrics
            Read only.
        """
        acc = self._totals
        for name in DURATION_FIELDS + COUNT_FIELDS:
            setattr(acc, name, getattr(acc, name) + getattr(other, name))
        _fold_extremes(acc, other)
        acc.ndvi_average += other.ndvi_average
        self._samples.append(other.total_time_ns)

    def finalize(self, iteration_count: Optional[int] = None) -> Metrics:
        """Produce the per-iteration average record.

        Parameters
        ----------
        iteration_count : int, optional
            Divisor.  Defaults to the number of folded iterations.

        Returns
        -------
        Metrics
            New record: durations and counts floor-divided, NDVI average
            float-divided, NDVI min/max unchanged.

        Raises
        ------
        ValueError
            If *iteration_count* < 1.
        """
        n = self.iterations if iteration_count is None else iteration_count
        if n < 1:
            raise ValueError(f"iteration_count must be >= 1, got {n}")

        result = self._totals.copy()
        for name in DURATION_FIELDS + COUNT_FIELDS:
            setattr(result, name, getattr(result, name) // n)
        result.ndvi_average = result.ndvi_average / n
        return result

    def total_time_stats(self) -> AggregatedMetrics:
        """Distribution of per-iteration total times, in seconds."""
        return AggregatedMetrics.from_values(
            [ns / 1e9 for ns in self._samples]
        )
