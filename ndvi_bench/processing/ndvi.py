# -*- coding: utf-8 -*-
"""
NDVI Calculator — parallel map-reduce over NIR and RED band rasters.

Computes ``(NIR - RED) / (NIR + RED)`` per pixel into a float64 raster
and reduces per-worker minimum, maximum, sum and no-data count into
``NDVIStatistics``.  Pixels whose band sum is not positive are set to
exactly 0.0 and counted as no-data.

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
import math
from dataclasses import dataclass
from typing import Tuple

# Third-party
import numpy as np

# Internal
from ndvi_bench.io.models import BandRaster
from ndvi_bench.processing.parallel import parallel_chunks


class DimensionMismatchError(ValueError):
    """NIR and RED rasters do not share the same width and height."""

    def __init__(
        self,
        nir_width: int,
        nir_height: int,
        red_width: int,
        red_height: int,
    ) -> None:
        self.nir_width = nir_width
        self.nir_height = nir_height
        self.red_width = red_width
        self.red_height = red_height
        super().__init__(
            "NIR and RED images have different dimensions: "
            f"NIR {nir_width}x{nir_height}, RED {red_width}x{red_height}"
        )


@dataclass(frozen=True)
class NDVIStatistics:
    """Aggregate statistics of one NDVI raster.

    Attributes
    ----------
    total_pixels : int
    no_data_pixels : int
        Pixels with ``NIR + RED <= 0``.
    min : float
    max : float
    average : float
        Sum of all NDVI values (no-data included as 0.0) over
        ``total_pixels``.
    """

    total_pixels: int
    no_data_pixels: int
    min: float
    max: float
    average: float


@dataclass(frozen=True)
class _Partial:
    """Reduction state of one worker's chunk."""

    min: float
    max: float
    sum: float
    no_data: int

    def merge(self, other: '_Partial') -> '_Partial':
        return _Partial(
            min=min(self.min, other.min),
            max=max(self.max, other.max),
            sum=self.sum + other.sum,
            no_data=self.no_data + other.no_data,
        )


_EMPTY = _Partial(min=math.inf, max=-math.inf, sum=0.0, no_data=0)


def calculate(
    nir: BandRaster,
    red: BandRaster,
    worker_count: int,
) -> Tuple[NDVIStatistics, np.ndarray]:
    """Compute the NDVI raster and its statistics.

    Parameters
    ----------
    nir : BandRaster
        Near-infrared band (first component is used).
    red : BandRaster
        Red band (first component is used).
    worker_count : int
        Number of parallel workers.  Must be >= 1.

    Returns
    -------
    Tuple[NDVIStatistics, np.ndarray]
        Statistics and a flat float64 raster in the bands' pixel order.
        The raster is owned by the caller.

    Raises
    ------
    DimensionMismatchError
        If the bands differ in width or height.
    ValueError
        If *worker_count* < 1.
    """
    if nir.width != red.width or nir.height != red.height:
        raise DimensionMismatchError(
            nir.width, nir.height, red.width, red.height
        )
    if worker_count < 1:
        raise ValueError(f"worker count must be >= 1, got {worker_count}")

    pixel_count = nir.width * nir.height
    nir_data = nir.band(0)
    red_data = red.band(0)
    ndvi = np.empty(pixel_count, dtype=np.float64)

    def _work(worker: int, start: int, end: int) -> _Partial:
        if start == end:
            return _EMPTY
        n = nir_data[start:end].astype(np.float64)
        r = red_data[start:end].astype(np.float64)
        total = n + r
        valid = total > 0
        out = ndvi[start:end]
        out.fill(0.0)
        np.divide(n - r, total, out=out, where=valid)
        return _Partial(
            min=float(out.min()),
            max=float(out.max()),
            sum=float(out.sum()),
            no_data=int(valid.size - np.count_nonzero(valid)),
        )

    merged = parallel_chunks(
        pixel_count, worker_count, _work, combine=_Partial.merge
    )

    if pixel_count == 0:
        stats = NDVIStatistics(0, 0, 0.0, 0.0, 0.0)
    else:
        stats = NDVIStatistics(
            total_pixels=pixel_count,
            no_data_pixels=merged.no_data,
            min=merged.min,
            max=merged.max,
            average=merged.sum / pixel_count,
        )
    return stats, ndvi
