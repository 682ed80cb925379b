# -*- coding: utf-8 -*-
"""
NDVI Colorizer — parallel map from NDVI values to an RGBA raster.

Each worker converts a contiguous pixel range through the injected
``GradientTable`` and writes its own byte range of a buffer allocated
up front.  Alpha is always opaque.

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
from dataclasses import dataclass
from typing import Tuple

# Third-party
import numpy as np

# Internal
from ndvi_bench.io.models import ColorRaster
from ndvi_bench.processing.gradient import DEFAULT_GRADIENT, GradientTable
from ndvi_bench.processing.parallel import parallel_chunks


@dataclass(frozen=True)
class ColorStatistics:
    """Output characteristics of one colorization.

    Attributes
    ----------
    image_size : int
        RGBA buffer size in bytes (``width * height * 4``).
    """

    image_size: int


class Colorizer:
    """Convert NDVI rasters to RGBA images.

    Parameters
    ----------
    gradient : GradientTable
        Breakpoint table used for every lookup.  Defaults to
        ``DEFAULT_GRADIENT``.
    """

    def __init__(self, gradient: GradientTable = DEFAULT_GRADIENT) -> None:
        self._gradient = gradient

    @property
    def gradient(self) -> GradientTable:
        return self._gradient

    def colorize(
        self,
        ndvi: np.ndarray,
        width: int,
        height: int,
        worker_count: int,
    ) -> Tuple[ColorStatistics, ColorRaster]:
        """Colorize an NDVI raster.

        Parameters
        ----------
        ndvi : np.ndarray
            Flat float64 NDVI values, row-major.
        width, height : int
            Raster dimensions.
        worker_count : int
            Number of parallel workers.  Must be >= 1.

        Returns
        -------
        Tuple[ColorStatistics, ColorRaster]

        Raises
        ------
        ValueError
            If *ndvi* does not hold ``width * height`` values or
            *worker_count* < 1.
        """
        pixel_count = width * height
        if ndvi.size != pixel_count:
            raise ValueError(
                f"NDVI raster has {ndvi.size} values, expected "
                f"{pixel_count} ({width} x {height})"
            )
        if worker_count < 1:
            raise ValueError(f"worker count must be >= 1, got {worker_count}")

        image = ColorRaster.empty(width, height)
        rgba = image.pixels.reshape(pixel_count, 4)
        gradient = self._gradient

        def _work(worker: int, start: int, end: int) -> None:
            if start == end:
                return
            rgba[start:end, :3] = gradient.colors_for(ndvi[start:end])
            rgba[start:end, 3] = 255

        parallel_chunks(pixel_count, worker_count, _work)

        return ColorStatistics(image_size=pixel_count * 4), image


def colorize(
    ndvi: np.ndarray,
    width: int,
    height: int,
    worker_count: int,
    gradient: GradientTable = DEFAULT_GRADIENT,
) -> Tuple[ColorStatistics, ColorRaster]:
    """Colorize with a one-off ``Colorizer``; see ``Colorizer.colorize``."""
    return Colorizer(gradient).colorize(ndvi, width, height, worker_count)
