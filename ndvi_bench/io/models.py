# -*- coding: utf-8 -*-
"""
Raster Data Models — decoded bands, read timings, and color output.

``BandRaster`` is what a ``BandReader`` hands over: normalized float32
components the caller exclusively owns until it calls ``release()``.
``ColorRaster`` is the RGBA buffer an ``ImageWriter`` consumes.

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
from dataclasses import dataclass, field
from typing import List

# Third-party
import numpy as np


@dataclass
class BandRaster:
    """One decoded spectral band.

    Attributes
    ----------
    width : int
        Columns.
    height : int
        Rows.
    components : int
        Number of components in the source image.
    data : List[np.ndarray]
        One flat float32 array of ``width * height`` samples in [0, 1]
        per component, row-major.
    """

    width: int
    height: int
    components: int
    data: List[np.ndarray] = field(default_factory=list)

    def __post_init__(self) -> None:
        pixels = self.width * self.height
        for i, comp in enumerate(self.data):
            if comp.size != pixels:
                raise ValueError(
                    f"component {i} has {comp.size} samples, expected "
                    f"{pixels} ({self.width} x {self.height})"
                )

    @classmethod
    def from_array(cls, array: np.ndarray) -> 'BandRaster':
        """Build from a ``(rows, cols)`` or ``(rows, cols, comps)`` array.

        Parameters
        ----------
        array : np.ndarray
            Normalized samples.

        Returns
        -------
        BandRaster
        """
        if array.ndim == 2:
            array = array[:, :, np.newaxis]
        height, width, comps = array.shape
        data = [
            np.ascontiguousarray(array[:, :, c], dtype=np.float32).ravel()
            for c in range(comps)
        ]
        return cls(width=width, height=height, components=comps, data=data)

    @property
    def pixel_count(self) -> int:
        """Return ``width * height``."""
        return self.width * self.height

    @property
    def released(self) -> bool:
        """Whether the backing arrays have been dropped."""
        return not self.data

    def band(self, component: int = 0) -> np.ndarray:
        """Return the flat samples of one component.

        Raises
        ------
        RuntimeError
            If the raster was already released.
        """
        if self.released:
            raise RuntimeError("band raster has been released")
        return self.data[component]

    def release(self) -> None:
        """Drop the backing arrays."""
        self.data = []


@dataclass
class ReadTimings:
    """Per-stage timings reported by a ``BandReader``.

    Attributes
    ----------
    file_time_ns : int
        Opening the file and parsing its header.
    decode_time_ns : int
        Decoding the codestream into normalized samples.
    total_time_ns : int
        Whole ``read()`` call.
    num_tiles : int
        Tiles in the codestream (1 when unknown).
    """

    file_time_ns: int = 0
    decode_time_ns: int = 0
    total_time_ns: int = 0
    num_tiles: int = 1


@dataclass
class ColorRaster:
    """RGBA byte buffer, 4 bytes per pixel, row-major.

    Attributes
    ----------
    width : int
    height : int
    pixels : np.ndarray
        Flat uint8 array of ``width * height * 4`` bytes.
    """

    width: int
    height: int
    pixels: np.ndarray

    @classmethod
    def empty(cls, width: int, height: int) -> 'ColorRaster':
        """Allocate an uninitialized buffer for *width* x *height*."""
        return cls(
            width=width,
            height=height,
            pixels=np.empty(width * height * 4, dtype=np.uint8),
        )

    @property
    def nbytes(self) -> int:
        """Buffer size in bytes."""
        return int(self.pixels.nbytes)

    def as_image(self) -> np.ndarray:
        """Return a ``(height, width, 4)`` view of the buffer."""
        return self.pixels.reshape(self.height, self.width, 4)
