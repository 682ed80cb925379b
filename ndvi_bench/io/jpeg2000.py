# -*- coding: utf-8 -*-
"""
JPEG2000 CPU Codec — glymur/OpenJPEG band reader and RGBA writer.

``JP2BandReader`` opens a JPEG2000 file, decodes it with OpenJPEG and
normalizes every component to [0, 1] float32 by the component bit
depth.  ``JP2ImageWriter`` encodes a ``ColorRaster`` as a 4-component
JP2.  Both honor the thread hint through glymur's ``lib.num_threads``
option when the linked OpenJPEG supports it.

Dependencies
------------
glymur
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
import time
from pathlib import Path
from typing import Tuple, Union

# Third-party
import glymur
import numpy as np

# Internal
from ndvi_bench.io.base import BandReader, CodecError, ImageWriter
from ndvi_bench.io.models import BandRaster, ColorRaster, ReadTimings


def _set_threads(threads: int) -> None:
    """Configure OpenJPEG worker threads, warning when unsupported.

    The option is process-wide, so a single-thread hint resets it rather
    than inheriting the count of an earlier configuration.
    """
    threads = max(threads, 1)
    try:
        glymur.set_option("lib.num_threads", threads)
    except RuntimeError as exc:
        # Without thread support OpenJPEG is already single-threaded.
        if threads > 1:
            print(f"  WARN  could not configure {threads} codec threads, "
                  f"continuing with defaults: {exc}")


def _tile_count(jp2: glymur.Jp2k) -> int:
    """Number of tiles declared by the SIZ segment (1 if unavailable)."""
    try:
        siz = jp2.codestream.segment[1]
        cols = math.ceil((siz.xsiz - siz.xtosiz) / siz.xtsiz)
        rows = math.ceil((siz.ysiz - siz.ytosiz) / siz.ytsiz)
    except (AttributeError, IndexError, ZeroDivisionError):
        return 1
    return max(int(cols * rows), 1)


def _bit_depths(jp2: glymur.Jp2k, comps: int) -> Tuple[int, ...]:
    """Per-component precision from the SIZ segment."""
    try:
        depths = tuple(jp2.codestream.segment[1].bitdepth)
    except (AttributeError, IndexError):
        depths = ()
    if len(depths) != comps:
        return (16,) * comps
    return depths


class JP2BandReader(BandReader):
    """Decode JPEG2000 band files on the CPU with OpenJPEG."""

    @property
    def processor(self) -> str:
        """Return ``"CPU"``."""
        return "CPU"

    def read(
        self,
        path: Union[str, Path],
        threads: int,
    ) -> Tuple[BandRaster, ReadTimings]:
        """Decode a band file.

        Samples are divided by ``2**bitdepth - 1`` so the full code range
        maps onto [0, 1].

        Parameters
        ----------
        path : str or Path
        threads : int

        Returns
        -------
        Tuple[BandRaster, ReadTimings]

        Raises
        ------
        FileNotFoundError
            If *path* does not exist.
        CodecError
            If the header cannot be parsed or decoding fails.
        """
        path = Path(path)
        timings = ReadTimings()
        t_total = time.perf_counter_ns()

        if not path.is_file():
            raise FileNotFoundError(f"could not open file: {path}")

        t_file = time.perf_counter_ns()
        try:
            jp2 = glymur.Jp2k(str(path))
        except (OSError, RuntimeError, ValueError) as exc:
            raise CodecError(f"error reading image header: {path}") from exc
        timings.file_time_ns = time.perf_counter_ns() - t_file

        t_decode = time.perf_counter_ns()
        _set_threads(threads)
        try:
            samples = jp2[:]
        except (OSError, RuntimeError, ValueError) as exc:
            raise CodecError(f"error decoding image: {path}") from exc

        if samples.ndim == 2:
            samples = samples[:, :, np.newaxis]
        depths = _bit_depths(jp2, samples.shape[2])
        scale = np.array(
            [1.0 / (2 ** d - 1) for d in depths], dtype=np.float32
        )
        raster = BandRaster.from_array(samples.astype(np.float32) * scale)
        del samples

        timings.decode_time_ns = time.perf_counter_ns() - t_decode
        timings.num_tiles = _tile_count(jp2)
        timings.total_time_ns = time.perf_counter_ns() - t_total
        return raster, timings


class JP2ImageWriter(ImageWriter):
    """Encode RGBA images to JPEG2000 on the CPU with OpenJPEG.

    Parameters
    ----------
    numres : int
        Number of wavelet resolution levels.  Default 6; reduced
        automatically for images too small to support it.
    """

    def __init__(self, numres: int = 6) -> None:
        if numres < 1:
            raise ValueError(f"numres must be >= 1, got {numres}")
        self._numres = numres

    @property
    def processor(self) -> str:
        """Return ``"CPU"``."""
        return "CPU"

    def write(
        self,
        image: ColorRaster,
        output_path: Union[str, Path],
        threads: int,
    ) -> int:
        """Encode *image* to *output_path*.

        Returns
        -------
        int
            Elapsed nanoseconds, directory creation included.

        Raises
        ------
        OSError
            If the parent directory cannot be created.
        CodecError
            If OpenJPEG fails to encode or write the file.
        """
        t0 = time.perf_counter_ns()
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        # Each resolution level halves the smallest dimension.
        smallest = max(min(image.width, image.height), 1)
        numres = max(1, min(self._numres, int(math.log2(smallest)) + 1))

        _set_threads(threads)
        try:
            glymur.Jp2k(
                str(output_path), data=image.as_image(), numres=numres,
            )
        except (OSError, RuntimeError, ValueError) as exc:
            raise CodecError(
                f"failed to encode JPEG2000 image: {output_path}"
            ) from exc

        return time.perf_counter_ns() - t0
