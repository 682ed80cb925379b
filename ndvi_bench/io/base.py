# -*- coding: utf-8 -*-
"""
Codec ABCs — contracts for band readers and image writers.

Defines ``BandReader`` (decode one band file into a ``BandRaster``) and
``ImageWriter`` (encode a ``ColorRaster`` to disk).  CPU and GPU codec
paths inherit from these, so the benchmark orchestrator drives either
without knowing which one it holds.

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
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Tuple, Union

# Internal
from ndvi_bench.io.models import BandRaster, ColorRaster, ReadTimings


class CodecError(RuntimeError):
    """A codec could not be set up, or failed to decode or encode."""


class BandReader(ABC):
    """Abstract base class for band decoders."""

    @property
    @abstractmethod
    def processor(self) -> str:
        """Return the processor kind that runs this codec.

        Returns
        -------
        str
            ``"CPU"`` or ``"GPU"``.
        """
        ...

    @abstractmethod
    def read(
        self,
        path: Union[str, Path],
        threads: int,
    ) -> Tuple[BandRaster, ReadTimings]:
        """Decode a band file.

        Parameters
        ----------
        path : str or Path
            Image file to decode.
        threads : int
            Decoder thread hint.  Codecs without threading ignore it.

        Returns
        -------
        Tuple[BandRaster, ReadTimings]
            A raster the caller exclusively owns, and per-stage timings.

        Raises
        ------
        FileNotFoundError
            If *path* does not exist.
        CodecError
            If the decoder cannot be set up or decoding fails.
        """
        ...


class ImageWriter(ABC):
    """Abstract base class for color image encoders."""

    @property
    @abstractmethod
    def processor(self) -> str:
        """Return ``"CPU"`` or ``"GPU"``."""
        ...

    @abstractmethod
    def write(
        self,
        image: ColorRaster,
        output_path: Union[str, Path],
        threads: int,
    ) -> int:
        """Encode and save an RGBA image.

        Parameters
        ----------
        image : ColorRaster
            Image to encode.
        output_path : str or Path
            Destination file.  Missing parent directories are created.
        threads : int
            Encoder thread hint.

        Returns
        -------
        int
            Time spent writing, in nanoseconds.

        Raises
        ------
        OSError
            If the output directory cannot be created.
        CodecError
            If the encoder cannot be set up or encoding fails.
        """
        ...
