# -*- coding: utf-8 -*-
"""
Shared pytest fixtures for the NDVI Bench test suite.

Provides synthetic band rasters and in-memory codec doubles so the
engine and orchestrator can be exercised without JPEG2000 files.

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
from pathlib import Path
from typing import Dict, List, Tuple, Union

# Third-party
import numpy as np
import pytest

# Internal
from ndvi_bench.io.base import BandReader, CodecError, ImageWriter
from ndvi_bench.io.models import BandRaster, ColorRaster, ReadTimings


def _band_from_values(values, width: int, height: int) -> BandRaster:
    """Build a single-component band from a flat sequence."""
    data = np.asarray(values, dtype=np.float32).reshape(height, width)
    return BandRaster.from_array(data)


class FakeReader(BandReader):
    """Serves pre-built rasters keyed by path; records every call."""

    def __init__(
        self,
        bands: Dict[str, np.ndarray],
        timings: ReadTimings = None,
        processor: str = "CPU",
        fail_on: Dict[str, int] = None,
    ) -> None:
        self._bands = bands
        self._timings = timings or ReadTimings(
            file_time_ns=1_000, decode_time_ns=9_000,
            total_time_ns=10_000, num_tiles=4,
        )
        self._processor = processor
        # path -> number of upcoming reads that fail
        self._fail_on = dict(fail_on or {})
        self.calls: List[Tuple[str, int]] = []
        self.issued: List[BandRaster] = []

    @property
    def processor(self) -> str:
        return self._processor

    def read(
        self,
        path: Union[str, Path],
        threads: int,
    ) -> Tuple[BandRaster, ReadTimings]:
        key = str(path)
        self.calls.append((key, threads))
        if key not in self._bands:
            raise FileNotFoundError(f"could not open file: {key}")
        if self._fail_on.get(key, 0) > 0:
            self._fail_on[key] -= 1
            raise CodecError(f"error decoding image: {key}")
        raster = BandRaster.from_array(self._bands[key].copy())
        self.issued.append(raster)
        return raster, ReadTimings(**vars(self._timings))


class FakeWriter(ImageWriter):
    """Keeps written images in memory and reports a fixed save time."""

    def __init__(self, save_ns: int = 5_000, processor: str = "CPU") -> None:
        self._save_ns = save_ns
        self._processor = processor
        self.written: List[Tuple[str, ColorRaster, int]] = []

    @property
    def processor(self) -> str:
        return self._processor

    def write(
        self,
        image: ColorRaster,
        output_path: Union[str, Path],
        threads: int,
    ) -> int:
        self.written.append((str(output_path), image, threads))
        return self._save_ns


@pytest.fixture
def rng():
    """Seeded random generator."""
    return np.random.default_rng(1234)


@pytest.fixture
def random_bands(rng):
    """A 64 x 48 NIR/RED pair in [0, 1] with a block of zero pixels."""
    nir = rng.random((48, 64), dtype=np.float32)
    red = rng.random((48, 64), dtype=np.float32)
    nir[:4, :8] = 0.0
    red[:4, :8] = 0.0
    return BandRaster.from_array(nir), BandRaster.from_array(red)


@pytest.fixture
def band_files(rng):
    """Path-keyed arrays for ``FakeReader``: a 10m and a 20m pair."""
    return {
        "nir_10m.jp2": rng.random((40, 30), dtype=np.float32),
        "red_10m.jp2": rng.random((40, 30), dtype=np.float32),
        "nir_20m.jp2": rng.random((20, 15), dtype=np.float32),
        "red_20m.jp2": rng.random((20, 15), dtype=np.float32),
        "red_bad.jp2": rng.random((10, 10), dtype=np.float32),
    }


@pytest.fixture
def make_band():
    """Factory: ``make_band(values, width, height)`` -> ``BandRaster``."""
    return _band_from_values


@pytest.fixture
def fake_reader():
    """The ``FakeReader`` class, for tests that configure their own."""
    return FakeReader


@pytest.fixture
def fake_writer():
    """The ``FakeWriter`` class, for tests that configure their own."""
    return FakeWriter
