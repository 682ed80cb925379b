# -*- coding: utf-8 -*-
"""
Tests for the benchmark orchestrator and CLI.

Uses the in-memory ``fake_reader`` / ``fake_writer`` codecs from
``conftest`` so every pipeline stage runs without JPEG2000 files.

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

# Third-party
import pytest

# Internal
import ndvi_bench.__main__ as cli
from ndvi_bench.benchmarking.models import BenchmarkResult
from ndvi_bench.benchmarking.suite import (
    BandPair,
    NDVIBenchmark,
    print_summary,
    run_suite,
)
from ndvi_bench.io.base import CodecError
from ndvi_bench.processing.ndvi import DimensionMismatchError

PAIR_10M = BandPair("10m", Path("nir_10m.jp2"), Path("red_10m.jp2"))
PAIR_20M = BandPair("20m", Path("nir_20m.jp2"), Path("red_20m.jp2"))
PAIR_BAD = BandPair("bad", Path("nir_10m.jp2"), Path("red_bad.jp2"))


def _bench(reader, writer, pair=PAIR_10M, threads=2, **kwargs):
    return NDVIBenchmark(pair, "CPU", threads, reader, writer,
                         Path("out.jp2"), **kwargs)


# ---------------------------------------------------------------------------
# NDVIBenchmark
# ---------------------------------------------------------------------------

class TestRunIteration:
    """One pass of read -> NDVI -> colorize -> write."""

    def test_metrics_populated(self, fake_reader, fake_writer, band_files):
        reader, writer = fake_reader(band_files), fake_writer(save_ns=5_000)
        m = _bench(reader, writer).run_iteration()

        assert (m.resolution, m.processor, m.num_threads) == ("10m", "CPU", 2)
        assert m.pixels == 40 * 30
        assert m.image_size_bytes == 40 * 30 * 4
        assert m.reading_time_ns == 20_000
        assert m.file_time_nir_ns == 1_000
        assert m.decode_time_red_ns == 9_000
        assert (m.num_tiles_nir, m.num_tiles_red) == (4, 4)
        assert m.save_time_ns == 5_000
        assert m.ndvi_time_ns > 0
        assert m.total_time_ns >= m.ndvi_time_ns + m.color_time_ns
        assert -1.0 <= m.ndvi_min <= m.ndvi_average <= m.ndvi_max <= 1.0

    def test_reads_nir_then_red_with_thread_hint(
        self, fake_reader, fake_writer, band_files,
    ):
        reader = fake_reader(band_files)
        _bench(reader, fake_writer(), threads=3).run_iteration()
        assert reader.calls == [("nir_10m.jp2", 3), ("red_10m.jp2", 3)]

    def test_writes_colorized_image(
        self, fake_reader, fake_writer, band_files,
    ):
        writer = fake_writer()
        _bench(fake_reader(band_files), writer).run_iteration()

        (path, image, threads), = writer.written
        assert path == "out.jp2"
        assert threads == 2
        assert (image.width, image.height) == (30, 40)
        assert (image.as_image()[:, :, 3] == 255).all()

    def test_bands_released(self, fake_reader, fake_writer, band_files):
        reader = fake_reader(band_files)
        _bench(reader, fake_writer()).run_iteration()
        assert len(reader.issued) == 2
        assert all(band.released for band in reader.issued)

    def test_dimension_mismatch_releases_bands(
        self, fake_reader, fake_writer, band_files,
    ):
        reader = fake_reader(band_files)
        writer = fake_writer()
        with pytest.raises(DimensionMismatchError):
            _bench(reader, writer, pair=PAIR_BAD).run_iteration()
        assert all(band.released for band in reader.issued)
        assert writer.written == []

    def test_red_failure_releases_nir(
        self, fake_reader, fake_writer, band_files,
    ):
        reader = fake_reader(band_files, fail_on={"red_10m.jp2": 1})
        with pytest.raises(CodecError):
            _bench(reader, fake_writer()).run_iteration()
        (nir,) = reader.issued
        assert nir.released


class TestRun:
    """Repetition, failure exclusion and averaging."""

    def test_averages_completed_iterations(
        self, fake_reader, fake_writer, band_files,
    ):
        writer = fake_writer(save_ns=6_000)
        result = _bench(fake_reader(band_files), writer, iterations=3).run()

        assert isinstance(result, BenchmarkResult)
        assert result.iterations == 3
        assert result.failures == 0
        assert result.total_time.count == 3
        assert result.metrics.save_time_ns == 6_000
        assert result.metrics.pixels == 1_200
        assert len(writer.written) == 3

    def test_failed_iteration_excluded(
        self, fake_reader, fake_writer, band_files, capsys,
    ):
        reader = fake_reader(band_files, fail_on={"red_10m.jp2": 1})
        result = _bench(reader, fake_writer(), iterations=3).run()

        assert result.iterations == 2
        assert result.failures == 1
        assert result.total_time.count == 2
        assert result.metrics.reading_time_ns == 20_000
        out = capsys.readouterr().out
        assert "FAIL  10m CPU 2 iteration 1/3" in out
        assert out.count("OK    10m CPU 2") == 2

    def test_all_failed_returns_none(
        self, fake_reader, fake_writer, band_files,
    ):
        result = _bench(fake_reader(band_files), fake_writer(),
                        pair=PAIR_BAD, iterations=2).run()
        assert result is None

    def test_missing_file_counts_as_failure(
        self, fake_reader, fake_writer, band_files,
    ):
        pair = BandPair("10m", Path("missing.jp2"), Path("red_10m.jp2"))
        assert _bench(fake_reader(band_files), fake_writer(), pair=pair,
                      iterations=1).run() is None

    def test_warmup_discarded(self, fake_reader, fake_writer, band_files):
        reader, writer = fake_reader(band_files), fake_writer()
        result = _bench(reader, writer, iterations=1, warmup=2).run()

        assert result.iterations == 1
        assert len(reader.calls) == 6
        assert len(writer.written) == 3

    def test_warmup_failure_does_not_count(
        self, fake_reader, fake_writer, band_files,
    ):
        reader = fake_reader(band_files, fail_on={"nir_10m.jp2": 1})
        result = _bench(reader, fake_writer(), iterations=2, warmup=1).run()
        assert result.iterations == 2
        assert result.failures == 0

    def test_progress_callback(self, fake_reader, fake_writer, band_files):
        calls = []
        reader = fake_reader(band_files, fail_on={"red_10m.jp2": 1})
        _bench(reader, fake_writer(), iterations=3).run(
            progress_callback=lambda cur, tot: calls.append((cur, tot))
        )
        assert calls == [(1, 3), (2, 3), (3, 3)]


class TestNDVIBenchmarkConfig:
    """Constructor validation and naming."""

    def test_name(self, fake_reader, fake_writer, band_files):
        reader, writer = fake_reader(band_files), fake_writer()
        assert _bench(reader, writer, threads=4).name == "10m CPU 4"
        gpu = NDVIBenchmark(PAIR_20M, "GPU", 1, reader, writer, Path("g.jp2"))
        assert gpu.name == "20m GPU"

    @pytest.mark.parametrize("kwargs,match", [
        (dict(processor="TPU"), "processor"),
        (dict(num_threads=0), "num_threads"),
        (dict(iterations=0), "iterations"),
        (dict(warmup=-1), "warmup"),
    ])
    def test_invalid_config(
        self, fake_reader, fake_writer, band_files, kwargs, match,
    ):
        params = dict(pair=PAIR_10M, processor="CPU", num_threads=1,
                      reader=fake_reader(band_files), writer=fake_writer(),
                      output_path=Path("o.jp2"))
        params.update(kwargs)
        with pytest.raises(ValueError, match=match):
            NDVIBenchmark(**params)


# ---------------------------------------------------------------------------
# run_suite()
# ---------------------------------------------------------------------------

class TestRunSuite:
    """Configuration sweep and summary output."""

    def test_sweep(
        self, fake_reader, fake_writer, band_files, tmp_path, capsys,
    ):
        cpu_writer = fake_writer()
        gpu_writer = fake_writer(processor="GPU")
        codecs = {
            "CPU": (fake_reader(band_files), cpu_writer),
            "GPU": (fake_reader(band_files, processor="GPU"), gpu_writer),
        }
        results = run_suite(
            [PAIR_10M, PAIR_20M],
            thread_counts=(1, 2, 4),
            codecs=codecs,
            iterations=2,
            output_dir=tmp_path,
            max_threads=2,
        )

        labels = [(r.metrics.resolution, r.metrics.label) for r in results]
        assert labels == [
            ("10m", "CPU 1"), ("10m", "CPU 2"), ("10m", "GPU"),
            ("20m", "CPU 1"), ("20m", "CPU 2"), ("20m", "GPU"),
        ]

        out = capsys.readouterr().out
        assert "SKIP  10m CPU 4" in out
        assert "BENCHMARK RESULTS" in out
        assert "Bottleneck Analysis" in out
        assert "--- SCALABILITY ANALYSIS ---" in out
        assert "Resolution: 20m" in out

        cpu_paths = {p for p, _, _ in cpu_writer.written}
        assert str(tmp_path / "ndvi_10m_cpu_2t.jp2") in cpu_paths
        assert {p for p, _, _ in gpu_writer.written} == {
            str(tmp_path / "ndvi_10m_gpu.jp2"),
            str(tmp_path / "ndvi_20m_gpu.jp2"),
        }

    def test_gpu_runs_once_with_one_thread(
        self, fake_reader, fake_writer, band_files, tmp_path,
    ):
        gpu_reader = fake_reader(band_files, processor="GPU")
        results = run_suite(
            [PAIR_10M],
            thread_counts=(1, 2, 4, 8),
            codecs={"GPU": (gpu_reader, fake_writer())},
            iterations=1,
            output_dir=tmp_path,
            max_threads=8,
        )
        assert len(results) == 1
        assert {threads for _, threads in gpu_reader.calls} == {1}

    def test_failed_configuration_dropped(
        self, fake_reader, fake_writer, band_files, tmp_path, capsys,
    ):
        results = run_suite(
            [PAIR_BAD],
            thread_counts=(1,),
            codecs={"CPU": (fake_reader(band_files), fake_writer())},
            iterations=1,
            output_dir=tmp_path,
        )
        assert results == []
        out = capsys.readouterr().out
        assert "no iteration completed" in out
        assert "No benchmarks completed." in out

    def test_print_summary_empty(self, capsys):
        print_summary([])
        assert "No benchmarks completed." in capsys.readouterr().out


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

class TestCLI:
    """Argument parsing and exit status of ``python -m ndvi_bench``."""

    @pytest.fixture
    def captured(self, monkeypatch):
        calls = {}

        def _fake_run_suite(pairs, **kwargs):
            calls["pairs"] = pairs
            calls.update(kwargs)
            return calls.get("return", [])

        monkeypatch.setattr(cli, "run_suite", _fake_run_suite)
        return calls

    def test_arguments_forwarded(self, captured):
        captured["return"] = ["result"]
        with pytest.raises(SystemExit) as exc_info:
            cli.main([
                "--band", "10m", "a.jp2", "b.jp2",
                "--band", "20m", "c.jp2", "d.jp2",
                "--threads", "1", "4", "-n", "3", "--warmup", "1",
                "--output-dir", "out",
            ])

        assert exc_info.value.code == 0
        assert captured["pairs"] == [
            BandPair("10m", Path("a.jp2"), Path("b.jp2")),
            BandPair("20m", Path("c.jp2"), Path("d.jp2")),
        ]
        assert captured["thread_counts"] == [1, 4]
        assert captured["iterations"] == 3
        assert captured["warmup"] == 1
        assert captured["output_dir"] == Path("out")

    def test_no_results_exit_code(self, captured):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["--band", "10m", "a.jp2", "b.jp2"])
        assert exc_info.value.code == 1
        assert captured["iterations"] == 10

    @pytest.mark.parametrize("argv", [
        [],
        ["--band", "10m", "a.jp2", "b.jp2", "-n", "0"],
        ["--band", "10m", "a.jp2", "b.jp2", "--warmup", "-1"],
        ["--band", "10m", "a.jp2", "b.jp2", "--threads", "0"],
    ])
    def test_usage_errors(self, captured, argv):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(argv)
        assert exc_info.value.code == 2
        assert "pairs" not in captured
