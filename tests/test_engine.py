"""
Integration tests for SimilarityEngine.
"""

import pytest

from simcheck import SimilarityEngine
from simcheck.exceptions import (
    ConfigurationError,
    DecodeError,
    EngineBusyError,
    EnumerationError,
    ScanCancelled,
)

from conftest import (
    BlockingDecoder,
    FakeDecoder,
    FakeHasher,
    make_noise_image,
    write_broken_png,
)


class TestConstruction:
    """Test synchronous validation at construction."""

    @pytest.mark.parametrize("folder", [None, "", "  "])
    def test_invalid_folder(self, folder):
        with pytest.raises(ConfigurationError):
            SimilarityEngine(folder, 90)

    @pytest.mark.parametrize("threshold", [0, -5, 100.5])
    def test_invalid_threshold(self, threshold, temp_dir):
        with pytest.raises(ConfigurationError):
            SimilarityEngine(temp_dir, threshold)

    def test_threshold_stored_as_fraction(self, temp_dir):
        engine = SimilarityEngine(temp_dir, 90)
        assert engine.config.threshold_fraction == pytest.approx(0.9)

    def test_missing_folder_is_not_a_configuration_error(self, temp_dir):
        """Existence is checked when the run enumerates, not at construction."""
        engine = SimilarityEngine(temp_dir / "missing", 90)
        with pytest.raises(EnumerationError):
            engine.run()


class TestRealImages:
    """Test runs over real PNG files hashed with imagehash."""

    def test_identical_pair_found(self, sample_images, temp_dir):
        engine = SimilarityEngine(temp_dir, 90)
        result = engine.run()

        p1, p2 = sample_images['identical1'], sample_images['identical2']
        assert [m.as_tuple() for m in result.matches] == [
            (p1, p2, 100.0),
            (p2, p1, 100.0),
        ]
        assert all(sample_images['unrelated'] not in (m.path_a, m.path_b) for m in result.matches)
        assert engine.result == result.matches
        assert result.hashed_count == 3

    def test_threshold_100_no_identical(self, temp_dir):
        make_noise_image(seed=10).save(temp_dir / "one.png")
        make_noise_image(seed=11).save(temp_dir / "two.png")

        result = SimilarityEngine(temp_dir, 100).run()

        assert result.matches == []

    def test_unique_pairs(self, sample_images, temp_dir):
        result = SimilarityEngine(temp_dir, 90, symmetric_pairs=False).run()
        assert [m.as_tuple() for m in result.matches] == [
            (sample_images['identical1'], sample_images['identical2'], 100.0),
        ]

    def test_corrupt_image_skipped_by_default(self, sample_images, temp_dir):
        broken = temp_dir / "broken.jpg"
        broken.write_text("not an image")

        engine = SimilarityEngine(temp_dir, 90)
        result = engine.run()

        assert [s.path for s in result.skipped] == [str(broken)]
        assert [s.path for s in engine.skipped] == [str(broken)]
        assert len(result.matches) == 2

    def test_broken_png_chunk_skipped_by_default(self, sample_images, temp_dir):
        broken = temp_dir / "broken_chunk.png"
        write_broken_png(broken)

        result = SimilarityEngine(temp_dir, 90).run()

        assert [s.path for s in result.skipped] == [str(broken)]
        assert [m.as_tuple() for m in result.matches] == [
            (sample_images['identical1'], sample_images['identical2'], 100.0),
            (sample_images['identical2'], sample_images['identical1'], 100.0),
        ]

    def test_corrupt_image_aborts_with_abort_policy(self, sample_images, temp_dir):
        (temp_dir / "broken.jpg").write_text("not an image")

        engine = SimilarityEngine(temp_dir, 90, decode_policy="abort")
        with pytest.raises(DecodeError):
            engine.run()


class TestProgress:
    """Test progress as observed by a subscriber during a full run."""

    def test_sequence_for_three_images(self, fake_files, temp_dir, progress_log):
        values, observer = progress_log
        fake_files("a.png", "b.png", "c.png")
        engine = SimilarityEngine(
            temp_dir, 90,
            decoder=FakeDecoder(),
            hasher=FakeHasher({"a.png": 0, "b.png": 0, "c.png": 0xFFFF}),
        )
        engine.progress.subscribe(observer)

        engine.run()

        assert values == [16, 33, 50, 100, 100, 100]

    def test_phase_ranges(self, fake_files, temp_dir, progress_log):
        values, observer = progress_log
        names = [f"img{i}.png" for i in range(5)] + ["readme.txt"]
        fake_files(*names)
        engine = SimilarityEngine(
            temp_dir, 90,
            decoder=FakeDecoder(),
            hasher=FakeHasher({name: i for i, name in enumerate(names)}),
            progress_mode="proportional",
        )
        engine.progress.subscribe(observer)

        engine.run()

        load_values, compare_values = values[:6], values[6:]
        assert all(0 <= v <= 50 for v in load_values)
        assert load_values[-1] == 50
        assert all(50 <= v <= 100 for v in compare_values)
        assert values == sorted(values)
        assert values[-1] == 100

    def test_empty_folder(self, temp_dir, progress_log):
        values, observer = progress_log
        engine = SimilarityEngine(temp_dir, 90)
        engine.progress.subscribe(observer)

        result = engine.run()

        assert result.matches == []
        assert result.candidate_count == 0
        assert values == [100]

    def test_only_unsupported_files(self, fake_files, temp_dir, progress_log):
        values, observer = progress_log
        fake_files("a.txt", "b.doc")
        engine = SimilarityEngine(temp_dir, 90, decoder=FakeDecoder(), hasher=FakeHasher({}))
        engine.progress.subscribe(observer)

        result = engine.run()

        assert result.hashed_count == 0
        assert values == [25, 50, 100]

    def test_progress_restarts_each_run(self, fake_files, temp_dir, progress_log):
        values, observer = progress_log
        fake_files("a.png", "b.png")
        engine = SimilarityEngine(
            temp_dir, 90,
            decoder=FakeDecoder(),
            hasher=FakeHasher({"a.png": 0, "b.png": 0}),
        )
        engine.run()
        engine.progress.subscribe(observer)

        engine.run()

        assert values == [25, 50, 100, 100]


class TestRuns:
    """Test run lifecycle, determinism and background execution."""

    def _engine(self, fake_files, temp_dir, decoder=None, **kwargs):
        fake_files("a.png", "b.png", "c.png", "sub/d.png")
        hasher = FakeHasher({"a.png": 0, "b.png": 0, "c.png": 0x3, "d.png": (1 << 64) - 1})
        return SimilarityEngine(temp_dir, 90, decoder=decoder or FakeDecoder(), hasher=hasher, **kwargs)

    def test_rerun_is_deterministic(self, fake_files, temp_dir):
        engine = self._engine(fake_files, temp_dir)
        first = engine.run()
        second = engine.run()

        assert [m.as_tuple() for m in first.matches] == [m.as_tuple() for m in second.matches]
        assert engine.result == second.matches

    def test_result_replaced_between_runs(self, fake_files, temp_dir):
        engine = self._engine(fake_files, temp_dir)
        engine.run()
        assert len(engine.result) == 6

        (temp_dir / "b.png").unlink()
        engine.run()

        assert len(engine.result) == 2

    def test_compare_async_returns_future(self, fake_files, temp_dir):
        with self._engine(fake_files, temp_dir) as engine:
            future = engine.compare_async()
            result = future.result(timeout=10)

        assert len(result.matches) == 6
        assert engine.progress.value == 100
        assert not engine.is_running

    def test_async_failure_delivered_through_future(self, temp_dir):
        with SimilarityEngine(temp_dir / "missing", 90) as engine:
            future = engine.compare_async()
            with pytest.raises(EnumerationError):
                future.result(timeout=10)

    def test_async_decode_failure_with_abort(self, fake_files, temp_dir):
        fake_files("a.png", "bad.png")
        engine = SimilarityEngine(
            temp_dir, 90,
            decoder=FakeDecoder(failing={"bad.png"}),
            hasher=FakeHasher({"a.png": 0}),
            decode_policy="abort",
        )
        with engine:
            with pytest.raises(DecodeError):
                engine.compare_async().result(timeout=10)

    def test_concurrent_runs_rejected(self, fake_files, temp_dir):
        decoder = BlockingDecoder()
        with self._engine(fake_files, temp_dir, decoder=decoder) as engine:
            future = engine.compare_async()
            assert decoder.started.wait(timeout=10)

            assert engine.is_running
            with pytest.raises(EngineBusyError):
                engine.run()
            with pytest.raises(EngineBusyError):
                engine.compare_async()

            decoder.release.set()
            assert len(future.result(timeout=10).matches) == 6

        # The engine is usable again once the run has finished
        assert len(engine.run().matches) == 6

    def test_cancel(self, fake_files, temp_dir):
        decoder = BlockingDecoder()
        with self._engine(fake_files, temp_dir, decoder=decoder) as engine:
            future = engine.compare_async()
            assert decoder.started.wait(timeout=10)

            engine.cancel()
            decoder.release.set()

            with pytest.raises(ScanCancelled):
                future.result(timeout=10)
            assert not engine.is_running

    def test_cancel_when_idle_is_noop(self, fake_files, temp_dir):
        engine = self._engine(fake_files, temp_dir)
        engine.cancel()
        assert len(engine.run().matches) == 6
