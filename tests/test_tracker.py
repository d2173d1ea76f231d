"""
Unit tests for the frame stats tracker.
Tests window flushes, best/worst tracking and warm-up behavior.
"""

import math
import random
import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from framestats.sinks import FrameStatsSinks
from framestats.tracker import FrameStatsTracker, WindowSample


@pytest.fixture
def sinks():
    return FrameStatsSinks.buffers()


@pytest.fixture
def tracker(sinks):
    return FrameStatsTracker(sinks=sinks, sample_duration=1.0)


def feed(tracker, durations, start=0.0):
    """Feed frame durations, accumulating total elapsed time from ``start``."""
    elapsed = start
    for duration in durations:
        elapsed += duration
        tracker.on_frame_rendered(duration, elapsed)
    return elapsed


class TestInitialization:
    """Tests for tracker construction."""

    def test_initial_state(self, tracker):
        """Test startup values."""
        assert tracker.frames_in_window == 0
        assert tracker.elapsed_in_window == 0.0
        assert tracker.window_best_duration == math.inf
        assert tracker.window_worst_duration == 0.0
        assert tracker.all_time_best_duration == math.inf
        assert tracker.all_time_worst_duration == 0.0
        assert math.isnan(tracker.fps)

    @pytest.mark.parametrize("value", [-0.1, 2.5])
    def test_sample_duration_out_of_range(self, value):
        """Test that sample_duration outside [0, 2] is rejected."""
        with pytest.raises(ValueError):
            FrameStatsTracker(sample_duration=value)

    def test_negative_warmup(self):
        with pytest.raises(ValueError):
            FrameStatsTracker(warmup_seconds=-1.0)

    def test_without_sinks(self):
        """Test that a tracker without sinks still computes values."""
        tracker = FrameStatsTracker(sample_duration=0.0)
        tracker.on_frame_rendered(0.02, 0.02)

        assert tracker.fps == pytest.approx(50.0)


class TestWindowFlush:
    """Tests for windowed FPS / ms."""

    def test_sixty_fps(self, tracker, sinks):
        """Test 60 frames of 1/60s over a one second window."""
        elapsed = feed(tracker, [1 / 60] * 59)
        assert sinks.fps.write_count == 0

        feed(tracker, [1 / 60], start=elapsed)

        assert tracker.frames_in_window == 0
        assert sinks.fps.write_count == 1
        assert sinks.fps.text == "60"
        assert sinks.ms.text == "16.7"

    def test_no_flush_before_window(self, tracker, sinks):
        feed(tracker, [0.1] * 5)

        assert sinks.fps.write_count == 0
        assert sinks.ms.write_count == 0
        assert tracker.frames_in_window == 5

    def test_flush_resets_window(self, sinks):
        """Test counters and window extremes reset on flush."""
        tracker = FrameStatsTracker(sinks=sinks, sample_duration=0.5)
        feed(tracker, [0.25, 0.25])

        assert tracker.frames_in_window == 0
        assert tracker.elapsed_in_window == 0.0
        assert tracker.fps == pytest.approx(4.0)
        assert tracker.ms == pytest.approx(250.0)
        assert sinks.fps.text == "4"
        assert sinks.ms.text == "250.0"

    def test_flush_values_match_window(self, sinks):
        """Test FPS equals frames / elapsed of the flushed window."""
        tracker = FrameStatsTracker(sinks=sinks, sample_duration=0.1)
        received = []
        tracker.add_listener(received.append)

        feed(tracker, [0.03, 0.04, 0.05])

        assert len(received) == 1
        sample = received[0]
        assert isinstance(sample, WindowSample)
        assert sample.frames == 3
        assert sample.elapsed == pytest.approx(0.12)
        assert sample.fps == pytest.approx(3 / 0.12)
        assert sample.ms == pytest.approx(40.0)
        assert sample.timestamp == pytest.approx(0.12)

    def test_zero_sample_duration_flushes_every_frame(self, sinks):
        tracker = FrameStatsTracker(sinks=sinks, sample_duration=0.0)
        feed(tracker, [0.01, 0.02, 0.03, 0.04, 0.05])

        assert sinks.fps.write_count == 5
        assert sinks.ms.history == ["10.0", "20.0", "30.0", "40.0", "50.0"]
        assert tracker.frames_in_window == 0

    def test_frames_reset_exactly_at_window(self):
        """Test frames_in_window resets only when the window is reached."""
        rng = random.Random(7)
        tracker = FrameStatsTracker(sample_duration=0.25)
        accumulated = 0.0
        elapsed = 0.0

        for _ in range(500):
            duration = rng.uniform(0.001, 0.05)
            elapsed += duration
            accumulated += duration
            tracker.on_frame_rendered(duration, elapsed)

            if accumulated >= 0.25:
                assert tracker.frames_in_window == 0
                accumulated = 0.0
            else:
                assert tracker.frames_in_window > 0

    def test_zero_duration_frame(self, sinks):
        """Test a zero-duration frame shows inf instead of raising."""
        tracker = FrameStatsTracker(sinks=sinks, sample_duration=0.0)
        tracker.on_frame_rendered(0.0, 0.0)

        assert sinks.fps.text == "inf"
        assert sinks.ms.text == "0.0"
        assert sinks.best_fps.text == "inf"
        assert sinks.best_ms.text == "0.0"


class TestBestTracking:
    """Tests for fastest-frame tracking."""

    def test_faster_frame_updates_best(self, tracker, sinks):
        feed(tracker, [0.016, 0.001])

        assert tracker.all_time_best_duration == 0.001
        assert sinks.best_fps.text == "1000"
        assert sinks.best_ms.text == "1.0"
        assert sinks.best_fps.write_count == 2

    def test_slower_frame_does_not_emit(self, tracker, sinks):
        feed(tracker, [0.01, 0.02, 0.03])

        assert sinks.best_fps.write_count == 1
        assert tracker.window_best_duration == 0.01

    def test_best_tracked_during_warmup(self, tracker, sinks):
        tracker.on_frame_rendered(0.02, 0.5)

        assert sinks.best_fps.text == "50"
        assert sinks.best_ms.text == "20.0"

    def test_window_best_restarts_after_flush(self, sinks):
        """Test the first frame after a flush becomes the window best."""
        tracker = FrameStatsTracker(sinks=sinks, sample_duration=0.5)
        feed(tracker, [0.125, 0.375, 0.25])

        assert tracker.window_best_duration == 0.25
        assert tracker.all_time_best_duration == 0.125
        assert sinks.best_fps.write_count == 1

    def test_all_time_best_non_increasing(self, tracker):
        rng = random.Random(3)
        elapsed = 0.0
        previous = tracker.all_time_best_duration

        for _ in range(1000):
            duration = rng.uniform(0.002, 0.1)
            elapsed += duration
            tracker.on_frame_rendered(duration, elapsed)
            assert tracker.all_time_best_duration <= previous
            previous = tracker.all_time_best_duration


class TestWorstTracking:
    """Tests for slowest-frame tracking and warm-up."""

    def test_ignored_during_warmup(self, tracker, sinks):
        tracker.on_frame_rendered(0.05, 1.0)

        assert tracker.window_worst_duration == 0.0
        assert tracker.all_time_worst_duration == 0.0
        assert sinks.worst_fps.write_count == 0
        assert sinks.worst_ms.write_count == 0

    def test_warmup_boundary_is_exclusive(self, tracker, sinks):
        tracker.on_frame_rendered(0.05, 2.0)

        assert tracker.all_time_worst_duration == 0.0
        assert sinks.worst_fps.write_count == 0

    def test_tracked_after_warmup(self, tracker, sinks):
        tracker.on_frame_rendered(0.05, 3.0)

        assert tracker.all_time_worst_duration == 0.05
        assert sinks.worst_fps.text == "20"
        assert sinks.worst_ms.text == "50.0"

    def test_custom_warmup(self, sinks):
        tracker = FrameStatsTracker(sinks=sinks, warmup_seconds=0.0)
        tracker.on_frame_rendered(0.1, 0.1)

        assert sinks.worst_fps.text == "10"

    def test_all_time_worst_non_decreasing(self, tracker):
        rng = random.Random(11)
        elapsed = 0.0
        previous = tracker.all_time_worst_duration

        for _ in range(1000):
            duration = rng.uniform(0.002, 0.1)
            elapsed += duration
            tracker.on_frame_rendered(duration, elapsed)

            if elapsed <= 2.0:
                assert tracker.all_time_worst_duration == 0.0
            assert tracker.all_time_worst_duration >= previous
            previous = tracker.all_time_worst_duration


class TestSnapshotAndReset:
    """Tests for state inspection and session reset."""

    def test_snapshot(self, tracker):
        feed(tracker, [0.5, 0.5, 0.25], start=2.0)
        stats = tracker.snapshot()

        assert stats.fps == pytest.approx(2.0)
        assert stats.frames_in_window == 1
        assert stats.all_time_best_duration == 0.25
        assert stats.all_time_worst_duration == 0.5
        assert stats.best_fps == pytest.approx(4.0)
        assert stats.worst_ms == pytest.approx(500.0)
        assert stats.warmed_up

    def test_reset(self, tracker, sinks):
        received = []
        tracker.add_listener(received.append)
        feed(tracker, [0.5, 0.5, 0.5], start=2.0)

        tracker.reset()

        assert tracker.frames_in_window == 0
        assert tracker.all_time_best_duration == math.inf
        assert tracker.all_time_worst_duration == 0.0
        assert math.isnan(tracker.best_fps)
        assert tracker.listeners == [received.append]

    def test_remove_listener(self, sinks):
        tracker = FrameStatsTracker(sinks=sinks, sample_duration=0.0)
        received = []
        tracker.add_listener(received.append)
        tracker.on_frame_rendered(0.01, 0.01)
        tracker.remove_listener(received.append)
        tracker.on_frame_rendered(0.01, 0.02)

        assert len(received) == 1

    def test_str(self, sinks):
        tracker = FrameStatsTracker(sinks=sinks, sample_duration=0.0)
        tracker.on_frame_rendered(0.02, 0.02)

        assert str(tracker).startswith("FPS: 50 (20.0 ms)")
