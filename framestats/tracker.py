"""
Frame statistics tracker.
Samples per-frame timing and derives windowed FPS / frame time plus
all-time best and worst frames.
"""

import logging
import math
from dataclasses import dataclass
from typing import Callable, List, Optional

import numpy as np

from .sinks import FrameStatsSinks, format_fps, format_ms

logger = logging.getLogger(__name__)

MIN_SAMPLE_DURATION = 0.0
MAX_SAMPLE_DURATION = 2.0
DEFAULT_SAMPLE_DURATION = 1.0
DEFAULT_WARMUP_SECONDS = 2.0


def _divide(numerator: float, denominator: float) -> float:
    # IEEE semantics: x / 0 -> inf, 0 / 0 -> nan
    with np.errstate(divide='ignore', invalid='ignore'):
        return float(np.float64(numerator) / np.float64(denominator))


@dataclass(frozen=True)
class WindowSample:
    """Result of one window flush."""
    timestamp: float
    frames: int
    elapsed: float
    fps: float
    ms: float


@dataclass(frozen=True)
class FrameStats:
    """Read-only view of the tracker state."""
    last_frame_duration: float
    frames_in_window: int
    elapsed_in_window: float
    window_best_duration: float
    window_worst_duration: float
    all_time_best_duration: float
    all_time_worst_duration: float
    elapsed_since_start: float
    fps: float
    ms: float
    best_fps: float
    best_ms: float
    worst_fps: float
    worst_ms: float
    warmup_seconds: float = DEFAULT_WARMUP_SECONDS

    @property
    def warmed_up(self) -> bool:
        return self.elapsed_since_start > self.warmup_seconds


class FrameStatsTracker:
    """
    Rolling and all-time frame timing statistics.

    Call :meth:`on_frame_rendered` once per rendered frame with the
    unscaled frame delta and the unscaled time since start. Values are
    pushed to the sinks only when they change: the FPS / ms pair once per
    window, the best and worst pairs when a new extreme is seen.
    """

    def __init__(
        self,
        sinks: Optional[FrameStatsSinks] = None,
        sample_duration: float = DEFAULT_SAMPLE_DURATION,
        warmup_seconds: float = DEFAULT_WARMUP_SECONDS
    ):
        """
        Initialize tracker.

        Args:
            sinks: Output text sinks (default: none)
            sample_duration: Window length in seconds, within [0, 2]
            warmup_seconds: Worst-frame tracking is disabled until this much
                time has elapsed, to ignore startup spikes
        """
        if not MIN_SAMPLE_DURATION <= sample_duration <= MAX_SAMPLE_DURATION:
            raise ValueError(
                f"sample_duration must be within [{MIN_SAMPLE_DURATION}, "
                f"{MAX_SAMPLE_DURATION}], got {sample_duration}"
            )
        if warmup_seconds < 0:
            raise ValueError(f"warmup_seconds must be >= 0, got {warmup_seconds}")

        self.sinks = sinks if sinks is not None else FrameStatsSinks()
        self.sample_duration = float(sample_duration)
        self.warmup_seconds = float(warmup_seconds)
        self.listeners: List[Callable[[WindowSample], None]] = []

        self.reset()

    @classmethod
    def from_config(cls, config, sinks: Optional[FrameStatsSinks] = None) -> "FrameStatsTracker":
        """Create a tracker from a :class:`TrackerConfig`."""
        return cls(
            sinks=sinks,
            sample_duration=config.sample_duration,
            warmup_seconds=config.warmup_seconds
        )

    def reset(self):
        """Return to the startup state. Listeners and sinks are kept."""
        self.frames_in_window = 0
        self.elapsed_in_window = 0.0
        self.last_frame_duration = 0.0
        self.window_best_duration = math.inf
        self.window_worst_duration = 0.0
        self.all_time_best_duration = math.inf
        self.all_time_worst_duration = 0.0
        self.elapsed_since_start = 0.0

        self.fps = math.nan
        self.ms = math.nan
        self.best_fps = math.nan
        self.best_ms = math.nan
        self.worst_fps = math.nan
        self.worst_ms = math.nan

    def add_listener(self, callback: Callable[[WindowSample], None]):
        """Register a callback invoked with every :class:`WindowSample`."""
        self.listeners.append(callback)

    def remove_listener(self, callback: Callable[[WindowSample], None]):
        self.listeners.remove(callback)

    def on_frame_rendered(self, delta_seconds: float, total_elapsed_seconds: float):
        """
        Record one rendered frame.

        Args:
            delta_seconds: Unscaled duration of the frame
            total_elapsed_seconds: Unscaled time since start
        """
        if delta_seconds == 0:
            logger.debug("Zero-duration frame at t=%.3fs", total_elapsed_seconds)

        self.last_frame_duration = delta_seconds
        self.elapsed_since_start = total_elapsed_seconds

        self._update_window(total_elapsed_seconds)
        self._update_best()
        if total_elapsed_seconds > self.warmup_seconds:
            self._update_worst()

    def _update_window(self, timestamp: float):
        self.frames_in_window += 1
        self.elapsed_in_window += self.last_frame_duration

        if self.elapsed_in_window < self.sample_duration:
            return

        frames = self.frames_in_window
        elapsed = self.elapsed_in_window
        self.fps = _divide(frames, elapsed)
        self.ms = _divide(1000.0 * elapsed, frames)
        self.sinks.emit('fps', format_fps(self.fps))
        self.sinks.emit('ms', format_ms(self.ms))

        self.frames_in_window = 0
        self.elapsed_in_window = 0.0
        self.window_best_duration = math.inf
        self.window_worst_duration = 0.0

        sample = WindowSample(
            timestamp=timestamp,
            frames=frames,
            elapsed=elapsed,
            fps=self.fps,
            ms=self.ms
        )
        for listener in self.listeners:
            listener(sample)

    def _update_best(self):
        duration = self.last_frame_duration
        if duration >= self.window_best_duration:
            return

        self.window_best_duration = duration
        if self.window_best_duration < self.all_time_best_duration:
            self.all_time_best_duration = self.window_best_duration
            self.best_fps = _divide(1.0, self.all_time_best_duration)
            self.best_ms = 1000.0 * self.all_time_best_duration
            self.sinks.emit('best_fps', format_fps(self.best_fps))
            self.sinks.emit('best_ms', format_ms(self.best_ms))

    def _update_worst(self):
        duration = self.last_frame_duration
        if duration <= self.window_worst_duration:
            return

        self.window_worst_duration = duration
        if self.window_worst_duration > self.all_time_worst_duration:
            self.all_time_worst_duration = self.window_worst_duration
            self.worst_fps = _divide(1.0, self.all_time_worst_duration)
            self.worst_ms = 1000.0 * self.all_time_worst_duration
            self.sinks.emit('worst_fps', format_fps(self.worst_fps))
            self.sinks.emit('worst_ms', format_ms(self.worst_ms))

    def snapshot(self) -> FrameStats:
        """Get the current state as an immutable :class:`FrameStats`."""
        return FrameStats(
            last_frame_duration=self.last_frame_duration,
            frames_in_window=self.frames_in_window,
            elapsed_in_window=self.elapsed_in_window,
            window_best_duration=self.window_best_duration,
            window_worst_duration=self.window_worst_duration,
            all_time_best_duration=self.all_time_best_duration,
            all_time_worst_duration=self.all_time_worst_duration,
            elapsed_since_start=self.elapsed_since_start,
            fps=self.fps,
            ms=self.ms,
            best_fps=self.best_fps,
            best_ms=self.best_ms,
            worst_fps=self.worst_fps,
            worst_ms=self.worst_ms,
            warmup_seconds=self.warmup_seconds
        )

    def __str__(self) -> str:
        return (
            f"FPS: {format_fps(self.fps)} ({format_ms(self.ms)} ms) "
            f"best: {format_fps(self.best_fps)} worst: {format_fps(self.worst_fps)}"
        )
