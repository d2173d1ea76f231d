"""
Frame clock providing unscaled frame delta and elapsed time.
"""

import time
from typing import Callable, Tuple


class FrameClock:
    """
    Measures time between frames.

    ``delta`` and ``elapsed`` are unscaled wall-clock values; ``scaled_delta``
    applies ``time_scale`` for game logic that wants slow motion or pause.
    """

    def __init__(self, time_source: Callable[[], float] = time.perf_counter, time_scale: float = 1.0):
        """
        Initialize clock.

        Args:
            time_source: Monotonic clock in seconds
            time_scale: Multiplier applied to ``scaled_delta``
        """
        if time_scale < 0:
            raise ValueError(f"time_scale must be >= 0, got {time_scale}")

        self.time_source = time_source
        self.time_scale = time_scale
        self.start_time = None
        self.last_time = None
        self.delta = 0.0
        self.elapsed = 0.0
        self.frame_count = 0

    def start(self):
        """Start (or restart) the clock."""
        now = self.time_source()
        self.start_time = now
        self.last_time = now
        self.delta = 0.0
        self.elapsed = 0.0
        self.frame_count = 0

    def tick(self) -> Tuple[float, float]:
        """
        Mark the end of a frame.

        Returns:
            Tuple of (unscaled_delta, unscaled_elapsed) in seconds
        """
        if self.start_time is None:
            self.start()

        now = self.time_source()
        self.delta = now - self.last_time
        self.elapsed = now - self.start_time
        self.last_time = now
        self.frame_count += 1

        return self.delta, self.elapsed

    @property
    def scaled_delta(self) -> float:
        return self.delta * self.time_scale

    @property
    def running(self) -> bool:
        return self.start_time is not None
