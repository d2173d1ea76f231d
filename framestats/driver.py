"""
Explicit frame loop driving a FrameStatsTracker.
"""

import logging
import time
from typing import Callable, Optional

from .clock import FrameClock
from .logger import FrameStatsLogger
from .tracker import FrameStatsTracker

logger = logging.getLogger(__name__)


class FrameLoop:
    """
    Render loop that feeds every frame into a tracker.

    Each iteration calls ``render_fn(frame_index)``, optionally sleeps to
    hold ``target_fps``, then ticks the clock and reports the frame.
    """

    def __init__(
        self,
        tracker: FrameStatsTracker,
        render_fn: Optional[Callable[[int], None]] = None,
        clock: Optional[FrameClock] = None,
        target_fps: Optional[float] = None,
        metrics: Optional[FrameStatsLogger] = None,
        sleep_fn: Callable[[float], None] = time.sleep
    ):
        """
        Initialize frame loop.

        Args:
            tracker: Tracker receiving frame timings
            render_fn: Per-frame work, called with the frame index
            clock: Frame clock (default: perf_counter based)
            target_fps: Pace frames to this rate (None = run unthrottled)
            metrics: Optional logger recording every frame duration
            sleep_fn: Sleep function used for pacing
        """
        if target_fps is not None and target_fps <= 0:
            raise ValueError(f"target_fps must be > 0, got {target_fps}")

        self.tracker = tracker
        self.render_fn = render_fn
        self.clock = clock or FrameClock()
        self.target_fps = target_fps
        self.metrics = metrics
        self.sleep_fn = sleep_fn
        self.running = False

    def step(self):
        """Run a single frame."""
        if not self.clock.running:
            self.clock.start()

        frame_start = self.clock.time_source()
        if self.render_fn is not None:
            self.render_fn(self.clock.frame_count)

        if self.target_fps:
            budget = 1.0 / self.target_fps
            spent = self.clock.time_source() - frame_start
            if spent < budget:
                self.sleep_fn(budget - spent)

        delta, elapsed = self.clock.tick()
        if self.metrics is not None:
            self.metrics.log_frame(delta)
        self.tracker.on_frame_rendered(delta, elapsed)

    def run(self, max_frames: Optional[int] = None, duration: Optional[float] = None) -> int:
        """
        Run until stopped, ``max_frames`` frames or ``duration`` seconds.

        Returns:
            Number of frames rendered
        """
        self.running = True
        self.clock.start()
        frames = 0
        logger.info(f"Frame loop started (target_fps={self.target_fps})")

        try:
            while self.running:
                if max_frames is not None and frames >= max_frames:
                    break
                if duration is not None and self.clock.elapsed >= duration:
                    break
                self.step()
                frames += 1
        except KeyboardInterrupt:
            logger.info("Frame loop interrupted")
        finally:
            self.running = False

        logger.info(f"Frame loop stopped after {frames} frames ({self.clock.elapsed:.2f}s)")
        return frames

    def stop(self):
        """Stop the loop after the current frame."""
        self.running = False
