"""
Frame metrics logger with JSON export.
Tracks frame durations and window samples from a FrameStatsTracker.
"""

import json
import logging
import time
from collections import deque
from datetime import datetime
from pathlib import Path
from typing import Dict, List

import numpy as np

from .tracker import FrameStatsTracker, WindowSample

logger = logging.getLogger(__name__)


class FrameStatsLogger:
    """
    Log and summarize frame timing.
    """

    def __init__(self, window_size: int = 1000, save_path: str = "logs/frame_metrics.json"):
        """
        Initialize frame metrics logger.

        Args:
            window_size: Number of recent frame durations kept
            save_path: Path to save metrics JSON
        """
        self.window_size = window_size
        self.save_path = Path(save_path)

        self.frame_times_ms = deque(maxlen=window_size)
        self.samples: List[WindowSample] = []

        self.total_frames = 0
        self.start_time = time.time()

    def attach(self, tracker: FrameStatsTracker) -> "FrameStatsLogger":
        """Subscribe to a tracker's window flushes."""
        tracker.add_listener(self.log_sample)
        return self

    def log_frame(self, delta_seconds: float):
        """
        Log one frame duration.

        Args:
            delta_seconds: Frame duration in seconds
        """
        self.frame_times_ms.append(1000.0 * delta_seconds)
        self.total_frames += 1

    def log_sample(self, sample: WindowSample):
        """Log a window flush."""
        self.samples.append(sample)

    def get_stats(self) -> Dict:
        """
        Get current statistics.

        Returns:
            Dictionary of statistics
        """
        if not self.frame_times_ms:
            return {
                'total_frames': self.total_frames,
                'windows': len(self.samples),
                'avg_frame_ms': 0.0,
                'p50_frame_ms': 0.0,
                'p95_frame_ms': 0.0,
                'p99_frame_ms': 0.0,
                'avg_fps': 0.0,
                'uptime_seconds': time.time() - self.start_time
            }

        frame_times = np.asarray(self.frame_times_ms, dtype=np.float64)
        avg_ms = float(np.mean(frame_times))

        stats = {
            'total_frames': self.total_frames,
            'windows': len(self.samples),
            'avg_frame_ms': avg_ms,
            'min_frame_ms': float(np.min(frame_times)),
            'max_frame_ms': float(np.max(frame_times)),
            'std_frame_ms': float(np.std(frame_times)),
            'p50_frame_ms': float(np.percentile(frame_times, 50)),
            'p95_frame_ms': float(np.percentile(frame_times, 95)),
            'p99_frame_ms': float(np.percentile(frame_times, 99)),
            'avg_fps': 1000.0 / avg_ms if avg_ms > 0 else 0.0,
        }

        # "1% low": FPS of the slowest 1% (0.1%) of frames
        for label, pct in (('low_1pct_fps', 99), ('low_01pct_fps', 99.9)):
            slow_ms = float(np.percentile(frame_times, pct))
            stats[label] = 1000.0 / slow_ms if slow_ms > 0 else 0.0

        if self.samples:
            window_fps = np.array([s.fps for s in self.samples], dtype=np.float64)
            window_fps = window_fps[np.isfinite(window_fps)]
            if window_fps.size:
                stats['min_window_fps'] = float(np.min(window_fps))
                stats['max_window_fps'] = float(np.max(window_fps))

        stats['uptime_seconds'] = time.time() - self.start_time

        return stats

    def save_metrics(self, path: str = None):
        """
        Save metrics to JSON file.

        Args:
            path: Optional path to save (default: use configured path)
        """
        save_path = Path(path) if path else self.save_path
        save_path.parent.mkdir(parents=True, exist_ok=True)

        metrics_data = {
            'timestamp': datetime.now().isoformat(),
            'statistics': self.get_stats(),
            'recent_frame_times_ms': list(self.frame_times_ms),
            'window_samples': [
                {
                    'timestamp': s.timestamp,
                    'frames': s.frames,
                    'elapsed': s.elapsed,
                    'fps': s.fps,
                    'ms': s.ms
                }
                for s in self.samples
            ],
            'window_size': self.window_size
        }

        with open(save_path, 'w') as f:
            json.dump(metrics_data, f, indent=2)

        logger.info(f"Metrics saved to: {save_path}")

    def load_metrics(self, path: str = None):
        """
        Load metrics from JSON file.

        Args:
            path: Path to load from
        """
        load_path = Path(path) if path else self.save_path

        if not load_path.exists():
            logger.warning(f"Metrics file not found: {load_path}")
            return

        with open(load_path, 'r') as f:
            data = json.load(f)

        if 'recent_frame_times_ms' in data:
            self.frame_times_ms = deque(data['recent_frame_times_ms'], maxlen=self.window_size)
        if 'window_samples' in data:
            self.samples = [WindowSample(**s) for s in data['window_samples']]
        self.total_frames = data.get('statistics', {}).get('total_frames', len(self.frame_times_ms))

        logger.info(f"Metrics loaded from: {load_path}")

    def reset(self):
        """Reset all metrics."""
        self.frame_times_ms.clear()
        self.samples.clear()
        self.total_frames = 0
        self.start_time = time.time()

    def print_summary(self):
        """Print metrics summary."""
        stats = self.get_stats()

        print(f"\n{'='*60}")
        print("FRAME TIMING SUMMARY")
        print(f"{'='*60}")
        print(f"Total Frames:     {stats['total_frames']}")
        print(f"Windows:          {stats['windows']}")
        print(f"Uptime:           {stats['uptime_seconds']:.1f}s")
        print(f"\nFrame Time:")
        print(f"  Average:  {stats['avg_frame_ms']:.2f} ms")
        if 'min_frame_ms' in stats:
            print(f"  Min:      {stats['min_frame_ms']:.2f} ms")
            print(f"  Max:      {stats['max_frame_ms']:.2f} ms")
            print(f"  Std Dev:  {stats['std_frame_ms']:.2f} ms")
        print(f"  P50:      {stats['p50_frame_ms']:.2f} ms")
        print(f"  P95:      {stats['p95_frame_ms']:.2f} ms")
        print(f"  P99:      {stats['p99_frame_ms']:.2f} ms")
        print(f"\nAverage FPS:      {stats['avg_fps']:.1f}")
        if 'low_1pct_fps' in stats:
            print(f"1% Low FPS:       {stats['low_1pct_fps']:.1f}")
            print(f"0.1% Low FPS:     {stats['low_01pct_fps']:.1f}")
        print(f"{'='*60}\n")
