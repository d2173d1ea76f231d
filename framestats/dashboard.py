"""
Simple dashboard for visualizing frame timing.
"""

import json
from pathlib import Path
from typing import List

import matplotlib.pyplot as plt
import numpy as np

from .tracker import WindowSample


class FrameStatsDashboard:
    """
    Frame timing visualization dashboard.
    """

    def __init__(self, figsize: tuple = (12, 8)):
        """
        Initialize dashboard.

        Args:
            figsize: Figure size (width, height)
        """
        self.fig = plt.figure(figsize=figsize)
        self.fig.suptitle('Frame Stats Dashboard', fontsize=16)

        self.ax_fps = self.fig.add_subplot(2, 2, 1)
        self.ax_ms = self.fig.add_subplot(2, 2, 2)
        self.ax_frames = self.fig.add_subplot(2, 2, 3)
        self.ax_hist = self.fig.add_subplot(2, 2, 4)

        # Per-window data
        self.timestamps: List[float] = []
        self.fps_values: List[float] = []
        self.ms_values: List[float] = []

        # Per-frame data
        self.frame_times_ms: List[float] = []

        self._setup_plots()

    def _setup_plots(self):
        """Setup plot styles and labels."""
        self.ax_fps.set_title('FPS (window average)')
        self.ax_fps.set_xlabel('Time (s)')
        self.ax_fps.set_ylabel('FPS')
        self.ax_fps.grid(True, alpha=0.3)

        self.ax_ms.set_title('Frame Time (window average)')
        self.ax_ms.set_xlabel('Time (s)')
        self.ax_ms.set_ylabel('Frame time (ms)')
        self.ax_ms.grid(True, alpha=0.3)

        self.ax_frames.set_title('Recent Frames')
        self.ax_frames.set_xlabel('Frame')
        self.ax_frames.set_ylabel('Frame time (ms)')
        self.ax_frames.grid(True, alpha=0.3)

        self.ax_hist.set_title('Frame Time Distribution')
        self.ax_hist.set_xlabel('Frame time (ms)')
        self.ax_hist.set_ylabel('Frequency')
        self.ax_hist.grid(True, alpha=0.3)

    def update(self, sample: WindowSample):
        """
        Add a window sample. Usable directly as a tracker listener.

        Args:
            sample: Window flush from the tracker
        """
        self.timestamps.append(sample.timestamp)
        self.fps_values.append(sample.fps)
        self.ms_values.append(sample.ms)

    def add_frame(self, frame_ms: float, max_points: int = 1000):
        """Add a single frame time, keeping the last ``max_points``."""
        self.frame_times_ms.append(frame_ms)
        if len(self.frame_times_ms) > max_points:
            self.frame_times_ms = self.frame_times_ms[-max_points:]

    def render(self, save_path: str = None) -> bool:
        """
        Render the dashboard.

        Args:
            save_path: Optional path to save figure

        Returns:
            False if there was nothing to draw
        """
        if not self.fps_values and not self.frame_times_ms:
            return False

        self.ax_fps.clear()
        self.ax_ms.clear()
        self.ax_frames.clear()
        self.ax_hist.clear()
        self._setup_plots()

        if self.fps_values:
            fps = np.array(self.fps_values, dtype=np.float64)
            ms = np.array(self.ms_values, dtype=np.float64)
            finite = np.isfinite(fps) & np.isfinite(ms)
            time_axis = np.array(self.timestamps, dtype=np.float64)[finite]
            fps, ms = fps[finite], ms[finite]

            if fps.size:
                self.ax_fps.plot(time_axis, fps, 'g-', linewidth=1.5, label='FPS')
                self.ax_fps.axhline(y=np.mean(fps), color='r', linestyle='--',
                                    label=f'Mean: {np.mean(fps):.1f} FPS')
                self.ax_fps.legend()

                self.ax_ms.plot(time_axis, ms, 'b-', linewidth=1.5, label='Frame time')
                self.ax_ms.axhline(y=np.mean(ms), color='r', linestyle='--',
                                   label=f'Mean: {np.mean(ms):.2f}ms')
                self.ax_ms.legend()

        if self.frame_times_ms:
            frames = np.array(self.frame_times_ms, dtype=np.float64)
            self.ax_frames.plot(frames, color='orange', linewidth=1.0)

            self.ax_hist.hist(frames, bins=20, color='skyblue', edgecolor='black', alpha=0.7)

            stats_text = 'Stats:\n'
            stats_text += f'Min: {np.min(frames):.2f}ms\n'
            stats_text += f'Max: {np.max(frames):.2f}ms\n'
            stats_text += f'P50: {np.percentile(frames, 50):.2f}ms\n'
            stats_text += f'P99: {np.percentile(frames, 99):.2f}ms'

            self.ax_hist.text(0.7, 0.7, stats_text, transform=self.ax_hist.transAxes,
                              fontsize=10, verticalalignment='top',
                              bbox=dict(boxstyle='round', facecolor='wheat', alpha=0.5))

        self.fig.tight_layout()

        if save_path:
            self.fig.savefig(save_path, dpi=150, bbox_inches='tight')
        else:
            plt.show()
        return True

    def close(self):
        plt.close(self.fig)

    def load_from_json(self, json_path: str):
        """
        Load metrics saved by FrameStatsLogger.

        Args:
            json_path: Path to metrics JSON file
        """
        with open(json_path, 'r') as f:
            data = json.load(f)

        for entry in data.get('window_samples', []):
            self.update(WindowSample(**entry))
        for frame_ms in data.get('recent_frame_times_ms', []):
            self.add_frame(frame_ms)


def create_dashboard_from_metrics(metrics_path: str, output_path: str = None) -> Path:
    """
    Create and save dashboard from metrics file.

    Args:
        metrics_path: Path to metrics JSON
        output_path: Output path for dashboard image

    Returns:
        Path of the written image
    """
    dashboard = FrameStatsDashboard()
    try:
        dashboard.load_from_json(metrics_path)

        if output_path is None:
            output_path = Path(metrics_path).with_suffix('.png')

        dashboard.render(save_path=str(output_path))
    finally:
        dashboard.close()
    return Path(output_path)


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description='Generate frame stats dashboard')
    parser.add_argument('--metrics', type=str, required=True,
                        help='Path to metrics JSON file')
    parser.add_argument('--output', type=str, default=None,
                        help='Output path for dashboard image')

    args = parser.parse_args()

    print(f"[INFO] Dashboard saved to: {create_dashboard_from_metrics(args.metrics, args.output)}")
