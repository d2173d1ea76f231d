#!/usr/bin/env python3
"""
start.py - Frame Stats launcher

Modes:
1. Headless run: drives a frame loop (optionally paced to --target-fps)
   and reports statistics through the log
2. GUI overlay: customtkinter window with live FPS / ms labels (--gui)

Optionally saves metrics JSON and renders a matplotlib dashboard.
"""
import argparse
import logging
import random
import sys
import time
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from framestats import (
    ConfigError,
    FrameLoop,
    FrameStatsLogger,
    FrameStatsSinks,
    FrameStatsTracker,
    TrackerConfig,
    load_config,
)

logger = logging.getLogger("framestats.start")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Frame timing statistics overlay')
    parser.add_argument('--config', type=str, default=None,
                        help='Path to YAML config')
    parser.add_argument('--sample-duration', type=float, default=None,
                        help='Window length in seconds (0.0-2.0)')
    parser.add_argument('--target-fps', type=float, default=None,
                        help='Pace frames to this rate')
    parser.add_argument('--frames', type=int, default=None,
                        help='Stop after this many frames')
    parser.add_argument('--duration', type=float, default=5.0,
                        help='Stop after this many seconds (headless)')
    parser.add_argument('--jitter-ms', type=float, default=0.0,
                        help='Simulated random work per frame in ms (headless)')
    parser.add_argument('--save-metrics', action='store_true',
                        help='Save metrics JSON to the configured path')
    parser.add_argument('--dashboard', type=str, default=None,
                        help='Render a dashboard PNG to this path')
    parser.add_argument('--gui', action='store_true',
                        help='Open the overlay window instead of a headless run')
    return parser.parse_args(argv)


def build_config(args) -> TrackerConfig:
    config = load_config(args.config) if args.config else TrackerConfig()
    overrides = {}
    if args.sample_duration is not None:
        overrides['sample_duration'] = args.sample_duration
    if args.target_fps is not None:
        overrides['target_fps'] = args.target_fps
    if overrides:
        config = TrackerConfig.from_dict({**config.to_dict(), **overrides})
    return config


def simulated_work(jitter_ms: float):
    """Render callback standing in for real frame work."""
    def render(frame_index: int):
        if jitter_ms > 0:
            time.sleep(random.uniform(0.0, jitter_ms) / 1000.0)
    return render


def run_headless(config: TrackerConfig, metrics: FrameStatsLogger, args) -> FrameStatsTracker:
    tracker = FrameStatsTracker.from_config(config, sinks=FrameStatsSinks.to_log())
    metrics.attach(tracker)

    loop = FrameLoop(
        tracker,
        render_fn=simulated_work(args.jitter_ms),
        target_fps=config.target_fps,
        metrics=metrics
    )
    loop.run(max_frames=args.frames, duration=None if args.frames else args.duration)

    logger.info(str(tracker))
    return tracker


def main(argv=None) -> int:
    args = parse_args(argv)

    try:
        config = build_config(args)
    except ConfigError as e:
        logging.basicConfig(level=logging.INFO)
        logger.error(f"Config error: {e}")
        return 1

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    metrics = FrameStatsLogger(window_size=config.history_size, save_path=config.metrics_path)

    if args.gui:
        from framestats.overlay import run_overlay
        run_overlay(config, metrics)
    else:
        run_headless(config, metrics, args)
        metrics.print_summary()

    if args.save_metrics:
        metrics.save_metrics()

    if args.dashboard:
        from framestats.dashboard import FrameStatsDashboard

        dashboard = FrameStatsDashboard()
        for sample in metrics.samples:
            dashboard.update(sample)
        for frame_ms in metrics.frame_times_ms:
            dashboard.add_frame(frame_ms)
        if dashboard.render(save_path=args.dashboard):
            logger.info(f"Dashboard saved to: {args.dashboard}")
        else:
            logger.warning("No data to display")
        dashboard.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
