"""Frame timing statistics and on-screen overlay."""

from .tracker import FrameStatsTracker, FrameStats, WindowSample
from .sinks import (
    TextSink,
    BufferSink,
    LabelSink,
    LogSink,
    FrameStatsSinks,
    format_fps,
    format_ms
)
from .clock import FrameClock
from .driver import FrameLoop
from .config import TrackerConfig, ConfigError, load_config, save_config
from .logger import FrameStatsLogger

__all__ = [
    'FrameStatsTracker',
    'FrameStats',
    'WindowSample',
    'TextSink',
    'BufferSink',
    'LabelSink',
    'LogSink',
    'FrameStatsSinks',
    'format_fps',
    'format_ms',
    'FrameClock',
    'FrameLoop',
    'TrackerConfig',
    'ConfigError',
    'load_config',
    'save_config',
    'FrameStatsLogger'
]
