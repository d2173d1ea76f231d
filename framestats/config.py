"""
Tracker configuration with YAML persistence.

Example config.yaml:
    sample_duration: 0.5
    warmup_seconds: 2.0
    target_fps: 60
    metrics_path: logs/frame_metrics.json
"""

import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Optional

import yaml

from .tracker import (
    DEFAULT_SAMPLE_DURATION,
    DEFAULT_WARMUP_SECONDS,
    MAX_SAMPLE_DURATION,
    MIN_SAMPLE_DURATION,
)

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when a config file cannot be used."""


@dataclass
class TrackerConfig:
    sample_duration: float = DEFAULT_SAMPLE_DURATION
    """Window length in seconds for the FPS / ms average. Range 0.0-2.0"""

    warmup_seconds: float = DEFAULT_WARMUP_SECONDS
    """Worst-frame tracking starts after this many seconds"""

    target_fps: Optional[float] = None
    """Pace the driver loop to this rate. None = unthrottled"""

    history_size: int = 1000
    """Number of frame durations kept by the metrics logger"""

    metrics_path: str = "logs/frame_metrics.json"
    """Where the metrics logger saves JSON"""

    log_level: str = "INFO"

    def __post_init__(self):
        # Same range as the overlay slider; out-of-range values are clamped
        clamped = min(max(float(self.sample_duration), MIN_SAMPLE_DURATION), MAX_SAMPLE_DURATION)
        if clamped != self.sample_duration:
            logger.warning(
                f"sample_duration {self.sample_duration} out of range "
                f"[{MIN_SAMPLE_DURATION}, {MAX_SAMPLE_DURATION}], using {clamped}"
            )
        self.sample_duration = clamped

        if self.warmup_seconds < 0:
            raise ConfigError(f"warmup_seconds must be >= 0, got {self.warmup_seconds}")
        if self.target_fps is not None and self.target_fps <= 0:
            raise ConfigError(f"target_fps must be > 0, got {self.target_fps}")
        if self.history_size < 1:
            raise ConfigError(f"history_size must be >= 1, got {self.history_size}")

    @classmethod
    def from_dict(cls, data: dict) -> "TrackerConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        for key in sorted(unknown):
            logger.warning(f"Ignoring unknown config key: {key}")
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> dict:
        return asdict(self)


def load_config(path) -> TrackerConfig:
    """
    Load configuration from a YAML file.

    Args:
        path: Path to YAML file

    Returns:
        TrackerConfig
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config root must be a mapping, got {type(data).__name__}")

    try:
        config = TrackerConfig.from_dict(data)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid config in {path}: {e}") from e

    logger.info(f"Config loaded from: {path}")
    return config


def save_config(config: TrackerConfig, path):
    """Write configuration to a YAML file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w') as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)

    logger.info(f"Config saved to: {path}")
