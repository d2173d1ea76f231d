"""
Text sinks for frame statistics.
A sink is anything that can display a string: an on-screen label,
an in-memory buffer, or the log.
"""

import logging
import math
from dataclasses import dataclass, fields
from typing import List, Optional, Protocol

logger = logging.getLogger(__name__)


class TextSink(Protocol):
    """Anything that accepts a formatted text value."""

    def set_text(self, text: str) -> None:
        ...


def _format(value: float, decimals: int) -> str:
    value = float(value)
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return f"{value:.{decimals}f}"


def format_fps(value: float) -> str:
    """Format an FPS value as a whole number."""
    return _format(value, 0)


def format_ms(value: float) -> str:
    """Format a frame time in milliseconds with one decimal."""
    return _format(value, 1)


class BufferSink:
    """
    In-memory sink that keeps every value written to it.
    """

    def __init__(self, name: str = ""):
        self.name = name
        self.history: List[str] = []

    def set_text(self, text: str) -> None:
        self.history.append(text)

    @property
    def text(self) -> Optional[str]:
        """Last value written, or None if nothing was written."""
        return self.history[-1] if self.history else None

    @property
    def write_count(self) -> int:
        return len(self.history)

    def clear(self):
        self.history.clear()

    def __repr__(self) -> str:
        return f"BufferSink({self.name!r}, text={self.text!r})"


class LabelSink:
    """
    Adapter for GUI labels (customtkinter / tkinter).

    Any widget exposing ``configure(text=...)`` works.
    """

    def __init__(self, label, prefix: str = "", suffix: str = ""):
        self.label = label
        self.prefix = prefix
        self.suffix = suffix

    def set_text(self, text: str) -> None:
        self.label.configure(text=f"{self.prefix}{text}{self.suffix}")


class LogSink:
    """Writes every value to the log under a fixed name."""

    def __init__(self, name: str, level: int = logging.INFO, log: Optional[logging.Logger] = None):
        self.name = name
        self.level = level
        self.log = log or logger

    def set_text(self, text: str) -> None:
        self.log.log(self.level, "%s: %s", self.name, text)


@dataclass
class FrameStatsSinks:
    """The six outputs of the overlay. Missing sinks are skipped."""
    fps: Optional[TextSink] = None
    ms: Optional[TextSink] = None
    best_fps: Optional[TextSink] = None
    best_ms: Optional[TextSink] = None
    worst_fps: Optional[TextSink] = None
    worst_ms: Optional[TextSink] = None

    @classmethod
    def buffers(cls) -> "FrameStatsSinks":
        """Create a set of named in-memory sinks."""
        return cls(**{f.name: BufferSink(f.name) for f in fields(cls)})

    @classmethod
    def to_log(cls, level: int = logging.INFO) -> "FrameStatsSinks":
        """Create a set of sinks that report through ``logging``."""
        return cls(**{f.name: LogSink(f.name, level) for f in fields(cls)})

    def emit(self, name: str, text: str):
        """Write ``text`` to the sink called ``name`` if it is set."""
        sink = getattr(self, name)
        if sink is not None:
            sink.set_text(text)
