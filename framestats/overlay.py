"""
customtkinter overlay showing live frame statistics.
"""

import logging
from typing import Optional

import customtkinter as ctk

from .clock import FrameClock
from .config import TrackerConfig
from .logger import FrameStatsLogger
from .sinks import FrameStatsSinks, LabelSink
from .tracker import FrameStatsTracker

logger = logging.getLogger(__name__)

ROWS = (
    ('FPS', 'fps', 'ms'),
    ('High', 'best_fps', 'best_ms'),
    ('Low', 'worst_fps', 'worst_ms'),
)


class FrameStatsOverlay(ctk.CTkFrame):
    """Three rows (current, high, low) of FPS and ms labels."""

    def __init__(self, master, **kwargs):
        super().__init__(master, **kwargs)
        self.widgets = {}

        for row, (title, fps_key, ms_key) in enumerate(ROWS):
            ctk.CTkLabel(self, text=title, font=("Consolas", 12, "bold"),
                         anchor="w").grid(row=row, column=0, padx=(8, 4), pady=2, sticky="w")

            self.widgets[fps_key] = ctk.CTkLabel(self, text="-", font=("Consolas", 12),
                                                 width=48, anchor="e")
            self.widgets[fps_key].grid(row=row, column=1, padx=4, pady=2)

            self.widgets[ms_key] = ctk.CTkLabel(self, text="-", font=("Consolas", 12),
                                                width=72, anchor="e")
            self.widgets[ms_key].grid(row=row, column=2, padx=(4, 8), pady=2)

    def sinks(self) -> FrameStatsSinks:
        """Sinks writing into this overlay's labels."""
        return FrameStatsSinks(
            fps=LabelSink(self.widgets['fps']),
            ms=LabelSink(self.widgets['ms'], suffix=" ms"),
            best_fps=LabelSink(self.widgets['best_fps']),
            best_ms=LabelSink(self.widgets['best_ms'], suffix=" ms"),
            worst_fps=LabelSink(self.widgets['worst_fps']),
            worst_ms=LabelSink(self.widgets['worst_ms'], suffix=" ms"),
        )


class OverlayApp(ctk.CTk):
    """
    Window hosting the overlay. The Tk event loop is the frame loop:
    every ``after()`` callback counts as one rendered frame.
    """

    def __init__(self, config: Optional[TrackerConfig] = None, metrics: Optional[FrameStatsLogger] = None):
        super().__init__()
        self.tracker_config = config or TrackerConfig()
        self.metrics = metrics
        self._job = None

        self.title("Frame Stats")
        self.resizable(False, False)
        self.attributes("-topmost", True)

        self.overlay = FrameStatsOverlay(self)
        self.overlay.pack(fill="both", expand=True, padx=6, pady=6)

        self.tracker = FrameStatsTracker.from_config(self.tracker_config, sinks=self.overlay.sinks())
        if self.metrics is not None:
            self.metrics.attach(self.tracker)

        self.clock = FrameClock()
        target_fps = self.tracker_config.target_fps or 60
        self.interval_ms = max(1, int(1000 / target_fps))

        self.protocol("WM_DELETE_WINDOW", self.on_closing)
        logger.info(f"Overlay started (interval={self.interval_ms}ms)")

    def _frame(self):
        delta, elapsed = self.clock.tick()
        if self.metrics is not None:
            self.metrics.log_frame(delta)
        self.tracker.on_frame_rendered(delta, elapsed)
        self._job = self.after(self.interval_ms, self._frame)

    def run(self):
        self.clock.start()
        self._job = self.after(self.interval_ms, self._frame)
        self.mainloop()

    def on_closing(self):
        logger.info("Closing overlay")
        if self._job is not None:
            self.after_cancel(self._job)
        self.destroy()


def run_overlay(config: Optional[TrackerConfig] = None, metrics: Optional[FrameStatsLogger] = None):
    """Open the overlay window and block until it is closed."""
    ctk.set_appearance_mode("dark")
    app = OverlayApp(config, metrics)
    app.run()
