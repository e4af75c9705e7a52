#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Presentation Manager - UI layer for the Step Compass screen

Responsibilities:
- Owning the OpenCV window
- Listening to StepSummary / HeadingState changes
- Redrawing the screen when either changes, throttled to a max FPS
- Keyboard input and PNG snapshots

State listeners fire on the sensor delivery threads; they only raise a
dirty flag. The redraw itself happens on the UI loop in update_display(),
which takes one snapshot of each state and builds the frame from those.
"""

import logging
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import cv2
import numpy as np

from step_compass.core.state import HeadingState, StepSummary
from step_compass.presentation.renderers.compass_view import ScreenModel, build_screen
from step_compass.presentation.renderers.frame_renderer import FrameRenderer
from step_compass.utils.config_sections import (
    DialConfig,
    DisplayConfig,
    load_dial_config,
    load_display_config,
)

log = logging.getLogger("compass.renderer")


@dataclass
class UIState:
    """User interface state"""
    display_enabled: bool = True
    window_name: str = "Step Compass"
    window_size: tuple = (420, 760)
    max_fps: float = 30.0


class PresentationManager:
    """
    Presentation and UI manager

    Re-renders whenever the step summary or heading changes. Heading
    updates can arrive far faster than a screen refresh, so redraws are
    capped at UIState.max_fps; the frame shown always reflects the most
    recent update once the next frame interval has passed.
    """

    def __init__(
        self,
        step_summary: StepSummary,
        heading_state: HeadingState,
        display_enabled: bool = True,
        config: Optional[DisplayConfig] = None,
        dial_config: Optional[DialConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the presentation manager

        Args:
            step_summary: Pedometer state to display
            heading_state: Compass state to display
            display_enabled: False renders off-screen only (snapshots, tests)
            config: Display section (defaults loaded from Config)
            dial_config: Dial section (defaults loaded from Config)
            clock: Monotonic time source used for throttling
        """
        self.config = config or load_display_config()
        self.dial_config = dial_config or load_dial_config()
        self.ui_state = UIState(
            display_enabled=display_enabled,
            window_name=self.config.window_name,
            window_size=(self.config.width, self.config.height),
            max_fps=self.config.max_fps,
        )
        self.step_summary = step_summary
        self.heading_state = heading_state
        self.frame_renderer = FrameRenderer(self.config)
        self.clock = clock

        # Display state
        self.current_display_frame: Optional[np.ndarray] = None
        self.current_model: Optional[ScreenModel] = None
        self.render_count = 0
        self.frame_count = 0
        self.last_fps_time = clock()
        self.current_fps = 0.0
        self._last_render_time: Optional[float] = None

        # Starts dirty so the first call draws the "unavailable" screen
        self._dirty = threading.Event()
        self._dirty.set()
        self._ui_lock = threading.Lock()

        self._unsubscribers = [
            step_summary.subscribe(self._mark_dirty),
            heading_state.subscribe(self._mark_dirty),
        ]

        if self.ui_state.display_enabled:
            self._initialize_opencv_window()

        print("[PRESENTATION] PresentationManager initialized "
              f"(display={'on' if display_enabled else 'off'}, max {self.ui_state.max_fps:.0f} FPS)")

    def _initialize_opencv_window(self):
        """Initialize OpenCV window"""
        cv2.namedWindow(self.ui_state.window_name, cv2.WINDOW_NORMAL)
        cv2.resizeWindow(self.ui_state.window_name, *self.ui_state.window_size)
        log.info("OpenCV window '%s' initialized", self.ui_state.window_name)

    def _mark_dirty(self):
        self._dirty.set()

    @property
    def needs_redraw(self) -> bool:
        return self._dirty.is_set()

    def update_display(self) -> str:
        """
        Redraw if state changed since the last frame and the frame interval
        has elapsed, then pump the window event loop.

        Returns:
            str: Key pressed ('q' quit, 'r' restart heading, 's' snapshot) or ''
        """
        now = self.clock()
        min_interval = 1.0 / self.ui_state.max_fps if self.ui_state.max_fps > 0 else 0.0
        throttled = (
            self._last_render_time is not None
            and now - self._last_render_time < min_interval
        )

        if self._dirty.is_set() and not throttled:
            self.render_now()
            self._last_render_time = now

        if not self.ui_state.display_enabled:
            return ''

        with self._ui_lock:
            frame = self.current_display_frame
        if frame is not None:
            cv2.imshow(self.ui_state.window_name, frame)

        key = cv2.waitKey(1) & 0xFF
        return chr(key) if key != 255 else ''

    def render_now(self) -> np.ndarray:
        """Render the current state unconditionally and return the frame."""
        # Clear before reading so an update landing mid-render triggers another frame
        self._dirty.clear()

        model = build_screen(
            self.step_summary.snapshot(),
            self.heading_state.snapshot(),
            self.dial_config,
        )
        frame = self.frame_renderer.render(model)

        with self._ui_lock:
            self.current_model = model
            self.current_display_frame = frame
        self.render_count += 1
        self._update_fps_counter()

        log.debug("Rendered frame %d: %s | %s | %s", self.render_count,
                  model.step_text, model.distance_text, model.readout_text)
        return frame

    def save_snapshot(self, path: Optional[str] = None) -> Path:
        """Write the current frame (rendering one if needed) as PNG."""
        with self._ui_lock:
            frame = self.current_display_frame
        if frame is None:
            frame = self.render_now()

        target = Path(path or self.config.snapshot_path)
        target.parent.mkdir(parents=True, exist_ok=True)
        if not cv2.imwrite(str(target), frame):
            raise IOError(f"Could not write snapshot to {target}")

        log.info("Snapshot saved to %s", target)
        return target

    def _update_fps_counter(self):
        """Update FPS counter"""
        self.frame_count += 1
        current_time = self.clock()

        if current_time - self.last_fps_time >= 1.0:
            self.current_fps = self.frame_count / (current_time - self.last_fps_time)
            self.frame_count = 0
            self.last_fps_time = current_time

    def get_current_display_frame(self) -> Optional[np.ndarray]:
        """Get current display frame"""
        with self._ui_lock:
            return self.current_display_frame.copy() if self.current_display_frame is not None else None

    def get_ui_stats(self) -> Dict[str, Any]:
        """Get UI statistics"""
        return {
            'display_enabled': self.ui_state.display_enabled,
            'current_fps': self.current_fps,
            'render_count': self.render_count,
            'max_fps': self.ui_state.max_fps,
            'window_name': self.ui_state.window_name,
        }

    def print_ui_stats(self):
        """Print UI statistics"""
        stats = self.get_ui_stats()

        print("\n[PRESENTATION STATS]")
        print(f"  Frames rendered: {stats['render_count']}")
        print(f"  FPS: {stats['current_fps']:.1f} (max {stats['max_fps']:.0f})")
        print(f"  Display: {'on' if stats['display_enabled'] else 'off'}")

    def cleanup(self):
        """Release state listeners and windows"""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

        if self.ui_state.display_enabled:
            try:
                cv2.destroyAllWindows()
            except cv2.error as err:
                log.warning("OpenCV cleanup error: %s", err)

        print("[PRESENTATION] Cleanup completed")
