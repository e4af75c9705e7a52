#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Simulated heading service for running the compass without a magnetometer.

This module provides a drop-in HeadingService that delivers magnetic
headings from a background thread at a fixed rate:
1. Synthetic rotation at a constant rate with gaussian noise
2. A static heading with small jitter
3. Replay of a recorded CSV file in loop

Location permission is simulated too: when the prompt is "denied", the
subscription is accepted but never delivers anything, matching how a
platform location manager behaves without authorization.

Operating modes:
- 'synthetic': heading += rate * dt + noise, wrapped to [0, 360)
- 'static': fixed heading + jitter
- 'replay': rows of a CSV file with a 'heading' column

Usage:
    service = SimulatedHeadingService(mode='synthetic', update_hz=30)
    service.request_permission()
    service.subscribe(on_update, on_error)

    service = SimulatedHeadingService(mode='replay', replay_path='data/walk.csv')
"""

import logging
import threading
import time
from pathlib import Path
from typing import Optional

import numpy as np

from step_compass.core.sensors.interfaces import ErrorCallback, HeadingCallback
from step_compass.utils.config_sections import SimulationConfig, load_simulation_config

log = logging.getLogger("compass.sensors")

MODES = ("synthetic", "static", "replay")


class SimulatedHeadingService:
    """In-process HeadingService."""

    def __init__(
        self,
        mode: Optional[str] = None,
        update_hz: Optional[float] = None,
        available: Optional[bool] = None,
        permission_granted: Optional[bool] = None,
        start_heading: float = 0.0,
        rotation_deg_per_s: Optional[float] = None,
        noise_deg: Optional[float] = None,
        static_heading: Optional[float] = None,
        replay_path: Optional[str] = None,
        seed: Optional[int] = None,
        config: Optional[SimulationConfig] = None,
    ) -> None:
        """
        Args:
            mode: 'synthetic', 'static', or 'replay'
            update_hz: Deliveries per second
            available: Value reported by heading_available()
            permission_granted: Outcome of the simulated permission prompt
            start_heading: Initial heading for synthetic mode
            rotation_deg_per_s: Synthetic rotation rate (negative turns left)
            noise_deg: Standard deviation of per-sample noise
            static_heading: Heading reported in static mode
            replay_path: CSV file for replay mode
            seed: Random seed for reproducible noise
            config: Simulation section (defaults loaded from Config)
        """
        cfg = config or load_simulation_config()
        self.mode = mode or cfg.heading_mode
        self.update_hz = update_hz or cfg.heading_update_hz
        self.available = cfg.heading_available if available is None else available
        self.permission_granted = (
            cfg.location_permission if permission_granted is None else permission_granted
        )
        self.rotation_deg_per_s = (
            cfg.rotation_deg_per_s if rotation_deg_per_s is None else rotation_deg_per_s
        )
        self.noise_deg = cfg.heading_noise_deg if noise_deg is None else noise_deg
        self.static_heading = cfg.static_heading if static_heading is None else static_heading
        self.replay_path = replay_path or cfg.replay_path

        if self.mode not in MODES:
            raise ValueError(f"Unknown mode: {self.mode}")

        self._rng = np.random.default_rng(seed)
        self._heading = float(start_heading) % 360.0
        self._replay = None
        self._replay_index = 0

        # Permission prompt state: None until requested
        self.authorized: Optional[bool] = None

        self._on_update: Optional[HeadingCallback] = None
        self._on_error: Optional[ErrorCallback] = None
        self._lock = threading.Lock()
        self._running = False
        self._wake = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.delivered_count = 0

        if self.mode == 'replay':
            self._replay = self._load_replay(self.replay_path)

        log.info("Simulated heading service ready (mode=%s, %.0f Hz)", self.mode, self.update_hz)

    @staticmethod
    def _load_replay(path: Optional[str]) -> np.ndarray:
        if not path or not Path(path).exists():
            raise ValueError(f"Replay file not found: {path}")

        table = np.genfromtxt(path, delimiter=",", names=True, dtype=float, encoding="utf-8")
        if table.dtype.names is None or "heading" not in table.dtype.names:
            raise ValueError(f"Replay file has no 'heading' column: {path}")

        headings = np.atleast_1d(table["heading"])
        if headings.size == 0:
            raise ValueError(f"Replay file is empty: {path}")
        return headings

    # ------------------------------------------------------------------
    # HeadingService API
    # ------------------------------------------------------------------

    def heading_available(self) -> bool:
        return self.available

    def request_permission(self) -> None:
        self.authorized = self.permission_granted
        log.info("Location permission %s", "granted" if self.authorized else "denied")

    def revoke_permission(self) -> None:
        """Simulate the user withdrawing location access in system settings."""
        self.permission_granted = False
        self.authorized = False
        log.info("Location permission revoked")

    def grant_permission(self) -> None:
        """Simulate the user re-enabling location access (takes effect on next prompt)."""
        self.permission_granted = True

    def subscribe(self, on_update: HeadingCallback, on_error: ErrorCallback) -> None:
        with self._lock:
            self._on_update = on_update
            self._on_error = on_error

            if self._running:
                return
            self._running = True
            self._wake.clear()

        self._thread = threading.Thread(target=self._deliver_loop, daemon=True)
        self._thread.start()

    def unsubscribe(self) -> None:
        with self._lock:
            self._running = False
            self._on_update = None
            self._on_error = None
        self._wake.set()

        if self._thread and self._thread is not threading.current_thread():
            self._thread.join(timeout=2.0)
        self._thread = None

    # ------------------------------------------------------------------
    # Synchronous delivery (tests, demos)
    # ------------------------------------------------------------------

    def emit(self, heading: float) -> None:
        """Deliver one heading to the current subscriber, if authorized."""
        callback = self._current_callbacks()[0]
        if callback is not None:
            self.delivered_count += 1
            callback(heading)

    def emit_error(self, message: str) -> None:
        """Report a delivery failure to the current subscriber."""
        callback = self._current_callbacks()[1]
        if callback is not None:
            callback(message)

    def _current_callbacks(self):
        with self._lock:
            if not self.authorized:
                return None, None
            return self._on_update, self._on_error

    # ------------------------------------------------------------------
    # Delivery thread
    # ------------------------------------------------------------------

    def _deliver_loop(self) -> None:
        """Thread loop that produces headings based on mode."""
        interval = 1.0 / self.update_hz

        while True:
            loop_start = time.time()

            with self._lock:
                if not self._running:
                    break

            if self.authorized:
                self._tick(interval)

            elapsed = time.time() - loop_start
            sleep_time = max(0, interval - elapsed)
            if sleep_time > 0:
                self._wake.wait(sleep_time)

    def _tick(self, dt: float) -> None:
        if self.mode == 'replay':
            value = self._next_replay_value()
            if value is None:
                return
        elif self.mode == 'static':
            value = self.static_heading + self._noise()
        else:
            self._heading += self.rotation_deg_per_s * dt
            value = self._heading + self._noise()

        self.emit(float(value) % 360.0)

    def _noise(self) -> float:
        if self.noise_deg <= 0:
            return 0.0
        return float(self._rng.normal(0.0, self.noise_deg))

    def _next_replay_value(self) -> Optional[float]:
        row = self._replay_index
        value = self._replay[row]
        self._replay_index = (row + 1) % len(self._replay)

        if np.isnan(value):
            # Header is row 1 in the file
            self.emit_error(f"Unreadable heading in replay row {row + 2}")
            return None
        return float(value)
