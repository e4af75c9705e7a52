#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Simulated pedometer service for running the screen without platform sensors.

Answers range queries with a step count proportional to the queried span
and a distance derived from a fixed stride length. The answer is delivered
on a background thread after a short latency, the way a platform pedometer
calls back from its own queue.

Usage:
    pedometer = SimulatedPedometer(steps_per_day=6500)
    pedometer.query_range(start, end, handler)

    # Feature-unavailable device
    pedometer = SimulatedPedometer(available=False)

    # Failing query / no distance estimate
    pedometer = SimulatedPedometer(fail_with=RuntimeError("sensor busy"))
    pedometer = SimulatedPedometer(report_distance=False)
"""

import logging
import threading
import time
from datetime import datetime
from typing import Optional

from step_compass.core.sensors.interfaces import PedometerData, PedometerHandler
from step_compass.utils.config_sections import SimulationConfig, load_simulation_config

log = logging.getLogger("compass.sensors")

SECONDS_PER_DAY = 24 * 60 * 60


class SimulatedPedometer:
    """In-process PedometerService."""

    def __init__(
        self,
        available: Optional[bool] = None,
        steps_per_day: Optional[int] = None,
        stride_length_m: Optional[float] = None,
        latency_s: Optional[float] = None,
        fail_with: Optional[Exception] = None,
        report_distance: bool = True,
        config: Optional[SimulationConfig] = None,
    ) -> None:
        """
        Args:
            available: Value reported by all three capability flags
            steps_per_day: Walking rate used to size the answer
            stride_length_m: Meters per step for the distance estimate
            latency_s: Delay before the handler runs (0 = answer inline)
            fail_with: Deliver this error instead of data
            report_distance: False answers with distance_meters=None
            config: Simulation section (defaults loaded from Config)
        """
        cfg = config or load_simulation_config()
        self.available = cfg.pedometer_available if available is None else available
        self.steps_per_day = cfg.steps_per_day if steps_per_day is None else steps_per_day
        self.stride_length_m = cfg.stride_length_m if stride_length_m is None else stride_length_m
        self.latency_s = cfg.query_latency_s if latency_s is None else latency_s
        self.fail_with = fail_with
        self.report_distance = report_distance

        self.query_count = 0
        self._threads = []

    def is_event_tracking_available(self) -> bool:
        return self.available

    def is_distance_available(self) -> bool:
        return self.available

    def is_step_counting_available(self) -> bool:
        return self.available

    def query_range(self, start: datetime, end: datetime, handler: PedometerHandler) -> None:
        self.query_count += 1
        log.debug("Pedometer query %s -> %s", start.isoformat(), end.isoformat())

        if self.latency_s <= 0:
            self._answer(start, end, handler)
            return

        worker = threading.Thread(
            target=self._answer_later, args=(start, end, handler), daemon=True
        )
        self._threads.append(worker)
        worker.start()

    def join(self, timeout: float = 2.0) -> None:
        """Wait for pending answers (used by tests and clean shutdown)."""
        for worker in self._threads:
            worker.join(timeout=timeout)

    def _answer_later(self, start: datetime, end: datetime, handler: PedometerHandler) -> None:
        time.sleep(self.latency_s)
        self._answer(start, end, handler)

    def _answer(self, start: datetime, end: datetime, handler: PedometerHandler) -> None:
        if self.fail_with is not None:
            handler(None, self.fail_with)
            return

        span_days = max(0.0, (end - start).total_seconds() / SECONDS_PER_DAY)
        steps = int(round(span_days * self.steps_per_day))
        distance = steps * self.stride_length_m if self.report_distance else None

        handler(PedometerData(start=start, end=end, number_of_steps=steps, distance_meters=distance), None)
