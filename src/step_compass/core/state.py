"""
Observable state containers shared by the sensor subsystems and the screen.

Each container is written by exactly one subsystem and read by the
presentation layer. Writes commit every field of an update under one lock
and only then notify listeners, so a reader taking a snapshot never sees a
half-written update (e.g. a step count without its distance).

Usage:
    summary = StepSummary()
    unsubscribe = summary.subscribe(lambda: print(summary.snapshot()))
    summary.publish(step_count=8123, distance_miles=4.0)
"""

import logging
import threading
from dataclasses import dataclass
from typing import Callable, List, Optional

from step_compass.utils.config import Config

log = logging.getLogger("compass.state")

Listener = Callable[[], None]


class ObservableState:
    """Lock-protected state with push notification on every committed write."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._listeners: List[Listener] = []
        self._listeners_lock = threading.Lock()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a zero-argument listener.

        Returns:
            Callable that removes the listener again.
        """
        with self._listeners_lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._listeners_lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        with self._listeners_lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener()
            except Exception:
                log.exception("State listener %r failed", listener)


@dataclass(frozen=True)
class StepSnapshot:
    """Immutable view of StepSummary."""
    step_count: Optional[int] = None
    distance_miles: Optional[float] = None

    @property
    def is_available(self) -> bool:
        return self.step_count is not None and self.distance_miles is not None


@dataclass(frozen=True)
class HeadingSnapshot:
    """Immutable view of HeadingState."""
    heading_degrees: float = 0.0
    cardinal_label: str = "N"


class StepSummary(ObservableState):
    """Weekly step count and distance, published once per session."""

    def __init__(self) -> None:
        super().__init__()
        self._step_count: Optional[int] = None
        self._distance_miles: Optional[float] = None

    @property
    def is_available(self) -> bool:
        with self._lock:
            return self._step_count is not None

    def publish(self, step_count: int, distance_miles: float) -> None:
        """Set both fields together; allowed exactly once."""
        if step_count < 0 or distance_miles < 0:
            raise ValueError(
                f"Pedometer values must be non-negative: steps={step_count}, miles={distance_miles}"
            )

        with self._lock:
            if self._step_count is not None:
                raise RuntimeError("StepSummary has already been published this session")
            self._step_count = int(step_count)
            self._distance_miles = float(distance_miles)

        self._notify()

    def snapshot(self) -> StepSnapshot:
        with self._lock:
            return StepSnapshot(self._step_count, self._distance_miles)


class HeadingState(ObservableState):
    """Latest magnetic heading and its compass label."""

    def __init__(
        self,
        heading_degrees: float = Config.DEFAULT_HEADING,
        cardinal_label: str = Config.DEFAULT_CARDINAL,
    ) -> None:
        super().__init__()
        self._heading_degrees = float(heading_degrees)
        self._cardinal_label = cardinal_label

    def update(self, heading_degrees: float, cardinal_label: str) -> None:
        with self._lock:
            self._heading_degrees = float(heading_degrees)
            self._cardinal_label = cardinal_label

        self._notify()

    def snapshot(self) -> HeadingSnapshot:
        with self._lock:
            return HeadingSnapshot(self._heading_degrees, self._cardinal_label)
