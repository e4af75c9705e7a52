"""
Contracts for the platform sensor services the screen depends on.

The pedometer and heading subsystems only talk to these protocols, so the
simulated services in this package, a platform binding or a test stub can
be swapped in without touching the subsystems or the renderer.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Protocol


@dataclass(frozen=True)
class PedometerData:
    """Cumulative pedometer reading for a time range."""
    start: datetime
    end: datetime
    number_of_steps: int
    distance_meters: Optional[float]  # None when the device cannot estimate distance


PedometerHandler = Callable[[Optional[PedometerData], Optional[Exception]], None]
HeadingCallback = Callable[[float], None]
ErrorCallback = Callable[[str], None]


class PedometerService(Protocol):
    """Step and distance history provider."""

    def is_event_tracking_available(self) -> bool: ...

    def is_distance_available(self) -> bool: ...

    def is_step_counting_available(self) -> bool: ...

    def query_range(self, start: datetime, end: datetime, handler: PedometerHandler) -> None:
        """Answer asynchronously with handler(data, None) or handler(None, error)."""
        ...


class HeadingService(Protocol):
    """Continuous magnetic heading provider."""

    def heading_available(self) -> bool: ...

    def request_permission(self) -> None:
        """Ask for foreground location access; the outcome is not reported."""
        ...

    def subscribe(self, on_update: HeadingCallback, on_error: ErrorCallback) -> None: ...

    def unsubscribe(self) -> None: ...
