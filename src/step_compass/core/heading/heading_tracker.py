"""
Live compass heading subscription.

The tracker asks for foreground location access and, when the device can
sense heading, subscribes to continuous updates. Every update stores the
raw heading and its compass label on the HeadingState in one write.
Delivery failures and non-finite readings are logged and leave the last
heading in place.

Tracking is not resumed automatically after the user revokes location
access; call restart() once access is back.

Usage:
    tracker = HeadingTracker(service)          # starts immediately
    state = tracker.state.snapshot()
    tracker.restart()                          # after permission changes
"""

import logging
import math
import threading
from typing import Optional

from step_compass.core.heading.cardinal import cardinal_direction
from step_compass.core.sensors.interfaces import HeadingService
from step_compass.core.state import HeadingState

log = logging.getLogger("compass.heading")


class HeadingTracker:
    """Keeps a HeadingState in sync with a HeadingService."""

    def __init__(
        self,
        service: HeadingService,
        state: Optional[HeadingState] = None,
        autostart: bool = True,
    ) -> None:
        self.service = service
        self.state = state or HeadingState()

        self._lock = threading.Lock()
        self._tracking = False
        self.update_count = 0
        self.error_count = 0
        self.dropped_count = 0

        if autostart:
            self.service.request_permission()
            self.start()

    @property
    def is_tracking(self) -> bool:
        with self._lock:
            return self._tracking

    def start(self) -> bool:
        """
        Subscribe to heading updates if the device supports them.

        Returns:
            bool: True if a subscription is active afterwards
        """
        with self._lock:
            if self._tracking:
                return True

            if not self.service.heading_available():
                log.info("Heading not available on this device")
                return False

            self._tracking = True

        self.service.subscribe(self.on_heading, self.on_error)
        log.info("Heading updates started")
        return True

    def stop(self) -> None:
        """Unsubscribe; the last heading stays on screen."""
        with self._lock:
            if not self._tracking:
                return
            self._tracking = False

        self.service.unsubscribe()
        log.info("Heading updates stopped")

    def restart(self) -> bool:
        """Re-request permission and subscribe again."""
        self.stop()
        self.service.request_permission()
        return self.start()

    def on_heading(self, heading_degrees: float) -> None:
        if not math.isfinite(heading_degrees):
            self.dropped_count += 1
            log.warning("Dropping non-finite heading: %r", heading_degrees)
            return
        label = cardinal_direction(heading_degrees)
        self.state.update(heading_degrees, label)
        self.update_count += 1

    def on_error(self, message: str) -> None:
        self.error_count += 1
        log.error("Compass error: %s", message)
