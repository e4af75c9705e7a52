"""
Weekly step count and distance lookup.

On first display the reader checks the pedometer's capability flags and,
if every one is present, issues a single range query covering the trailing
week. A successful answer is converted to miles and published onto the
StepSummary in one atomic write. Missing capabilities, query errors and
answers without a distance all leave the summary unset, which the screen
shows as "unavailable". Nothing is retried.

Usage:
    reader = PedometerReader(service, summary)
    reader.initialize()
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from step_compass.core.pedometer.units import meters_to_miles
from step_compass.core.sensors.interfaces import PedometerData, PedometerService
from step_compass.core.state import StepSummary
from step_compass.utils.config_sections import PedometerConfig, load_pedometer_config

log = logging.getLogger("compass.pedometer")


class PedometerReader:
    """Fire-once pedometer query feeding a StepSummary."""

    def __init__(
        self,
        service: PedometerService,
        summary: StepSummary,
        clock: Callable[[], datetime] = datetime.now,
        config: Optional[PedometerConfig] = None,
    ) -> None:
        self.service = service
        self.summary = summary
        self.clock = clock
        self.config = config or load_pedometer_config()
        self._initialized = False

    @property
    def is_available(self) -> bool:
        return (
            self.service.is_event_tracking_available()
            and self.service.is_distance_available()
            and self.service.is_step_counting_available()
        )

    def initialize(self) -> bool:
        """
        Query the trailing window once.

        Returns:
            bool: True if a query was issued
        """
        if self._initialized:
            log.debug("Pedometer already initialized; ignoring repeated call")
            return False
        self._initialized = True

        if not self.is_available:
            log.info("Pedometer unavailable on this device")
            return False

        end = self.clock()
        start = end - timedelta(days=self.config.lookback_days)
        log.info("Querying pedometer from %s to %s", start.isoformat(), end.isoformat())

        self.service.query_range(start, end, self._on_query_result)
        return True

    def _on_query_result(self, data: Optional[PedometerData], error: Optional[Exception]) -> None:
        """Service callback, runs on the service's delivery thread."""
        if error is not None or data is None:
            log.debug("Pedometer query failed: %s", error)
            return

        if data.distance_meters is None:
            log.debug("Pedometer answer has no distance (%d steps)", data.number_of_steps)
            return

        miles = meters_to_miles(data.distance_meters, self.config.meters_to_miles)
        try:
            self.summary.publish(step_count=data.number_of_steps, distance_miles=miles)
        except ValueError as err:
            log.warning("Discarding pedometer answer: %s", err)
            return
        log.info("Pedometer: %d steps, %.2f miles", data.number_of_steps, miles)
