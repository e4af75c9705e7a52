"""
Builder - wires sensor services, subsystems and the presentation layer
"""

from dataclasses import dataclass
from typing import Optional

from step_compass.core.heading.heading_tracker import HeadingTracker
from step_compass.core.pedometer.pedometer_reader import PedometerReader
from step_compass.core.sensors.interfaces import HeadingService, PedometerService
from step_compass.core.sensors.simulated_heading import SimulatedHeadingService
from step_compass.core.sensors.simulated_pedometer import SimulatedPedometer
from step_compass.core.state import HeadingState, StepSummary
from step_compass.presentation.presentation_manager import PresentationManager
from step_compass.utils.config_sections import SimulationConfig, load_simulation_config


@dataclass
class CompassScreen:
    """Everything one mounted screen owns."""
    step_summary: StepSummary
    heading_state: HeadingState
    pedometer_reader: PedometerReader
    heading_tracker: HeadingTracker
    presentation: PresentationManager
    pedometer_service: PedometerService
    heading_service: HeadingService

    def mount(self) -> bool:
        """First display: fire the weekly pedometer query."""
        return self.pedometer_reader.initialize()

    def cleanup(self) -> None:
        self.heading_tracker.stop()
        self.presentation.cleanup()


class Builder:
    """Creates every dependency of the screen; classes read Config internally"""

    def __init__(self, simulation: Optional[SimulationConfig] = None):
        self.simulation = simulation or load_simulation_config()

    def build_pedometer_service(self) -> PedometerService:
        print("  [BUILD] Simulated pedometer service...")
        return SimulatedPedometer(config=self.simulation)

    def build_heading_service(self) -> HeadingService:
        print(f"  [BUILD] Simulated heading service ({self.simulation.heading_mode})...")
        return SimulatedHeadingService(config=self.simulation)

    def build_pedometer_reader(self, service: PedometerService, summary: StepSummary) -> PedometerReader:
        print("  [BUILD] PedometerReader...")
        return PedometerReader(service, summary)

    def build_heading_tracker(self, service: HeadingService, state: HeadingState) -> HeadingTracker:
        print("  [BUILD] HeadingTracker...")
        return HeadingTracker(service, state)

    def build_presentation(self, summary: StepSummary, state: HeadingState,
                           display_enabled: bool = True) -> PresentationManager:
        print("  [BUILD] PresentationManager...")
        return PresentationManager(summary, state, display_enabled=display_enabled)

    def build_screen(
        self,
        display_enabled: bool = True,
        pedometer_service: Optional[PedometerService] = None,
        heading_service: Optional[HeadingService] = None,
    ) -> CompassScreen:
        """
        Build the complete screen.

        Args:
            display_enabled: Open an OpenCV window
            pedometer_service: Use this service instead of the simulated one
            heading_service: Use this service instead of the simulated one
        """
        pedometer_service = pedometer_service or self.build_pedometer_service()
        heading_service = heading_service or self.build_heading_service()

        step_summary = StepSummary()
        heading_state = HeadingState()

        # Presentation subscribes first so no early heading update is missed
        presentation = self.build_presentation(step_summary, heading_state, display_enabled)
        reader = self.build_pedometer_reader(pedometer_service, step_summary)
        tracker = self.build_heading_tracker(heading_service, heading_state)

        return CompassScreen(
            step_summary=step_summary,
            heading_state=heading_state,
            pedometer_reader=reader,
            heading_tracker=tracker,
            presentation=presentation,
            pedometer_service=pedometer_service,
            heading_service=heading_service,
        )
