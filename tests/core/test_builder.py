"""Tests for the Builder wiring helpers."""

from __future__ import annotations

import pytest

from step_compass.core import builder as builder_module
from step_compass.core.builder import Builder
from step_compass.core.sensors.simulated_pedometer import SimulatedPedometer
from step_compass.utils.config_sections import SimulationConfig


class StubHeadingService:
    def __init__(self):
        self.on_update = None
        self.unsubscribed = False

    def heading_available(self):
        return True

    def request_permission(self):
        pass

    def subscribe(self, on_update, on_error):
        self.on_update = on_update

    def unsubscribe(self):
        self.unsubscribed = True


@pytest.fixture()
def simulation():
    return SimulationConfig(query_latency_s=0.0, heading_mode="static")


def test_build_screen_wires_states_end_to_end(simulation):
    heading_service = StubHeadingService()
    pedometer = SimulatedPedometer(available=True, steps_per_day=1000, stride_length_m=1.0, latency_s=0)

    screen = Builder(simulation).build_screen(
        display_enabled=False,
        pedometer_service=pedometer,
        heading_service=heading_service,
    )
    try:
        assert screen.mount() is True
        heading_service.on_update(95.0)

        screen.presentation.update_display()
        model = screen.presentation.current_model

        assert model.step_text == "Steps: 7000"
        assert model.distance_text == "4.35 miles traveled"
        assert model.readout_text == "95° E"
    finally:
        screen.cleanup()

    assert heading_service.unsubscribed


def test_build_screen_uses_simulated_services_by_default(monkeypatch, simulation):
    built = []

    class RecordingHeading(StubHeadingService):
        def __init__(self, config=None):
            super().__init__()
            built.append(config)

    monkeypatch.setattr(builder_module, "SimulatedHeadingService", RecordingHeading)

    screen = Builder(simulation).build_screen(display_enabled=False)
    try:
        assert isinstance(screen.pedometer_service, SimulatedPedometer)
        assert isinstance(screen.heading_service, RecordingHeading)
        assert built == [simulation]
    finally:
        screen.cleanup()
