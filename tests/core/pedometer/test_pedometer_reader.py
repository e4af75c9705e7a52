"""Tests for PedometerReader using a stubbed pedometer service."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from step_compass.core.pedometer.pedometer_reader import PedometerReader
from step_compass.core.sensors.interfaces import PedometerData
from step_compass.core.state import StepSummary
from step_compass.presentation.renderers.compass_view import distance_text, step_text

NOW = datetime(2025, 5, 13, 12, 0, 0)


class StubPedometer:
    def __init__(self, event_tracking=True, distance=True, step_counting=True):
        self.flags = (event_tracking, distance, step_counting)
        self.queries = []

    def is_event_tracking_available(self):
        return self.flags[0]

    def is_distance_available(self):
        return self.flags[1]

    def is_step_counting_available(self):
        return self.flags[2]

    def query_range(self, start, end, handler):
        self.queries.append((start, end, handler))

    def answer(self, data=None, error=None):
        _, _, handler = self.queries[-1]
        handler(data, error)


@pytest.fixture()
def summary():
    return StepSummary()


def make_reader(service, summary):
    return PedometerReader(service, summary, clock=lambda: NOW)


@pytest.mark.parametrize(
    "flags",
    [(False, True, True), (True, False, True), (True, True, False), (False, False, False)],
)
def test_missing_capability_skips_query(flags, summary):
    service = StubPedometer(*flags)
    reader = make_reader(service, summary)

    assert reader.initialize() is False
    assert service.queries == []
    assert not summary.is_available
    assert step_text(summary.snapshot()) == "Step count unavailable."
    assert distance_text(summary.snapshot()) == "Distance unavailable."


def test_queries_trailing_seven_days(summary):
    service = StubPedometer()
    reader = make_reader(service, summary)

    assert reader.initialize() is True

    start, end, _ = service.queries[0]
    assert end == NOW
    assert start == NOW - timedelta(days=7)


def test_successful_answer_publishes_miles(summary):
    service = StubPedometer()
    make_reader(service, summary).initialize()

    service.answer(PedometerData(NOW - timedelta(days=7), NOW, 8123, 6437.0))

    snap = summary.snapshot()
    assert snap.step_count == 8123
    assert snap.distance_miles == pytest.approx(6437.0 * 0.000621371)
    assert step_text(snap) == "Steps: 8123"
    assert distance_text(snap) == "4.00 miles traveled"


def test_query_error_leaves_summary_unset(summary):
    service = StubPedometer()
    make_reader(service, summary).initialize()

    service.answer(None, RuntimeError("not authorized"))

    assert not summary.is_available


def test_missing_distance_leaves_summary_unset(summary):
    service = StubPedometer()
    make_reader(service, summary).initialize()

    service.answer(PedometerData(NOW - timedelta(days=7), NOW, 500, None))

    snap = summary.snapshot()
    assert snap.step_count is None
    assert snap.distance_miles is None


def test_negative_payload_is_discarded(summary):
    service = StubPedometer()
    make_reader(service, summary).initialize()

    service.answer(PedometerData(NOW - timedelta(days=7), NOW, -3, 10.0))

    assert not summary.is_available


def test_initialize_fires_only_once(summary):
    service = StubPedometer()
    reader = make_reader(service, summary)

    assert reader.initialize() is True
    assert reader.initialize() is False
    assert len(service.queries) == 1
