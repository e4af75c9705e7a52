"""Tests for the per-session sensor log files."""

from __future__ import annotations

import logging

import pytest

from step_compass.core.state import HeadingState
from step_compass.core.telemetry.loggers import sensor_logger as sensor_logger_module
from step_compass.core.telemetry.loggers.sensor_logger import (
    close_sensor_logger,
    get_sensor_logger,
)


@pytest.fixture()
def session_dir(tmp_path):
    yield tmp_path / "session_test"
    close_sensor_logger()


def test_creates_one_file_per_channel(session_dir):
    sensor_logger = get_sensor_logger(session_dir=session_dir)

    for filename in sensor_logger_module.CHANNELS.values():
        assert (session_dir / filename).exists()


def test_component_loggers_write_to_their_file(session_dir):
    get_sensor_logger(session_dir=session_dir)

    logging.getLogger("compass.heading").error("Compass error: test")
    logging.getLogger("compass.pedometer").debug("query issued")
    for handler in logging.getLogger("compass.heading").handlers:
        handler.flush()
    for handler in logging.getLogger("compass.pedometer").handlers:
        handler.flush()

    assert "Compass error: test" in (session_dir / "heading.log").read_text()
    assert "query issued" in (session_dir / "pedometer.log").read_text()
    assert "Compass error" not in (session_dir / "pedometer.log").read_text()


def test_singleton_until_closed(session_dir, tmp_path):
    first = get_sensor_logger(session_dir=session_dir)
    assert get_sensor_logger() is first

    close_sensor_logger()
    assert logging.getLogger("compass.heading").propagate is True
    assert logging.getLogger("compass.heading").handlers == []

    second = get_sensor_logger(session_dir=tmp_path / "other")
    assert second.log_dir == tmp_path / "other"


def test_failing_state_listener_lands_in_state_log(session_dir):
    get_sensor_logger(session_dir=session_dir)
    state = HeadingState()

    def broken():
        raise RuntimeError("listener blew up")

    state.subscribe(broken)
    state.update(45.0, "NE")
    for handler in logging.getLogger("compass.state").handlers:
        handler.flush()

    text = (session_dir / "state.log").read_text()
    assert "State listener" in text
    assert "listener blew up" in text
    assert state.snapshot().cardinal_label == "NE"
