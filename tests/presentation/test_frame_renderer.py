"""Tests for FrameRenderer rasterization."""

from __future__ import annotations

import numpy as np

from step_compass.core.state import HeadingSnapshot, StepSnapshot
from step_compass.presentation.renderers.compass_view import build_screen
from step_compass.presentation.renderers.frame_renderer import FrameRenderer, _polar
from step_compass.utils.config_sections import DialConfig, DisplayConfig

WHITE = (255, 255, 255)


def render(heading: float):
    renderer = FrameRenderer(DisplayConfig())
    model = build_screen(StepSnapshot(8123, 4.0), HeadingSnapshot(heading, "N"), DialConfig())
    return renderer, renderer.render(model)


def test_polar_is_clockwise_from_up():
    assert _polar((100, 100), 50, 0) == (100, 50)
    assert _polar((100, 100), 50, 90) == (150, 100)
    assert _polar((100, 100), 50, 180) == (100, 150)
    assert _polar((100, 100), 50, 270) == (50, 100)


def test_canvas_shape_and_background():
    _, frame = render(0.0)

    assert frame.shape == (760, 420, 3)
    assert frame.dtype == np.uint8
    assert tuple(frame[5, 5]) == WHITE


def test_pointer_is_blue_above_center():
    renderer, frame = render(123.0)
    cx, cy = renderer.dial_center

    b, g, r = frame[cy - 50, cx]
    assert b > 200 and g < 60 and r < 60


def test_north_tick_moves_with_heading():
    renderer, frame_north = render(0.0)
    _, frame_east = render(90.0)
    cx, cy = renderer.dial_center
    radius = DialConfig().radius

    # Facing north: red tick at the top; facing east: red tick on the left
    top = frame_north[cy - radius + 10, cx]
    left = frame_east[cy, cx - radius + 10]
    assert top[2] > 200 and top[0] < 60
    assert left[2] > 200 and left[0] < 60


def test_text_is_drawn():
    renderer, frame = render(47.0)

    band = frame[renderer.step_text_y - 25:renderer.step_text_y + 5]
    assert (band < 200).any()
    readout = frame[renderer.readout_y - 40:renderer.readout_y + 5]
    assert (readout < 200).any()
