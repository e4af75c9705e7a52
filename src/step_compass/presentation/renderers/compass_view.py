"""
Screen model for the step/compass view.

build_screen() is a pure function of the two state snapshots. It decides
every piece of text and every dial element; FrameRenderer only turns the
resulting ScreenModel into pixels, so layout logic can be tested without
touching OpenCV.

Dial convention: the whole dial face is rotated by -heading and the
pointer is rotated by +heading inside it. Ticks therefore sweep past a
pointer that always stays at the top of the screen, marking the direction
the device is facing; the red cardinal tick at local 0° marks north.

Angles are degrees clockwise from screen-up. A non-finite heading is drawn
as 0°.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from step_compass.core.state import HeadingSnapshot, StepSnapshot
from step_compass.utils.config_sections import Color, DialConfig, load_dial_config

STEPS_UNAVAILABLE = "Step count unavailable."
DISTANCE_UNAVAILABLE = "Distance unavailable."


@dataclass(frozen=True)
class TickMark:
    angle: float           # Position on the dial face
    screen_angle: float    # After the dial rotation, in [0, 360)
    length: int
    color: Color
    is_cardinal: bool


@dataclass(frozen=True)
class PointerShape:
    rotation: float        # Relative to the dial face
    screen_angle: float
    width: int
    height: int
    color: Color


@dataclass(frozen=True)
class CompassDial:
    rotation: float
    radius: int
    ring_width: int
    ring_color: Color
    tick_width: int
    ticks: Tuple[TickMark, ...]
    pointer: PointerShape


@dataclass(frozen=True)
class ScreenModel:
    step_text: str
    distance_text: str
    dial: CompassDial
    readout_text: str


def _drawable(heading_degrees: float) -> float:
    return heading_degrees if math.isfinite(heading_degrees) else 0.0


def step_text(steps: StepSnapshot) -> str:
    if steps.step_count is None:
        return STEPS_UNAVAILABLE
    return f"Steps: {steps.step_count}"


def distance_text(steps: StepSnapshot) -> str:
    if steps.distance_miles is None:
        return DISTANCE_UNAVAILABLE
    return f"{steps.distance_miles:.2f} miles traveled"


def readout_text(heading: HeadingSnapshot) -> str:
    return f"{int(_drawable(heading.heading_degrees))}° {heading.cardinal_label}"


def build_dial(heading_degrees: float, config: Optional[DialConfig] = None) -> CompassDial:
    cfg = config or load_dial_config()
    heading_degrees = _drawable(heading_degrees)
    rotation = -heading_degrees

    ticks = []
    for index in range(cfg.tick_count):
        angle = index * cfg.tick_step_deg
        is_cardinal = angle % 90 == 0
        ticks.append(TickMark(
            angle=angle,
            screen_angle=(angle + rotation) % 360.0,
            length=cfg.cardinal_tick_length if is_cardinal else cfg.minor_tick_length,
            color=cfg.cardinal_tick_color if is_cardinal else cfg.minor_tick_color,
            is_cardinal=is_cardinal,
        ))

    pointer = PointerShape(
        rotation=heading_degrees,
        screen_angle=(heading_degrees + rotation) % 360.0,
        width=cfg.pointer_width,
        height=cfg.pointer_height,
        color=cfg.pointer_color,
    )

    return CompassDial(
        rotation=rotation,
        radius=cfg.radius,
        ring_width=cfg.ring_width,
        ring_color=cfg.ring_color,
        tick_width=cfg.tick_width,
        ticks=tuple(ticks),
        pointer=pointer,
    )


def build_screen(
    steps: StepSnapshot,
    heading: HeadingSnapshot,
    dial_config: Optional[DialConfig] = None,
) -> ScreenModel:
    """Compose the whole screen from the current state snapshots."""
    return ScreenModel(
        step_text=step_text(steps),
        distance_text=distance_text(steps),
        dial=build_dial(heading.heading_degrees, dial_config),
        readout_text=readout_text(heading),
    )
