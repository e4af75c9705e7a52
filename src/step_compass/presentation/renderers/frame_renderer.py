"""
Rasterize a ScreenModel onto an OpenCV canvas.

Layout (portrait, top to bottom):
    person glyph
    "Steps: ..." / "Step count unavailable."
    "... miles traveled" / "Distance unavailable."
    compass dial (ring, 36 ticks, pointer)
    digital readout "47° NE"
"""

import math
from typing import Optional, Tuple

import cv2
import numpy as np

from step_compass.presentation.renderers.compass_view import CompassDial, ScreenModel
from step_compass.utils.config_sections import Color, DisplayConfig, load_display_config

FONT = cv2.FONT_HERSHEY_SIMPLEX
DEGREE_SIGN = "°"


def _polar(center: Tuple[int, int], radius: float, screen_angle: float) -> Tuple[int, int]:
    """Point at `radius` from center, angle clockwise from screen-up."""
    rad = math.radians(screen_angle)
    return (
        int(round(center[0] + radius * math.sin(rad))),
        int(round(center[1] - radius * math.cos(rad))),
    )


class FrameRenderer:
    """Draws the step/compass screen"""

    def __init__(self, config: Optional[DisplayConfig] = None):
        self.config = config or load_display_config()
        self.width = self.config.width
        self.height = self.config.height

        # Vertical anchors
        self.glyph_center = (self.width // 2, 60)
        self.step_text_y = 130
        self.distance_text_y = 170
        self.dial_center = (self.width // 2, 390)
        self.readout_y = 640

    def render(self, model: ScreenModel) -> np.ndarray:
        """Draw complete screen for the given model"""
        canvas = np.full((self.height, self.width, 3), self.config.background_color, dtype=np.uint8)

        self._draw_person_glyph(canvas)
        self._draw_centered_text(canvas, model.step_text, self.step_text_y, 0.7, 2)
        self._draw_centered_text(canvas, model.distance_text, self.distance_text_y, 0.7, 2)
        self._draw_dial(canvas, model.dial)
        self._draw_centered_text(canvas, model.readout_text, self.readout_y, 1.3, 3)

        return canvas

    def _draw_person_glyph(self, canvas: np.ndarray):
        x, y = self.glyph_center
        color = self.config.accent_color
        cv2.circle(canvas, (x, y - 14), 10, color, 2, cv2.LINE_AA)
        cv2.ellipse(canvas, (x, y + 22), (20, 18), 0, 180, 360, color, 2, cv2.LINE_AA)

    def _draw_dial(self, canvas: np.ndarray, dial: CompassDial):
        center = self.dial_center

        cv2.circle(canvas, center, dial.radius, dial.ring_color, dial.ring_width, cv2.LINE_AA)

        # Ticks hang inward from the ring
        for tick in dial.ticks:
            outer = _polar(center, dial.radius, tick.screen_angle)
            inner = _polar(center, dial.radius - tick.length, tick.screen_angle)
            cv2.line(canvas, outer, inner, tick.color, dial.tick_width, cv2.LINE_AA)

        # Pointer: triangle whose base sits at the center, apex toward the ring
        pointer = dial.pointer
        apex = _polar(center, pointer.height, pointer.screen_angle)
        half_base = pointer.width / 2.0
        base_left = _polar(center, half_base, pointer.screen_angle - 90)
        base_right = _polar(center, half_base, pointer.screen_angle + 90)
        triangle = np.array([apex, base_left, base_right], dtype=np.int32)
        cv2.fillPoly(canvas, [triangle], pointer.color, cv2.LINE_AA)

    def _draw_centered_text(self, canvas: np.ndarray, text: str, baseline_y: int,
                            scale: float, thickness: int):
        """
        Draw text centered horizontally.

        Hershey fonts are ASCII only, so a degree sign is drawn as a small
        ring after the text preceding it.
        """
        color: Color = self.config.text_color
        parts = text.split(DEGREE_SIGN)
        (_, text_h), _ = cv2.getTextSize("0", FONT, scale, thickness)
        ring_radius = max(2, int(text_h * 0.2))
        ring_space = 3 * ring_radius + thickness

        widths = [cv2.getTextSize(part, FONT, scale, thickness)[0][0] for part in parts]
        total_w = sum(widths) + ring_space * (len(parts) - 1)
        x = (self.width - total_w) // 2

        for index, (part, part_w) in enumerate(zip(parts, widths)):
            if part:
                cv2.putText(canvas, part, (x, baseline_y), FONT, scale, color, thickness, cv2.LINE_AA)
            x += part_w
            if index < len(parts) - 1:
                ring_center = (x + ring_radius + thickness, baseline_y - text_h + ring_radius)
                cv2.circle(canvas, ring_center, ring_radius, color, max(1, thickness - 1), cv2.LINE_AA)
                x += ring_space
