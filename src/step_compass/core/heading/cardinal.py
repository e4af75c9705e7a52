"""
Compass label lookup for magnetic headings.

Each of the eight labels owns a 45° sector centered on its compass point.
Sectors are half-open [lower, upper): a heading exactly on a boundary
belongs to the sector that starts there. Headings from 337.5° upward wrap
back to "N", and anything outside [0, 360) also reads as "N".

    N   [0, 22.5)       S   [157.5, 202.5)
    NE  [22.5, 67.5)    SW  [202.5, 247.5)
    E   [67.5, 112.5)   W   [247.5, 292.5)
    SE  [112.5, 157.5)  NW  [292.5, 337.5)
"""

from typing import Tuple

from step_compass.utils.config import Config

# (lower, upper, label) in ascending order
SECTORS: Tuple[Tuple[float, float, str], ...] = tuple(
    (
        max(0.0, index * Config.CARDINAL_SECTOR_WIDTH - Config.CARDINAL_SECTOR_WIDTH / 2),
        index * Config.CARDINAL_SECTOR_WIDTH + Config.CARDINAL_SECTOR_WIDTH / 2,
        label,
    )
    for index, label in enumerate(Config.CARDINAL_LABELS)
)


def cardinal_direction(heading: float) -> str:
    """Map a heading in degrees to one of N, NE, E, SE, S, SW, W, NW."""
    for lower, upper, label in SECTORS:
        if lower <= heading < upper:
            return label
    return Config.DEFAULT_CARDINAL
