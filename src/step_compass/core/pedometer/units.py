"""Distance conversion for pedometer readings."""

from step_compass.utils.config import Config


def meters_to_miles(meters: float, factor: float = Config.METERS_TO_MILES) -> float:
    """Convert a distance in meters to statute miles."""
    return meters * factor
