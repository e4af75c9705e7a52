"""
Centralized configuration for the Step Compass screen.

This module provides all configuration constants and runtime settings for:
- Pedometer query window and unit conversion
- Compass dial geometry (ticks, pointer, colors)
- Screen layout and redraw throttling
- Simulated sensor services used when no platform sensors are attached
- Session logging

The Config class contains all constants as class attributes, making them
accessible throughout the application without instantiation.

Usage:
    from step_compass.utils.config import Config

    lookback = Config.PEDOMETER_LOOKBACK_DAYS
    if Config.SIM_HEADING_MODE == "replay":
        # Feed headings from a recorded CSV
"""


class Config:
    """System configuration constants for the Step Compass screen."""

    # ==========================================================================
    # PEDOMETER: Query window & units
    # ==========================================================================

    PEDOMETER_LOOKBACK_DAYS = 7             # Trailing window queried on mount
    METERS_TO_MILES = 0.000621371           # 1 m in statute miles

    # ==========================================================================
    # HEADING: Compass sectors
    # ==========================================================================

    CARDINAL_LABELS = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")
    CARDINAL_SECTOR_WIDTH = 45.0            # Degrees per label
    DEFAULT_HEADING = 0.0
    DEFAULT_CARDINAL = "N"

    # ==========================================================================
    # SCREEN: Layout (portrait, phone-like)
    # ==========================================================================

    WINDOW_NAME = "Step Compass"
    SCREEN_WIDTH = 420
    SCREEN_HEIGHT = 760
    BACKGROUND_COLOR = (255, 255, 255)      # BGR
    TEXT_COLOR = (30, 30, 30)
    ACCENT_COLOR = (255, 122, 0)            # Person glyph tint
    RENDER_MAX_FPS = 30                     # Redraw throttle for heading bursts
    SNAPSHOT_PATH = "step_compass.png"

    # ==========================================================================
    # DIAL: Geometry & colors
    # ==========================================================================

    DIAL_DIAMETER = 300
    DIAL_RING_WIDTH = 3
    DIAL_RING_COLOR = (128, 128, 128)
    DIAL_TICK_COUNT = 36                    # One tick every 10°
    DIAL_TICK_STEP_DEG = 10.0
    DIAL_TICK_WIDTH = 2
    DIAL_CARDINAL_TICK_LENGTH = 30
    DIAL_MINOR_TICK_LENGTH = 15
    DIAL_CARDINAL_TICK_COLOR = (0, 0, 255)  # Red
    DIAL_MINOR_TICK_COLOR = (128, 128, 128) # Gray
    POINTER_WIDTH = 20
    POINTER_HEIGHT = 100
    POINTER_COLOR = (255, 0, 0)             # Blue

    # ==========================================================================
    # SIMULATION: In-process sensor services
    # ==========================================================================

    SIM_PEDOMETER_AVAILABLE = True          # All three capability flags
    SIM_STEPS_PER_DAY = 6500
    SIM_STRIDE_LENGTH_M = 0.762             # Average adult walking stride
    SIM_QUERY_LATENCY_S = 0.25              # Delay before the range query answers

    SIM_HEADING_AVAILABLE = True
    SIM_LOCATION_PERMISSION = True          # False simulates a denied prompt
    SIM_HEADING_MODE = "synthetic"          # synthetic | static | replay
    SIM_HEADING_UPDATE_HZ = 30
    SIM_ROTATION_DEG_PER_S = 12.0
    SIM_HEADING_NOISE_DEG = 1.5
    SIM_STATIC_HEADING = 47.0
    SIM_REPLAY_PATH = None

    # ==========================================================================
    # LOGGING
    # ==========================================================================

    LOG_DIR = "logs"
    SESSION_LOGS_ENABLED = True
