"""
Session log files for the sensor subsystems and the screen.

This module provides a singleton logger that routes each component's
log channel into its own file inside a per-session directory, for easier
analysis of sensor behaviour after a run.

Features:
- Singleton pattern (one instance per session)
- One log file per compass.* channel
- DEBUG level logging to files
- WARNING level console output for critical messages

Log Files:
- pedometer.log: Capability checks, range queries and their answers
- heading.log: Subscription lifecycle and compass errors
- sensors.log: Simulated service events
- renderer.log: Redraws, snapshots and display failures
- state.log: State listeners that raised during a notify
- main.log: Session start, key commands and UI loop errors

Usage:
    from step_compass.core.telemetry.loggers.sensor_logger import get_sensor_logger

    sensor_logger = get_sensor_logger(session_dir=Path("logs/session_2025-05-13_10-30-00"))
    sensor_logger.heading.error("Compass error: ...")
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from step_compass.utils.config import Config

CHANNELS = {
    "pedometer": "pedometer.log",
    "heading": "heading.log",
    "sensors": "sensors.log",
    "renderer": "renderer.log",
    "state": "state.log",
    "main": "main.log",
}


class SensorLogger:
    """Singleton logger for the compass.* channels."""

    _instance = None
    _initialized = False

    def __new__(cls, session_dir: Optional[Path] = None):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, session_dir: Optional[Path] = None):
        if self._initialized:
            return

        if session_dir is None:
            timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
            self.log_dir = Path(Config.LOG_DIR) / f"session_{timestamp}"
        else:
            self.log_dir = Path(session_dir)

        self.log_dir.mkdir(parents=True, exist_ok=True)

        for name, filename in CHANNELS.items():
            self._setup_logger(name, filename)

        SensorLogger._initialized = True

    def _setup_logger(self, name: str, filename: str):
        """Setup individual logger with file handler."""
        logger = logging.getLogger(f"compass.{name}")
        logger.setLevel(logging.DEBUG)
        logger.propagate = False

        logger.handlers.clear()

        fh = logging.FileHandler(self.log_dir / filename, mode='w')
        fh.setLevel(logging.DEBUG)

        ch = logging.StreamHandler()
        ch.setLevel(logging.WARNING)

        formatter = logging.Formatter(
            '%(asctime)s.%(msecs)03d [%(levelname)s] %(message)s',
            datefmt='%H:%M:%S'
        )
        fh.setFormatter(formatter)
        ch.setFormatter(formatter)

        logger.addHandler(fh)
        logger.addHandler(ch)

        setattr(self, name, logger)

    def close(self):
        """Close all handlers and give the channels back to the root logger."""
        for name in CHANNELS:
            logger = getattr(self, name, None)
            if logger:
                for handler in logger.handlers[:]:
                    handler.close()
                    logger.removeHandler(handler)
                logger.propagate = True

        SensorLogger._instance = None
        SensorLogger._initialized = False


# Global instance
_sensor_logger = None


def get_sensor_logger(session_dir: Optional[Path] = None) -> SensorLogger:
    """Get or create sensor logger instance."""
    global _sensor_logger
    if _sensor_logger is None:
        _sensor_logger = SensorLogger(session_dir=session_dir)
    return _sensor_logger


def close_sensor_logger() -> None:
    """Close the session files, if any were opened."""
    global _sensor_logger
    if _sensor_logger is not None:
        _sensor_logger.close()
        _sensor_logger = None
