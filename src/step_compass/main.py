#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Step Compass - weekly steps, distance and a live compass dial

Architecture:
- PedometerReader: one weekly query on mount -> StepSummary
- HeadingTracker: continuous heading subscription -> HeadingState
- PresentationManager: redraws the screen whenever either state changes

Sensor services are simulated in-process (see core.sensors) unless a
platform binding is passed to Builder.build_screen().
"""

import dataclasses
import logging
import os
import time
from typing import Optional

from step_compass.core.builder import Builder, CompassScreen
from step_compass.core.ctrl_handler import CtrlCHandler
from step_compass.core.telemetry.loggers.sensor_logger import close_sensor_logger, get_sensor_logger
from step_compass.utils.config import Config
from step_compass.utils.config_sections import SimulationConfig, load_simulation_config

log = logging.getLogger("compass.main")


def _start_session_logs():
    if Config.SESSION_LOGS_ENABLED:
        sensor_logger = get_sensor_logger()
        print(f"[MAIN] Session logs in {sensor_logger.log_dir}")


def run_window(simulation: Optional[SimulationConfig] = None, max_frames: Optional[int] = None) -> int:
    """
    Interactive loop: open the window and redraw until 'q' or Ctrl+C.

    Returns:
        int: Number of frames rendered
    """
    ctrl_handler = CtrlCHandler()
    screen: Optional[CompassScreen] = None
    loops = 0

    if max_frames is None and os.environ.get("DEBUG_MAX_FRAMES"):
        max_frames = int(os.environ["DEBUG_MAX_FRAMES"])

    try:
        print("\n[MAIN] Initializing components...")
        screen = Builder(simulation).build_screen(display_enabled=True)
        screen.mount()

        print("\n[MAIN] Controls:")
        print("  - 'q': quit")
        print("  - 'r': restart heading tracking")
        print("  - 's': save snapshot")
        print("  - Ctrl+C: clean exit")

        last_stats_print = time.time()

        while not ctrl_handler.should_stop:
            try:
                key = screen.presentation.update_display()
                loops += 1

                if key == 'q':
                    ctrl_handler.request_stop("key q")
                elif key == 'r':
                    restarted = screen.heading_tracker.restart()
                    log.info("Heading restart requested (tracking=%s)", restarted)
                elif key == 's':
                    path = screen.presentation.save_snapshot()
                    print(f"[MAIN] Snapshot saved: {path}")

                if max_frames is not None and loops >= max_frames:
                    ctrl_handler.request_stop(f"{max_frames} frames")

                current_time = time.time()
                if current_time - last_stats_print > 10.0:
                    heading = screen.heading_state.snapshot()
                    print(f"[STATUS] Heading {heading.heading_degrees:.1f} {heading.cardinal_label}, "
                          f"updates={screen.heading_tracker.update_count}, "
                          f"errors={screen.heading_tracker.error_count}")
                    last_stats_print = current_time

            except Exception as e:
                log.warning("Error in UI loop: %s", e)
                time.sleep(0.1)

        print(f"\n[MAIN] Stopping ({ctrl_handler.reason})")
        screen.presentation.print_ui_stats()
        return screen.presentation.render_count

    finally:
        if screen:
            try:
                screen.cleanup()
            except Exception as e:
                print(f"  [WARN] Screen cleanup error: {e}")
        close_sensor_logger()


def run_snapshot(path: str, simulation: Optional[SimulationConfig] = None,
                 settle_s: float = 0.5) -> str:
    """
    Headless run: mount, let sensors deliver for settle_s, write one PNG.

    Returns:
        str: Path of the written snapshot
    """
    screen = Builder(simulation).build_screen(display_enabled=False)
    try:
        screen.mount()
        join = getattr(screen.pedometer_service, "join", None)
        if join:
            join(timeout=settle_s + 2.0)
        time.sleep(settle_s)
        screen.presentation.render_now()
        written = screen.presentation.save_snapshot(path)
        heading = screen.heading_state.snapshot()
        print(f"[MAIN] {screen.presentation.current_model.step_text} | "
              f"{screen.presentation.current_model.distance_text} | "
              f"{heading.heading_degrees:.1f}° {heading.cardinal_label}")
        return str(written)
    finally:
        screen.cleanup()


def main():
    """Interactive window with simulated sensors"""
    print("=" * 60)
    print("Step Compass")
    print("=" * 60)
    _start_session_logs()
    run_window()


def main_snapshot(path: Optional[str] = None):
    """Render a single frame to PNG without opening a window"""
    simulation = dataclasses.replace(load_simulation_config(), heading_mode="static")
    print(f"[MAIN] Snapshot written: {run_snapshot(path or Config.SNAPSHOT_PATH, simulation)}")


def main_replay(csv_path: str):
    """Interactive window fed by a recorded heading CSV"""
    _start_session_logs()
    simulation = dataclasses.replace(
        load_simulation_config(), heading_mode="replay", replay_path=csv_path
    )
    run_window(simulation)


def main_denied():
    """Interactive window with location permission denied and no pedometer"""
    _start_session_logs()
    simulation = dataclasses.replace(
        load_simulation_config(), location_permission=False, pedometer_available=False
    )
    run_window(simulation)


if __name__ == "__main__":
    main()
