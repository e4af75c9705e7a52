#!/usr/bin/env python3
"""
Launcher for the Step Compass screen

Modes:
    python run.py                   interactive window (simulated sensors)
    python run.py snapshot [png]    render one frame headless
    python run.py replay <csv>      headings replayed from a CSV file
    python run.py denied            permission denied, no pedometer
"""
import logging
import os
import sys

# Add src to path FIRST
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    from step_compass.main import main, main_denied, main_replay, main_snapshot

    if len(sys.argv) > 1:
        mode = sys.argv[1].lower()

        if mode == "snapshot":
            main_snapshot(sys.argv[2] if len(sys.argv) > 2 else None)
        elif mode == "replay":
            if len(sys.argv) < 3:
                print("Usage: python run.py replay <headings.csv>")
                sys.exit(1)
            main_replay(sys.argv[2])
        elif mode == "denied":
            main_denied()
        elif mode == "window":
            main()
        else:
            print(f"Unknown mode '{mode}'")
            print("Available modes: window, snapshot [png], replay <csv>, denied")
            sys.exit(1)
    else:
        main()
