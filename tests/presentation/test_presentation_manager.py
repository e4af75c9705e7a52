"""Tests for PresentationManager redraw and throttling behaviour."""

from __future__ import annotations

import pytest

from step_compass.core.heading.heading_tracker import HeadingTracker
from step_compass.core.state import HeadingState, StepSummary
from step_compass.presentation import presentation_manager as pm_module
from step_compass.presentation.presentation_manager import PresentationManager
from step_compass.utils.config_sections import DisplayConfig


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class WindowRecorder:
    def __init__(self):
        self.shown = []
        self.keys = []
        self.destroyed = False

    def named_window(self, name, flags):
        self.window = name

    def resize_window(self, name, width, height):
        self.size = (width, height)

    def imshow(self, name, frame):
        self.shown.append(frame)

    def wait_key(self, delay):
        return self.keys.pop(0) if self.keys else 255

    def destroy_all(self):
        self.destroyed = True


@pytest.fixture()
def states():
    return StepSummary(), HeadingState()


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def window(monkeypatch: pytest.MonkeyPatch):
    recorder = WindowRecorder()
    monkeypatch.setattr(pm_module.cv2, "namedWindow", recorder.named_window)
    monkeypatch.setattr(pm_module.cv2, "resizeWindow", recorder.resize_window)
    monkeypatch.setattr(pm_module.cv2, "imshow", recorder.imshow)
    monkeypatch.setattr(pm_module.cv2, "waitKey", recorder.wait_key)
    monkeypatch.setattr(pm_module.cv2, "destroyAllWindows", recorder.destroy_all)
    return recorder


def make_manager(states, clock, display_enabled=False, max_fps=10.0):
    summary, heading = states
    return PresentationManager(
        summary, heading,
        display_enabled=display_enabled,
        config=DisplayConfig(max_fps=max_fps),
        clock=clock,
    )


def test_first_update_renders_unavailable_screen(states, clock):
    manager = make_manager(states, clock)

    assert manager.update_display() == ''
    assert manager.render_count == 1
    assert manager.current_model.step_text == "Step count unavailable."
    assert manager.current_model.distance_text == "Distance unavailable."
    assert manager.current_model.readout_text == "0° N"


def test_no_redraw_without_changes(states, clock):
    manager = make_manager(states, clock)
    manager.update_display()
    clock.advance(1.0)
    manager.update_display()

    assert manager.render_count == 1


def test_state_change_triggers_redraw(states, clock):
    summary, heading = states
    manager = make_manager(states, clock)
    manager.update_display()

    summary.publish(8123, 6437.0 * 0.000621371)
    clock.advance(1.0)
    manager.update_display()

    assert manager.render_count == 2
    assert manager.current_model.step_text == "Steps: 8123"
    assert manager.current_model.distance_text == "4.00 miles traveled"


def test_heading_bursts_are_throttled_but_latest_wins(states, clock):
    _, heading = states
    manager = make_manager(states, clock, max_fps=10.0)
    manager.update_display()

    for value, label in [(10.0, "N"), (50.0, "NE"), (100.0, "E")]:
        heading.update(value, label)
        clock.advance(0.01)
        manager.update_display()

    assert manager.render_count == 1
    assert manager.needs_redraw

    clock.advance(0.1)
    manager.update_display()

    assert manager.render_count == 2
    assert manager.current_model.readout_text == "100° E"
    assert not manager.needs_redraw


def test_display_mode_shows_frames_and_returns_keys(states, clock, window):
    manager = make_manager(states, clock, display_enabled=True)
    window.keys = [ord('q')]

    assert manager.update_display() == 'q'
    assert len(window.shown) == 1
    assert window.shown[0].shape == (760, 420, 3)
    assert window.size == (420, 760)

    manager.cleanup()
    assert window.destroyed


def test_cleanup_unsubscribes(states, clock):
    _, heading = states
    manager = make_manager(states, clock)
    manager.update_display()
    manager.cleanup()

    heading.update(90.0, "E")
    assert not manager.needs_redraw


def test_save_snapshot_writes_png(states, clock, tmp_path):
    manager = make_manager(states, clock)
    target = manager.save_snapshot(str(tmp_path / "shots" / "screen.png"))

    assert target.exists()
    assert target.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def test_get_current_display_frame_returns_copy(states, clock):
    manager = make_manager(states, clock)
    assert manager.get_current_display_frame() is None

    manager.render_now()
    frame = manager.get_current_display_frame()
    frame[:] = 0

    assert manager.current_display_frame.max() == 255


class PushHeadingService:
    def heading_available(self):
        return True

    def request_permission(self):
        pass

    def subscribe(self, on_update, on_error):
        self.push = on_update

    def unsubscribe(self):
        pass


@pytest.mark.parametrize("bad", [float("nan"), float("inf")])
def test_non_finite_heading_still_renders(states, clock, bad):
    summary, heading = states
    service = PushHeadingService()
    HeadingTracker(service, heading)
    manager = make_manager(states, clock)

    service.push(90.0)
    service.push(bad)
    frame = manager.render_now()

    assert frame is not None
    assert manager.current_model.readout_text == "90° E"

    # A raw write that bypasses the tracker is drawn at 0°
    heading.update(bad, "N")
    manager.render_now()

    assert manager.current_model.readout_text == "0° N"
    assert manager.render_count == 2
