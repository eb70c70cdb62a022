"""Tests for the playback controller."""

from __future__ import annotations

import logging
import threading
import time

import pytest
from pydantic import ValidationError

from virtualtimeline.core.models import Segment, VideoDataPayload
from virtualtimeline.playback.controller import (
    PlaybackConfig,
    PlaybackController,
    PlaybackSource,
)


class FakeSource:
    """In-memory media player."""

    def __init__(self, current_time: float = 0.0):
        self.current_time = current_time
        self.paused = True
        self.seeks: list[float] = []

    def seek(self, real_time: float) -> None:
        self.seeks.append(real_time)
        self.current_time = real_time

    def play(self) -> None:
        self.paused = False

    def pause(self) -> None:
        self.paused = True


@pytest.fixture
def source() -> FakeSource:
    """Paused player at the start of the recording."""
    return FakeSource()


@pytest.fixture
def controller(source, payload) -> PlaybackController:
    """Controller whose source has reported a 120s duration."""
    controller = PlaybackController(source, payload)
    controller.on_loaded_metadata(120)
    return controller


class TestPlaybackConfig:
    """Test PlaybackConfig."""

    def test_defaults(self):
        """Test half-second margin and a 60 Hz poll."""
        config = PlaybackConfig()
        assert config.navigation_margin == 0.5
        assert config.poll_interval == pytest.approx(1 / 60)

    def test_invalid_interval(self):
        """Test a non-positive poll interval is rejected."""
        with pytest.raises(ValidationError):
            PlaybackConfig(poll_interval=0)

    def test_validate_assignment(self):
        """Test assignments are validated."""
        config = PlaybackConfig()
        with pytest.raises(ValidationError):
            config.navigation_margin = -1


class TestPlaybackController:
    """Test PlaybackController."""

    def test_fake_source_satisfies_protocol(self, source):
        """Test the fake player matches the protocol."""
        assert isinstance(source, PlaybackSource)

    def test_no_duration_until_metadata(self, source, payload):
        """Test the engine starts with an unknown duration."""
        controller = PlaybackController(source, payload)
        assert controller.engine.get_virtual_duration() == 0
        assert controller.tick() == 0
        controller.on_loaded_metadata(120)
        assert controller.engine.get_virtual_duration() == pytest.approx(95)

    def test_tick_in_visible_footage(self, controller, source):
        """Test a visible position is left alone."""
        source.current_time = 50
        assert controller.tick() == pytest.approx(40 / 95 * 100)
        assert source.seeks == []

    def test_tick_skips_hidden_footage(self, controller, source):
        """Test playback entering a gap is pushed to its end."""
        source.current_time = 36
        progress = controller.tick()
        assert source.seeks == [45]
        assert source.current_time == 45
        assert progress == pytest.approx(35 / 95 * 100)
        assert controller.virtual_progress == progress

    def test_seek_to_percentage(self, controller, source):
        """Test scrubber clicks seek to a playable time."""
        assert controller.seek_to_percentage(0) == 0
        assert controller.seek_to_percentage(1) == pytest.approx(120)
        assert source.current_time == pytest.approx(120)

    def test_skip_forward(self, controller, source):
        """Test skipping through cut points."""
        source.current_time = 12
        assert controller.skip_forward() == 20
        assert controller.skip_forward() == 30
        assert controller.skip_forward() == 50

    def test_skip_forward_at_end(self, controller, source):
        """Test nothing happens past the last cut point."""
        source.current_time = 120
        assert controller.skip_forward() is None
        assert source.seeks == []

    def test_skip_backward(self, controller, source):
        """Test skipping back, falling back to the start."""
        source.current_time = 55
        assert controller.skip_backward() == 50
        assert controller.skip_backward() == 30
        source.current_time = 5
        assert controller.skip_backward() == 0

    def test_toggle_play(self, controller, source):
        """Test play/pause toggling."""
        assert controller.toggle_play() is True
        assert source.paused is False
        assert controller.toggle_play() is False
        assert source.paused is True

    def test_active_segment(self, controller, source):
        """Test the annotation under the playhead."""
        source.current_time = 25
        assert controller.active_segment().id == "s1"
        source.current_time = 85
        assert controller.active_segment() is None

    def test_rebuild_keeps_duration(self, controller, tags):
        """Test a new snapshot replaces the engine but keeps the duration."""
        before = controller.engine
        payload = VideoDataPayload(
            tags=tags,
            segments=[Segment(id="h", tag_id="t4", start_real=0, end_real=20)],
        )
        controller.rebuild(payload)
        assert controller.engine is not before
        assert controller.engine.get_real_duration() == 120
        assert controller.engine.get_virtual_duration() == pytest.approx(100)

    def test_polling_lifecycle(self, controller, source):
        """Test the background poll ticks until stopped."""
        source.current_time = 40
        ticked = threading.Event()
        original_seek = source.seek

        def seek_and_signal(real_time: float) -> None:
            original_seek(real_time)
            ticked.set()

        source.seek = seek_and_signal
        controller.config.poll_interval = 0.001
        controller.start_polling()
        try:
            assert controller.is_polling
            assert ticked.wait(timeout=5)
        finally:
            controller.stop_polling()

        assert not controller.is_polling
        assert source.current_time == 45

    def test_stop_without_start(self, controller):
        """Test stopping an idle controller is harmless."""
        controller.stop_polling()
        assert not controller.is_polling

    def test_toggle_play_waits_for_lock(self, controller, source):
        """Test play/pause is serialized with other controller calls."""
        worker = threading.Thread(target=controller.toggle_play)
        with controller._lock:
            worker.start()
            worker.join(timeout=0.05)
            assert worker.is_alive()
            assert source.paused is True
        worker.join(timeout=5)
        assert source.paused is False


class SlowSeekSource(FakeSource):
    """Player whose seek blocks long enough to outlive a short stop timeout."""

    def __init__(self, current_time: float = 0.0):
        super().__init__(current_time)
        self.seeking = threading.Event()

    def seek(self, real_time: float) -> None:
        self.seeking.set()
        time.sleep(0.3)
        super().seek(real_time)


class BrokenSource(FakeSource):
    """Player whose position cannot be read."""

    @property
    def current_time(self) -> float:
        msg = "media element detached"
        raise RuntimeError(msg)

    @current_time.setter
    def current_time(self, value: float) -> None:
        pass


def live_pollers() -> int:
    return sum(
        1
        for thread in threading.enumerate()
        if thread.name == "playback-poll" and thread.is_alive()
    )


class TestPollingRestart:
    """Test restarting the background poll."""

    def test_restart_while_previous_poll_is_stopping(self, payload):
        """Test a slow tick never leaves two pollers running."""
        source = SlowSeekSource(current_time=40)
        controller = PlaybackController(
            source, payload, PlaybackConfig(poll_interval=0.001)
        )
        controller.on_loaded_metadata(120)

        controller.start_polling()
        assert source.seeking.wait(timeout=5)
        controller.stop_polling(timeout=0.01)

        assert not controller.is_polling
        with pytest.raises(RuntimeError, match="still stopping"):
            controller.start_polling()
        assert live_pollers() == 1

        controller.stop_polling(timeout=5)
        assert live_pollers() == 0
        assert source.seeks == [45]

        controller.start_polling()
        try:
            assert controller.is_polling
            assert live_pollers() == 1
        finally:
            controller.stop_polling(timeout=5)
        assert source.seeks == [45]

    def test_failed_tick_is_logged_once(self, payload, caplog, monkeypatch):
        """Test a failing tick stops the poll without re-raising."""
        uncaught = []
        monkeypatch.setattr(threading, "excepthook", uncaught.append)
        controller = PlaybackController(
            BrokenSource(), payload, PlaybackConfig(poll_interval=0.001)
        )
        controller.on_loaded_metadata(120)

        with caplog.at_level(logging.ERROR):
            controller.start_polling()
            controller._thread.join(timeout=5)

        assert not controller.is_polling
        failures = [r for r in caplog.records if "tick failed" in r.getMessage()]
        assert len(failures) == 1
        assert uncaught == []
        controller.stop_polling()
