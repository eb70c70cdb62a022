"""Playback controller keeping a media source on the virtual timeline."""

from __future__ import annotations

import logging
import threading
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, Field

from virtualtimeline.core.constants import (
    DEFAULT_POLL_INTERVAL_SECONDS,
    NAVIGATION_MARGIN_SECONDS,
)
from virtualtimeline.core.models import Segment, VideoDataPayload
from virtualtimeline.engine.virtual_time import VirtualTimeEngine

logger = logging.getLogger(__name__)


@runtime_checkable
class PlaybackSource(Protocol):
    """What the controller needs from a media player."""

    @property
    def current_time(self) -> float: ...

    @property
    def paused(self) -> bool: ...

    def seek(self, real_time: float) -> None: ...

    def play(self) -> None: ...

    def pause(self) -> None: ...


class PlaybackConfig(BaseModel):
    """Configuration for the playback controller."""

    navigation_margin: float = Field(
        default=NAVIGATION_MARGIN_SECONDS,
        ge=0,
        description="Seconds ignored around the playhead when skipping",
    )
    poll_interval: float = Field(
        default=DEFAULT_POLL_INTERVAL_SECONDS,
        gt=0,
        description="Seconds between polling ticks",
    )

    model_config = {
        "validate_assignment": True,
    }


class PlaybackController:
    """Drives a playback source through a VirtualTimeEngine.

    Each tick reads the source position, pushes it out of hidden intervals
    when needed, and refreshes the virtual progress. Engine queries are pure,
    so the only state guarded by the lock is the engine reference and the
    last computed progress.
    """

    def __init__(
        self,
        source: PlaybackSource,
        payload: VideoDataPayload,
        config: PlaybackConfig | None = None,
    ):
        self.source = source
        self.config = config or PlaybackConfig()
        self._lock = threading.RLock()
        self._payload = payload
        self._engine = VirtualTimeEngine(payload.segments, payload.tags, 0.0)
        self._virtual_progress = 0.0
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def engine(self) -> VirtualTimeEngine:
        """The engine for the current snapshot."""
        return self._engine

    @property
    def virtual_progress(self) -> float:
        """Last computed progress, as a percentage of virtual duration."""
        return self._virtual_progress

    def rebuild(self, payload: VideoDataPayload) -> None:
        """Swap in a new snapshot, keeping the known real duration."""
        with self._lock:
            duration = self._engine.get_real_duration()
            self._payload = payload
            self._engine = VirtualTimeEngine(payload.segments, payload.tags, duration)
            logger.debug("Engine rebuilt for %s", payload)

    def on_loaded_metadata(self, duration: float) -> None:
        """Record the media duration once the source reports it."""
        with self._lock:
            self._engine.set_real_duration(duration)

    def tick(self) -> float:
        """Run one poll step and return the virtual progress."""
        with self._lock:
            # Without a duration every position would clamp to 0
            if self._engine.get_real_duration() <= 0:
                return self._virtual_progress
            current = self.source.current_time
            valid = self._engine.get_valid_real_time(current)
            if valid != current:
                logger.debug("Skipping hidden footage: %.3fs -> %.3fs", current, valid)
                self.source.seek(valid)
            if self._engine.get_virtual_duration() > 0:
                self._virtual_progress = self._engine.virtual_progress(valid)
            return self._virtual_progress

    def seek_to_percentage(self, fraction: float) -> float:
        """Seek to a scrubber position in ``[0, 1]``; returns the real time."""
        with self._lock:
            target = self._engine.real_time_for_percentage(fraction)
            self.source.seek(target)
            return target

    def skip_forward(self) -> float | None:
        """Jump to the next cut point, if there is one."""
        with self._lock:
            target = self._engine.next_cut_point(
                self.source.current_time, self.config.navigation_margin
            )
            if target is None:
                return None
            target = self._engine.get_valid_real_time(target)
            self.source.seek(target)
            return target

    def skip_backward(self) -> float:
        """Jump to the previous cut point, or the start of the recording."""
        with self._lock:
            target = self._engine.previous_cut_point(
                self.source.current_time, self.config.navigation_margin
            )
            target = self._engine.get_valid_real_time(target)
            self.source.seek(target)
            return target

    def toggle_play(self) -> bool:
        """Play if paused, pause otherwise; returns True when now playing."""
        with self._lock:
            if self.source.paused:
                self.source.play()
                return True
            self.source.pause()
            return False

    def active_segment(self) -> Segment | None:
        """Visible annotation under the playhead."""
        with self._lock:
            return self._engine.get_active_visible_segment(
                self._payload.segments,
                self._payload.tags,
                self.source.current_time,
            )

    # Polling loop

    @property
    def is_polling(self) -> bool:
        """Check if the background poll is running and not asked to stop."""
        return (
            self._thread is not None
            and self._thread.is_alive()
            and not self._stop_event.is_set()
        )

    def start_polling(self) -> None:
        """Start ticking on a background thread."""
        if self.is_polling:
            return
        if self._thread is not None and self._thread.is_alive():
            msg = "Previous playback poll is still stopping"
            raise RuntimeError(msg)
        # A fresh event per run, so a late poller never sees a restart
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._poll_loop,
            args=(self._stop_event,),
            name="playback-poll",
            daemon=True,
        )
        self._thread.start()
        logger.info("Playback polling started (every %.4fs)", self.config.poll_interval)

    def stop_polling(self, timeout: float | None = 1.0) -> None:
        """Stop the background poll and wait for it to exit."""
        self._stop_event.set()
        if self._thread is None:
            return
        self._thread.join(timeout)
        if self._thread.is_alive():
            logger.warning("Playback poll did not stop within %ss", timeout)
            return
        self._thread = None
        logger.info("Playback polling stopped")

    def _poll_loop(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self.config.poll_interval):
            try:
                self.tick()
            except Exception:
                logger.exception("Playback tick failed, stopping poll")
                stop_event.set()
                return
