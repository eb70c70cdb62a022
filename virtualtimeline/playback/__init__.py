"""Playback module - Polling controller for media sources."""

from .controller import PlaybackConfig, PlaybackController, PlaybackSource

__all__ = [
    "PlaybackConfig",
    "PlaybackController",
    "PlaybackSource",
]
