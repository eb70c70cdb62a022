"""Virtual timeline - hide discarded footage from playback and navigation."""

from virtualtimeline.core.models import Interval, Segment, Tag, VideoDataPayload
from virtualtimeline.engine.lanes import assign_lanes, layout_visible_segments
from virtualtimeline.engine.normalizer import normalize_intervals
from virtualtimeline.engine.virtual_time import VirtualTimeEngine

__version__ = "1.0.0"

__all__ = [
    "Interval",
    "Segment",
    "Tag",
    "VideoDataPayload",
    "VirtualTimeEngine",
    "assign_lanes",
    "layout_visible_segments",
    "normalize_intervals",
]
