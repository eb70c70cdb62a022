"""Engine module - Hidden-interval normalization, time mapping and lanes."""

from virtualtimeline.engine.lanes import (
    LaneAssignment,
    assign_lanes,
    lane_count,
    layout_visible_segments,
)
from virtualtimeline.engine.layout import (
    HiddenMarker,
    TagSummary,
    TimelineLayout,
    TrackPlacement,
    build_timeline_layout,
    summarize_by_tag,
)
from virtualtimeline.engine.normalizer import (
    clamp_partition,
    normalize_intervals,
    total_length,
)
from virtualtimeline.engine.virtual_time import (
    VirtualTimeEngine,
    hidden_segments,
    is_hidden_segment,
    visible_segments,
)

__all__ = [
    # Normalization
    "clamp_partition",
    "normalize_intervals",
    "total_length",
    # Time mapping
    "VirtualTimeEngine",
    "hidden_segments",
    "is_hidden_segment",
    "visible_segments",
    # Lanes
    "LaneAssignment",
    "assign_lanes",
    "lane_count",
    "layout_visible_segments",
    # Layout
    "HiddenMarker",
    "TagSummary",
    "TimelineLayout",
    "TrackPlacement",
    "build_timeline_layout",
    "summarize_by_tag",
]
