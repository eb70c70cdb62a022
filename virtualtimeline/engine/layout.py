"""Scrubber layout and per-tag summaries built on the virtual timeline."""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel, Field

from virtualtimeline.core.models import Segment, Tag
from virtualtimeline.engine.lanes import lane_count, layout_visible_segments
from virtualtimeline.engine.virtual_time import (
    VirtualTimeEngine,
    build_tag_lookup,
    hidden_segments,
)
from virtualtimeline.utils.time import TimeUtils


class TrackPlacement(BaseModel):
    """A visible segment positioned on the scrubber."""

    segment: Segment
    tag: Tag | None = Field(default=None, description="None for unknown tags")
    start_v: float
    end_v: float
    lane_index: int = Field(..., ge=0)
    left_pct: float = Field(..., description="Offset as % of virtual duration")
    width_pct: float = Field(..., description="Width as % of virtual duration")


class HiddenMarker(BaseModel):
    """Where a discarded stretch was cut out of the virtual timeline."""

    segment: Segment
    left_pct: float
    duration_real: float = Field(..., ge=0, description="Discarded seconds")


class TimelineLayout(BaseModel):
    """Everything a presentation layer needs to draw the scrubber."""

    real_duration: float
    virtual_duration: float
    tracks: list[TrackPlacement] = Field(default_factory=list)
    hidden_markers: list[HiddenMarker] = Field(default_factory=list)
    total_lanes: int = Field(default=1, ge=1)

    @property
    def real_duration_label(self) -> str:
        """Raw duration as shown next to the scrubber."""
        return TimeUtils.format_clock(self.real_duration, suffix="min")


class TagSummary(BaseModel):
    """Segments of one tag, in time order."""

    tag: Tag
    segments: list[Segment]
    labels: list[str]

    @property
    def count(self) -> int:
        """Number of segments in the group."""
        return len(self.segments)


def build_timeline_layout(
    engine: VirtualTimeEngine,
    segments: Sequence[Segment],
    tags: Sequence[Tag],
) -> TimelineLayout:
    """Lay out visible tracks and hidden markers in virtual percentages."""
    virtual_duration = engine.get_virtual_duration()
    layout = TimelineLayout(
        real_duration=engine.get_real_duration(),
        virtual_duration=virtual_duration,
    )
    if virtual_duration <= 0:
        return layout

    lookup = build_tag_lookup(tags)
    placements = layout_visible_segments(engine, segments, tags)
    layout.tracks = [
        TrackPlacement(
            segment=p.segment,
            tag=lookup.get(p.segment.tag_id),
            start_v=p.start_v,
            end_v=p.end_v,
            lane_index=p.lane_index,
            left_pct=p.start_v / virtual_duration * 100.0,
            width_pct=p.duration_v / virtual_duration * 100.0,
        )
        for p in placements
    ]
    layout.hidden_markers = [
        HiddenMarker(
            segment=s,
            left_pct=engine.real_to_virtual(s.start) / virtual_duration * 100.0,
            duration_real=s.duration,
        )
        for s in hidden_segments(segments, tags)
    ]
    layout.total_lanes = max(1, lane_count(placements))
    return layout


def summarize_by_tag(
    segments: Sequence[Segment], tags: Sequence[Tag]
) -> list[TagSummary]:
    """Group segments by tag, skipping tags without segments."""
    summaries = []
    for tag in tags:
        group = sorted(
            (s for s in segments if s.tag_id == tag.id),
            key=lambda s: s.start_real,
        )
        if not group:
            continue
        summaries.append(
            TagSummary(
                tag=tag,
                segments=group,
                labels=[TimeUtils.format_range(s.start_real, s.end_real) for s in group],
            )
        )
    return summaries
