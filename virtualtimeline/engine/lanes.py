"""Greedy lane assignment for overlapping visible annotations."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pydantic import BaseModel, Field

from virtualtimeline.core.models import Segment, Tag
from virtualtimeline.engine.virtual_time import VirtualTimeEngine, visible_segments

logger = logging.getLogger(__name__)


class LaneAssignment(BaseModel):
    """A visible segment placed on a display lane in virtual coordinates."""

    segment: Segment = Field(..., description="Annotated segment")
    start_v: float = Field(..., ge=0, description="Virtual start (seconds)")
    end_v: float = Field(..., ge=0, description="Virtual end (seconds)")
    lane_index: int = Field(..., ge=0, description="Display lane")

    model_config = {"frozen": True}

    @property
    def duration_v(self) -> float:
        """Virtual duration in seconds."""
        return self.end_v - self.start_v

    def overlaps(self, other: LaneAssignment) -> bool:
        """Check whether two placements overlap in virtual time."""
        return self.start_v < other.end_v and other.start_v < self.end_v


def assign_lanes(intervals: Sequence[tuple[float, float]]) -> list[int]:
    """Earliest-fit interval colouring.

    Intervals are visited by ascending start (stable, so ties keep input
    order) and each goes to the lowest lane already free at its start.
    Returns lane indices aligned with the input order.
    """
    order = sorted(range(len(intervals)), key=lambda i: intervals[i][0])
    lane_ends: list[float] = []
    lanes = [0] * len(intervals)

    for i in order:
        start, end = intervals[i]
        for lane, lane_end in enumerate(lane_ends):
            if lane_end <= start:
                lane_ends[lane] = end
                lanes[i] = lane
                break
        else:
            lanes[i] = len(lane_ends)
            lane_ends.append(end)

    return lanes


def layout_visible_segments(
    engine: VirtualTimeEngine,
    segments: Sequence[Segment],
    tags: Sequence[Tag],
) -> list[LaneAssignment]:
    """Place visible segments on lanes, sorted by virtual start."""
    visible = visible_segments(segments, tags)
    spans = [
        (engine.real_to_virtual(s.start), engine.real_to_virtual(s.end))
        for s in visible
    ]
    lanes = assign_lanes(spans)

    placements = [
        LaneAssignment(segment=segment, start_v=start_v, end_v=end_v, lane_index=lane)
        for segment, (start_v, end_v), lane in zip(visible, spans, lanes, strict=True)
    ]
    # sorted() is stable, so equal starts stay in collection order
    placements = sorted(placements, key=lambda p: p.start_v)

    logger.debug(
        "Placed %d visible segments on %d lanes",
        len(placements),
        lane_count(placements),
    )
    return placements


def lane_count(assignments: Sequence[LaneAssignment]) -> int:
    """Number of lanes in use."""
    if not assignments:
        return 0
    return max(a.lane_index for a in assignments) + 1
