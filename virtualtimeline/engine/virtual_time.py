"""Translation between real (raw recording) time and virtual (edited) time."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence

from virtualtimeline.core.constants import NAVIGATION_MARGIN_SECONDS
from virtualtimeline.core.models import Interval, Segment, Tag
from virtualtimeline.engine.normalizer import (
    clamp_partition,
    normalize_intervals,
    total_length,
)

logger = logging.getLogger(__name__)


def build_tag_lookup(tags: Iterable[Tag]) -> dict[str, Tag]:
    """Map tag ids to tags."""
    return {tag.id: tag for tag in tags}


def is_hidden_segment(segment: Segment, tag_lookup: Mapping[str, Tag]) -> bool:
    """Check whether a segment belongs to the hidden partition.

    A segment whose tag is unknown counts as visible: mis-tagged data must
    stay on the timeline rather than silently vanish.
    """
    tag = tag_lookup.get(segment.tag_id)
    return tag is not None and tag.is_hidden


def visible_segments(segments: Iterable[Segment], tags: Iterable[Tag]) -> list[Segment]:
    """Segments not excised from virtual time, in collection order."""
    lookup = build_tag_lookup(tags)
    return [s for s in segments if not is_hidden_segment(s, lookup)]


def hidden_segments(segments: Iterable[Segment], tags: Iterable[Tag]) -> list[Segment]:
    """Segments excised from virtual time, in collection order."""
    lookup = build_tag_lookup(tags)
    return [s for s in segments if is_hidden_segment(s, lookup)]


class VirtualTimeEngine:
    """Real/virtual time mapping for a recording with hidden intervals.

    The engine is built from a snapshot of segments and tags and is not
    updated in place when the snapshot changes; build a new one instead.
    Only the real duration may change after construction, since media
    metadata often arrives after the annotations.

    Every operation is total over its numeric domain: out-of-range input is
    clamped, never rejected.
    """

    def __init__(
        self,
        segments: Sequence[Segment],
        tags: Sequence[Tag],
        real_duration: float = 0.0,
    ):
        self._segments: tuple[Segment, ...] = tuple(segments)
        self._tags: tuple[Tag, ...] = tuple(tags)

        lookup = build_tag_lookup(self._tags)
        for segment in self._segments:
            if segment.tag_id not in lookup:
                logger.warning(
                    "Segment %s references unknown tag %s, treating as visible",
                    segment.id,
                    segment.tag_id,
                )

        # Shape is fixed here without an upper bound; only its clamped
        # measure depends on the real duration
        self._partition = normalize_intervals(
            (s.start_real, s.end_real)
            for s in self._segments
            if is_hidden_segment(s, lookup)
        )

        self._real_duration = 0.0
        self._virtual_duration = 0.0
        self._hidden: list[Interval] = []
        self._apply_real_duration(real_duration)

    def _apply_real_duration(self, duration: float) -> None:
        self._real_duration = max(0.0, duration)
        self._hidden = clamp_partition(self._partition, self._real_duration)
        self._virtual_duration = max(
            0.0, self._real_duration - total_length(self._hidden)
        )

    # Durations

    def get_real_duration(self) -> float:
        """Duration of the raw recording in seconds."""
        return self._real_duration

    def get_virtual_duration(self) -> float:
        """Duration left once hidden intervals are excised."""
        return self._virtual_duration

    def set_real_duration(self, duration: float) -> None:
        """Update the raw duration, e.g. once media metadata is loaded."""
        self._apply_real_duration(duration)
        logger.info(
            "Real duration set to %.3fs (virtual %.3fs, %d hidden intervals)",
            self._real_duration,
            self._virtual_duration,
            len(self._hidden),
        )

    def get_hidden_segments(self) -> list[Interval]:
        """Copy of the normalized hidden partition within the recording."""
        return list(self._hidden)

    # Translation

    def _clamp_real(self, real_time: float) -> float:
        return min(max(0.0, real_time), self._real_duration)

    def real_to_virtual(self, real_time: float) -> float:
        """Map a real timestamp to virtual time.

        A point strictly inside a hidden interval maps to the virtual time
        of that interval's start: time spent in a gap does not advance the
        virtual clock.
        """
        t = self._clamp_real(real_time)
        virtual_time = t
        for interval in self._hidden:
            if t >= interval.end:
                virtual_time -= interval.length
            elif t > interval.start:
                virtual_time -= t - interval.start
                break
            else:
                break
        return min(max(0.0, virtual_time), self._virtual_duration)

    def virtual_to_real(self, virtual_time: float) -> float:
        """Map a virtual timestamp back onto the raw recording.

        A target on the far edge of a visible stretch resolves to the end of
        that stretch, which is the start of the next hidden interval.
        """
        v = min(max(0.0, virtual_time), self._virtual_duration)
        consumed = 0.0
        cursor = 0.0
        for interval in self._hidden:
            visible = interval.start - cursor
            if v <= consumed + visible:
                return cursor + (v - consumed)
            consumed += visible
            cursor = interval.end
        return min(self._real_duration, cursor + (v - consumed))

    def get_valid_real_time(self, real_time: float) -> float:
        """Snap a real timestamp out of any hidden interval.

        Hidden intervals are half-open for snapping: their start is hidden,
        their end is the first visible instant.
        """
        t = self._clamp_real(real_time)
        for interval in self._hidden:
            if interval.start > t:
                break
            if interval.contains(t):
                return interval.end
        return t

    def virtual_progress(self, real_time: float) -> float:
        """Playback progress as a percentage of virtual duration."""
        if self._virtual_duration <= 0:
            return 0.0
        virtual_time = self.real_to_virtual(self.get_valid_real_time(real_time))
        return virtual_time / self._virtual_duration * 100.0

    def real_time_for_percentage(self, fraction: float) -> float:
        """Resolve a scrubber position in ``[0, 1]`` to a playable real time."""
        fraction = min(max(0.0, fraction), 1.0)
        target = self.virtual_to_real(self._virtual_duration * fraction)
        return self.get_valid_real_time(target)

    # Navigation

    def _snapshot(
        self,
        segments: Sequence[Segment] | None,
        tags: Sequence[Tag] | None,
    ) -> tuple[Sequence[Segment], Sequence[Tag]]:
        return (
            self._segments if segments is None else segments,
            self._tags if tags is None else tags,
        )

    def get_valid_cut_points(
        self,
        segments: Sequence[Segment] | None = None,
        tags: Sequence[Tag] | None = None,
    ) -> list[float]:
        """Sorted navigation points: recording bounds and visible boundaries.

        Hidden-tag segments contribute no boundaries of their own; their
        effect shows up through snapping.
        """
        segments, tags = self._snapshot(segments, tags)
        points = {0.0, self._real_duration}
        for segment in visible_segments(segments, tags):
            points.add(self.get_valid_real_time(segment.start_real))
            points.add(self.get_valid_real_time(segment.end_real))
        return sorted(p for p in points if 0.0 <= p <= self._real_duration)

    def next_cut_point(
        self,
        real_time: float,
        margin: float = NAVIGATION_MARGIN_SECONDS,
        segments: Sequence[Segment] | None = None,
        tags: Sequence[Tag] | None = None,
    ) -> float | None:
        """First cut point beyond ``real_time + margin``, if any."""
        for point in self.get_valid_cut_points(segments, tags):
            if point > real_time + margin:
                return point
        return None

    def previous_cut_point(
        self,
        real_time: float,
        margin: float = NAVIGATION_MARGIN_SECONDS,
        segments: Sequence[Segment] | None = None,
        tags: Sequence[Tag] | None = None,
    ) -> float:
        """Last cut point before ``real_time - margin``, else the start."""
        for point in reversed(self.get_valid_cut_points(segments, tags)):
            if point < real_time - margin:
                return point
        return 0.0

    def get_active_visible_segment(
        self,
        segments: Sequence[Segment] | None,
        tags: Sequence[Tag] | None,
        real_time: float,
    ) -> Segment | None:
        """First visible segment, in collection order, covering the snapped time."""
        segments, tags = self._snapshot(segments, tags)
        snapped = self.get_valid_real_time(real_time)
        for segment in visible_segments(segments, tags):
            if segment.contains(snapped):
                return segment
        return None

    def __repr__(self) -> str:
        """Return detailed representation."""
        return (
            f"VirtualTimeEngine(real={self._real_duration}, "
            f"virtual={self._virtual_duration}, hidden={len(self._hidden)})"
        )
