"""Shared fixtures: a two-minute recording with two discarded stretches."""

from __future__ import annotations

import pytest

from virtualtimeline.core.models import Segment, Tag, VideoDataPayload
from virtualtimeline.engine.virtual_time import VirtualTimeEngine

REAL_DURATION = 120.0


@pytest.fixture
def tags() -> list[Tag]:
    """Three visible tags and one discardable tag."""
    return [
        Tag(id="t1", name="Leadership", color="#ff4444", is_hidden=False),
        Tag(id="t2", name="Teamwork", color="#cddc39", is_hidden=False),
        Tag(id="t3", name="Communication", color="#4caf50", is_hidden=False),
        Tag(id="t4", name="Discardable", color="#424242", is_hidden=True),
    ]


@pytest.fixture
def segments() -> list[Segment]:
    """Overlapping visible annotations plus hidden [35, 45) and [90, 105)."""
    return [
        Segment(id="s1", tag_id="t1", start_real=10, end_real=30),
        Segment(id="s2", tag_id="t3", start_real=50, end_real=80),
        Segment(id="s3", tag_id="t2", start_real=20, end_real=60),
        Segment(id="s4", tag_id="t4", start_real=35, end_real=45),
        Segment(id="s5", tag_id="t4", start_real=90, end_real=105),
    ]


@pytest.fixture
def payload(tags, segments) -> VideoDataPayload:
    """Snapshot as the annotation store would hand it over."""
    return VideoDataPayload(
        video_url="https://example.com/recording.mp4", tags=tags, segments=segments
    )


@pytest.fixture
def engine(tags, segments) -> VirtualTimeEngine:
    """Engine with the real duration already known."""
    return VirtualTimeEngine(segments, tags, REAL_DURATION)
