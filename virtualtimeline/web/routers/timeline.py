"""Timeline API router exposing virtual time queries to the player UI."""

from __future__ import annotations

import logging
from typing import Annotated, Literal

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from virtualtimeline.core.models import Segment, ValidationResult, VideoDataPayload
from virtualtimeline.engine.layout import (
    TagSummary,
    TimelineLayout,
    build_timeline_layout,
    summarize_by_tag,
)
from virtualtimeline.engine.virtual_time import VirtualTimeEngine
from virtualtimeline.utils.time import TimeUtils
from virtualtimeline.utils.validation import ValidationUtils

logger = logging.getLogger(__name__)

router = APIRouter()

TimeInput = Annotated[float, Field(allow_inf_nan=False)] | str


# Request/Response Models
class TimelineRequest(BaseModel):
    """Annotation snapshot plus the known media duration."""

    payload: VideoDataPayload = Field(..., description="Tags and segments")
    real_duration: float = Field(
        default=0.0, allow_inf_nan=False, description="Raw media duration (seconds)"
    )


class ResolveRequest(TimelineRequest):
    """Request model for resolving a playhead position."""

    real_time: TimeInput = Field(..., description="Seconds or a time string")


class ResolveResponse(BaseModel):
    """Response model for a resolved playhead position."""

    real_time: float
    valid_real_time: float
    virtual_time: float
    virtual_progress: float
    corrected: bool
    active_segment: Segment | None = None


class SeekRequest(TimelineRequest):
    """Request model for a scrubber click."""

    percentage: float = Field(
        ..., allow_inf_nan=False, description="Scrubber position in [0, 1]"
    )


class SeekResponse(BaseModel):
    """Response model for a scrubber click."""

    real_time: float
    virtual_time: float


class NavigateRequest(TimelineRequest):
    """Request model for skipping between cut points."""

    current_time: TimeInput = Field(..., description="Seconds or a time string")
    direction: Literal["forward", "backward"] = Field(default="forward")
    margin: float | None = Field(default=None, ge=0, description="Override margin")


class NavigateResponse(BaseModel):
    """Response model for cut point navigation."""

    direction: str
    real_time: float | None = Field(
        default=None, description="Target, or None when nothing lies ahead"
    )
    cut_points: list[float]


def _build_engine(request: TimelineRequest) -> VirtualTimeEngine:
    return VirtualTimeEngine(
        request.payload.segments, request.payload.tags, request.real_duration
    )


def _parse_time(value: float | str) -> float:
    if isinstance(value, str):
        try:
            return TimeUtils.parse_time_string(value)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
    return value


@router.post("/timeline/layout", response_model=TimelineLayout)
async def get_layout(request: TimelineRequest):
    """Lay out visible tracks and hidden markers for the scrubber."""
    engine = _build_engine(request)
    layout = build_timeline_layout(
        engine, request.payload.segments, request.payload.tags
    )
    logger.debug(
        "Layout: %d tracks on %d lanes, %d hidden markers",
        len(layout.tracks),
        layout.total_lanes,
        len(layout.hidden_markers),
    )
    return layout


@router.post("/timeline/resolve", response_model=ResolveResponse)
async def resolve_time(request: ResolveRequest):
    """Snap a playhead position and report its virtual progress."""
    engine = _build_engine(request)
    real_time = _parse_time(request.real_time)
    valid = engine.get_valid_real_time(real_time)

    return ResolveResponse(
        real_time=real_time,
        valid_real_time=valid,
        virtual_time=engine.real_to_virtual(valid),
        virtual_progress=engine.virtual_progress(valid),
        corrected=valid != real_time,
        active_segment=engine.get_active_visible_segment(
            request.payload.segments, request.payload.tags, valid
        ),
    )


@router.post("/timeline/seek", response_model=SeekResponse)
async def seek(request: SeekRequest):
    """Convert a scrubber click into a playable real time."""
    engine = _build_engine(request)
    real_time = engine.real_time_for_percentage(request.percentage)
    return SeekResponse(real_time=real_time, virtual_time=engine.real_to_virtual(real_time))


@router.post("/timeline/navigate", response_model=NavigateResponse)
async def navigate(request: NavigateRequest):
    """Find the next or previous cut point from the current position."""
    engine = _build_engine(request)
    current = _parse_time(request.current_time)
    kwargs = {} if request.margin is None else {"margin": request.margin}

    if request.direction == "forward":
        target = engine.next_cut_point(current, **kwargs)
    else:
        target = engine.previous_cut_point(current, **kwargs)

    return NavigateResponse(
        direction=request.direction,
        real_time=target,
        cut_points=engine.get_valid_cut_points(),
    )


@router.post("/timeline/summary", response_model=list[TagSummary])
async def get_summary(request: TimelineRequest):
    """Group segments per tag for the summary panel."""
    return summarize_by_tag(request.payload.segments, request.payload.tags)


@router.post("/timeline/validate", response_model=ValidationResult)
async def validate_payload(request: TimelineRequest):
    """Report data the engine accepts but reinterprets."""
    result = ValidationUtils.validate_payload(request.payload, request.real_duration)
    if result.has_warnings:
        logger.info("Payload validation: %s", result)
    return result
