"""Core data models for the virtual timeline."""

from __future__ import annotations

import re
from typing import Self

from pydantic import BaseModel, Field, field_validator, model_validator

from virtualtimeline.core.constants import DEFAULT_TAG_COLOR

COLOR_PATTERN = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


class Interval(BaseModel):
    """A range on the real time axis, in seconds."""

    start: float = Field(..., ge=0, description="Start (seconds)")
    end: float = Field(..., ge=0, description="End (seconds)")

    model_config = {
        "frozen": True,
        "allow_inf_nan": False,
    }

    @model_validator(mode="after")
    def validate_order(self) -> Self:
        """Ensure start does not come after end."""
        if self.end < self.start:
            msg = f"end ({self.end}) must not be before start ({self.start})"
            raise ValueError(msg)
        return self

    @classmethod
    def from_endpoints(cls, a: float, b: float) -> Interval:
        """Create from two endpoints given in any order."""
        return cls(start=min(a, b), end=max(a, b))

    @property
    def length(self) -> float:
        """Length of the interval in seconds."""
        return self.end - self.start

    def contains(self, timestamp: float) -> bool:
        """Check half-open membership ``[start, end)``."""
        return self.start <= timestamp < self.end

    def clip(self, upper: float) -> Interval | None:
        """Clip to ``[0, upper]``, returning None if nothing remains."""
        end = min(self.end, upper)
        if end <= self.start:
            return None
        return Interval(start=self.start, end=end)

    def __str__(self) -> str:
        """Return string representation."""
        return f"[{self.start:.2f}, {self.end:.2f})"


class Tag(BaseModel):
    """Annotation category; hidden tags mark discardable footage."""

    id: str = Field(..., min_length=1, description="Unique tag identifier")
    name: str = Field(..., description="Display name")
    color: str = Field(default=DEFAULT_TAG_COLOR, description="Hex display color")
    is_hidden: bool = Field(
        default=False,
        alias="isHidden",
        description="Whether tagged footage is excised from virtual time",
    )

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "str_strip_whitespace": True,
    }

    @field_validator("color")
    @classmethod
    def validate_color(cls, v: str) -> str:
        """Validate hex color notation."""
        if not COLOR_PATTERN.match(v):
            msg = f"Invalid color: {v}. Expected #rgb, #rrggbb or #rrggbbaa"
            raise ValueError(msg)
        return v

    def __str__(self) -> str:
        """Return string representation."""
        suffix = " (hidden)" if self.is_hidden else ""
        return f"Tag({self.name}{suffix})"


class Segment(BaseModel):
    """An annotated stretch of the raw recording.

    Endpoints are taken as supplied by the annotation store and may be
    inverted or fall outside the recording; consumers order and clamp them.
    """

    id: str = Field(..., min_length=1, description="Unique segment identifier")
    tag_id: str = Field(..., alias="tagId", description="Referenced tag id")
    start_real: float = Field(..., alias="startReal", description="Start (seconds)")
    end_real: float = Field(..., alias="endReal", description="End (seconds)")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "allow_inf_nan": False,
    }

    @property
    def start(self) -> float:
        """Earlier of the two endpoints."""
        return min(self.start_real, self.end_real)

    @property
    def end(self) -> float:
        """Later of the two endpoints."""
        return max(self.start_real, self.end_real)

    @property
    def duration(self) -> float:
        """Duration in seconds, independent of endpoint order."""
        return self.end - self.start

    def contains(self, timestamp: float) -> bool:
        """Check closed membership ``[start, end]``."""
        return self.start <= timestamp <= self.end

    def __str__(self) -> str:
        """Return string representation."""
        return f"Segment({self.id} {self.tag_id} {self.start:.1f}-{self.end:.1f}s)"


class VideoDataPayload(BaseModel):
    """Snapshot handed over by the annotation store."""

    video_url: str = Field(default="", alias="videoUrl", description="Media source")
    tags: list[Tag] = Field(default_factory=list, description="Known tags")
    segments: list[Segment] = Field(
        default_factory=list, description="Annotated segments"
    )

    model_config = {
        "populate_by_name": True,
    }

    @model_validator(mode="after")
    def validate_unique_ids(self) -> Self:
        """Reject duplicate tag or segment identifiers."""
        for label, items in (("tag", self.tags), ("segment", self.segments)):
            seen: set[str] = set()
            for item in items:
                if item.id in seen:
                    msg = f"Duplicate {label} id: {item.id}"
                    raise ValueError(msg)
                seen.add(item.id)
        return self

    def tag_map(self) -> dict[str, Tag]:
        """Map tag ids to tags."""
        return {tag.id: tag for tag in self.tags}

    @property
    def hidden_tag_ids(self) -> set[str]:
        """Ids of tags whose footage is discardable."""
        return {tag.id for tag in self.tags if tag.is_hidden}

    def __str__(self) -> str:
        """Return string representation."""
        return (
            f"VideoDataPayload({len(self.tags)} tags, "
            f"{len(self.segments)} segments)"
        )


class ValidationResult(BaseModel):
    """Result of validation operations with errors and warnings."""

    is_valid: bool = Field(..., description="Whether validation passed")
    errors: list[str] = Field(
        default_factory=list, description="List of validation errors"
    )
    warnings: list[str] = Field(
        default_factory=list, description="List of validation warnings"
    )

    def add_error(self, error: str) -> None:
        """Add an error message and mark as invalid."""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str) -> None:
        """Add a warning message without affecting validity."""
        self.warnings.append(warning)

    @property
    def has_warnings(self) -> bool:
        """Check if there are any warnings."""
        return len(self.warnings) > 0

    def __str__(self) -> str:
        """Return string representation."""
        status = "valid" if self.is_valid else "invalid"
        return (
            f"ValidationResult({status}, {len(self.errors)} errors, "
            f"{len(self.warnings)} warnings)"
        )
