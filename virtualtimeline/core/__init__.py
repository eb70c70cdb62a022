"""Core module - Fundamental data structures and models."""

from virtualtimeline.core.constants import NAVIGATION_MARGIN_SECONDS
from virtualtimeline.core.models import (
    Interval,
    Segment,
    Tag,
    ValidationResult,
    VideoDataPayload,
)

__all__ = [
    # Models
    "Interval",
    "Segment",
    "Tag",
    "ValidationResult",
    "VideoDataPayload",
    # Constants
    "NAVIGATION_MARGIN_SECONDS",
]
