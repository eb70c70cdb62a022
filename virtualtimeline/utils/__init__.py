"""Utils module - Common utilities and helper functions."""

from .time import TimeUtils
from .validation import ValidationUtils

__all__ = [
    "TimeUtils",
    "ValidationUtils",
]
