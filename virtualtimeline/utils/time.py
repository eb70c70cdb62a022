"""Time utilities for parsing and formatting timeline positions."""

from __future__ import annotations

import math
import re

MINUTES_IN_HOUR = 60
SECONDS_IN_MINUTE = 60
SECONDS_IN_HOUR = SECONDS_IN_MINUTE * MINUTES_IN_HOUR

_CLOCK_PATTERN = re.compile(r"^(?:(\d+):)?(\d{1,2}):(\d{1,2})(?:\.(\d{1,3}))?$")
_COMPACT_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*([hms])")


class TimeUtils:
    """Utilities for timeline time parsing and formatting."""

    @staticmethod
    def format_clock(seconds: float, suffix: str = "") -> str:
        """Format as ``m:ss`` with whole seconds, as shown on the scrubber."""
        seconds = max(0.0, seconds)
        minutes = int(seconds // SECONDS_IN_MINUTE)
        secs = int(seconds % SECONDS_IN_MINUTE)
        text = f"{minutes}:{secs:02d}"
        return f"{text} {suffix}" if suffix else text

    @staticmethod
    def format_range(start: float, end: float) -> str:
        """Format a range as ``m:ss - m:ss``."""
        return f"{TimeUtils.format_clock(start)} - {TimeUtils.format_clock(end)}"

    @staticmethod
    def parse_time_string(time_str: str) -> float:
        """Parse ``90``, ``1:30``, ``0:01:30.5`` or ``1m30s`` to seconds."""
        time_str = time_str.strip().lower()
        if not time_str:
            msg = "Empty time string"
            raise ValueError(msg)

        try:
            value = float(time_str)
        except ValueError:
            pass
        else:
            if not math.isfinite(value):
                msg = f"Non-finite time: {time_str}"
                raise ValueError(msg)
            return value

        clock = _CLOCK_PATTERN.match(time_str)
        if clock:
            hours_str, minutes_str, seconds_str, millis_str = clock.groups()
            minutes = int(minutes_str)
            seconds = int(seconds_str)
            if seconds >= SECONDS_IN_MINUTE or (
                hours_str and minutes >= MINUTES_IN_HOUR
            ):
                msg = f"Invalid time components in: {time_str}"
                raise ValueError(msg)
            millis = int(millis_str.ljust(3, "0")) if millis_str else 0
            return (
                int(hours_str or 0) * SECONDS_IN_HOUR
                + minutes * SECONDS_IN_MINUTE
                + seconds
                + millis / 1000
            )

        units = {"h": SECONDS_IN_HOUR, "m": SECONDS_IN_MINUTE, "s": 1}
        matches = _COMPACT_PATTERN.findall(time_str)
        if matches and _COMPACT_PATTERN.sub("", time_str).strip() == "":
            return sum(float(value) * units[unit] for value, unit in matches)

        msg = f"Unrecognized time format: {time_str}"
        raise ValueError(msg)
