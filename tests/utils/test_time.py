"""Tests for time utilities."""

from __future__ import annotations

import pytest

from virtualtimeline.utils.time import SECONDS_IN_HOUR, TimeUtils


class TestTimeUtils:
    """Test time utilities."""

    def test_format_clock(self):
        """Test scrubber clock formatting."""
        assert TimeUtils.format_clock(0) == "0:00"
        assert TimeUtils.format_clock(35) == "0:35"
        assert TimeUtils.format_clock(90.9) == "1:30"
        assert TimeUtils.format_clock(3725) == "62:05"

    def test_format_clock_suffix(self):
        """Test the unit suffix shown next to the raw duration."""
        assert TimeUtils.format_clock(120, suffix="min") == "2:00 min"

    def test_format_clock_negative(self):
        """Test negative input clamps to zero."""
        assert TimeUtils.format_clock(-4) == "0:00"

    def test_format_range(self):
        """Test range labels used in the summary."""
        assert TimeUtils.format_range(35, 45) == "0:35 - 0:45"

    @pytest.mark.parametrize(
        ("text", "seconds"),
        [
            ("90", 90.0),
            ("  12.5 ", 12.5),
            ("1:30", 90.0),
            ("0:01:30.5", 90.5),
            ("2:00:00", 2 * SECONDS_IN_HOUR),
            ("1m30s", 90.0),
            ("1h 2m", 3720.0),
            ("45S", 45.0),
        ],
    )
    def test_parse_time_string(self, text, seconds):
        """Test the accepted notations."""
        assert TimeUtils.parse_time_string(text) == pytest.approx(seconds)

    def test_parse_time_string_errors(self):
        """Test error cases in time parsing."""
        with pytest.raises(ValueError, match="Empty time string"):
            TimeUtils.parse_time_string("   ")
        with pytest.raises(ValueError, match="Invalid time components"):
            TimeUtils.parse_time_string("1:75")
        with pytest.raises(ValueError, match="Invalid time components"):
            TimeUtils.parse_time_string("1:60:00")
        with pytest.raises(ValueError, match="Unrecognized time format"):
            TimeUtils.parse_time_string("1d 2h")
        with pytest.raises(ValueError, match="Non-finite"):
            TimeUtils.parse_time_string("inf")
