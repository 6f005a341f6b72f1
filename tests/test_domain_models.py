"""
Tests for domain models.
"""

from datetime import time

import pendulum
import pytest

from workingtime.domain.models import WorkingWindow


class TestWorkingWindow:
    """Tests for WorkingWindow model."""

    def test_parse_valid_window(self):
        """Test parsing a valid window."""
        window = WorkingWindow.parse("09:00-18:00")

        assert window.start == time(9, 0)
        assert window.end == time(18, 0)
        assert window.minutes() == 540
        assert str(window) == "09:00-18:00"

    def test_invalid_window_raises_error(self):
        """Test that a window ending before it starts raises ValueError."""
        with pytest.raises(ValueError):
            WorkingWindow(start=time(18, 0), end=time(9, 0))

    @pytest.mark.parametrize("value", ["09:00", "09:00-18:00-19:00", "ab:cd-18:00", "09:60-18:00"])
    def test_malformed_window_raises_error(self, value):
        with pytest.raises(ValueError):
            WorkingWindow.parse(value)

    def test_bounds_on_day(self):
        """Bounds are the window edges on the given day."""
        window = WorkingWindow.parse("09:30-17:15")

        start, end = window.bounds(pendulum.date(2016, 10, 27))

        assert start.format("YYYY-MM-DD HH:mm") == "2016-10-27 09:30"
        assert end.format("YYYY-MM-DD HH:mm") == "2016-10-27 17:15"

    def test_contains_is_half_open(self):
        """Start is inside the window, end is not."""
        window = WorkingWindow.parse("09:00-18:00")

        assert window.contains(pendulum.datetime(2016, 10, 27, 9, 0))
        assert window.contains(pendulum.datetime(2016, 10, 27, 17, 59))
        assert not window.contains(pendulum.datetime(2016, 10, 27, 18, 0))
        assert not window.contains(pendulum.datetime(2016, 10, 27, 8, 59))
