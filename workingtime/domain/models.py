"""
Domain models for working windows.
"""

from dataclasses import dataclass
from datetime import date, time
from typing import Tuple

from pendulum import DateTime

from .dates import combine


@dataclass(frozen=True)
class WorkingWindow:
    """
    Time-of-day interval during which a weekday counts as working.

    Invariant: start must be before end on the same day (no overnight windows).
    """
    start: time
    end: time

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(f"Window start {self.start} must be before window end {self.end}")

    @classmethod
    def parse(cls, value: str) -> "WorkingWindow":
        """
        Parse a ``HH:MM-HH:MM`` interval.

        Raises:
            ValueError: If the string is not two valid times or start >= end
        """
        parts = value.split("-")
        if len(parts) != 2:
            raise ValueError(f"Working window must look like 'HH:MM-HH:MM', got '{value}'")

        return cls(start=_parse_clock(parts[0]), end=_parse_clock(parts[1]))

    def minutes(self) -> int:
        """Return the window length in minutes."""
        return (self.end.hour * 60 + self.end.minute) - (self.start.hour * 60 + self.start.minute)

    def bounds(self, day: date) -> Tuple[DateTime, DateTime]:
        """Window start and end as instants on the given day."""
        return (
            combine(day, self.start.hour, self.start.minute),
            combine(day, self.end.hour, self.end.minute),
        )

    def contains(self, instant: DateTime) -> bool:
        """Check if an instant lies in [start, end) on its own day."""
        start, end = self.bounds(instant)
        return start <= instant < end

    def __str__(self) -> str:
        return f"{self.start.strftime('%H:%M')}-{self.end.strftime('%H:%M')}"


def _parse_clock(value: str) -> time:
    hours, sep, minutes = value.strip().partition(":")
    if not sep or len(hours) != 2 or len(minutes) != 2 or not (hours + minutes).isdigit():
        raise ValueError(f"Time must be formatted as HH:MM, got '{value}'")
    # time() rejects hours > 23 and minutes > 59
    return time(hour=int(hours), minute=int(minutes))
