"""
Working time engine.

Classifies dates and times against weekly working windows, weekends and
holidays, and does minute arithmetic that skips non-working time.

This is pure computation: no I/O, no shared state besides the instance's own
reference instant, which only ``modify`` mutates.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable, FrozenSet, Mapping, Optional, Tuple, Union

from pendulum import Date, DateTime

from ..config import WorkingTimeConfig
from .dates import (
    DATE_FORMAT,
    DATETIME_FORMAT,
    DATETIME_SECONDS_FORMAT,
    DAY_MONTH_FORMAT,
    TIME_FORMAT,
    DateLike,
    civil_now,
    minutes_between,
    parse_instant,
    validate_date,
    weekday_index,
)
from .exceptions import ConfigurationGapError, ConfigurationInvalidError, InvalidArgumentError
from .models import WorkingWindow

logger = logging.getLogger(__name__)


class WorkingTime:
    """
    Calculates time intervals taking working hours, weekends and holidays into account.

    Every ``date`` argument may be omitted, in which case the reference
    instant ``date_time`` is used. Instances are not thread safe: ``modify``
    without a date rewrites the reference instant.
    """

    def __init__(
        self,
        config: Union[WorkingTimeConfig, Mapping[str, Any]],
        date_time: Optional[DateLike] = None,
    ) -> None:
        if not isinstance(config, WorkingTimeConfig):
            config = WorkingTimeConfig.model_validate(config)

        self.config = config
        self._windows = config.windows()
        self.date_time: DateTime = civil_now() if date_time is None else parse_instant(date_time)

    @property
    def working_days(self) -> Mapping[int, str]:
        return self.config.working_days

    @property
    def weekends(self) -> FrozenSet[int]:
        return self.config.weekends

    @property
    def holidays(self) -> FrozenSet[str]:
        return self.config.holidays

    @staticmethod
    def validate_date(value: str, fmt: str = DATETIME_SECONDS_FORMAT) -> bool:
        """Check that ``value`` parses under ``fmt`` and formats back identically."""
        return validate_date(value, fmt)

    def _instant(self, value: Optional[DateLike]) -> DateTime:
        return self.date_time if value is None else parse_instant(value)

    def _window(self, day: date) -> Optional[WorkingWindow]:
        return self._windows.get(weekday_index(day))

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def is_holiday(self, date: Optional[DateLike] = None) -> bool:
        """Check if the date is a holiday. No configured holidays means never."""
        if not self.holidays:
            return False
        return self._instant(date).format(DAY_MONTH_FORMAT) in self.holidays

    def is_weekend(self, date: Optional[DateLike] = None) -> bool:
        """Check if the date falls on a weekend weekday. No configured weekends means never."""
        if not self.weekends:
            return False
        return weekday_index(self._instant(date)) in self.weekends

    def is_working_date(self, date: Optional[DateLike] = None) -> bool:
        """Check if the date is neither a weekend nor a holiday."""
        return not (self.is_weekend(date) or self.is_holiday(date))

    # ------------------------------------------------------------------
    # Window resolution
    # ------------------------------------------------------------------

    def working_window(self, date: Optional[DateLike] = None) -> WorkingWindow:
        """
        Get the configured working window for the date's weekday.

        Raises:
            ConfigurationGapError: If the weekday has no window
        """
        day = self._instant(date)
        window = self._window(day)
        if window is None:
            raise ConfigurationGapError(weekday_index(day))
        return window

    def is_working_time(self, time: Optional[DateLike] = None) -> bool:
        """
        Check if the time falls inside a working window.

        Args:
            time: ``None`` for the reference instant, a bare ``HH:mm`` on the
                reference date, a full ``YYYY-MM-DD HH:mm`` or a datetime

        Raises:
            InvalidArgumentError: If a string has neither accepted format
        """
        if time is None:
            instant = self.date_time
        elif isinstance(time, str):
            if validate_date(time, TIME_FORMAT):
                instant = parse_instant(f"{self.date_time.format(DATE_FORMAT)} {time}")
            elif validate_date(time, DATETIME_FORMAT):
                instant = parse_instant(time)
            else:
                raise InvalidArgumentError(
                    f"Date `{time}` isn't a valid date. Dates should be formatted as "
                    f"{DATETIME_FORMAT} or {TIME_FORMAT}, e.g. `2016-10-27 17:30` or `17:30`."
                )
        else:
            instant = parse_instant(time)

        window = self._window(instant)
        if window is None:
            return False

        return self.is_working_date(instant) and window.contains(instant)

    def _walk_days(self, start: date, accept: Callable[[Date], bool]) -> Date:
        """First day strictly after ``start`` that satisfies ``accept``."""
        day = Date(start.year, start.month, start.day)

        for step in range(1, self.config.max_iterations + 1):
            day = day.add(days=1)
            if accept(day):
                logger.debug("Found day %s after %d step(s) from %s", day, step, start)
                return day

        logger.warning(
            "No matching day within %d days after %s", self.config.max_iterations, start
        )
        raise ConfigurationInvalidError(
            f"No working day found within {self.config.max_iterations} days after {start}. "
            "Check the weekends, holidays and working_days configuration."
        )

    def next_working_day(self, date: Optional[DateLike] = None) -> Date:
        """Return the next working date strictly after the given date."""
        return self._walk_days(self._instant(date), self.is_working_date)

    def _next_working_window(self, date: Optional[DateLike] = None) -> Tuple[DateTime, DateTime]:
        # Days missing from working_days count as non-working
        day = self._walk_days(
            self._instant(date),
            lambda d: self._window(d) is not None and self.is_working_date(d),
        )
        return self._window(day).bounds(day)

    def next_working_day_start(self, date: Optional[DateLike] = None) -> DateTime:
        """Return the start of the next working day's window."""
        return self._next_working_window(date)[0]

    def next_working_day_end(self, date: Optional[DateLike] = None) -> DateTime:
        """Return the end of the next working day's window."""
        return self._next_working_window(date)[1]

    def next_working_time(self, date: Optional[DateLike] = None) -> Optional[DateTime]:
        """
        Return the nearest working instant, or ``None`` if already working.

        The result is never earlier than the given instant.
        """
        instant = self._instant(date)
        window = self._window(instant)

        # Days without a window are non-working
        if window is None or not self.is_working_date(instant):
            return self.next_working_day_start(instant)

        start, end = window.bounds(instant)

        if instant < start:
            return start
        if instant >= end:
            return self.next_working_day_start(instant)

        return None

    # ------------------------------------------------------------------
    # Day length
    # ------------------------------------------------------------------

    def get_job_minutes_in_day(self, date: Optional[DateLike] = None) -> int:
        """
        Return the working minutes available in the day from this point on.

        Inside a window this is what remains until the window closes; otherwise
        it is the full window length for the weekday (0 without a window).
        """
        instant = self._instant(date)
        window = self._window(instant)
        if window is None:
            return 0

        if self.next_working_time(instant) is None:
            return minutes_between(instant, window.bounds(instant)[1])

        return window.minutes()

    # ------------------------------------------------------------------
    # Minute arithmetic
    # ------------------------------------------------------------------

    def modify_date(self, minutes: int, date: DateLike) -> DateTime:
        """
        Add working minutes to an instant, rolling over to later days.

        An instant outside working time first moves to the next working instant.
        """
        instant = parse_instant(date)
        instant = self.next_working_time(instant) or instant
        available = self.get_job_minutes_in_day(instant)

        # Each roll goes through _walk_days, which bounds hopeless configurations
        while minutes > available:
            instant = instant.add(minutes=available)
            minutes -= available
            instant = self.next_working_time(instant)
            available = self.get_job_minutes_in_day(instant)
            logger.debug("Rolled to %s with %d minutes left", instant, minutes)

        return instant.add(minutes=minutes)

    def modify(self, minutes: int, date: Optional[DateLike] = None) -> str:
        """
        Add working minutes to a date, skipping non-working time.

        Without ``date`` the reference instant is used and then replaced by
        the result.

        Returns:
            Resulting instant formatted as ``YYYY-MM-DD HH:mm``

        Raises:
            InvalidArgumentError: If minutes is negative
        """
        if minutes < 0:
            raise InvalidArgumentError(f"Minutes must not be negative, got {minutes}")

        result = self.modify_date(minutes, self._instant(date))

        if date is None:
            self.date_time = result

        return result.format(DATETIME_FORMAT)

    # ------------------------------------------------------------------
    # Range aggregation
    # ------------------------------------------------------------------

    def calculating_working_time(self, start_date: DateLike, end_date: DateLike) -> int:
        """
        Return the working minutes between two instants.

        String arguments must be formatted as ``YYYY-MM-DD HH:mm:ss``.

        Raises:
            InvalidArgumentError: If a string argument is not in that format
        """
        for value in (start_date, end_date):
            if isinstance(value, str) and not validate_date(value):
                raise InvalidArgumentError(
                    f"Date `{value}` isn't a valid date. Dates should be formatted as "
                    f"{DATETIME_SECONDS_FORMAT}, e.g. `2016-10-27 17:30:00`."
                )

        start = parse_instant(start_date)
        end = parse_instant(end_date)

        start = self.next_working_time(start) or start
        if start > end:
            return 0

        total = self.get_job_minutes_in_day(start)
        elapsed = minutes_between(start, end)
        if elapsed < total:
            return elapsed

        day_start, day_end = self._next_working_window(start)
        while True:
            # End comes before the next working day opens
            if day_start >= end:
                return total
            # End falls inside the next working day's window
            if end < day_end:
                return total + minutes_between(day_start, end)

            total += minutes_between(day_start, day_end)
            day_start, day_end = self._next_working_window(day_start)
