"""
Civil date/time helpers built on pendulum.

All arithmetic happens in a single civil calendar. Instants are stamped with
UTC only so that pendulum never applies a daylight saving shift; the wall
clock values are what matter.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Sequence, Union

import pendulum
from pendulum import DateTime

from .exceptions import InvalidArgumentError

CIVIL_TIMEZONE = "UTC"

DATETIME_SECONDS_FORMAT = "YYYY-MM-DD HH:mm:ss"
DATETIME_FORMAT = "YYYY-MM-DD HH:mm"
DATE_FORMAT = "YYYY-MM-DD"
TIME_FORMAT = "HH:mm"
DAY_MONTH_FORMAT = "DD-MM"

ACCEPTED_FORMATS = (DATETIME_SECONDS_FORMAT, DATETIME_FORMAT, DATE_FORMAT)

DateLike = Union[str, date, datetime]


def validate_date(value: str, fmt: str = DATETIME_SECONDS_FORMAT) -> bool:
    """
    Check that a string is a valid date in the given pendulum format.

    The string must parse and format back to exactly the same text, which
    rejects overflowing values such as ``2021-02-30`` and unpadded fields.
    """
    if not isinstance(value, str):
        return False

    try:
        parsed = pendulum.from_format(value, fmt, tz=CIVIL_TIMEZONE)
    except ValueError:
        return False

    return parsed.format(fmt) == value


def civil(value: datetime) -> DateTime:
    """Re-stamp a datetime's wall clock into the civil calendar, floored to the minute."""
    return pendulum.datetime(
        value.year,
        value.month,
        value.day,
        value.hour,
        value.minute,
        tz=CIVIL_TIMEZONE,
    )


def civil_now() -> DateTime:
    """Current local wall clock time as a civil instant."""
    return civil(pendulum.now())


def combine(day: date, hour: int, minute: int) -> DateTime:
    """Build a civil instant from a calendar day and a time of day."""
    return pendulum.datetime(day.year, day.month, day.day, hour, minute, tz=CIVIL_TIMEZONE)


def parse_instant(value: DateLike, formats: Sequence[str] = ACCEPTED_FORMATS) -> DateTime:
    """
    Convert a supported date value into a civil instant.

    Args:
        value: A datetime, a date (taken at midnight) or a string in one of ``formats``
        formats: Accepted pendulum formats for string input

    Returns:
        Civil DateTime floored to the minute

    Raises:
        InvalidArgumentError: If a string matches none of the formats
    """
    if isinstance(value, datetime):
        return civil(value)

    if isinstance(value, date):
        return combine(value, 0, 0)

    for fmt in formats:
        if validate_date(value, fmt):
            return civil(pendulum.from_format(value, fmt, tz=CIVIL_TIMEZONE))

    raise InvalidArgumentError(
        f"Date `{value}` isn't a valid date. "
        f"Dates should be formatted as {' or '.join(formats)}, e.g. `2016-10-27 17:30`."
    )


def weekday_index(value: date) -> int:
    """Weekday index with 0=Sunday through 6=Saturday."""
    return value.isoweekday() % 7


def minutes_between(start: datetime, end: datetime) -> int:
    """Signed number of whole minutes from start to end."""
    return int((end - start).total_seconds() // 60)
