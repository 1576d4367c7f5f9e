"""
Date and Time utilities

This module handles time-of-day parsing, reference day calculation and
the ISO8601 format used for persisted timestamps.
"""
from datetime import date, datetime, timezone, tzinfo
from zoneinfo import ZoneInfo
import logging
import re

logger = logging.getLogger(__name__)

_TIME_OF_DAY_RE = re.compile(r"^(\d{1,2}):(\d{2})$", re.ASCII)


class TimeFormatError(ValueError):
    """Raised when a time-of-day string is invalid"""
    pass


class DateFormatError(ValueError):
    """Raised when date format is invalid"""
    pass


def get_zone(name: str) -> tzinfo:
    """Resolve an IANA timezone name ('UTC' included) to a tzinfo."""
    if name == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def parse_time_of_day(value: str) -> tuple[int, int]:
    """
    Parse a 24-hour 'HH:MM' string into (hour, minute)

    Args:
        value: Time-of-day text such as '06:30' or '9:05'

    Returns:
        Tuple of (hour, minute)

    Raises:
        TimeFormatError: If the text is not H:MM/HH:MM or is out of range
    """
    if not isinstance(value, str):
        raise TimeFormatError(f"Time of day must be text, got {type(value).__name__}")

    match = _TIME_OF_DAY_RE.match(value.strip())
    if not match:
        raise TimeFormatError(f"Invalid time of day: '{value}'")

    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise TimeFormatError(f"Time of day out of range: '{value}'")
    return hour, minute


def reference_day_for(tz: tzinfo, now: datetime | None = None) -> date:
    """
    Calendar day the scrape represents: today on the guide's wall clock

    Args:
        tz: Timezone of the guide
        now: Optional current instant (defaults to the system clock)

    Returns:
        Date of 'now' as seen in tz
    """
    current = now or datetime.now(timezone.utc)
    return current.astimezone(tz).date()


def format_iso8601_utc(value: datetime) -> str:
    """
    Format an aware datetime as ISO8601 UTC with milliseconds and 'Z'

    Example: 2024-06-01T22:00:00.000Z

    Raises:
        DateFormatError: If value is naive
    """
    if value.tzinfo is None:
        raise DateFormatError(f"Cannot format naive datetime: {value!r}")
    utc_value = value.astimezone(timezone.utc)
    return utc_value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc_value.microsecond // 1000:03d}Z"
