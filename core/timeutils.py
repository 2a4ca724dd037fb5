"""
Time-of-day and calendar helpers shared by the scheduling and entitlement engines.

All helpers read the wall clock of the datetime they are given; no timezone
conversion happens here.
"""

import re
from datetime import datetime, timezone
from typing import Optional

MINUTES_PER_DAY = 24 * 60

TIME_OF_DAY_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")
ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# datetime.weekday() index -> business hours key
WEEKDAY_KEYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def is_time_of_day(value: str) -> bool:
    return bool(TIME_OF_DAY_PATTERN.match(value))


def is_iso_date(value: str) -> bool:
    return bool(ISO_DATE_PATTERN.match(value))


def time_to_minutes(value: str) -> int:
    """
    Convert "HH:MM" to minutes since midnight.

    Raises:
        ValueError: if value is not a valid 24h time of day
    """
    match = TIME_OF_DAY_PATTERN.match(value)
    if not match:
        raise ValueError(f"invalid time of day: {value!r} (expected HH:MM)")
    return int(match.group(1)) * 60 + int(match.group(2))


def closing_minutes(value: str) -> int:
    """Like time_to_minutes, but "00:00" as a closing time means end of day."""
    minutes = time_to_minutes(value)
    return MINUTES_PER_DAY if minutes == 0 else minutes


def minutes_of_day(moment: datetime) -> int:
    return moment.hour * 60 + moment.minute


def weekday_key(moment: datetime) -> str:
    return WEEKDAY_KEYS[moment.weekday()]


def iso_date(moment: datetime) -> str:
    return moment.date().isoformat()


def ensure_aware(moment: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC so they compare against aware clocks."""
    if moment is None or moment.tzinfo is not None:
        return moment
    return moment.replace(tzinfo=timezone.utc)
