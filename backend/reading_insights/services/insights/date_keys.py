"""
Calendar Day Keys

Converts the timestamp strings found on reading records into canonical
`YYYY-MM-DD` day keys. All day-based metrics (streaks, weekly frequency)
operate on these keys.

The day boundary is always UTC: two clients in different timezones looking at
the same records compute identical streaks.
"""

from datetime import date, datetime, timezone
from typing import Optional

from reading_insights.models import ReadingRecord

DAY_KEY_FORMAT = "%Y-%m-%d"


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 style timestamp into an aware UTC datetime.

    Accepts date-only values, date-times with or without sub-second precision,
    a trailing "Z" or a numeric UTC offset. Naive values are taken as UTC.

    Args:
        value: Raw timestamp string from the API.

    Returns:
        Aware datetime in UTC, or None if the value is empty or unparseable.
    """
    if not value or not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(text)
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        # Offsets at the edge of the datetime range overflow on conversion
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None


def date_to_day_key(day: date) -> str:
    """Format a calendar date as a day key."""
    return day.strftime(DAY_KEY_FORMAT)


def day_key_to_date(key: str) -> date:
    """Parse a day key back into a date."""
    return datetime.strptime(key, DAY_KEY_FORMAT).date()


def to_day_key(value: Optional[str]) -> Optional[str]:
    """
    Normalize a timestamp string to its UTC day key.

    Returns:
        `YYYY-MM-DD` string, or None if the value cannot be parsed.
    """
    parsed = parse_timestamp(value)
    if parsed is None:
        return None
    return date_to_day_key(parsed.date())


def record_timestamp(record: ReadingRecord) -> Optional[datetime]:
    """
    Resolve the moment a reading record refers to.

    Uses read_date, falling back to created_at when read_date is unparseable.

    Returns:
        Aware UTC datetime, or None if neither field parses.
    """
    parsed = parse_timestamp(record.read_date)
    if parsed is None:
        parsed = parse_timestamp(record.created_at)
    return parsed


def utc_today(now: Optional[datetime] = None) -> date:
    """Current calendar day in UTC."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc).date()
