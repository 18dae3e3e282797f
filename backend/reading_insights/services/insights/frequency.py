"""
Reading Frequency and Weekday Distribution

Weekly frequency measures consistency over distinct days; the weekday
distribution measures volume and counts every record, so a day with three
records adds three to its weekday.
"""

from datetime import date, datetime, timedelta
from typing import Iterable

from reading_insights.enums import Weekday
from reading_insights.models import WeekdayDistribution
from reading_insights.services.insights.date_keys import day_key_to_date

DAYS_PER_WEEK = 7


def calculate_weekly_frequency(
    day_keys: Iterable[str], today: date, weeks: int = 4
) -> float:
    """
    Average reading days per week over a trailing window.

    The window covers `weeks * 7` days ending today inclusive, so for the
    default four weeks the cutoff is today minus 27 days. Days after today
    are not counted.

    Args:
        day_keys: Distinct UTC day keys.
        today: Last day of the window.
        weeks: Window length in weeks.

    Returns:
        Distinct reading days in the window divided by `weeks`.
    """
    if weeks <= 0:
        raise ValueError(f"weeks must be positive, got {weeks}")

    cutoff = today - timedelta(days=weeks * DAYS_PER_WEEK - 1)
    count = 0
    for key in set(day_keys):
        day = day_key_to_date(key)
        if cutoff <= day <= today:
            count += 1

    return count / weeks


def build_weekday_distribution(timestamps: Iterable[datetime]) -> WeekdayDistribution:
    """
    Count record occurrences per UTC weekday.

    Args:
        timestamps: One aware UTC datetime per record (not deduplicated).

    Returns:
        WeekdayDistribution with a count for each weekday.
    """
    counts = {weekday.value: 0 for weekday in Weekday}
    for moment in timestamps:
        counts[Weekday.from_index(moment.weekday()).value] += 1
    return WeekdayDistribution(**counts)
