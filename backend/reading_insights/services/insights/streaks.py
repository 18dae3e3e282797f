"""
Streak Calculation

Computes the current and best-ever consecutive reading-day streaks from a set
of UTC day keys.

Usage:
    from reading_insights.services.insights.streaks import (
        calculate_best_streak,
        calculate_current_streak,
    )

    keys = {"2024-01-01", "2024-01-02", "2024-01-03"}
    calculate_current_streak(keys, today=date(2024, 1, 3))  # 3
    calculate_best_streak(keys)  # 3
"""

from datetime import date, timedelta
from typing import Iterable

from reading_insights.services.insights.date_keys import (
    date_to_day_key,
    day_key_to_date,
)


def calculate_current_streak(day_keys: Iterable[str], today: date) -> int:
    """
    Calculate the consecutive reading streak ending today.

    Walks backward from today while each day is present. Unlike a "grace day"
    streak, a user who read yesterday but not yet today has a streak of 0.

    Args:
        day_keys: Distinct UTC day keys (any order).
        today: Reference day for the walk.

    Returns:
        Number of consecutive days ending today.
    """
    keys = set(day_keys)
    if not keys:
        return 0

    streak = 0
    cursor = today
    while date_to_day_key(cursor) in keys:
        streak += 1
        cursor = cursor - timedelta(days=1)

    return streak


def calculate_best_streak(day_keys: Iterable[str]) -> int:
    """
    Calculate the longest reading streak ever achieved.

    Scans the day keys in ascending order; a run continues only when the next
    day is exactly one calendar day after the previous one.

    Args:
        day_keys: Distinct UTC day keys (any order).

    Returns:
        Length of the longest run, 0 for no days.
    """
    sorted_dates = sorted({day_key_to_date(key) for key in day_keys})
    if not sorted_dates:
        return 0

    longest = 1
    current = 1

    for i in range(1, len(sorted_dates)):
        if sorted_dates[i] == sorted_dates[i - 1] + timedelta(days=1):
            current += 1
            longest = max(longest, current)
        else:
            current = 1

    return longest
