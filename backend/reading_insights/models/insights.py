"""
Insights Result Models (Pydantic)

The InsightsResult is created fresh for every computation request and is
never persisted. Field names dump to the camelCase shape the reading club
API uses for its pre-computed /api/insights payload, so a locally computed
result and a remote one are interchangeable.
"""

from typing import Optional

from pydantic import Field

from reading_insights.enums import InsightsSource
from reading_insights.models.base import ResultModel


class WeekdayDistribution(ResultModel):
    """Record counts per UTC weekday."""

    mon: int = 0
    tue: int = 0
    wed: int = 0
    thu: int = 0
    fri: int = 0
    sat: int = 0
    sun: int = 0


class TopBook(ResultModel):
    """A book ranked by number of reading records logged against it."""

    isbn: str
    title: str = ""
    record_count: int


class HabitInsights(ResultModel):
    """
    Reading habit metrics.

    total_reading_days, current_streak, best_streak and weekly_frequency are
    computed over distinct UTC days. weekday_distribution counts every record.
    """

    total_reading_days: int = 0
    current_streak: int = 0
    best_streak: int = 0
    weekly_frequency: float = 0.0
    weekday_distribution: WeekdayDistribution = Field(
        default_factory=WeekdayDistribution
    )


class CompletionInsights(ResultModel):
    """
    Book completion metrics.

    avg_finish_days is None when no finish-duration data is available. Treat
    None as "insufficient data", not zero.
    """

    finished_books: int = 0
    active_groups: int = 0
    completion_rate: float = 0.0
    avg_finish_days: Optional[float] = None


class ActivityInsights(ResultModel):
    """Record and sentence volume plus the most-read books."""

    total_records: int = 0
    total_sentences: int = 0
    top_books: list[TopBook] = Field(default_factory=list)


class InsightsResult(ResultModel):
    """
    Complete insights for one user.

    All three sections are required so a remote payload missing them is
    rejected instead of reading as an all-zero result.
    """

    habit: HabitInsights
    completion: CompletionInsights
    activity: ActivityInsights


class InsightsReport(ResultModel):
    """An insights result tagged with where it came from."""

    insights: InsightsResult
    source: InsightsSource
