"""
Pydantic models for reading club payloads and computed insights.

Usage:
    from reading_insights.models import ReadingRecord, InsightsResult
"""

from reading_insights.models.insights import (
    ActivityInsights,
    CompletionInsights,
    HabitInsights,
    InsightsReport,
    InsightsResult,
    TopBook,
    WeekdayDistribution,
)
from reading_insights.models.records import (
    FinishedGroup,
    Group,
    ReadingRecord,
    Sentence,
)

__all__ = [
    # Inbound payloads
    "FinishedGroup",
    "Group",
    "ReadingRecord",
    "Sentence",
    # Results
    "ActivityInsights",
    "CompletionInsights",
    "HabitInsights",
    "InsightsReport",
    "InsightsResult",
    "TopBook",
    "WeekdayDistribution",
]
