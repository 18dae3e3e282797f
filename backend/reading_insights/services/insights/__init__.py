"""
Reading Insights Services

Derives habit, completion and activity metrics from a user's reading data.

Modules:
- date_keys: timestamp parsing and UTC day keys
- streaks: current and best reading streaks
- frequency: weekly frequency and weekday distribution
- completion: finished vs active groups
- ranking: most-read books
- aggregator: pure assembly plus the fetching InsightsService
- summary: AI summary, fallback summary and text report

Usage:
    from reading_insights.services.insights import (
        InsightsService,
        InsightsSummarizer,
        build_insights,
    )
"""

from reading_insights.services.insights.aggregator import (
    InsightsService,
    build_insights,
)
from reading_insights.services.insights.completion import calculate_completion
from reading_insights.services.insights.date_keys import (
    date_to_day_key,
    day_key_to_date,
    parse_timestamp,
    record_timestamp,
    to_day_key,
    utc_today,
)
from reading_insights.services.insights.frequency import (
    build_weekday_distribution,
    calculate_weekly_frequency,
)
from reading_insights.services.insights.ranking import rank_top_books
from reading_insights.services.insights.streaks import (
    calculate_best_streak,
    calculate_current_streak,
)
from reading_insights.services.insights.summary import (
    InsightsSummarizer,
    build_fallback_summary,
    format_insights_lines,
    normalize_summary,
)

__all__ = [
    # Day keys
    "date_to_day_key",
    "day_key_to_date",
    "parse_timestamp",
    "record_timestamp",
    "to_day_key",
    "utc_today",
    # Metrics
    "build_weekday_distribution",
    "calculate_best_streak",
    "calculate_completion",
    "calculate_current_streak",
    "calculate_weekly_frequency",
    "rank_top_books",
    # Aggregation
    "InsightsService",
    "build_insights",
    # Summaries
    "InsightsSummarizer",
    "build_fallback_summary",
    "format_insights_lines",
    "normalize_summary",
]
