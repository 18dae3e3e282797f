"""
Insights Text Summaries

Turns an InsightsResult into text for display:

- An AI-written summary from the reading club's summary endpoint
- A deterministic fallback summary used when the AI summary is unavailable
- A line-by-line metrics report

Usage:
    from reading_insights.services.insights import InsightsSummarizer

    summarizer = InsightsSummarizer(api)
    text = await summarizer.summarize(report.insights)
"""

import logging
import math
from typing import Any, Optional

from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from reading_insights.config import settings
from reading_insights.exceptions import ApiClientError, SummaryError
from reading_insights.models import InsightsResult
from reading_insights.services.api import ReadingClubApi

logger = logging.getLogger(__name__)

UNTITLED_BOOK = "Untitled"


def _percent(rate: float) -> int:
    """Round a 0-1 rate to a whole percent, halves rounding up."""
    return int(math.floor(rate * 100 + 0.5))


def _number(value: float) -> str:
    """Format a number without a trailing '.0' (7.0 -> '7', 1.75 -> '1.75')."""
    return f"{value:g}"


def normalize_summary(payload: Any) -> str:
    """
    Extract summary text from the summary endpoint's response.

    The endpoint returns either a bare string or {"summary": "..."}.

    Returns:
        Summary text, or "" for any other shape.
    """
    if isinstance(payload, str):
        return payload
    if isinstance(payload, dict) and "summary" in payload:
        summary = payload["summary"]
        return "" if summary is None else str(summary)
    return ""


def build_fallback_summary(insights: InsightsResult) -> str:
    """
    Build a deterministic summary from the metrics alone.

    Used when the AI summary fails or comes back empty.
    """
    habit = insights.habit
    completion = insights.completion
    activity = insights.activity

    return " ".join(
        [
            f"Your current streak is {habit.current_streak} days and you read "
            f"{_number(habit.weekly_frequency)} days a week.",
            f"You have finished {completion.finished_books} books, a completion "
            f"rate of {_percent(completion.completion_rate)}%.",
            f"So far you have logged {activity.total_records} records and "
            f"{activity.total_sentences} sentences.",
            "Keep this going and your reading rhythm will only get stronger.",
        ]
    )


def format_insights_lines(insights: InsightsResult) -> list[str]:
    """Render insights as a list of "label: value" lines."""
    habit = insights.habit
    completion = insights.completion
    activity = insights.activity

    if activity.top_books:
        top_books = ", ".join(
            f"{book.title or UNTITLED_BOOK} ({book.record_count} records)"
            for book in activity.top_books
        )
    else:
        top_books = "none"

    if completion.avg_finish_days is None:
        avg_finish = "no data"
    else:
        avg_finish = f"{int(math.floor(completion.avg_finish_days + 0.5))} days"

    return [
        f"Total reading days: {habit.total_reading_days}",
        f"Current streak: {habit.current_streak} days",
        f"Best streak: {habit.best_streak} days",
        f"Weekly frequency: {_number(habit.weekly_frequency)} days",
        f"Finished books: {completion.finished_books}",
        f"Active groups: {completion.active_groups}",
        f"Completion rate: {_percent(completion.completion_rate)}%",
        f"Average days to finish: {avg_finish}",
        f"Total records: {activity.total_records}",
        f"Total sentences: {activity.total_sentences}",
        f"Top books: {top_books}",
    ]


class InsightsSummarizer:
    """
    Natural-language layer over computed insights.

    The AI summary call is retried with exponential backoff; the insights
    computation itself never retries.
    """

    def __init__(
        self,
        api: ReadingClubApi,
        max_attempts: Optional[int] = None,
        wait: Optional[wait_base] = None,
    ):
        """
        Initialize the summarizer.

        Args:
            api: Reading club queries (summary endpoint).
            max_attempts: Attempts before giving up
                (default: settings.INSIGHTS_SUMMARY_MAX_ATTEMPTS).
            wait: tenacity wait strategy (default: exponential backoff capped
                at settings.INSIGHTS_SUMMARY_RETRY_MAX_WAIT seconds).
        """
        self.api = api
        self.max_attempts: int = (
            max_attempts
            if max_attempts is not None
            else settings.INSIGHTS_SUMMARY_MAX_ATTEMPTS
        )
        self.wait: wait_base = wait or wait_exponential(
            multiplier=1, min=1, max=settings.INSIGHTS_SUMMARY_RETRY_MAX_WAIT
        )

    async def generate_ai_summary(
        self, insights: InsightsResult, refresh: bool = False
    ) -> str:
        """
        Request an AI summary from the reading club API.

        Args:
            insights: Insights to summarize.
            refresh: Ask the server to regenerate instead of using its cache.

        Returns:
            Normalized summary text (may be empty).

        Raises:
            SummaryError: If every attempt fails.
        """
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_attempts),
                wait=self.wait,
                retry=retry_if_exception_type(ApiClientError),
                reraise=True,
            ):
                with attempt:
                    payload = await self.api.request_ai_summary(
                        insights, refresh=refresh
                    )
        except ApiClientError as e:
            raise SummaryError(
                f"AI summary failed: {e.message}", details=e.details
            ) from e

        return normalize_summary(payload)

    async def summarize(self, insights: InsightsResult, refresh: bool = False) -> str:
        """
        Summarize insights, falling back to deterministic text.

        Args:
            insights: Insights to summarize.
            refresh: Ask the server to regenerate its AI summary.

        Returns:
            AI summary, or the fallback summary if the AI summary failed or
            was blank.
        """
        try:
            summary = (await self.generate_ai_summary(insights, refresh=refresh)).strip()
        except SummaryError as e:
            logger.warning(f"{e.message}, using fallback summary")
            return build_fallback_summary(insights)

        if not summary:
            logger.info("AI summary was empty, using fallback summary")
            return build_fallback_summary(insights)
        return summary
