"""
Insights Aggregation Service

Assembles a user's reading insights from records, groups, finished groups and
sentences.

Responsibilities:
- Pure computation of InsightsResult over explicit data snapshots
- Concurrent fetching of the snapshots from the reading club API
- Fallback to the server's pre-computed insights when local computation fails

Usage:
    from reading_insights.services.insights import InsightsService

    service = InsightsService(api)
    report = await service.fetch_insights()
    print(report.source, report.insights.habit.current_streak)
"""

import asyncio
import logging
from datetime import date
from typing import Iterable, Optional

from reading_insights.config import settings
from reading_insights.enums import InsightsSource
from reading_insights.exceptions import (
    InsightsUnavailableError,
    MissingUserError,
    ServiceError,
)
from reading_insights.models import (
    ActivityInsights,
    FinishedGroup,
    Group,
    HabitInsights,
    InsightsReport,
    InsightsResult,
    ReadingRecord,
    Sentence,
)
from reading_insights.services.api import ReadingClubApi
from reading_insights.services.insights.completion import calculate_completion
from reading_insights.services.insights.date_keys import (
    date_to_day_key,
    record_timestamp,
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

logger = logging.getLogger(__name__)


def build_insights(
    records: Iterable[ReadingRecord],
    groups: Iterable[Group],
    finished_groups: Iterable[FinishedGroup],
    sentences: Iterable[Sentence],
    user_id: str,
    today: Optional[date] = None,
    top_books_limit: Optional[int] = None,
    frequency_weeks: Optional[int] = None,
) -> InsightsResult:
    """
    Compute insights from explicit data snapshots.

    Records whose dates cannot be parsed are left out of the day-based habit
    metrics but still count toward total_records and the book ranking.

    Args:
        records: The user's reading records.
        groups: Groups the user belongs to.
        finished_groups: Groups the user marked finished.
        sentences: Sentences from the user's groups (any author).
        user_id: The user the insights are for; only their sentences count.
        today: Reference UTC day (default: current UTC day).
        top_books_limit: Books to rank (default: INSIGHTS_TOP_BOOKS_LIMIT).
        frequency_weeks: Weekly frequency window (default:
            INSIGHTS_FREQUENCY_WEEKS).

    Returns:
        A new InsightsResult.
    """
    records = list(records)
    today = today or utc_today()
    if top_books_limit is None:
        top_books_limit = settings.INSIGHTS_TOP_BOOKS_LIMIT
    if frequency_weeks is None:
        frequency_weeks = settings.INSIGHTS_FREQUENCY_WEEKS

    timestamps = []
    day_keys: set[str] = set()
    for record in records:
        moment = record_timestamp(record)
        if moment is None:
            continue
        timestamps.append(moment)
        day_keys.add(date_to_day_key(moment.date()))

    habit = HabitInsights(
        total_reading_days=len(day_keys),
        current_streak=calculate_current_streak(day_keys, today),
        best_streak=calculate_best_streak(day_keys),
        weekly_frequency=calculate_weekly_frequency(
            day_keys, today, weeks=frequency_weeks
        ),
        weekday_distribution=build_weekday_distribution(timestamps),
    )

    activity = ActivityInsights(
        total_records=len(records),
        total_sentences=sum(1 for s in sentences if s.user_id == user_id),
        top_books=rank_top_books(records, limit=top_books_limit),
    )

    return InsightsResult(
        habit=habit,
        completion=calculate_completion(groups, finished_groups),
        activity=activity,
    )


class InsightsService:
    """
    Fetches a user's data and computes their insights.

    Holds no state between calls: every computation fetches fresh snapshots
    and returns a new result. Callers own any caching.
    """

    def __init__(
        self,
        api: ReadingClubApi,
        max_concurrent: Optional[int] = None,
    ):
        """
        Initialize the insights service.

        Args:
            api: Read-only reading club queries.
            max_concurrent: Cap on parallel sentence fetches
                (default: settings.API_MAX_CONCURRENT_REQUESTS).
        """
        self.api = api
        self.max_concurrent: int = (
            max_concurrent
            if max_concurrent is not None
            else settings.API_MAX_CONCURRENT_REQUESTS
        )

    async def compute_insights(self, today: Optional[date] = None) -> InsightsResult:
        """
        Compute insights locally from freshly fetched data.

        Groups, finished groups and the user's records are fetched
        concurrently, then sentences are fetched for every group in parallel.
        A single failed fetch aborts the whole computation.

        Args:
            today: Reference UTC day (default: current UTC day).

        Returns:
            Complete InsightsResult.

        Raises:
            MissingUserError: If no user is signed in.
            ApiClientError: If any upstream fetch fails.
        """
        user_id = await self.api.get_user_id()
        if not user_id:
            raise MissingUserError("Missing user id")

        groups, finished_groups, records = await asyncio.gather(
            self.api.get_groups(),
            self.api.get_finished_groups(),
            self.api.get_user_records(user_id),
        )

        sentences = await self._fetch_user_sentences(
            user_id, [group.id for group in groups]
        )

        logger.debug(
            f"Computing insights for {user_id}: {len(records)} records, "
            f"{len(groups)} groups, {len(sentences)} sentences"
        )

        return build_insights(
            records=records,
            groups=groups,
            finished_groups=finished_groups,
            sentences=sentences,
            user_id=user_id,
            today=today,
        )

    async def fetch_insights(self, today: Optional[date] = None) -> InsightsReport:
        """
        Get insights, preferring local computation.

        Falls back to the server's pre-computed insights when local
        computation fails for any upstream reason.

        Args:
            today: Reference UTC day for local computation.

        Returns:
            InsightsReport tagged with the source that produced it.

        Raises:
            InsightsUnavailableError: If both local computation and the
                fallback endpoint fail.
        """
        try:
            insights = await self.compute_insights(today=today)
            return InsightsReport(insights=insights, source=InsightsSource.LOCAL)
        except ServiceError as e:
            logger.warning(
                f"Local insights computation failed ({e.error_code}: {e.message}), "
                "falling back to pre-computed insights"
            )

        try:
            insights = await self.api.get_precomputed_insights()
        except ServiceError as e:
            logger.error(f"Pre-computed insights unavailable: {e.message}")
            raise InsightsUnavailableError(
                "Insights are unavailable", details=e.details
            ) from e

        return InsightsReport(insights=insights, source=InsightsSource.REMOTE)

    async def _fetch_user_sentences(
        self, user_id: str, group_ids: list[str]
    ) -> list[Sentence]:
        """
        Fetch sentences for every group in parallel and keep the user's own.

        Args:
            user_id: Author to keep.
            group_ids: Groups to fetch sentences for.

        Returns:
            Flattened list of sentences authored by the user.
        """
        if not group_ids:
            return []

        semaphore = asyncio.Semaphore(max(self.max_concurrent, 1))

        async def fetch(group_id: str) -> list[Sentence]:
            async with semaphore:
                return await self.api.get_group_sentences(group_id)

        batches = await asyncio.gather(*(fetch(group_id) for group_id in group_ids))

        return [
            sentence
            for batch in batches
            for sentence in batch
            if sentence.user_id == user_id
        ]
