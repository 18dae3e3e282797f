"""
Completion Tracking

Splits the user's groups into finished and active ones and derives the
completion rate.
"""

from typing import Iterable

from reading_insights.models import CompletionInsights, FinishedGroup, Group


def calculate_completion(
    groups: Iterable[Group], finished_groups: Iterable[FinishedGroup]
) -> CompletionInsights:
    """
    Compute finished-vs-active group metrics.

    Args:
        groups: Groups the user belongs to.
        finished_groups: Groups the user marked finished.

    Returns:
        CompletionInsights. completion_rate is 0.0 when the user has no
        groups at all. avg_finish_days is always None here because no
        start/finish duration is available on this data path.
    """
    finished = list(finished_groups)
    finished_ids = {item.group_id for item in finished}
    active_groups = sum(1 for group in groups if group.id not in finished_ids)

    finished_books = len(finished)
    total = finished_books + active_groups
    completion_rate = finished_books / total if total else 0.0

    return CompletionInsights(
        finished_books=finished_books,
        active_groups=active_groups,
        completion_rate=completion_rate,
        avg_finish_days=None,
    )
