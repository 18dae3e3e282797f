"""
Activity Ranking

Tallies reading records per book and ranks the most-read books.
"""

from typing import Iterable, Optional

from reading_insights.models import ReadingRecord, TopBook


def rank_top_books(
    records: Iterable[ReadingRecord],
    limit: int = 3,
    user_id: Optional[str] = None,
) -> list[TopBook]:
    """
    Rank books by number of records logged against them.

    Records with an empty ISBN are skipped. The display title is the first
    non-empty title seen for the ISBN. Ties keep first-encounter order.

    Args:
        records: Reading records to tally.
        limit: Maximum number of books returned.
        user_id: If set, only this user's records are counted.

    Returns:
        Up to `limit` TopBook entries, highest count first.
    """
    # dicts keep insertion order, which is the tie-break order
    counts: dict[str, int] = {}
    titles: dict[str, str] = {}

    for record in records:
        if user_id is not None and record.user_id != user_id:
            continue
        isbn = record.book_isbn
        if not isbn:
            continue
        counts[isbn] = counts.get(isbn, 0) + 1
        if not titles.get(isbn) and record.book_title:
            titles[isbn] = record.book_title

    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)

    return [
        TopBook(isbn=isbn, title=titles.get(isbn, ""), record_count=count)
        for isbn, count in ranked[: max(limit, 0)]
    ]
