"""
Reading Club Data Models (Pydantic)

Read-only snapshots of the entities the insights engine consumes. They are
produced by the reading club API and never modified here.

Timestamps are kept as the raw strings the server sent; parsing into
calendar days is the job of services.insights.date_keys so that one bad
value drops a record from day-based metrics instead of failing validation
for the whole response.
"""

from typing import Optional

from reading_insights.models.base import ApiModel


class ReadingRecord(ApiModel):
    """
    A logged reading session.

    Only read_date, created_at, book_isbn, book_title and user_id feed the
    insights computation. The remaining fields are carried so the same model
    can back other read-only views of a record.
    """

    id: str
    read_date: str = ""
    created_at: str = ""
    book_isbn: str = ""
    book_title: Optional[str] = ""
    user_id: str = ""
    start_page: Optional[int] = None
    end_page: Optional[int] = None
    comment: Optional[str] = None
    image_url: Optional[str] = None
    user_nickname: Optional[str] = None
    book_cover_image: Optional[str] = None


class Group(ApiModel):
    """A reading group the user belongs to."""

    id: str
    name: str = ""
    start_date: str = ""
    goal_date: Optional[str] = None
    book_isbn: str = ""
    book_title: str = ""
    member_count: int = 0
    created_at: str = ""


class FinishedGroup(ApiModel):
    """Marks a group as completed by the user."""

    group_id: str
    finished_at: str = ""


class Sentence(ApiModel):
    """A sentence highlighted by a group member."""

    id: str
    content: str = ""
    page_no: Optional[int] = None
    thought: Optional[str] = None
    created_at: str = ""
    user_id: str = ""
    book_isbn: str = ""
    book_title: str = ""
