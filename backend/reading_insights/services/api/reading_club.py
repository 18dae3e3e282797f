"""
Reading Club Read Queries

Read-only endpoints the insights engine depends on:

- GET  /api/users/{userId}/records     reading records of one user
- GET  /api/groups                     groups of the signed-in user
- GET  /api/groups/finished            groups the user marked finished
- GET  /api/groups/{groupId}/sentences sentences recorded in a group
- GET  /api/insights                   server pre-computed insights
- POST /api/insights/ai-summary        natural-language insights summary

Responses are validated into pydantic models; a payload that does not match
raises ApiClientError like any other upstream failure.
"""

import logging
from typing import Any, Optional, TypeVar
from urllib.parse import quote

from pydantic import TypeAdapter, ValidationError

from reading_insights.exceptions import ApiClientError
from reading_insights.models import (
    FinishedGroup,
    Group,
    InsightsResult,
    ReadingRecord,
    Sentence,
)
from reading_insights.services.api.client import ApiClient

logger = logging.getLogger(__name__)

T = TypeVar("T")

_records_adapter = TypeAdapter(list[ReadingRecord])
_groups_adapter = TypeAdapter(list[Group])
_finished_adapter = TypeAdapter(list[FinishedGroup])
_sentences_adapter = TypeAdapter(list[Sentence])


def _segment(value: str) -> str:
    """URL-encode a single path segment."""
    return quote(str(value), safe="")


def _validate(adapter: TypeAdapter[T], payload: Any, path: str) -> T:
    """Validate a list payload, treating a null body as an empty list."""
    try:
        return adapter.validate_python(payload if payload is not None else [])
    except ValidationError as e:
        raise ApiClientError(
            f"Unexpected payload from {path}",
            error_code="invalid_payload",
            details=str(e),
        ) from e


class ReadingClubApi:
    """Typed read queries over an ApiClient."""

    def __init__(self, client: ApiClient):
        """
        Initialize the query layer.

        Args:
            client: Configured ApiClient (owns the HTTP connection pool).
        """
        self.client = client

    async def get_user_id(self) -> Optional[str]:
        """Current session's user id, or None when signed out."""
        return await self.client.session.get_user_id()

    async def get_user_records(self, user_id: str) -> list[ReadingRecord]:
        """Fetch all reading records belonging to a user."""
        path = f"/api/users/{_segment(user_id)}/records"
        records = _validate(_records_adapter, await self.client.request(path), path)
        logger.debug(f"Fetched {len(records)} records for user {user_id}")
        return records

    async def get_groups(self) -> list[Group]:
        """Fetch all groups the signed-in user belongs to."""
        path = "/api/groups"
        return _validate(_groups_adapter, await self.client.request(path), path)

    async def get_finished_groups(self) -> list[FinishedGroup]:
        """Fetch the groups the signed-in user marked finished."""
        path = "/api/groups/finished"
        return _validate(_finished_adapter, await self.client.request(path), path)

    async def get_group_sentences(self, group_id: str) -> list[Sentence]:
        """Fetch all sentences recorded against a group."""
        path = f"/api/groups/{_segment(group_id)}/sentences"
        return _validate(_sentences_adapter, await self.client.request(path), path)

    async def get_precomputed_insights(self) -> InsightsResult:
        """Fetch the server-side pre-computed insights."""
        path = "/api/insights"
        payload = await self.client.request(path)
        try:
            return InsightsResult.model_validate(payload)
        except ValidationError as e:
            raise ApiClientError(
                f"Unexpected payload from {path}",
                error_code="invalid_payload",
                details=str(e),
            ) from e

    async def request_ai_summary(
        self, insights: InsightsResult, refresh: bool = False
    ) -> Any:
        """
        Ask the server to summarize insights as text.

        Args:
            insights: Insights to summarize (sent with camelCase keys).
            refresh: Bypass the server's cached summary.

        Returns:
            Raw response data: a string or a {"summary": ...} object.
        """
        return await self.client.request(
            "/api/insights/ai-summary",
            method="POST",
            body=insights.model_dump(mode="json", by_alias=True),
            params={"refresh": "true"} if refresh else None,
            headers={"x-refresh-ai": "true"} if refresh else None,
        )
