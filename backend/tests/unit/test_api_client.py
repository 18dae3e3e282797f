"""
Unit Tests for the Reading Club API Client

Tests the HTTP layer against httpx.MockTransport:
- Envelope unwrapping and error mapping
- x-user-id header handling
- Typed read queries and the AI summary request
"""

import json

import httpx
import pytest

from reading_insights.exceptions import ApiClientError
from reading_insights.services.api import ApiClient, ReadingClubApi, SessionStore
from tests.factories import make_insights

BASE_URL = "https://api.test"


def make_client(handler, user_id: str = "user-1") -> ApiClient:
    """ApiClient wired to a MockTransport handler."""
    return ApiClient(
        base_url=BASE_URL,
        session=SessionStore(user_id),
        transport=httpx.MockTransport(handler),
    )


class TestApiClientRequest:
    """Tests for ApiClient.request."""

    @pytest.mark.asyncio
    async def test_unwraps_success_envelope(self) -> None:
        """{success: true, data} returns data."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"success": True, "data": [1, 2]})

        async with make_client(handler) as client:
            assert await client.request("/api/groups") == [1, 2]

    @pytest.mark.asyncio
    async def test_plain_payload_passthrough(self) -> None:
        """Payloads without an envelope are returned as-is."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"summary": "hi"})

        async with make_client(handler) as client:
            assert await client.request("api/insights") == {"summary": "hi"}

    @pytest.mark.asyncio
    async def test_empty_and_text_bodies(self) -> None:
        """Empty bodies decode to None and non-JSON bodies to text."""
        bodies = iter([b"", b"plain words"])

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=next(bodies))

        async with make_client(handler) as client:
            assert await client.request("/a") is None
            assert await client.request("/b") == "plain words"

    @pytest.mark.asyncio
    async def test_failure_envelope_raises(self) -> None:
        """{success: false} raises with the server's code and message."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json={"success": False, "error": {"code": "NOPE", "message": "denied"}},
            )

        async with make_client(handler) as client:
            with pytest.raises(ApiClientError) as exc_info:
                await client.request("/api/groups")

        assert exc_info.value.message == "denied"
        assert exc_info.value.error_code == "NOPE"

    @pytest.mark.asyncio
    async def test_http_error_with_error_body(self) -> None:
        """Non-2xx responses use the error object when present."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                404, json={"error": {"code": "NOT_FOUND", "message": "no user"}}
            )

        async with make_client(handler) as client:
            with pytest.raises(ApiClientError) as exc_info:
                await client.request("/api/users/x/records")

        assert exc_info.value.status_code == 404
        assert exc_info.value.error_code == "NOT_FOUND"
        assert exc_info.value.message == "no user"

    @pytest.mark.asyncio
    async def test_http_error_without_body(self) -> None:
        """Non-2xx responses without an error object get a generic message."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500)

        async with make_client(handler) as client:
            with pytest.raises(ApiClientError, match=r"Request failed \(500\)"):
                await client.request("/api/groups")

    @pytest.mark.asyncio
    async def test_transport_error_wrapped(self) -> None:
        """Connection failures surface as ApiClientError with status 0."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        async with make_client(handler) as client:
            with pytest.raises(ApiClientError) as exc_info:
                await client.request("/api/groups")

        assert exc_info.value.status_code == 0

    @pytest.mark.asyncio
    async def test_user_header(self) -> None:
        """x-user-id is sent for authenticated calls only."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        async with make_client(handler) as client:
            await client.request("/a")
            await client.request("/b", auth=False)

        assert seen[0].headers["x-user-id"] == "user-1"
        assert "x-user-id" not in seen[1].headers

    @pytest.mark.asyncio
    async def test_no_header_when_signed_out(self) -> None:
        """Signed-out sessions send no x-user-id."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        async with make_client(handler, user_id="") as client:
            await client.request("/a")

        assert "x-user-id" not in seen[0].headers

    def test_requires_base_url(self) -> None:
        """An empty base URL is rejected."""
        with pytest.raises(ValueError):
            ApiClient(base_url="")


class TestReadingClubApi:
    """Tests for the typed read queries."""

    @pytest.mark.asyncio
    async def test_user_records_path_and_models(self) -> None:
        """User ids are URL-encoded and records parse from camelCase."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={
                    "success": True,
                    "data": [
                        {
                            "id": "r1",
                            "readDate": "2024-01-03",
                            "createdAt": "2024-01-03T10:00:00Z",
                            "bookIsbn": "978-0",
                            "bookTitle": "Dune",
                            "userId": "a/b",
                            "startPage": 1,
                            "endPage": 20,
                            "imageUrl": "https://img",
                        }
                    ],
                },
            )

        async with make_client(handler) as client:
            records = await ReadingClubApi(client).get_user_records("a/b")

        assert seen[0].url.raw_path == b"/api/users/a%2Fb/records"
        assert records[0].book_isbn == "978-0"
        assert records[0].read_date == "2024-01-03"
        assert records[0].end_page == 20

    @pytest.mark.asyncio
    async def test_null_data_is_empty_list(self) -> None:
        """A null data payload is treated as an empty list."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"success": True, "data": None})

        async with make_client(handler) as client:
            assert await ReadingClubApi(client).get_groups() == []

    @pytest.mark.asyncio
    async def test_finished_groups(self) -> None:
        """Finished groups come from /api/groups/finished."""

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/groups/finished"
            return httpx.Response(
                200, json=[{"groupId": "g1", "finishedAt": "2024-01-02T00:00:00Z"}]
            )

        async with make_client(handler) as client:
            finished = await ReadingClubApi(client).get_finished_groups()

        assert finished[0].group_id == "g1"

    @pytest.mark.asyncio
    async def test_invalid_payload_raises(self) -> None:
        """Payloads of the wrong shape are upstream failures."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"unexpected": "object"})

        async with make_client(handler) as client:
            with pytest.raises(ApiClientError) as exc_info:
                await ReadingClubApi(client).get_group_sentences("g1")

        assert exc_info.value.error_code == "invalid_payload"

    @pytest.mark.asyncio
    async def test_precomputed_insights(self) -> None:
        """The fallback endpoint parses into an InsightsResult."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json={
                    "habit": {"currentStreak": 5, "weeklyFrequency": 3.5},
                    "completion": {},
                    "activity": {
                        "topBooks": [{"isbn": "A", "title": "T", "recordCount": 9}]
                    },
                },
            )

        async with make_client(handler) as client:
            insights = await ReadingClubApi(client).get_precomputed_insights()

        assert insights.habit.current_streak == 5
        assert insights.activity.top_books[0].record_count == 9

    @pytest.mark.asyncio
    async def test_precomputed_insights_without_sections_rejected(self) -> None:
        """A payload missing the insight sections is not read as all zeros."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"status": "maintenance"})

        async with make_client(handler) as client:
            with pytest.raises(ApiClientError) as exc_info:
                await ReadingClubApi(client).get_precomputed_insights()

        assert exc_info.value.error_code == "invalid_payload"

    @pytest.mark.asyncio
    async def test_ai_summary_refresh(self) -> None:
        """Refresh adds the query flag and header; body uses camelCase."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"summary": "ok"})

        async with make_client(handler) as client:
            payload = await ReadingClubApi(client).request_ai_summary(
                make_insights(), refresh=True
            )

        request = seen[0]
        body = json.loads(request.content)
        assert payload == {"summary": "ok"}
        assert request.method == "POST"
        assert request.url.params["refresh"] == "true"
        assert request.headers["x-refresh-ai"] == "true"
        assert "currentStreak" in body["habit"]
        assert body["completion"]["avgFinishDays"] is None
