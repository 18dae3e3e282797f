"""
Reading Club HTTP Client

Thin async wrapper around httpx for the reading club REST API.

Responsibilities:
- Build request URLs from API_BASE_URL
- Attach the x-user-id header for authenticated calls
- Decode JSON (or plain text) response bodies
- Unwrap the {success, data, error} envelope
- Map failures to ApiClientError

Usage:
    from reading_insights.services.api import ApiClient, SessionStore

    async with ApiClient(session=SessionStore("user-1")) as client:
        groups = await client.request("/api/groups")
"""

import json
import logging
from typing import Any, Optional

import httpx

from reading_insights.config import settings
from reading_insights.exceptions import ApiClientError
from reading_insights.services.api.session import SessionStore

logger = logging.getLogger(__name__)


def _extract_api_error(payload: Any) -> Optional[dict[str, str]]:
    """
    Pull the {code, message} error object out of a response payload.

    Returns:
        Normalized error dict, or None if the payload carries no error object.
    """
    if not isinstance(payload, dict):
        return None
    error = payload.get("error")
    if not isinstance(error, dict):
        return None
    return {
        "code": str(error.get("code") or "UNKNOWN"),
        "message": str(error.get("message") or "Unknown error"),
    }


def _parse_body(response: httpx.Response) -> Any:
    """Decode a response body: None when empty, JSON when valid, else text."""
    text = response.text
    if not text:
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


class ApiClient:
    """
    Async client for the reading club REST API.

    One instance owns one httpx.AsyncClient; close it with close() or use the
    client as an async context manager.
    """

    DEFAULT_TIMEOUT_SECONDS: float = 30.0

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[SessionStore] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize the API client.

        Args:
            base_url: API root (default: settings.API_BASE_URL).
            session: Session identity for the x-user-id header.
            timeout: HTTP request timeout in seconds
                (default: settings.API_TIMEOUT_SECONDS).
            transport: Optional httpx transport (tests use MockTransport).

        Raises:
            ValueError: If no base URL is configured.
        """
        if base_url is None:
            base_url = settings.API_ROOT
        if not base_url:
            raise ValueError("API_BASE_URL is not set")

        self.base_url: str = base_url.rstrip("/")
        self.session: SessionStore = session or SessionStore()
        self.timeout: float = (
            timeout if timeout is not None else settings.API_TIMEOUT_SECONDS
        )
        self.client: httpx.AsyncClient = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=transport,
        )

    async def request(
        self,
        path: str,
        method: str = "GET",
        body: Any = None,
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
        auth: bool = True,
    ) -> Any:
        """
        Send a request and return the unwrapped response data.

        Args:
            path: API path, with or without a leading slash.
            method: HTTP method.
            body: JSON-serializable request body.
            params: Query parameters; None values are dropped.
            headers: Extra request headers.
            auth: Attach x-user-id when a user is signed in.

        Returns:
            The envelope's `data` for {success: true} payloads, otherwise the
            decoded body (None for an empty body).

        Raises:
            ApiClientError: On transport errors, non-2xx responses, or a
                {success: false} envelope.
        """
        request_headers = {"Accept": "application/json", **(headers or {})}

        if auth:
            user_id = await self.session.get_user_id()
            if user_id:
                request_headers["x-user-id"] = user_id

        query = {k: v for k, v in (params or {}).items() if v is not None}
        normalized_path = path if path.startswith("/") else f"/{path}"

        try:
            response = await self.client.request(
                method,
                normalized_path,
                params=query or None,
                json=body,
                headers=request_headers,
            )
        except httpx.HTTPError as e:
            logger.warning(f"{method} {normalized_path} failed: {e}")
            raise ApiClientError(
                f"Request failed: {e}", status_code=0, details=str(e)
            ) from e

        payload = _parse_body(response)

        if not response.is_success:
            api_error = _extract_api_error(payload)
            raise ApiClientError(
                api_error["message"]
                if api_error
                else f"Request failed ({response.status_code})",
                status_code=response.status_code,
                error_code=api_error["code"] if api_error else None,
                details=payload,
            )

        if isinstance(payload, dict) and "success" in payload:
            if payload["success"]:
                return payload.get("data")
            api_error = _extract_api_error(payload) or {
                "code": "UNKNOWN",
                "message": "Unknown error",
            }
            raise ApiClientError(
                api_error["message"],
                status_code=response.status_code,
                error_code=api_error["code"],
                details=payload,
            )

        return payload

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        await self.client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
