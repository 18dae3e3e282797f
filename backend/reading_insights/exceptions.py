"""
Insights Engine Exceptions

Custom exception classes for the failure modes of an insights computation.
Every failure is local to one aggregation call; nothing here is fatal to the
hosting process.

Usage:
    from reading_insights.exceptions import ApiClientError, MissingUserError

    try:
        report = await service.fetch_insights()
    except InsightsUnavailableError:
        show_unavailable_state()
"""

from typing import Any, Optional


class ServiceError(Exception):
    """
    Base exception for insights engine errors.

    Provides consistent error handling with:
    - HTTP-style status code
    - Error code for categorization
    - Optional details for debugging

    Example:
        raise ServiceError("Upstream unavailable", status_code=503)
    """

    status_code: int = 500
    error_code: str = "service_error"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if error_code:
            self.error_code = error_code
        self.details = details


class ApiClientError(ServiceError):
    """
    Reading club API error.

    Raised for non-2xx responses, `success: false` envelopes and transport
    failures (status_code 0).
    """

    status_code = 502
    error_code = "api_error"


class MissingUserError(ServiceError):
    """
    No signed-in user.

    Aggregation cannot proceed without a session identity.
    """

    status_code = 401
    error_code = "missing_user"


class InsightsUnavailableError(ServiceError):
    """
    Insights could not be produced.

    Raised when local computation failed and the pre-computed fallback
    endpoint failed as well.
    """

    status_code = 503
    error_code = "insights_unavailable"


class SummaryError(ServiceError):
    """AI summary request failed after retries."""

    status_code = 502
    error_code = "summary_error"
