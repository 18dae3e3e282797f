"""
Reading club API collaborators.

Usage:
    from reading_insights.services.api import ApiClient, ReadingClubApi, SessionStore
"""

from reading_insights.services.api.client import ApiClient
from reading_insights.services.api.reading_club import ReadingClubApi
from reading_insights.services.api.session import SessionStore

__all__ = [
    "ApiClient",
    "ReadingClubApi",
    "SessionStore",
]
