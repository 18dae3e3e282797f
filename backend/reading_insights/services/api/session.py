"""
Session Identity

Holds the signed-in user's id. Storage and sign-in flows live outside the
insights engine; this store only answers "who is the current user".
"""

from typing import Optional

from reading_insights.config import settings


class SessionStore:
    """
    In-memory session identity.

    Seeded from SESSION_USER_ID when no user id is given. An empty id means
    no signed-in user.
    """

    def __init__(self, user_id: Optional[str] = None):
        """
        Initialize the session store.

        Args:
            user_id: Signed-in user id (default: settings.SESSION_USER_ID).
        """
        if user_id is None:
            user_id = settings.SESSION_USER_ID
        self._user_id: Optional[str] = user_id or None

    async def get_user_id(self) -> Optional[str]:
        """Return the current user id, or None when signed out."""
        return self._user_id

    async def set_user_id(self, user_id: Optional[str]) -> None:
        """Replace the current user id (None signs out)."""
        self._user_id = user_id or None

    async def clear(self) -> None:
        """Sign out."""
        await self.set_user_id(None)
