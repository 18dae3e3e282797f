"""
Shared Test Fixtures and Configuration

This module provides pytest fixtures used across the unit tests.
"""

import os
import sys
from datetime import date
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

# Add the backend directory to the path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Tests must not pick up a developer's session or API settings
os.environ.setdefault("API_BASE_URL", "https://api.test")
os.environ["SESSION_USER_ID"] = ""

from reading_insights.models import FinishedGroup, Group, Sentence
from tests.factories import make_record, make_sentence


@pytest.fixture
def today() -> date:
    """Fixed reference day (a Wednesday) for deterministic streaks."""
    return date(2024, 1, 3)


@pytest.fixture
def mock_api() -> AsyncMock:
    """
    Mock ReadingClubApi with a signed-in user and two groups.

    Group g1 is finished, g2 is active. Each group has one sentence by the
    user and one by someone else.
    """
    api = AsyncMock()
    api.get_user_id.return_value = "user-1"
    api.get_groups.return_value = [Group(id="g1"), Group(id="g2")]
    api.get_finished_groups.return_value = [
        FinishedGroup(group_id="g1", finished_at="2024-01-02T10:00:00Z")
    ]
    api.get_user_records.return_value = [
        make_record("r1", "2024-01-01T09:00:00Z", "isbn-a", "Book A"),
        make_record("r2", "2024-01-02T09:00:00Z", "isbn-a", "Book A"),
        make_record("r3", "2024-01-03T09:00:00Z", "isbn-b", "Book B"),
    ]

    sentences = {
        "g1": [make_sentence("s1", "user-1"), make_sentence("s2", "user-2")],
        "g2": [make_sentence("s3", "user-1"), make_sentence("s4", "user-3")],
    }

    async def get_group_sentences(group_id: str) -> list[Sentence]:
        return sentences[group_id]

    api.get_group_sentences.side_effect = get_group_sentences
    return api
