"""
Insights Enums

Defines weekday buckets for the reading distribution and the origin of a
computed insights result.
"""

from enum import Enum


class Weekday(str, Enum):
    """
    Weekday buckets used by the weekday distribution.

    Values match the keys of the distribution payload. Ordering follows
    Python's date.weekday() (Monday is 0).
    """

    MON = "mon"
    TUE = "tue"
    WED = "wed"
    THU = "thu"
    FRI = "fri"
    SAT = "sat"
    SUN = "sun"

    @classmethod
    def from_index(cls, index: int) -> "Weekday":
        """Map a date.weekday() index (0=Monday) to its bucket."""
        return list(cls)[index]


class InsightsSource(str, Enum):
    """Where an insights result came from."""

    LOCAL = "local"  # Computed on the client from raw records
    REMOTE = "remote"  # Server-provided pre-computed summary
