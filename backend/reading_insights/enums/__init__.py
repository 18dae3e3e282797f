"""
Centralized enum definitions for the insights engine.

Usage:
    from reading_insights.enums import InsightsSource, Weekday
"""

from reading_insights.enums.insights import InsightsSource, Weekday

__all__ = [
    "InsightsSource",
    "Weekday",
]
