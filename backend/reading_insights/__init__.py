"""
Reading Insights Engine

Derives reading-habit, completion and activity metrics for a reading-club
user from records, groups and sentences fetched from the club's REST API.
"""

__version__ = "0.1.0"
