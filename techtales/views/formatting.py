"""
Display helpers shared by the views.
"""

from datetime import datetime


def format_date(value: datetime) -> str:
    """Long US date, e.g. 'March 1, 2024'."""
    return f"{value:%B} {value.day}, {value.year}"


def initials(name: str) -> str:
    """Avatar fallback: the first two characters of a display name."""
    return name[:2]
