"""Timestamp rendering and calendar helpers.

These are pure functions shared by the store, the gap-filling strategies,
and the CLI.
"""

from __future__ import annotations

from datetime import datetime

_MONTH_OFFSETS = (0, 3, 2, 5, 0, 3, 5, 1, 4, 6, 2, 4)


def format_timestamp(timestamp: datetime) -> str:
    """Render a timestamp in ISO-8601 extended form.

    Args:
        timestamp: Naive timestamp to render.

    Returns:
        Text such as ``2020-03-14T08:30:00``.
    """
    return timestamp.isoformat(sep="T")


def day_of_week(timestamp: datetime) -> int:
    """Return the Gregorian day of the week, 0 for Sunday through 6 for Saturday.

    Uses Sakamoto's congruence on the proleptic Gregorian calendar.
    """
    year = timestamp.year
    month = timestamp.month
    if month < 3:
        year -= 1
    leap_days = year // 4 - year // 100 + year // 400
    return (year + leap_days + _MONTH_OFFSETS[month - 1] + timestamp.day) % 7


def is_weekend(timestamp: datetime) -> bool:
    """Return whether the timestamp falls on a Saturday or Sunday."""
    return day_of_week(timestamp) in (0, 6)
