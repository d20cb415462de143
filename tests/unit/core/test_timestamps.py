"""Unit tests for timestamp rendering and weekday helpers."""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from core.constants import SENTINEL_TIMESTAMP
from core.timestamps import day_of_week, format_timestamp, is_weekend


@pytest.mark.parametrize(
    ("timestamp", "expected"),
    [
        (datetime(2000, 1, 1), 6),
        (datetime(2024, 2, 29), 4),
        (datetime(1970, 1, 1), 4),
        (datetime(1900, 3, 1), 4),
        (datetime(1, 1, 1), 1),
    ],
)
def test_day_of_week_reference_dates(timestamp: datetime, expected: int) -> None:
    """Known weekdays should match with 0 as Sunday."""
    assert day_of_week(timestamp) == expected


def test_day_of_week_matches_calendar_over_range() -> None:
    """Congruence should agree with the stdlib calendar across leap years."""
    current = date(1899, 12, 1)
    for _ in range(3000):
        timestamp = datetime(current.year, current.month, current.day)
        assert day_of_week(timestamp) == (current.weekday() + 1) % 7
        current += timedelta(days=37)


def test_format_timestamp_is_iso_extended() -> None:
    """Rendering should use the ISO-8601 extended form with seconds."""
    assert format_timestamp(datetime(2020, 3, 14, 8, 30)) == "2020-03-14T08:30:00"
    assert format_timestamp(SENTINEL_TIMESTAMP) == "1970-01-01T00:00:00"


def test_is_weekend() -> None:
    """Saturday and Sunday should count as weekend."""
    assert is_weekend(datetime(2020, 1, 4)) and is_weekend(datetime(2020, 1, 5))
    assert not is_weekend(datetime(2020, 1, 6))
