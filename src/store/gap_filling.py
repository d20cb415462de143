"""Pluggable gap-filling strategies.

A strategy receives the store timestamps in ascending order and returns
the timestamps that should exist in addition to them. The store inserts
empty tables for the new ones; no values are interpolated.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from enum import Enum
from typing import Callable, Iterable, Sequence

from core.constants import SENTINEL_TIMESTAMP
from core.errors import TsFrameStoreError
from core.timestamps import is_weekend

GapFillStrategy = Callable[[Sequence[datetime]], Iterable[datetime]]


class GapGranularity(Enum):
    """Spacing of a regular timestamp grid."""

    DAILY = "daily"
    HOURLY = "hourly"
    MINUTE = "minute"

    @property
    def step(self) -> timedelta:
        return _GRANULARITY_STEPS[self]


_GRANULARITY_STEPS = {
    GapGranularity.DAILY: timedelta(days=1),
    GapGranularity.HOURLY: timedelta(hours=1),
    GapGranularity.MINUTE: timedelta(minutes=1),
}


def parse_granularity(name: str) -> GapGranularity:
    """Resolve a granularity from its name.

    Raises:
        TsFrameStoreError: If the name is not a known granularity.
    """
    try:
        return GapGranularity(name.strip().lower())
    except ValueError as error:
        supported = ", ".join(item.value for item in GapGranularity)
        raise TsFrameStoreError(
            f"Unsupported gap granularity '{name}'. Use one of: {supported}."
        ) from error


def regular_grid_strategy(
    granularity: GapGranularity,
    skip_weekends: bool = False,
) -> GapFillStrategy:
    """Build a strategy that fills a regular grid between the first and last timestamp.

    The grid is anchored at the earliest timestamp. The sentinel timestamp
    used for unparsed dates never anchors or bounds the grid.

    Args:
        granularity: Grid spacing.
        skip_weekends: Leave Saturdays and Sundays unfilled.

    Returns:
        Strategy callable for ``TimeSeriesStore.fill_gaps``.
    """

    def _strategy(timestamps: Sequence[datetime]) -> list[datetime]:
        anchors = [timestamp for timestamp in timestamps if timestamp != SENTINEL_TIMESTAMP]
        if len(anchors) < 2:
            return []
        existing = set(anchors)
        missing = []
        current = anchors[0] + granularity.step
        while current < anchors[-1]:
            if current not in existing and not (skip_weekends and is_weekend(current)):
                missing.append(current)
            current += granularity.step
        return missing

    return _strategy
