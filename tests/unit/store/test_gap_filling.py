"""Unit tests for gap-filling strategies."""

from __future__ import annotations

from datetime import datetime

import pytest

from core.constants import SENTINEL_TIMESTAMP
from core.errors import TsFrameStoreError
from store.gap_filling import GapGranularity, parse_granularity, regular_grid_strategy


def test_daily_grid_returns_missing_days() -> None:
    """Daily strategy should propose each day strictly between the bounds."""
    strategy = regular_grid_strategy(GapGranularity.DAILY)

    missing = list(strategy([datetime(2020, 1, 1), datetime(2020, 1, 2), datetime(2020, 1, 5)]))

    assert missing == [datetime(2020, 1, 3), datetime(2020, 1, 4)]


def test_grid_skips_weekends_when_requested() -> None:
    """Business-day grids should leave Saturday and Sunday unfilled."""
    strategy = regular_grid_strategy(GapGranularity.DAILY, skip_weekends=True)

    missing = list(strategy([datetime(2020, 1, 3), datetime(2020, 1, 7)]))

    assert missing == [datetime(2020, 1, 6)]


def test_hourly_grid_ignores_sentinel_timestamp() -> None:
    """The sentinel timestamp should never anchor a grid."""
    strategy = regular_grid_strategy(GapGranularity.HOURLY)

    missing = list(
        strategy([SENTINEL_TIMESTAMP, datetime(2020, 1, 1, 9), datetime(2020, 1, 1, 11)])
    )

    assert missing == [datetime(2020, 1, 1, 10)]


def test_grid_with_single_timestamp_proposes_nothing() -> None:
    """A single anchor has no gap to fill."""
    strategy = regular_grid_strategy(GapGranularity.MINUTE)

    assert list(strategy([datetime(2020, 1, 1)])) == []


def test_parse_granularity_rejects_unknown_name() -> None:
    """Unknown granularity names should raise a store error."""
    assert parse_granularity(" Hourly ") is GapGranularity.HOURLY

    with pytest.raises(TsFrameStoreError):
        parse_granularity("weekly")


def test_epoch_dated_row_is_not_a_grid_anchor() -> None:
    """A real 1970-01-01 timestamp shares the unparsed-date key and is ignored."""
    strategy = regular_grid_strategy(GapGranularity.DAILY)

    missing = strategy([datetime(1970, 1, 1), datetime(2020, 1, 1), datetime(2020, 1, 3)])

    assert datetime(1970, 1, 1) == SENTINEL_TIMESTAMP
    assert list(missing) == [datetime(2020, 1, 2)]
