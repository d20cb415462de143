"""Integration tests for multi-file CSV ingestion."""

from __future__ import annotations

from datetime import datetime

from core.constants import SENTINEL_TIMESTAMP
from store.time_series_store import TimeSeriesStore
from tests.fixture_paths import csv_fixture


def test_messy_export_is_sanitized_and_folded() -> None:
    """A spreadsheet export with noise should ingest with every anomaly counted."""
    store = TimeSeriesStore()

    report = store.ingest(csv_fixture("messy"))

    assert report.features == ("Open", "Adj, Close", "Note")
    assert (report.rows_read, report.rows_at_sentinel, report.values_defaulted) == (7, 1, 1)
    assert (report.short_rows, report.long_rows) == (1, 1)
    assert store.get_data(datetime(2020, 1, 1, 9, 30), "messy", "Open") == 10
    assert store.get_data(datetime(2020, 1, 1, 9, 30, 15), "messy", "Adj, Close") == 13
    assert store.lookup(datetime(2020, 1, 2, 10), "messy", "Open") == 0.0
    assert store.get_data(datetime(2020, 1, 2, 10), "messy", "Adj, Close") == 14
    assert store.get_data(datetime(2020, 1, 3, 11), "messy", "Note") == 3
    assert store.get_data(SENTINEL_TIMESTAMP, "messy", "Note") == 3
    assert len(store) == 5


def test_demo_flow_sums_feature_across_timestamps() -> None:
    """Two assets with different date formats should share one timeline."""
    store = TimeSeriesStore()
    store.add_date_format("%d-%m-%Y")
    store.ingest(csv_fixture("EUR_USD"))
    store.ingest(csv_fixture("Testing1"), asset="CSV2")

    open_sum = sum(view.get("CSV2", "Open") for _, view in store.items())

    assert open_sum == 300.0
    assert len(store) == 4
    assert store.features["CSV2"] == frozenset({"Open", "Close", "Volume"})
    assert store.remove_empty_timestamps() == 0


def test_sentinel_rows_can_be_pruned_only_when_empty(write_csv) -> None:
    """Sentinel entries holding values survive pruning; empty ones do not."""
    store = TimeSeriesStore()
    store.ingest(write_csv("a.csv", "Date", "garbage"), asset="A")
    before = store.timestamps()

    removed = store.remove_empty_timestamps()

    assert before == (SENTINEL_TIMESTAMP,)
    assert removed == 1 and store.is_empty()
