"""Chronological multi-asset observation store.

This module owns the timestamp-ordered table mapping, the asset/feature
index, and the date format registry. It folds CSV files into the store
and answers point lookups by timestamp, asset, and feature.
"""

from __future__ import annotations

from bisect import insort
from datetime import datetime
from pathlib import Path
from types import MappingProxyType
from typing import Generic, Iterable, Iterator, Mapping, TypeVar

from core.config import TsFrameConfig
from core.constants import (
    BUILTIN_DATE_FORMATS,
    SENTINEL_TIMESTAMP,
    SUPPORTED_UNPARSED_DATE_POLICIES,
    UNPARSED_DATE_SENTINEL,
    UNPARSED_DATE_SKIP,
)
from core.errors import TsFrameStoreError
from core.logging_config import get_logger
from core.timestamps import day_of_week, format_timestamp
from core.types import IngestReport, ParsedCsvRow
from core.value_types import FLOAT_VALUE, ValueType, resolve_value_type
from ingest.csv_reader import asset_from_path, iter_rows, open_csv_source, read_header
from ingest.date_parsing import DateFormatRegistry
from store.feature_value_table import FeatureValueTable, FeatureValueView
from store.gap_filling import GapFillStrategy

T = TypeVar("T")

_LOGGER = get_logger(__name__)


class TimeSeriesStore(Generic[T]):
    """Time-ordered collection of per-timestamp observation tables.

    Typical use::

        store = TimeSeriesStore()
        store.add_date_format("%d-%m-%Y")
        store.ingest("data/EUR_USD.csv")
        store.get_data(datetime(2020, 1, 1), "EUR_USD", "Open")

    The store is not safe for concurrent mutation; callers serialize
    ingestion when sharing an instance across threads.
    """

    def __init__(
        self,
        value_type: ValueType[T] = FLOAT_VALUE,  # type: ignore[assignment]
        date_formats: Iterable[str] = BUILTIN_DATE_FORMATS,
        unparsed_dates: str = UNPARSED_DATE_SENTINEL,
    ) -> None:
        """Initialize an empty store.

        Args:
            value_type: Parse/default/render capabilities for stored values.
            date_formats: Initial date formats in priority order.
            unparsed_dates: ``sentinel`` stores rows with unparseable dates
                at the sentinel timestamp, ``skip`` drops them.

        Raises:
            TsFrameStoreError: If the unparsed date policy is unknown.
        """
        if unparsed_dates not in SUPPORTED_UNPARSED_DATE_POLICIES:
            raise TsFrameStoreError(
                f"Unsupported unparsed date policy '{unparsed_dates}'. "
                f"Use one of: {', '.join(SUPPORTED_UNPARSED_DATE_POLICIES)}."
            )
        self._value_type = value_type
        self._unparsed_dates = unparsed_dates
        self._date_formats = DateFormatRegistry(date_formats)
        self._assets_to_features: dict[str, frozenset[str]] = {}
        self._tables: dict[datetime, FeatureValueTable[T]] = {}
        self._timestamps: list[datetime] = []

    @classmethod
    def from_config(cls, config: TsFrameConfig) -> "TimeSeriesStore":
        """Build a store from validated runtime configuration."""
        return cls(
            value_type=resolve_value_type(config.value_type),
            date_formats=BUILTIN_DATE_FORMATS + config.extra_date_formats,
            unparsed_dates=config.unparsed_dates,
        )

    @property
    def value_type(self) -> ValueType[T]:
        return self._value_type

    @property
    def date_formats(self) -> tuple[str, ...]:
        """Registered date formats in priority order."""
        return self._date_formats.formats

    @property
    def features(self) -> Mapping[str, frozenset[str]]:
        """Read-only mapping of each ingested asset to its header features."""
        return MappingProxyType(self._assets_to_features)

    def add_date_format(self, date_format: str) -> None:
        """Append a date format tried after every registered one.

        Only ingestion calls made afterwards use the new format.
        """
        self._date_formats.add(date_format)

    def add_date_formats(self, date_formats: Iterable[str]) -> None:
        self._date_formats.extend(date_formats)

    def parse_date(self, date_text: str) -> datetime | None:
        """Parse date text with the registered formats, None when none match."""
        return self._date_formats.parse(date_text)

    def ingest(self, source_path: str | Path, asset: str | None = None) -> IngestReport:
        """Fold one CSV file into the store.

        The header's first column is ignored and the rest name the asset's
        features. Each data row contributes its values to the table at the
        row's parsed timestamp; values already present are kept.

        Args:
            source_path: Path to the CSV file.
            asset: Asset identifier; the file base name without extension
                when omitted.

        Returns:
            Report of what was applied and which anomalies were absorbed.

        Raises:
            TsFrameIngestError: If the file cannot be opened.
        """
        asset_id = asset if asset is not None else asset_from_path(source_path)
        if asset_id in self._assets_to_features:
            _LOGGER.warning("asset_already_ingested", asset=asset_id, source_path=str(source_path))
            return IngestReport(
                asset=asset_id,
                source_path=str(source_path),
                status="skipped_duplicate_asset",
            )
        with open_csv_source(source_path) as handle:
            features = read_header(handle)
            rows = list(iter_rows(handle))
        self._assets_to_features[asset_id] = frozenset(features)
        if not features:
            _LOGGER.warning(
                "csv_header_without_features",
                asset=asset_id,
                source_path=str(source_path),
            )
        counters = _IngestCounters()
        for row in rows:
            self._ingest_row(asset_id, features, row, counters)
        report = IngestReport(
            asset=asset_id,
            source_path=str(source_path),
            status="ingested",
            features=features,
            rows_read=counters.rows_read,
            rows_at_sentinel=counters.rows_at_sentinel,
            rows_skipped=counters.rows_skipped,
            values_defaulted=counters.values_defaulted,
            short_rows=counters.short_rows,
            long_rows=counters.long_rows,
        )
        _LOGGER.info(
            "csv_ingested",
            asset=asset_id,
            source_path=str(source_path),
            feature_count=len(features),
            rows_read=report.rows_read,
            rows_at_sentinel=report.rows_at_sentinel,
            rows_skipped=report.rows_skipped,
            values_defaulted=report.values_defaulted,
        )
        return report

    def contains_asset(self, asset: str) -> bool:
        return asset in self._assets_to_features

    def contains_timestamp(self, timestamp: datetime) -> bool:
        return timestamp in self._tables

    def get_data(self, timestamp: datetime, asset: str, feature: str) -> T:
        """Return the stored value, or the value type default when any key is missing."""
        value = self.lookup(timestamp, asset, feature)
        return self._value_type.default if value is None else value

    def lookup(self, timestamp: datetime, asset: str, feature: str) -> T | None:
        """Return the stored value, or None when any key is missing."""
        table = self._tables.get(timestamp)
        if table is None:
            return None
        return table.lookup(asset, feature)

    def remove_empty_timestamps(self) -> int:
        """Delete every timestamp whose table holds no observations.

        Returns:
            Number of timestamps removed.
        """
        empty_timestamps = [ts for ts in self._timestamps if self._tables[ts].is_empty()]
        if not empty_timestamps:
            return 0
        for timestamp in empty_timestamps:
            del self._tables[timestamp]
        self._timestamps = [ts for ts in self._timestamps if ts in self._tables]
        _LOGGER.info("empty_timestamps_removed", removed=len(empty_timestamps))
        return len(empty_timestamps)

    def fill_gaps(self, strategy: GapFillStrategy | None = None) -> int:
        """Insert empty tables at timestamps proposed by a gap-filling strategy.

        Without a strategy nothing is inserted; the granularity to fill is
        the caller's decision.

        Args:
            strategy: Callable receiving the ascending timestamps and
                returning timestamps that should exist.

        Returns:
            Number of timestamps inserted.
        """
        if strategy is None:
            _LOGGER.info("gap_fill_skipped", reason="no_strategy")
            return 0
        inserted = 0
        for timestamp in strategy(tuple(self._timestamps)):
            if timestamp not in self._tables:
                self._table_for(timestamp)
                inserted += 1
        _LOGGER.info("gaps_filled", inserted=inserted)
        return inserted

    def items(self) -> Iterator[tuple[datetime, FeatureValueView[T]]]:
        """Yield timestamp/table-view pairs in ascending timestamp order."""
        for timestamp in self._timestamps:
            yield timestamp, FeatureValueView(self._tables[timestamp])

    def timestamps(self) -> tuple[datetime, ...]:
        return tuple(self._timestamps)

    def is_empty(self) -> bool:
        return not self._tables

    def copy(self) -> "TimeSeriesStore[T]":
        """Return a deep copy of tables, asset index, and date formats."""
        duplicate: TimeSeriesStore[T] = TimeSeriesStore(
            value_type=self._value_type,
            date_formats=(),
            unparsed_dates=self._unparsed_dates,
        )
        duplicate._date_formats = self._date_formats.copy()
        duplicate._assets_to_features = dict(self._assets_to_features)
        duplicate._tables = {ts: table.copy() for ts, table in self._tables.items()}
        duplicate._timestamps = list(self._timestamps)
        return duplicate

    def render(self) -> str:
        """Render every timestamp with its table in ascending order."""
        return "".join(
            f"{format_timestamp(ts)}:\n{self._tables[ts].render()}\n" for ts in self._timestamps
        )

    format_timestamp = staticmethod(format_timestamp)
    day_of_week = staticmethod(day_of_week)

    def __len__(self) -> int:
        return len(self._tables)

    def __contains__(self, timestamp: object) -> bool:
        return timestamp in self._tables

    def __iter__(self) -> Iterator[datetime]:
        return iter(tuple(self._timestamps))

    def __reversed__(self) -> Iterator[datetime]:
        return reversed(tuple(self._timestamps))

    def __copy__(self) -> "TimeSeriesStore[T]":
        return self.copy()

    def __str__(self) -> str:
        return self.render()

    def _ingest_row(
        self,
        asset: str,
        features: tuple[str, ...],
        row: ParsedCsvRow,
        counters: "_IngestCounters",
    ) -> None:
        timestamp = self._date_formats.parse(row.date_text)
        if timestamp is None:
            if self._unparsed_dates == UNPARSED_DATE_SKIP:
                counters.rows_skipped += 1
                _LOGGER.debug("unparsed_date_row_skipped", asset=asset, line=row.line_number)
                return
            counters.rows_at_sentinel += 1
            _LOGGER.debug(
                "unparsed_date_row",
                asset=asset,
                line=row.line_number,
                date_text=row.date_text,
            )
            timestamp = SENTINEL_TIMESTAMP
        if len(row.values) < len(features):
            counters.short_rows += 1
        elif len(row.values) > len(features):
            counters.long_rows += 1
        table = self._table_for(timestamp)
        for feature, token in zip(features, row.values):
            value, converted = self._value_type.convert(token)
            if not converted:
                counters.values_defaulted += 1
            table.set(asset, feature, value)
        counters.rows_read += 1

    def _table_for(self, timestamp: datetime) -> FeatureValueTable[T]:
        table = self._tables.get(timestamp)
        if table is None:
            table = FeatureValueTable(self._value_type)
            self._tables[timestamp] = table
            insort(self._timestamps, timestamp)
        return table


class _IngestCounters:
    """Mutable anomaly counters accumulated during one ingestion call."""

    def __init__(self) -> None:
        self.rows_read = 0
        self.rows_at_sentinel = 0
        self.rows_skipped = 0
        self.values_defaulted = 0
        self.short_rows = 0
        self.long_rows = 0
