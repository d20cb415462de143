"""Shared typed models.

This module defines immutable data models used by ingest, store,
plan, and CLI layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

IngestStatus = Literal["ingested", "skipped_duplicate_asset"]


@dataclass(frozen=True)
class ParsedCsvRow:
    """One sanitized and tokenized data row.

    Attributes:
        line_number: One-based line number in the source file.
        date_text: Raw date token (first column).
        values: Remaining raw value tokens in column order.
    """

    line_number: int
    date_text: str
    values: tuple[str, ...]


@dataclass(frozen=True)
class IngestReport:
    """Outcome of one CSV ingestion call.

    Counters describe anomalies that were absorbed rather than raised.

    Attributes:
        asset: Asset identifier the file was ingested under.
        source_path: Path of the ingested file.
        status: Whether the file was applied or rejected as a duplicate asset.
        features: Feature names declared by the header, in column order.
        rows_read: Data rows applied to the store.
        rows_at_sentinel: Rows whose date matched no format and were stored
            at the sentinel timestamp.
        rows_skipped: Rows dropped because their date matched no format.
        values_defaulted: Tokens that failed conversion and became the default.
        short_rows: Rows with fewer values than header features.
        long_rows: Rows with more values than header features.
    """

    asset: str
    source_path: str
    status: IngestStatus
    features: tuple[str, ...] = field(default_factory=tuple)
    rows_read: int = 0
    rows_at_sentinel: int = 0
    rows_skipped: int = 0
    values_defaulted: int = 0
    short_rows: int = 0
    long_rows: int = 0

    @property
    def applied(self) -> bool:
        """Return whether the file contributed to the store."""
        return self.status == "ingested"
