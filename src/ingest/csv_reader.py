"""Header and row reader for CSV ingestion.

This module opens a source file, sanitizes and tokenizes each line,
and yields typed rows for the store to fold in.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator

from core.errors import TsFrameIngestError
from core.types import ParsedCsvRow
from ingest.line_tokenizer import sanitize_line, tokenize_line


def asset_from_path(source_path: str | Path) -> str:
    """Derive an asset identifier from a file base name.

    Args:
        source_path: Path to a CSV file.

    Returns:
        The file name with directories and its last extension removed.
    """
    file_name = str(source_path).replace("\\", "/").rsplit("/", 1)[-1]
    stem, _, _ = file_name.rpartition(".")
    return stem if stem else file_name


@contextmanager
def open_csv_source(source_path: str | Path) -> Iterator[BinaryIO]:
    """Open a CSV source in binary mode.

    Raises:
        TsFrameIngestError: If the file cannot be opened.
    """
    try:
        handle = open(source_path, "rb")
    except OSError as error:
        raise TsFrameIngestError(
            f"Failed to open CSV source at {source_path}: {error.strerror or error}. "
            "Provide a readable file path and retry ingest."
        ) from error
    with handle:
        yield handle


def read_header(handle: BinaryIO) -> tuple[str, ...]:
    """Read feature names from the header line.

    The first header column labels the date column and is discarded.

    Args:
        handle: Binary file handle positioned at the start of the file.

    Returns:
        Feature names in column order; empty for an empty file.
    """
    header_tokens = tokenize_line(sanitize_line(handle.readline()))
    return tuple(header_tokens[1:])


def iter_rows(handle: BinaryIO) -> Iterator[ParsedCsvRow]:
    """Yield data rows following the header.

    Lines that are empty after sanitizing carry no date and are skipped.

    Args:
        handle: Binary file handle positioned after the header line.

    Yields:
        Parsed rows with the raw date token split from the values.
    """
    for line_number, raw_line in enumerate(handle, 2):
        tokens = tokenize_line(sanitize_line(raw_line))
        if not tokens:
            continue
        yield ParsedCsvRow(
            line_number=line_number,
            date_text=tokens[0],
            values=tuple(tokens[1:]),
        )
