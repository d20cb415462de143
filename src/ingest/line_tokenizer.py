"""Line sanitizing and tokenizing for CSV ingestion.

Every line is reduced to printable ASCII before tokenizing, which drops
byte order marks, line terminators, and spreadsheet export noise.
"""

from __future__ import annotations

import csv
import sys

from core.constants import (
    CSV_DELIMITER,
    CSV_ESCAPE_CHAR,
    CSV_QUOTE_CHAR,
    PRINTABLE_ASCII_MAX,
    PRINTABLE_ASCII_MIN,
)

_NON_PRINTABLE_BYTES = bytes(
    value for value in range(256) if not PRINTABLE_ASCII_MIN <= value <= PRINTABLE_ASCII_MAX
)

# Fields are bounded only by the source line length.
csv.field_size_limit(sys.maxsize)


def sanitize_line(raw_line: bytes) -> str:
    """Strip every byte outside the printable ASCII range.

    Args:
        raw_line: Raw line bytes, terminator included or not.

    Returns:
        The remaining printable characters as text.
    """
    return raw_line.translate(None, _NON_PRINTABLE_BYTES).decode("ascii")


def tokenize_line(line: str) -> list[str]:
    """Split a sanitized line on commas.

    Double quotes group a field that contains commas; a backslash escapes
    the next character. A trailing backslash with nothing to escape is
    dropped. A quote inside an unquoted field is kept as a literal.

    Args:
        line: Sanitized line text.

    Returns:
        Field tokens in column order; empty for an empty line.
    """
    reader = csv.reader(
        [_drop_dangling_escape(line)],
        delimiter=CSV_DELIMITER,
        quotechar=CSV_QUOTE_CHAR,
        escapechar=CSV_ESCAPE_CHAR,
    )
    return next(reader, [])


def _drop_dangling_escape(line: str) -> str:
    trailing_escapes = len(line) - len(line.rstrip(CSV_ESCAPE_CHAR))
    if trailing_escapes % 2:
        return line[:-1]
    return line
