"""Prioritized date format registry.

Formats are tried in registration order and the first exact match wins.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from core.constants import BUILTIN_DATE_FORMATS
from core.errors import TsFrameStoreError


class DateFormatRegistry:
    """Ordered list of ``strptime`` formats used to parse row dates."""

    def __init__(self, formats: Iterable[str] = BUILTIN_DATE_FORMATS) -> None:
        self._formats: list[str] = []
        self.extend(formats)

    @property
    def formats(self) -> tuple[str, ...]:
        """Registered formats in priority order."""
        return tuple(self._formats)

    def add(self, date_format: str) -> None:
        """Append a format with the lowest priority.

        Raises:
            TsFrameStoreError: If the format is empty.
        """
        if not date_format.strip():
            raise TsFrameStoreError("Date format must be a non-empty strptime pattern.")
        self._formats.append(date_format)

    def extend(self, date_formats: Iterable[str]) -> None:
        for date_format in date_formats:
            self.add(date_format)

    def parse(self, date_text: str) -> datetime | None:
        """Parse date text with the first matching format.

        Args:
            date_text: Raw date token.

        Returns:
            Parsed naive timestamp, or None when no format matches.
        """
        candidate = date_text.strip()
        for date_format in self._formats:
            try:
                return datetime.strptime(candidate, date_format)
            except ValueError:
                continue
        return None

    def copy(self) -> "DateFormatRegistry":
        return DateFormatRegistry(self._formats)
