"""tsframe exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class TsFrameError(Exception):
    """Base exception for all tsframe failures."""


class TsFrameConfigError(TsFrameError):
    """Raised for invalid runtime configuration."""


class TsFrameIngestError(TsFrameError):
    """Raised when a source file cannot be read for ingestion."""


class TsFrameStoreError(TsFrameError):
    """Raised for invalid time-series store operations."""


class TsFramePlanError(TsFrameError):
    """Raised for invalid or unsupported ingest plan files."""
