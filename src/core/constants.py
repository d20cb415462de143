"""Core constants used across tsframe modules.

This module centralizes parsing defaults and environment variable names.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from datetime import datetime

BUILTIN_DATE_FORMATS = ("%Y-%m-%d", "%Y-%m-%d %H:%M", "%Y-%m-%d %H:%M:%S")
# Rows with unparseable dates are stored here. A row genuinely dated
# 1970-01-01T00:00:00 shares this key: it is indistinguishable from an
# unparsed row and grid gap filling never uses it as an anchor.
SENTINEL_TIMESTAMP = datetime(1970, 1, 1)
CSV_DELIMITER = ","
CSV_QUOTE_CHAR = '"'
CSV_ESCAPE_CHAR = "\\"
PRINTABLE_ASCII_MIN = 32
PRINTABLE_ASCII_MAX = 126
DEFAULT_VALUE_TYPE = "float"
UNPARSED_DATE_SENTINEL = "sentinel"
UNPARSED_DATE_SKIP = "skip"
SUPPORTED_UNPARSED_DATE_POLICIES = (UNPARSED_DATE_SENTINEL, UNPARSED_DATE_SKIP)
DEFAULT_LOG_LEVEL = "INFO"
DATE_FORMATS_ENV = "TSFRAME_DATE_FORMATS"
DATE_FORMATS_ENV_SEPARATOR = ";"
VALUE_TYPE_ENV = "TSFRAME_VALUE_TYPE"
UNPARSED_DATES_ENV = "TSFRAME_UNPARSED_DATES"
LOG_LEVEL_ENV = "TSFRAME_LOG_LEVEL"
INGEST_PLAN_VERSION = 1
