"""Unit tests for structured logging setup."""

from __future__ import annotations

import json

from structlog.testing import capture_logs

from core.logging_config import configure_logging, get_logger


def test_get_logger_emits_structured_events() -> None:
    """Events should carry their name, level, and keyword fields."""
    logger = get_logger("tests.logging")

    with capture_logs() as logs:
        logger.warning("asset_already_ingested", asset="X")

    assert logs == [{"event": "asset_already_ingested", "asset": "X", "log_level": "warning"}]


def test_configure_logging_writes_json_to_stderr(capsys) -> None:
    """Configured output should be one JSON object per line on stderr."""
    configure_logging("INFO")
    get_logger("tests.logging").info("csv_ingested", rows_read=2)

    captured = capsys.readouterr()
    payload = json.loads(captured.err.strip().splitlines()[-1])

    assert payload["event"] == "csv_ingested" and payload["rows_read"] == 2
    assert captured.out == ""


def test_configure_logging_filters_below_level(capsys) -> None:
    """Events below the configured level should be dropped."""
    configure_logging("WARNING")
    get_logger("tests.logging").info("gap_fill_skipped")

    assert capsys.readouterr().err == ""
    configure_logging("INFO")
