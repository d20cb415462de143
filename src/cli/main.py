"""tsframe CLI entry points.
This module exposes commands for loading CSV files into a store,
point lookups, weekday computation, and ingest plan execution.
It maps argparse commands onto store calls.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from datetime import datetime
from typing import Any, Sequence

from cli.run_plan_command import add_run_plan_command, run_run_plan_command
from core.config import TsFrameConfig
from core.constants import UNPARSED_DATE_SKIP
from core.errors import TsFrameError
from core.logging_config import configure_logging
from core.timestamps import day_of_week
from core.value_types import SUPPORTED_VALUE_TYPES
from store.time_series_store import TimeSeriesStore


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="tsframe", description="Time-indexed CSV store")
    parser.add_argument(
        "--value-type",
        choices=SUPPORTED_VALUE_TYPES,
        help="Override TSFRAME_VALUE_TYPE for this command",
    )
    parser.add_argument(
        "--date-format",
        action="append",
        default=[],
        help="Extra strptime date format, tried after the built-in ones (repeatable)",
    )
    parser.add_argument(
        "--skip-unparsed-dates",
        action="store_true",
        help="Drop rows whose date matches no format instead of storing them at the epoch",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_show_command(subparsers)
    _add_lookup_command(subparsers)
    _add_weekday_command(subparsers)
    add_run_plan_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the tsframe CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = _build_config(args)
        configure_logging(config.log_level)
        if args.command == "show":
            return _run_show_command(config, args)
        if args.command == "lookup":
            return _run_lookup_command(config, args)
        if args.command == "weekday":
            return _run_weekday_command(config, args)
        if args.command == "run-plan":
            return run_run_plan_command(args)
    except TsFrameError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(args: argparse.Namespace) -> TsFrameConfig:
    """Apply CLI overrides on top of the environment config.

    Args:
        args: Parsed CLI arguments.

    Returns:
        Effective runtime config.
    """
    config = TsFrameConfig.from_env()
    if args.value_type:
        config = replace(config, value_type=args.value_type)
    if args.date_format:
        config = replace(
            config,
            extra_date_formats=config.extra_date_formats + tuple(args.date_format),
        )
    if args.skip_unparsed_dates:
        config = replace(config, unparsed_dates=UNPARSED_DATE_SKIP)
    return config


def _add_show_command(subparsers: Any) -> None:
    parser = subparsers.add_parser("show", help="Load CSV files and print the store")
    parser.add_argument("files", nargs="+", help="CSV files to ingest")
    parser.add_argument("--asset", help="Asset name, only valid with a single file")
    parser.add_argument(
        "--prune-empty",
        action="store_true",
        help="Remove timestamps without observations before printing",
    )


def _add_lookup_command(subparsers: Any) -> None:
    parser = subparsers.add_parser("lookup", help="Print one value by date, asset, and feature")
    parser.add_argument("files", nargs="+", help="CSV files to ingest")
    parser.add_argument("--date", required=True, help="Date in any registered format")
    parser.add_argument("--asset", required=True, help="Asset name")
    parser.add_argument("--feature", required=True, help="Feature name")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 when no value is stored instead of printing the default",
    )


def _add_weekday_command(subparsers: Any) -> None:
    parser = subparsers.add_parser("weekday", help="Print day of week, 0 = Sunday")
    parser.add_argument("date", help="Date in any registered format")


def _load_store(config: TsFrameConfig, files: Sequence[str], asset: str | None) -> TimeSeriesStore:
    store = TimeSeriesStore.from_config(config)
    for file_path in files:
        store.ingest(file_path, asset=asset)
    return store


def _run_show_command(config: TsFrameConfig, args: argparse.Namespace) -> int:
    if args.asset and len(args.files) > 1:
        print("error: --asset can only be used with a single file", file=sys.stderr)
        return 2
    store = _load_store(config, args.files, args.asset)
    if args.prune_empty:
        store.remove_empty_timestamps()
    print(len(store))
    print(store.render(), end="")
    return 0


def _run_lookup_command(config: TsFrameConfig, args: argparse.Namespace) -> int:
    store = _load_store(config, args.files, None)
    timestamp = _parse_cli_date(store, args.date)
    value = store.lookup(timestamp, args.asset, args.feature)
    if value is None and args.strict:
        rendered = store.format_timestamp(timestamp)
        print(f"error: no value for {args.asset}/{args.feature} at {rendered}", file=sys.stderr)
        return 1
    shown = store.value_type.default if value is None else value
    print(store.value_type.render(shown))
    return 0


def _run_weekday_command(config: TsFrameConfig, args: argparse.Namespace) -> int:
    store = TimeSeriesStore.from_config(config)
    print(day_of_week(_parse_cli_date(store, args.date)))
    return 0


def _parse_cli_date(store: TimeSeriesStore, date_text: str) -> datetime:
    timestamp = store.parse_date(date_text)
    if timestamp is not None:
        return timestamp
    raise TsFrameError(
        f"Could not parse date '{date_text}' with formats: {', '.join(store.date_formats)}. "
        "Pass --date-format to register another format."
    )
