"""Run-plan CLI command wiring.

This module registers the run-plan subcommand and delegates execution to
the shared ingest plan runner used by CLI and SDK entry points.
"""

from __future__ import annotations

import argparse
from typing import Any

from core.ingest_plan import load_ingest_plan
from ingest.plan_runner import run_ingest_plan


def add_run_plan_command(subparsers: Any) -> None:
    """Register run-plan subcommand."""
    parser = subparsers.add_parser(
        "run-plan",
        help="Ingest every CSV listed in a YAML ingest plan",
    )
    parser.add_argument("plan_file", help="Path to YAML ingest plan")


def run_run_plan_command(args: argparse.Namespace) -> int:
    """Handle run-plan command invocation."""
    result = run_ingest_plan(load_ingest_plan(args.plan_file))
    for report in result.reports:
        print(f"{report.asset}: {report.status} rows={report.rows_read}")
    print(len(result.store))
    print(result.store.render(), end="")
    return 0
