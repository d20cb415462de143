"""Unit tests for ingest plan parsing."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.errors import TsFramePlanError
from core.ingest_plan import load_ingest_plan
from tests.fixture_paths import fixture_path


def _write_plan(tmp_path: Path, text: str) -> str:
    plan_path = tmp_path / "plan.yaml"
    plan_path.write_text(text, encoding="utf-8")
    return str(plan_path)


def test_load_ingest_plan_parses_fixture() -> None:
    """Fixture plan should parse defaults, sources, and passes."""
    plan = load_ingest_plan(str(fixture_path("plans/basic.yaml")))

    assert plan.defaults.date_formats == ("%d-%m-%Y",)
    assert [source.asset for source in plan.sources] == [None, "CSV2"]
    assert plan.prune_empty is True and plan.fill_gaps is None


def test_load_ingest_plan_resolves_relative_paths(tmp_path: Path) -> None:
    """Relative source paths should resolve against the plan directory."""
    plan_path = _write_plan(tmp_path, "version: 1\nsources:\n  - data/a.csv\n")

    plan = load_ingest_plan(plan_path)

    assert Path(plan.sources[0].path) == tmp_path.resolve() / "data" / "a.csv"


def test_load_ingest_plan_accepts_gap_fill_names(tmp_path: Path) -> None:
    """Gap fill names should be normalized to lower case."""
    plan_path = _write_plan(tmp_path, "version: 1\nsources: [a.csv]\nfill_gaps: Hourly\n")

    assert load_ingest_plan(plan_path).fill_gaps == "hourly"


@pytest.mark.parametrize(
    "plan_text",
    [
        "",
        "- just\n- a list\n",
        "version: 2\nsources: [a.csv]\n",
        "version: '1'\nsources: [a.csv]\n",
        "version: 1\n",
        "version: 1\nsources: []\n",
        "version: 1\nsources: [a.csv]\nextra: true\n",
        "version: 1\nsources:\n  - path: a.csv\n    weight: 2\n",
        "version: 1\nsources:\n  - asset: A\n",
        "version: 1\nsources: [a.csv]\ndefaults:\n  value_type: complex\n",
        "version: 1\nsources: [a.csv]\ndefaults:\n  date_formats: '%Y'\n",
        "version: 1\nsources: [a.csv]\nprune_empty: 'yes'\n",
        "version: 1\nsources: [a.csv]\nfill_gaps: weekly\n",
        "version: 1\nsources: [a.csv\n",
    ],
)
def test_load_ingest_plan_rejects_invalid_plans(tmp_path: Path, plan_text: str) -> None:
    """Schema violations should raise plan errors."""
    plan_path = _write_plan(tmp_path, plan_text)

    with pytest.raises(TsFramePlanError):
        load_ingest_plan(plan_path)


def test_load_ingest_plan_raises_for_missing_file(tmp_path: Path) -> None:
    """Missing plan files should raise plan errors."""
    with pytest.raises(TsFramePlanError):
        load_ingest_plan(str(tmp_path / "absent.yaml"))
