"""Typed ingest plan parsing.

This module loads and validates YAML ingest plans: which CSV files to
fold into one store, under which asset names, with which parsing options,
and which maintenance passes to run afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Sequence, cast

import yaml

from core.constants import (
    DEFAULT_VALUE_TYPE,
    INGEST_PLAN_VERSION,
    SUPPORTED_UNPARSED_DATE_POLICIES,
    UNPARSED_DATE_SENTINEL,
)
from core.errors import TsFramePlanError
from core.value_types import SUPPORTED_VALUE_TYPES

SUPPORTED_GAP_FILLS = ("daily", "hourly", "minute", "business_daily")
_ROOT_KEYS = {"version", "defaults", "sources", "prune_empty", "fill_gaps"}


@dataclass(frozen=True)
class IngestPlanDefaults:
    """Store options applied before any source is ingested."""

    value_type: str = DEFAULT_VALUE_TYPE
    unparsed_dates: str = UNPARSED_DATE_SENTINEL
    date_formats: tuple[str, ...] = ()


@dataclass(frozen=True)
class IngestPlanSource:
    """One CSV file to ingest, with an optional explicit asset name."""

    path: str
    asset: str | None = None


@dataclass(frozen=True)
class IngestPlan:
    """Validated ingest plan root object."""

    version: int
    defaults: IngestPlanDefaults
    sources: tuple[IngestPlanSource, ...]
    prune_empty: bool = False
    fill_gaps: str | None = None


def load_ingest_plan(plan_path: str) -> IngestPlan:
    """Load and validate a YAML ingest plan from disk.

    Relative source paths are resolved against the plan file directory.

    Args:
        plan_path: File path to YAML ingest plan.

    Returns:
        Fully validated ingest plan.

    Raises:
        TsFramePlanError: If file is invalid or schema checks fail.
    """
    plan_file = Path(plan_path).expanduser().resolve()
    payload = _load_yaml_payload(plan_file)
    root_mapping = _expect_mapping(payload, "ingest plan root")
    _validate_keys(root_mapping, _ROOT_KEYS, "root")
    return IngestPlan(
        version=_parse_version(root_mapping),
        defaults=_parse_defaults(root_mapping),
        sources=_parse_sources(root_mapping, plan_file.parent),
        prune_empty=_optional_bool(root_mapping, "prune_empty"),
        fill_gaps=_parse_fill_gaps(root_mapping),
    )


def _load_yaml_payload(plan_file: Path) -> object:
    if not plan_file.exists():
        raise TsFramePlanError(
            f"Ingest plan file does not exist at {plan_file}. Provide a valid YAML file path."
        )
    try:
        payload = cast(object, yaml.safe_load(plan_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise TsFramePlanError(
            f"Failed to read ingest plan at {plan_file}: {error}. Check file permissions and retry."
        ) from error
    except yaml.YAMLError as error:
        raise TsFramePlanError(
            f"Failed to parse YAML ingest plan at {plan_file}: {error}. Fix YAML syntax and retry."
        ) from error
    if payload is None:
        raise TsFramePlanError(
            f"Ingest plan at {plan_file} is empty. Define 'version' and 'sources'."
        )
    return payload


def _expect_mapping(value: object, context: str) -> Mapping[str, object]:
    if isinstance(value, Mapping):
        normalized_mapping = {}
        for key, payload in value.items():
            if not isinstance(key, str):
                raise TsFramePlanError(
                    f"Invalid {context}: expected string keys, got {type(key).__name__}."
                )
            normalized_mapping[key] = payload
        return normalized_mapping
    raise TsFramePlanError(
        f"Invalid {context}: expected object mapping, got {type(value).__name__}."
    )


def _expect_sequence(value: object, context: str) -> Sequence[object]:
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return value
    raise TsFramePlanError(f"Invalid {context}: expected list, got {type(value).__name__}.")


def _parse_version(root_mapping: Mapping[str, object]) -> int:
    raw_version = root_mapping.get("version")
    if not isinstance(raw_version, int) or isinstance(raw_version, bool):
        raise TsFramePlanError(
            f"Ingest plan field 'version' must be an integer. Set version: {INGEST_PLAN_VERSION}."
        )
    if raw_version != INGEST_PLAN_VERSION:
        raise TsFramePlanError(
            f"Unsupported ingest plan version {raw_version}. Use version: {INGEST_PLAN_VERSION}."
        )
    return raw_version


def _parse_defaults(root_mapping: Mapping[str, object]) -> IngestPlanDefaults:
    raw_defaults = root_mapping.get("defaults")
    if raw_defaults is None:
        return IngestPlanDefaults()
    defaults_mapping = _expect_mapping(raw_defaults, "ingest plan defaults")
    _validate_keys(defaults_mapping, {"value_type", "unparsed_dates", "date_formats"}, "defaults")
    value_type = _optional_choice(defaults_mapping, "value_type", SUPPORTED_VALUE_TYPES)
    unparsed_dates = _optional_choice(
        defaults_mapping, "unparsed_dates", SUPPORTED_UNPARSED_DATE_POLICIES
    )
    return IngestPlanDefaults(
        value_type=value_type or DEFAULT_VALUE_TYPE,
        unparsed_dates=unparsed_dates or UNPARSED_DATE_SENTINEL,
        date_formats=_parse_date_formats(defaults_mapping),
    )


def _parse_date_formats(defaults_mapping: Mapping[str, object]) -> tuple[str, ...]:
    raw_formats = defaults_mapping.get("date_formats")
    if raw_formats is None:
        return ()
    formats = []
    for index, item in enumerate(_expect_sequence(raw_formats, "defaults.date_formats")):
        if not isinstance(item, str) or not item.strip():
            raise TsFramePlanError(
                f"Invalid defaults.date_formats entry #{index + 1}: expected non-empty string."
            )
        formats.append(item)
    return tuple(formats)


def _parse_sources(
    root_mapping: Mapping[str, object],
    plan_dir: Path,
) -> tuple[IngestPlanSource, ...]:
    raw_sources = root_mapping.get("sources")
    if raw_sources is None:
        raise TsFramePlanError(
            "Ingest plan missing required field 'sources'. Add a non-empty list of CSV files."
        )
    source_rows = _expect_sequence(raw_sources, "ingest plan sources")
    if len(source_rows) == 0:
        raise TsFramePlanError("Ingest plan field 'sources' must include at least one source.")
    return tuple(
        _parse_source(source_value, index, plan_dir)
        for index, source_value in enumerate(source_rows)
    )


def _parse_source(source_value: object, source_index: int, plan_dir: Path) -> IngestPlanSource:
    context = f"ingest plan source #{source_index + 1}"
    if isinstance(source_value, str):
        source_mapping: Mapping[str, object] = {"path": source_value}
    else:
        source_mapping = _expect_mapping(source_value, context)
    _validate_keys(source_mapping, {"path", "asset"}, context)
    raw_path = source_mapping.get("path")
    if not isinstance(raw_path, str) or not raw_path.strip():
        raise TsFramePlanError(f"Invalid {context}: field 'path' must be a non-empty string.")
    source_path = Path(raw_path).expanduser()
    if not source_path.is_absolute():
        source_path = plan_dir / source_path
    return IngestPlanSource(path=str(source_path), asset=_optional_string(source_mapping, "asset"))


def _parse_fill_gaps(root_mapping: Mapping[str, object]) -> str | None:
    return _optional_choice(root_mapping, "fill_gaps", SUPPORTED_GAP_FILLS)


def _optional_string(mapping: Mapping[str, object], field_name: str) -> str | None:
    raw_value = mapping.get(field_name)
    if raw_value is None:
        return None
    if isinstance(raw_value, str):
        normalized_value = raw_value.strip()
        return normalized_value if normalized_value else None
    raise TsFramePlanError(f"Ingest plan field '{field_name}' must be a string when provided.")


def _optional_choice(
    mapping: Mapping[str, object],
    field_name: str,
    choices: tuple[str, ...],
) -> str | None:
    value = _optional_string(mapping, field_name)
    if value is None or value.lower() in choices:
        return None if value is None else value.lower()
    raise TsFramePlanError(
        f"Unsupported {field_name} '{value}' in ingest plan. Use one of: {', '.join(choices)}."
    )


def _optional_bool(mapping: Mapping[str, object], field_name: str) -> bool:
    raw_value = mapping.get(field_name, False)
    if isinstance(raw_value, bool):
        return raw_value
    raise TsFramePlanError(f"Ingest plan field '{field_name}' must be true or false.")


def _validate_keys(mapping: Mapping[str, object], allowed_keys: set[str], context: str) -> None:
    unknown_keys = sorted(set(mapping) - allowed_keys)
    if unknown_keys:
        raise TsFramePlanError(
            f"Ingest plan {context} contains unknown fields: {', '.join(unknown_keys)}."
        )
