"""Public SDK surface for tsframe.

This module provides a stable import path for library users.
It re-exports the store, its value types, and the typed option models.
"""

from __future__ import annotations

from core.config import TsFrameConfig
from core.constants import BUILTIN_DATE_FORMATS, SENTINEL_TIMESTAMP
from core.errors import (
    TsFrameConfigError,
    TsFrameError,
    TsFrameIngestError,
    TsFramePlanError,
    TsFrameStoreError,
)
from core.ingest_plan import IngestPlan, load_ingest_plan
from core.timestamps import day_of_week, format_timestamp
from core.types import IngestReport
from core.value_types import DECIMAL_VALUE, FLOAT_VALUE, INT_VALUE, ValueType, resolve_value_type
from ingest.plan_runner import IngestPlanResult, run_ingest_plan
from store.feature_value_table import FeatureValueTable, FeatureValueView
from store.gap_filling import GapFillStrategy, GapGranularity, regular_grid_strategy
from store.time_series_store import TimeSeriesStore

__all__ = [
    "BUILTIN_DATE_FORMATS",
    "DECIMAL_VALUE",
    "FLOAT_VALUE",
    "FeatureValueTable",
    "FeatureValueView",
    "GapFillStrategy",
    "GapGranularity",
    "INT_VALUE",
    "IngestPlan",
    "IngestPlanResult",
    "IngestReport",
    "SENTINEL_TIMESTAMP",
    "TimeSeriesStore",
    "TsFrameConfig",
    "TsFrameConfigError",
    "TsFrameError",
    "TsFrameIngestError",
    "TsFramePlanError",
    "TsFrameStoreError",
    "ValueType",
    "day_of_week",
    "format_timestamp",
    "load_ingest_plan",
    "regular_grid_strategy",
    "resolve_value_type",
    "run_ingest_plan",
]
