"""Unit tests for per-timestamp feature value tables."""

from __future__ import annotations

from decimal import Decimal

from core.value_types import DECIMAL_VALUE, INT_VALUE
from store.feature_value_table import FeatureValueTable, FeatureValueView


def test_set_keeps_first_value_for_pair() -> None:
    """Second write to the same asset/feature should be ignored."""
    table = FeatureValueTable()

    first_stored = table.set("X", "Open", 100.0)
    second_stored = table.set("X", "Open", 105.0)

    assert (first_stored, second_stored) == (True, False)
    assert table.get("X", "Open") == 100.0


def test_get_returns_default_for_missing_pair() -> None:
    """Missing asset or feature should read back as the value type default."""
    table = FeatureValueTable(INT_VALUE)
    table.set("X", "Open", 7)

    assert table.get("X", "Close") == 0
    assert table.get("Y", "Open") == 0


def test_lookup_distinguishes_missing_from_stored_default() -> None:
    """Lookup should return None only when nothing was stored."""
    table = FeatureValueTable()
    table.set("X", "Open", 0.0)

    assert table.lookup("X", "Open") == 0.0
    assert table.lookup("X", "Close") is None


def test_size_counts_distinct_assets() -> None:
    """Table length should reflect assets, not features."""
    table = FeatureValueTable()
    table.set("X", "Open", 1.0)
    table.set("X", "Close", 2.0)
    table.set("Y", "Open", 3.0)

    assert len(table) == 2
    assert not table.is_empty()
    assert FeatureValueTable().is_empty()


def test_render_lists_asset_blocks() -> None:
    """Rendering should indent each asset and list feature/value pairs."""
    table = FeatureValueTable()
    table.set("X", "Open", 100.0)
    table.set("X", "Close", 110.5)

    assert table.render() == "\tX:\n\t\tOpen: 100\tClose: 110.5\t\n"


def test_render_uses_value_type_renderer() -> None:
    """Decimal values should render with their own text form."""
    table = FeatureValueTable(DECIMAL_VALUE)
    table.set("X", "Open", Decimal("1.1170"))

    assert "Open: 1.1170" in str(table)


def test_copy_is_independent() -> None:
    """Writes to a copy should not reach the original."""
    table = FeatureValueTable()
    table.set("X", "Open", 1.0)

    duplicate = table.copy()
    duplicate.set("X", "Close", 2.0)

    assert table.lookup("X", "Close") is None
    assert duplicate.get("X", "Open") == 1.0


def test_view_exposes_read_only_features() -> None:
    """Views should read through to the table without a setter."""
    table = FeatureValueTable()
    table.set("X", "Open", 1.0)
    view = FeatureValueView(table)

    assert view.features_of("X")["Open"] == 1.0
    assert not hasattr(view, "set")
    assert view.assets() == ("X",)
