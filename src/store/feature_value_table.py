"""Per-timestamp observation table.

A table maps asset to feature to a single value. Writes are
first-write-wins so a recorded observation is never replaced.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Generic, Iterator, Mapping, TypeVar

from core.value_types import FLOAT_VALUE, ValueType

T = TypeVar("T")


class FeatureValueTable(Generic[T]):
    """All observations recorded at one instant.

    Iteration order over assets and features follows insertion into the
    underlying dicts and is not part of the contract.
    """

    def __init__(self, value_type: ValueType[T] = FLOAT_VALUE) -> None:  # type: ignore[assignment]
        self._value_type = value_type
        self._values: dict[str, dict[str, T]] = {}

    def set(self, asset: str, feature: str, value: T) -> bool:
        """Store a value unless the asset/feature pair already holds one.

        Args:
            asset: Asset identifier.
            feature: Feature name declared for the asset.
            value: Converted observation.

        Returns:
            True when the value was stored, False when it was ignored.
        """
        features = self._values.setdefault(asset, {})
        if feature in features:
            return False
        features[feature] = value
        return True

    def get(self, asset: str, feature: str) -> T:
        """Return the stored value or the value type default when absent."""
        value = self.lookup(asset, feature)
        return self._value_type.default if value is None else value

    def lookup(self, asset: str, feature: str) -> T | None:
        """Return the stored value, or None when the pair was never set."""
        features = self._values.get(asset)
        if features is None:
            return None
        return features.get(feature)

    def assets(self) -> tuple[str, ...]:
        return tuple(self._values)

    def features_of(self, asset: str) -> Mapping[str, T]:
        """Read-only feature/value mapping for one asset."""
        return MappingProxyType(self._values.get(asset, {}))

    def is_empty(self) -> bool:
        return not self._values

    def copy(self) -> "FeatureValueTable[T]":
        duplicate: FeatureValueTable[T] = FeatureValueTable(self._value_type)
        duplicate._values = {asset: dict(features) for asset, features in self._values.items()}
        return duplicate

    def render(self) -> str:
        """Render one indented block per asset listing feature/value pairs."""
        parts = []
        for asset, features in self._values.items():
            parts.append(f"\t{asset}:\n\t\t")
            for feature, value in features.items():
                parts.append(f"{feature}: {self._value_type.render(value)}\t")
            parts.append("\n")
        return "".join(parts)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __str__(self) -> str:
        return self.render()


class FeatureValueView(Generic[T]):
    """Read-only facade over a table owned by a store."""

    def __init__(self, table: FeatureValueTable[T]) -> None:
        self._table = table

    def get(self, asset: str, feature: str) -> T:
        return self._table.get(asset, feature)

    def lookup(self, asset: str, feature: str) -> T | None:
        return self._table.lookup(asset, feature)

    def assets(self) -> tuple[str, ...]:
        return self._table.assets()

    def features_of(self, asset: str) -> Mapping[str, T]:
        return self._table.features_of(asset)

    def is_empty(self) -> bool:
        return self._table.is_empty()

    def render(self) -> str:
        return self._table.render()

    def __len__(self) -> int:
        return len(self._table)

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __str__(self) -> str:
        return self._table.render()
