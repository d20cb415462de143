"""Value types for converted observation tokens.

A value type bundles the three capabilities the store needs from its
generic value: a default value, parsing from text, and rendering to text.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Callable, Generic, TypeVar

from core.errors import TsFrameConfigError

T = TypeVar("T")


@dataclass(frozen=True)
class ValueType(Generic[T]):
    """Parse/default/render capability set for stored values.

    Attributes:
        name: Identifier used by config and CLI.
        parse: Converts a raw token, raising ValueError when malformed.
        default: Value returned for malformed tokens and missing lookups.
        render: Converts a stored value to text.
    """

    name: str
    parse: Callable[[str], T]
    default: T
    render: Callable[[T], str] = str

    def convert(self, token: str) -> tuple[T, bool]:
        """Convert a raw token, falling back to the default value.

        Args:
            token: Raw cell text.

        Returns:
            Pair of converted value and whether parsing succeeded.
        """
        try:
            return self.parse(token.strip()), True
        except (ValueError, ArithmeticError):
            return self.default, False


def _parse_decimal(token: str) -> Decimal:
    try:
        value = Decimal(token)
    except InvalidOperation as error:
        raise ValueError(f"invalid decimal literal: {token!r}") from error
    if not value.is_finite():
        raise ValueError(f"non-finite decimal literal: {token!r}")
    return value


def _render_float(value: float) -> str:
    return f"{value:g}"


FLOAT_VALUE: ValueType[float] = ValueType("float", float, 0.0, _render_float)
INT_VALUE: ValueType[int] = ValueType("int", int, 0)
DECIMAL_VALUE: ValueType[Decimal] = ValueType("decimal", _parse_decimal, Decimal(0))

_VALUE_TYPES = {
    value_type.name: value_type for value_type in (FLOAT_VALUE, INT_VALUE, DECIMAL_VALUE)
}
SUPPORTED_VALUE_TYPES = tuple(_VALUE_TYPES)


def resolve_value_type(name: str) -> ValueType:
    """Return the built-in value type registered under ``name``.

    Raises:
        TsFrameConfigError: If no value type has that name.
    """
    value_type = _VALUE_TYPES.get(name.strip().lower())
    if value_type is None:
        raise TsFrameConfigError(
            f"Unsupported value type '{name}'. "
            f"Use one of: {', '.join(SUPPORTED_VALUE_TYPES)}."
        )
    return value_type
