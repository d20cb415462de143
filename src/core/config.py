"""Runtime configuration model for tsframe.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os

from core.constants import (
    DATE_FORMATS_ENV,
    DATE_FORMATS_ENV_SEPARATOR,
    DEFAULT_LOG_LEVEL,
    DEFAULT_VALUE_TYPE,
    LOG_LEVEL_ENV,
    SUPPORTED_UNPARSED_DATE_POLICIES,
    UNPARSED_DATE_SENTINEL,
    UNPARSED_DATES_ENV,
    VALUE_TYPE_ENV,
)
from core.errors import TsFrameConfigError
from core.value_types import SUPPORTED_VALUE_TYPES


@dataclass(frozen=True)
class TsFrameConfig:
    """Validated runtime configuration.

    Attributes:
        extra_date_formats: Formats appended after the built-in ones.
        value_type: Name of the value type used for converted tokens.
        unparsed_dates: Policy for rows whose date matches no format.
        log_level: Minimum level name for structured log output.
    """

    extra_date_formats: tuple[str, ...] = ()
    value_type: str = DEFAULT_VALUE_TYPE
    unparsed_dates: str = UNPARSED_DATE_SENTINEL
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "TsFrameConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            TsFrameConfigError: If environment values are invalid.
        """
        return cls(
            extra_date_formats=_parse_date_formats(os.getenv(DATE_FORMATS_ENV, "")),
            value_type=_parse_choice(
                VALUE_TYPE_ENV,
                os.getenv(VALUE_TYPE_ENV, DEFAULT_VALUE_TYPE),
                SUPPORTED_VALUE_TYPES,
            ),
            unparsed_dates=_parse_choice(
                UNPARSED_DATES_ENV,
                os.getenv(UNPARSED_DATES_ENV, UNPARSED_DATE_SENTINEL),
                SUPPORTED_UNPARSED_DATE_POLICIES,
            ),
            log_level=_parse_log_level(os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)),
        )


def _parse_date_formats(raw_value: str) -> tuple[str, ...]:
    """Split the date format environment value into formats.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Non-empty formats in declaration order.
    """
    formats = []
    for item in raw_value.split(DATE_FORMATS_ENV_SEPARATOR):
        if item.strip():
            formats.append(item.strip())
    return tuple(formats)


def _parse_choice(env_name: str, raw_value: str, choices: tuple[str, ...]) -> str:
    normalized_value = raw_value.strip().lower()
    if normalized_value in choices:
        return normalized_value
    raise TsFrameConfigError(
        f"Invalid {env_name} value: expected one of {', '.join(choices)}, "
        f"got '{raw_value}'. Set {env_name} to a supported value."
    )


def _parse_log_level(raw_value: str) -> str:
    """Validate a logging level name.

    Args:
        raw_value: Raw level name from environment.

    Returns:
        Upper-cased level name.

    Raises:
        TsFrameConfigError: If the name is not a standard logging level.
    """
    level_name = raw_value.strip().upper()
    if isinstance(logging.getLevelName(level_name), int):
        return level_name
    raise TsFrameConfigError(
        f"Invalid {LOG_LEVEL_ENV} value: got '{raw_value}'. "
        "Use DEBUG, INFO, WARNING, ERROR or CRITICAL."
    )
