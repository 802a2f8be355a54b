"""Primitive validators.

Every validator has the signature ``(config, field, value) -> ValidationOutcome``,
is pure, and never raises. A malformed ``config`` is reported as a
configuration error (``valid=False``, ``message=None``) and logged; a value
that breaks the rule is reported with a default, end-user facing message.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from .result import ValidationOutcome
from .rules import DataType
from .values import (
    FieldValue,
    ValueKind,
    date_ordinal,
    display_value,
    is_real_number,
    parse_date,
)

logger = logging.getLogger(__name__)


def check_data_type(config: Any, field: str, value: Any) -> ValidationOutcome:
    """Check that the value is of the configured data type.

    Args:
        config: One of string, number, date, boolean, object, array (any case)
        field: Field name
        value: Field value

    Returns:
        ValidationOutcome with validation outcome
    """
    data_type = DataType.parse(config)
    if data_type is None:
        logger.error(f"Unknown data type '{config}' configured for field '{field}'")
        return ValidationOutcome.config_error(field, "dataType")

    field_value = FieldValue.of(value)

    if data_type is DataType.ARRAY:
        if field_value.kind is not ValueKind.ARRAY:
            return ValidationOutcome.failure(
                f"The value of '{field}' is not an array", field, "dataType"
            )
    elif data_type is DataType.DATE:
        if field_value.kind is ValueKind.DATE:
            return ValidationOutcome.success(field)
        if field_value.kind is not ValueKind.STRING or parse_date(field_value.raw) is None:
            return ValidationOutcome.failure(
                f"The value of '{field}' is not a valid date", field, "dataType"
            )
    elif field_value.kind.value != data_type.value:
        return ValidationOutcome.failure(
            f"The value of '{field}' does not match the required data type",
            field,
            "dataType",
        )

    return ValidationOutcome.success(field)


def check_list(config: Any, field: str, value: Any) -> ValidationOutcome:
    """Check that the value is one of the allowed values."""
    if not isinstance(config, (list, tuple)):
        logger.error(f"The 'list' rule of field '{field}' must be a list of values")
        return ValidationOutcome.config_error(field, "list")

    field_value = FieldValue.of(value)
    if not any(field_value.same_as(allowed) for allowed in config):
        return ValidationOutcome.failure(
            f"The value '{field_value.text}' in '{field}' is not in the list of allowed values",
            field,
            "list",
        )

    return ValidationOutcome.success(field)


def _length_bound(bounds: Mapping, key: str) -> int | float | None:
    """Return a usable length bound; zero, negative and non-numeric are unset."""
    bound = bounds.get(key)
    if is_real_number(bound) and bound > 0:
        return bound
    return None


def check_length(config: Any, field: str, value: Any) -> ValidationOutcome:
    """Check the character count of a string or the item count of a sequence.

    Values that have no length (numbers, booleans, mappings, ``None``) fail
    with a data error rather than passing silently.
    """
    if not isinstance(config, Mapping):
        logger.error(f"The 'len' rule of field '{field}' must be an object with 'min' and/or 'max'")
        return ValidationOutcome.config_error(field, "len")

    field_value = FieldValue.of(value)
    if not field_value.is_sized:
        return ValidationOutcome.failure(
            f"The value of '{field}' does not have a length", field, "len"
        )

    length = len(field_value.raw)

    minimum = _length_bound(config, "min")
    if minimum is not None and length < minimum:
        return ValidationOutcome.failure(
            f"The value of '{field}' does not have the minimum number of characters required",
            field,
            "len",
        )

    maximum = _length_bound(config, "max")
    if maximum is not None and length > maximum:
        return ValidationOutcome.failure(
            f"The value of '{field}' has more characters/items than the maximum allowed",
            field,
            "len",
        )

    return ValidationOutcome.success(field)


def _date_bound(config: Mapping, key: str, field: str) -> tuple[bool, float | None]:
    """Resolve a date bound. Returns ``(ok, ordinal)``; absent bounds are ``(True, None)``."""
    bound = config.get(key)
    if bound is None:
        return True, None
    parsed = parse_date(bound)
    if parsed is None:
        logger.error(f"Invalid date '{bound}' in the 'range' rule of field '{field}'")
        return False, None
    return True, date_ordinal(parsed)


def _range_bounds(
    config: Mapping, field: str, field_value: FieldValue
) -> tuple[bool, float | None, float | None, float | None]:
    """Resolve the compared value and bounds.

    Returns ``(ok, subject, minimum, maximum)``; ``ok`` is False for
    configuration errors.
    """
    if field_value.kind in (ValueKind.STRING, ValueKind.DATE):
        parsed = parse_date(field_value.raw)
        if parsed is None:
            logger.error(
                f"Value of field '{field}' is not a valid date for use with the 'range' rule"
            )
            return False, None, None, None

        ok_min, minimum = _date_bound(config, "min", field)
        ok_max, maximum = _date_bound(config, "max", field)
        if not (ok_min and ok_max):
            return False, None, None, None
        return True, date_ordinal(parsed), minimum, maximum

    minimum = config.get("min")
    maximum = config.get("max")
    for bound in (minimum, maximum):
        if bound is not None and not is_real_number(bound):
            logger.error(
                f"The 'range' rule of field '{field}' needs numeric 'min' and/or 'max' for numbers"
            )
            return False, None, None, None
    return True, field_value.raw, minimum, maximum


def check_range(config: Any, field: str, value: Any) -> ValidationOutcome:
    """Check that a number or date lies within ``{min, max}``.

    Out-of-order bounds are swapped before comparing; failure messages quote
    the bounds as configured.
    """
    if not isinstance(config, Mapping):
        logger.error(f"The 'range' rule of field '{field}' must be an object")
        return ValidationOutcome.config_error(field, "range")

    if config.get("min") is None and config.get("max") is None:
        logger.error(
            f"The 'range' rule of field '{field}' needs 'min' and/or 'max' set to a number or date"
        )
        return ValidationOutcome.config_error(field, "range")

    field_value = FieldValue.of(value)
    if field_value.kind not in (ValueKind.STRING, ValueKind.DATE) and not is_real_number(
        field_value.raw
    ):
        return ValidationOutcome.failure(
            f"The value of '{field}' cannot be compared against a range", field, "range"
        )

    ok, subject, minimum, maximum = _range_bounds(config, field, field_value)
    if not ok:
        return ValidationOutcome.config_error(field, "range")

    if minimum is not None and maximum is not None and minimum > maximum:
        minimum, maximum = maximum, minimum

    if minimum is not None and subject < minimum:
        return ValidationOutcome.failure(
            f"{field} must be greater than or equal to {display_value(config.get('min'))}",
            field,
            "range",
        )

    if maximum is not None and subject > maximum:
        return ValidationOutcome.failure(
            f"{field} must be less than or equal to {display_value(config.get('max'))}",
            field,
            "range",
        )

    return ValidationOutcome.success(field)


def check_regex(config: Any, field: str, value: Any) -> ValidationOutcome:
    """Check that the string form of the value matches a pattern (search, not anchored)."""
    if isinstance(config, re.Pattern):
        regex = config
    elif isinstance(config, str):
        try:
            regex = re.compile(config)
        except re.error as e:
            logger.error(f"Invalid 'regex' pattern for field '{field}': {e}")
            return ValidationOutcome.config_error(field, "regex")
    else:
        logger.error(f"The 'regex' rule of field '{field}' must be a pattern string")
        return ValidationOutcome.config_error(field, "regex")

    if not regex.search(FieldValue.of(value).text):
        return ValidationOutcome.failure(
            f"The value of field '{field}' does not match the required format",
            field,
            "regex",
        )

    return ValidationOutcome.success(field)
