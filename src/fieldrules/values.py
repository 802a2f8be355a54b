"""Value model for record fields.

Record values are classified once into a closed set of kinds when they enter
the engine, so the validators inspect a :class:`ValueKind` tag instead of
re-deriving the type of a value on their own.
"""

from __future__ import annotations

import json
import math
import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from enum import Enum
from numbers import Number
from typing import Any


class ValueKind(Enum):
    """Enumeration of the kinds of value a record field can hold.

    Attributes:
        NULL: ``None``
        STRING: Text
        NUMBER: ``int``/``float`` and other real numbers (never ``bool``)
        BOOLEAN: ``True``/``False``
        DATE: Native ``date``/``datetime`` values
        ARRAY: Lists and tuples
        OBJECT: Mappings
        OTHER: Anything else (bytes, sets, arbitrary objects)
    """

    NULL = "null"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    ARRAY = "array"
    OBJECT = "object"
    OTHER = "other"

    @classmethod
    def of(cls, value: Any) -> ValueKind:
        """Detect the kind of a raw value.

        Example:
            ```python
            ValueKind.of([1, 2, 3])  # ValueKind.ARRAY
            ValueKind.of(True)       # ValueKind.BOOLEAN
            ```
        """
        if value is None:
            return cls.NULL
        elif isinstance(value, bool):
            return cls.BOOLEAN
        elif isinstance(value, Number):
            return cls.NUMBER
        elif isinstance(value, (datetime, date)):
            return cls.DATE
        elif isinstance(value, str):
            return cls.STRING
        elif isinstance(value, Mapping):
            return cls.OBJECT
        elif isinstance(value, (list, tuple)):
            return cls.ARRAY
        else:
            return cls.OTHER


@dataclass(frozen=True)
class FieldValue:
    """A record value together with its detected kind."""

    raw: Any
    kind: ValueKind

    @classmethod
    def of(cls, raw: Any) -> FieldValue:
        if isinstance(raw, FieldValue):
            return raw
        return cls(raw=raw, kind=ValueKind.of(raw))

    @property
    def text(self) -> str:
        """String form of the value, as used in messages and regex matching."""
        return display_value(self.raw)

    @property
    def is_sized(self) -> bool:
        return self.kind in (ValueKind.STRING, ValueKind.ARRAY)

    def same_as(self, other: Any) -> bool:
        """Strict equality: both kinds must match before values are compared."""
        other_value = FieldValue.of(other)
        if self.kind is not other_value.kind:
            return False
        try:
            return bool(self.raw == other_value.raw)
        except (TypeError, ValueError):
            return False


# Formats tried in order before falling back to ISO-8601 parsing
DATE_FORMATS = [
    '%Y-%m-%d %H:%M:%S',
    '%Y-%m-%dT%H:%M:%S',
    '%Y-%m-%dT%H:%M:%SZ',
    '%Y-%m-%dT%H:%M:%S.%f',
    '%Y-%m-%dT%H:%M:%S.%fZ',
    '%Y-%m-%d',
    '%Y/%m/%d',
    '%m/%d/%Y',
    '%m/%d/%Y %H:%M:%S',
]


def parse_date(value: Any) -> datetime | None:
    """Parse a date-like value.

    Args:
        value: A ``datetime``, ``date`` or date string

    Returns:
        The parsed ``datetime``, or ``None`` if the value is not a date
    """
    if isinstance(value, datetime):
        return value
    elif isinstance(value, date):
        return datetime.combine(value, time())
    elif not isinstance(value, str):
        return None

    value = value.strip()
    if not value:
        return None

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue

    # Compact ISO forms such as 20240101 are numbers, not dates
    if value.isdigit():
        return None

    try:
        return datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        return None


def date_ordinal(value: datetime) -> float:
    """Comparable position of a datetime on the timeline.

    Naive datetimes are read as UTC so that naive and aware values compare.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.timestamp()


def is_real_number(value: Any) -> bool:
    """True for numbers that can be ordered (not bool, not NaN)."""
    if isinstance(value, bool) or not isinstance(value, Number):
        return False
    try:
        return not math.isnan(value)  # type: ignore[arg-type]
    except TypeError:
        return False


def display_value(value: Any) -> str:
    """Render a value the way it appears in error messages.

    Example:
        ```python
        display_value([1, 2, 3])   # '1,2,3'
        display_value(True)        # 'true'
        display_value(18.0)        # '18'
        ```
    """
    if value is None:
        return "null"
    elif isinstance(value, bool):
        return "true" if value else "false"
    elif isinstance(value, float) and value.is_integer():
        return str(int(value))
    elif isinstance(value, str):
        return value
    elif isinstance(value, (datetime, date)):
        return value.isoformat()
    elif isinstance(value, re.Pattern):
        return value.pattern
    elif isinstance(value, (list, tuple)):
        return ",".join("" if item is None else display_value(item) for item in value)
    elif isinstance(value, Mapping):
        return json.dumps(dict(value), default=str)
    return str(value)
