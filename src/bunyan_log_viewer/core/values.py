"""Closed value model over decoded JSON values.

Every decoded value is one of null, string, number, boolean, array or object.
Callers classify once with :func:`kind_of` instead of inspecting types at each site.
"""

from __future__ import annotations

import json
import math
from enum import Enum
from typing import Any, Literal

# Integral floats up to this magnitude print without a fractional part.
_INTEGRAL_FLOAT_LIMIT = 1e21


class ValueKind(str, Enum):
    """Shape of a decoded JSON value."""

    NULL = "null"
    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    ARRAY = "array"
    OBJECT = "object"
    UNKNOWN = "unknown"


SCALAR_KINDS = frozenset({ValueKind.NULL, ValueKind.STRING, ValueKind.NUMBER, ValueKind.BOOL})


def kind_of(value: Any) -> ValueKind:
    """Return the kind of a decoded JSON value."""
    if value is None:
        return ValueKind.NULL
    # bool must be tested before numbers: bool is an int subclass.
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, list):
        return ValueKind.ARRAY
    if isinstance(value, dict):
        return ValueKind.OBJECT
    return ValueKind.UNKNOWN


def is_scalar(value: Any) -> bool:
    return kind_of(value) in SCALAR_KINDS


def classify(value: Any) -> Literal["fields", "blobs"]:
    """Decide whether an extension value is an inline field or a blob.

    Scalars and the empty array are fields; everything else is a blob.
    """
    kind = kind_of(value)
    if kind in SCALAR_KINDS:
        return "fields"
    if kind is ValueKind.ARRAY and not value:
        return "fields"
    return "blobs"


def format_number(value: int | float) -> str:
    """Shortest text form of a number (``42``, ``0.5``, ``1e+300``)."""
    if isinstance(value, int):
        return str(value)
    if math.isfinite(value) and value.is_integer() and abs(value) < _INTEGRAL_FLOAT_LIMIT:
        return str(int(value))
    return repr(value)


def format_bool(value: bool) -> str:
    return "true" if value else "false"


def canonical_string(value: Any) -> str:
    """String form of a value used by condition comparisons."""
    kind = kind_of(value)
    if kind is ValueKind.STRING:
        return value
    if kind is ValueKind.NUMBER:
        return format_number(value)
    if kind is ValueKind.BOOL:
        return format_bool(value)
    if kind is ValueKind.NULL:
        return "null"
    if kind in (ValueKind.ARRAY, ValueKind.OBJECT):
        return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str)
    return str(value)
