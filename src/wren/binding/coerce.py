"""Coercion matrix: raw value-bag strings to typed field values.

Every function here is total. A value that cannot be parsed never raises;
it becomes the kind's zero value, or ``UNTOUCHED`` for the kinds whose
field keeps its current value on failure.

Scalar kinds read only the first value for a name (``""`` when absent)
and zero the field on failure. ``DATETIME`` leaves the field as it was on
failure. The list kinds read every value for the name and are always
assigned, zeroing unparsable entries in place.
"""

import math
import re
from datetime import datetime
from typing import Any, Final

from wren._internal.multimap import ValueBag
from wren.binding.fields import FieldKind

# Returned when the field must keep its current value
UNTOUCHED: Final = object()

DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"

_INT_RE = re.compile(r"[+-]?[0-9]+")
_UINT_RE = re.compile(r"[0-9]+")
_DATETIME_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2}")

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_UINT64_MAX = (1 << 64) - 1

_TRUE_TOKENS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_TOKENS = frozenset({"0", "f", "F", "FALSE", "false", "False"})
_INF_TOKENS = frozenset({"inf", "infinity"})


def parse_bool(raw: str) -> bool | None:
    """Parse a truthy/falsy token, or ``None`` if it is neither."""
    if raw in _TRUE_TOKENS:
        return True
    if raw in _FALSE_TOKENS:
        return False
    return None


def parse_int(raw: str) -> int | None:
    """Parse a signed base-10 integer that fits in 64 bits."""
    if not _INT_RE.fullmatch(raw):
        return None
    value = int(raw)
    if not _INT64_MIN <= value <= _INT64_MAX:
        return None
    return value


def parse_uint(raw: str) -> int | None:
    """Parse an unsigned base-10 integer that fits in 64 bits."""
    if not _UINT_RE.fullmatch(raw):
        return None
    value = int(raw)
    if value > _UINT64_MAX:
        return None
    return value


def parse_float(raw: str) -> float | None:
    """Parse a decimal float (exponents, ``inf`` and ``nan`` included).

    Only ASCII input is accepted, and a finite literal too large for a
    double fails instead of rounding to infinity.
    """
    if not raw or not raw.isascii() or raw != raw.strip() or "_" in raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    if math.isinf(value) and raw.lstrip("+-").lower() not in _INF_TOKENS:
        return None
    return value


def parse_datetime(raw: str) -> datetime | None:
    """Parse ``YYYY-MM-DD HH:MM:SS`` into a naive datetime."""
    if not _DATETIME_RE.fullmatch(raw):
        return None
    try:
        return datetime.strptime(raw, DATETIME_FORMAT)
    except ValueError:
        return None


def coerce(kind: FieldKind, bag: ValueBag, source: str) -> Any:
    """Produce the value to assign for *source*, or ``UNTOUCHED``."""
    raw = bag.get(source) or ""

    match kind:
        case FieldKind.BOOL:
            return parse_bool(raw) is True
        case FieldKind.INT:
            value = parse_int(raw)
            return 0 if value is None else value
        case FieldKind.UINT:
            value = parse_uint(raw)
            return 0 if value is None else value
        case FieldKind.FLOAT:
            number = parse_float(raw)
            return 0.0 if number is None else number
        case FieldKind.ANY | FieldKind.STR:
            return raw
        case FieldKind.DATETIME:
            stamp = parse_datetime(raw)
            return UNTOUCHED if stamp is None else stamp
        case FieldKind.INT_LIST:
            return [parse_int(item) or 0 for item in bag.get_list(source)]
        case FieldKind.STR_LIST:
            return bag.get_list(source)
        case FieldKind.OTHER:
            return UNTOUCHED
