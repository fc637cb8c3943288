"""Typed request binding.

``bind()`` copies a flat, multi-valued value bag (query string or form
body) into a dataclass instance; ``to_context()`` maps a dataclass back
out into a template context.
"""

from wren.binding.bind import bind, bind_new
from wren.binding.coerce import DATETIME_FORMAT
from wren.binding.egress import to_context
from wren.binding.fields import (
    SKIP,
    UNSIGNED,
    FieldDescriptor,
    FieldKind,
    Unsigned,
    describe,
    field,
)

__all__ = [
    "DATETIME_FORMAT",
    "SKIP",
    "UNSIGNED",
    "FieldDescriptor",
    "FieldKind",
    "Unsigned",
    "bind",
    "bind_new",
    "describe",
    "field",
    "to_context",
]
