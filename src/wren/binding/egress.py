"""Map dataclass instances into template contexts.

The outbound counterpart of ``bind()``: each field becomes a context key
named by its ``"to"`` annotation (or the field name), and embedded fields
are flattened into the same mapping.
"""

import dataclasses
from typing import Any

from wren.binding.fields import describe


def to_context(obj: Any) -> dict[str, Any]:
    """Flatten dataclass instance *obj* into a context mapping.

    Fields are visited in declaration order, so a later field overwrites an
    earlier key with the same name. Unexported (underscore-prefixed) fields
    are left out. Anything that is not a dataclass instance maps to ``{}``.
    """
    context: dict[str, Any] = {}
    if isinstance(obj, type) or not dataclasses.is_dataclass(obj):
        return context
    _collect(obj, context)
    return context


def _collect(obj: Any, context: dict[str, Any]) -> None:
    for desc in describe(type(obj)):
        if not desc.settable:
            continue
        value = getattr(obj, desc.name)
        if desc.embedded is not None and dataclasses.is_dataclass(value):
            _collect(value, context)
        else:
            context[desc.target] = value
