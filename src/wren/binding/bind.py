"""Bind request values onto dataclass instances.

Walks a target's fields in declaration order and writes a type-coerced
value into each, recursing into embedded fields with the same flat
value bag. Binding never fails part-way: a value that cannot be coerced
becomes the field's zero value (see ``wren.binding.coerce`` for the
exact matrix), so callers that need validation check the populated
instance afterwards.

An embedded field that is ``None`` is replaced by a default-constructed
instance of its dataclass before binding. If that dataclass has required
fields it cannot be built, and the field is left as ``None``.

Usage::

    @dataclass
    class SearchParams:
        q: str = ""
        page: int = 1
        tags: list[str] = field(default_factory=list)

    params = bind_new(SearchParams, QueryParams(b"q=wren&page=2&tags=a&tags=b"))
"""

import dataclasses
import logging
from collections.abc import Mapping
from typing import Any

from wren._internal.multimap import ValueBag, as_value_bag
from wren.binding.coerce import UNTOUCHED, coerce
from wren.binding.fields import describe

logger = logging.getLogger("wren.binding")


def bind[T](bag: ValueBag | Mapping[str, Any], target: T) -> T:
    """Populate dataclass instance *target* from *bag* in place.

    Frozen dataclasses are written through ``object.__setattr__``, the
    same way they populate themselves during ``__init__``.

    Args:
        bag: A ``ValueBag`` (``QueryParams``, ``FormData``) or a plain
            mapping of names to a string or a list of strings.
        target: A dataclass instance.

    Returns:
        *target*, for chaining.

    Raises:
        TypeError: If *target* is not a dataclass instance.
    """
    if isinstance(target, type) or not dataclasses.is_dataclass(target):
        msg = f"bind() target must be a dataclass instance, got {type(target).__name__}"
        raise TypeError(msg)

    _bind_fields(as_value_bag(bag), target)
    return target


def bind_new[T](cls: type[T], bag: ValueBag | Mapping[str, Any]) -> T:
    """Create ``cls()`` and bind *bag* into it.

    Every field of *cls* needs a default (or ``default_factory``).
    """
    return bind(bag, cls())


def _bind_fields(bag: ValueBag, target: Any) -> None:
    for desc in describe(type(target)):
        if desc.embedded is not None:
            inner = getattr(target, desc.name, None)
            if inner is None:
                try:
                    inner = desc.embedded()
                except TypeError:
                    # Required fields: nothing sensible to construct
                    logger.debug(
                        "Skipping embedded field %s.%s: %s has required fields",
                        type(target).__name__,
                        desc.name,
                        desc.embedded.__name__,
                    )
                    continue
                object.__setattr__(target, desc.name, inner)
            _bind_fields(bag, inner)
            continue

        if desc.source is None:
            continue

        if not desc.settable:
            logger.debug("Skipping unexported field %s.%s", type(target).__name__, desc.name)
            continue

        value = coerce(desc.kind, bag, desc.source)
        if value is UNTOUCHED:
            continue
        object.__setattr__(target, desc.name, value)
