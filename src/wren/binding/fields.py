"""Field descriptors for the struct binder.

Dataclass fields are classified once per class into a closed set of
``FieldKind`` values. The binder and the context mapper then work on
``FieldDescriptor`` tuples instead of re-inspecting annotations on every
request.

Field annotations live in ``dataclasses.field(metadata=...)`` under three
keys:

- ``"from"`` — the value-bag name to bind from (``"-"`` never binds)
- ``"to"`` — the context key used when mapping into a template
- ``"embed"`` — recurse into this dataclass-typed field, sharing the
  parent's flat namespace

``field()`` is a thin wrapper that fills these in::

    @dataclass
    class Paging:
        page: int = field(source="p", default=1)
        size: Unsigned = 20

    @dataclass
    class SearchParams:
        paging: Paging = field(embed=True, default_factory=Paging)
        q: str = ""
        tags: list[str] = field(default_factory=list)
        secret: str = field(source=SKIP, default="")
"""

import dataclasses
import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum, auto
from functools import cache
from typing import Annotated, Any, get_args, get_origin, get_type_hints

logger = logging.getLogger("wren.binding")

FROM_TAG = "from"
TO_TAG = "to"
EMBED_TAG = "embed"

# Ingress sentinel: a field tagged with this name is never bound
SKIP = "-"


class _UnsignedMarker:
    """``Annotated`` marker for integers parsed as unsigned."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "UNSIGNED"


UNSIGNED = _UnsignedMarker()

# Non-negative integer field: digits only, no sign
Unsigned = Annotated[int, UNSIGNED]


class FieldKind(Enum):
    """Every coercion the binder knows how to perform."""

    BOOL = auto()
    INT = auto()
    UINT = auto()
    FLOAT = auto()
    ANY = auto()
    STR = auto()
    DATETIME = auto()
    INT_LIST = auto()
    STR_LIST = auto()
    OTHER = auto()


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """One dataclass field, classified.

    Attributes:
        name: Attribute name on the instance.
        source: Value-bag name to bind from, or ``None`` when tagged ``"-"``.
        target: Context key for template mapping.
        kind: Coercion to apply on ingress.
        settable: ``False`` for underscore-prefixed (unexported) fields.
        embedded: Dataclass type to recurse into, or ``None``.
    """

    name: str
    source: str | None
    target: str
    kind: FieldKind
    settable: bool = True
    embedded: type | None = None


def field(
    *,
    source: str | None = None,
    to: str | None = None,
    embed: bool = False,
    **kwargs: Any,
) -> Any:
    """``dataclasses.field`` with binder annotations.

    Args:
        source: Value-bag name (``SKIP`` to never bind).
        to: Template context key.
        embed: Recurse into this field when binding and mapping.
        **kwargs: Passed through to ``dataclasses.field``.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    if source is not None:
        metadata[FROM_TAG] = source
    if to is not None:
        metadata[TO_TAG] = to
    if embed:
        metadata[EMBED_TAG] = True
    return dataclasses.field(metadata=metadata, **kwargs)


def kind_of(hint: Any) -> FieldKind:
    """Classify a resolved type annotation."""
    if get_origin(hint) is Annotated:
        base, *extras = get_args(hint)
        if base is int and any(isinstance(e, _UnsignedMarker) for e in extras):
            return FieldKind.UINT
        hint = base

    if hint is bool:
        return FieldKind.BOOL
    if hint is int:
        return FieldKind.INT
    if hint is float:
        return FieldKind.FLOAT
    if hint is str:
        return FieldKind.STR
    if hint is Any or hint is object:
        return FieldKind.ANY
    if hint is datetime:
        return FieldKind.DATETIME

    if get_origin(hint) is list:
        args = get_args(hint)
        if args == (int,):
            return FieldKind.INT_LIST
        if args == (str,):
            return FieldKind.STR_LIST

    return FieldKind.OTHER


@cache
def describe(cls: type) -> tuple[FieldDescriptor, ...]:
    """Classify every field of dataclass *cls*, in declaration order.

    Raises:
        TypeError: If *cls* is not a dataclass type.
    """
    if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
        msg = f"{cls!r} is not a dataclass type"
        raise TypeError(msg)

    try:
        hints = get_type_hints(cls, include_extras=True)
    except NameError:
        # Unresolvable forward reference; fall back to the raw annotations
        logger.debug("Could not resolve annotations of %s", cls.__qualname__)
        hints = {}

    descriptors: list[FieldDescriptor] = []
    for f in dataclasses.fields(cls):
        hint = hints.get(f.name, f.type)
        if isinstance(hint, str):
            hint = None

        embedded: type | None = None
        if f.metadata.get(EMBED_TAG) and isinstance(hint, type) and dataclasses.is_dataclass(hint):
            embedded = hint

        source: str | None = f.metadata.get(FROM_TAG) or f.name
        if source == SKIP:
            source = None

        descriptors.append(
            FieldDescriptor(
                name=f.name,
                source=source,
                target=f.metadata.get(TO_TAG) or f.name,
                kind=kind_of(hint),
                settable=not f.name.startswith("_"),
                embedded=embedded,
            )
        )
    return tuple(descriptors)
