"""Multi-valued string mappings.

``ValueBag`` is the structural type the binder reads from. ``MultiDict``
is the concrete read-only implementation behind ``QueryParams`` and
``FormData``, and the adapter for plain ``{name: value | [values]}``
mappings handed to ``bind()``.
"""

from collections.abc import Iterable, Iterator, Mapping
from typing import Protocol, runtime_checkable


@runtime_checkable
class ValueBag(Protocol):
    """A read-only string mapping where a name can carry several values.

    ``get`` and ``__getitem__`` see the first value, ``get_list`` sees
    all of them in arrival order. Dunders are spelled out because a
    Protocol cannot also inherit from ``Mapping``.
    """

    def __getitem__(self, key: str) -> str: ...
    def __contains__(self, key: object) -> bool: ...
    def __iter__(self) -> Iterator[str]: ...
    def __len__(self) -> int: ...
    def get(self, key: str, default: str | None = None) -> str | None: ...
    def get_list(self, key: str) -> list[str]: ...


class MultiDict(Mapping[str, str]):
    """Immutable ``name -> [values]`` mapping implementing ``ValueBag``."""

    __slots__ = ("_data",)

    _data: dict[str, list[str]]

    def __init__(self, data: Mapping[str, list[str]] | None = None) -> None:
        object.__setattr__(self, "_data", {k: list(v) for k, v in (data or {}).items()})

    def __getitem__(self, key: str) -> str:
        values = self._data[key]
        if not values:
            raise KeyError(key)
        return values[0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        pairs = ", ".join(f"{k!r}: {v!r}" for k, v in self._data.items())
        return f"{type(self).__name__}({{{pairs}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """First value for *key*, or *default*."""
        values = self._data.get(key)
        return values[0] if values else default

    def get_list(self, key: str) -> list[str]:
        """Every value for *key*; a fresh list the caller may keep."""
        return list(self._data.get(key, ()))


def as_value_bag(data: ValueBag | Mapping[str, str | Iterable[str]]) -> ValueBag:
    """Return *data* unchanged if it already is a ``ValueBag``, else wrap it."""
    if isinstance(data, ValueBag):
        return data
    return MultiDict(
        {k: [v] if isinstance(v, str) else [str(i) for i in v] for k, v in data.items()}
    )
