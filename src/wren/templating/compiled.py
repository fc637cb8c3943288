"""Compiled views — immutable handles onto a compiled template set.

Compiling a layout chain yields one kida template per chain file. The
set is addressable by view path and by base filename; when two chain
files share a base name, the one later in the chain (closer to the
requested view) wins. A ``CompiledView`` is the set plus an entry point,
and ``lookup()`` returns another handle onto the same set with a
different entry point.
"""

import dataclasses
from collections.abc import Mapping
from pathlib import PurePosixPath
from typing import Any

from kida import Template, TemplateError

from wren.binding.egress import to_context
from wren.errors import ExecutionError


# Context key holding render data that is neither a mapping nor a dataclass
DATA_KEY = "data"


def template_context(data: Any) -> dict[str, Any]:
    """Turn render data into a kida context.

    Mappings are used as-is, dataclass instances are flattened with
    ``to_context()``, and ``None`` is an empty context. Any other value
    (a list, a model object) is passed through untouched under
    ``DATA_KEY``, so ``{{ data }}`` and ``{{ data.title }}`` reach it.
    """
    if data is None:
        return {}
    if isinstance(data, Mapping):
        return dict(data)
    if dataclasses.is_dataclass(data) and not isinstance(data, type):
        return to_context(data)
    return {DATA_KEY: data}


class CompiledView:
    """An entry point into a compiled template set.

    Immutable after construction and safe to share between threads:
    kida templates keep no per-render state on the template object.
    """

    __slots__ = ("_aliases", "_entry", "_templates", "view_path")

    def __init__(self, view_path: str, templates: Mapping[str, Template], entry: str) -> None:
        self.view_path = view_path
        self._templates = dict(templates)
        aliases: dict[str, str] = {}
        for name in self._templates:
            aliases[PurePosixPath(name).name] = name
        self._aliases = aliases
        if entry not in self._templates:
            entry = aliases[entry]
        self._entry = entry

    @property
    def name(self) -> str:
        """Base filename of the entry template."""
        return PurePosixPath(self._entry).name

    @property
    def template_names(self) -> tuple[str, ...]:
        """Every template in the set, in parse order."""
        return tuple(self._templates)

    @property
    def template(self) -> Template:
        """The kida template behind the entry point."""
        return self._templates[self._entry]

    def lookup(self, name: str) -> CompiledView | None:
        """Return a handle entered at *name* (view path or base name), or ``None``."""
        if name in self._templates:
            target = name
        elif name in self._aliases:
            target = self._aliases[name]
        else:
            return None
        if target == self._entry:
            return self
        return CompiledView(self.view_path, self._templates, target)

    def has_block(self, name: str) -> bool:
        """Whether the entry template defines a block called *name*."""
        return name in self.template.list_blocks()

    def find_block(self, name: str) -> CompiledView | None:
        """Return a handle on the nearest template that defines block *name*.

        The entry template is searched first, then its layouts outward
        toward the root. ``None`` if no template in that line defines it.
        """
        names = list(self._templates)
        for candidate in reversed(names[: names.index(self._entry) + 1]):
            if name in self._templates[candidate].list_blocks():
                return self.lookup(candidate)
        return None

    def execute(self, data: Any = None) -> str:
        """Render the entry template against *data*.

        Raises:
            ExecutionError: If the template fails against the data.
        """
        context = template_context(data)
        try:
            return self.template.render(context)
        except TemplateError as exc:
            raise ExecutionError(self.view_path, str(exc)) from exc

    def execute_block(self, block: str, data: Any = None) -> str:
        """Render only block *block* of the entry template against *data*.

        Raises:
            ExecutionError: If the block is missing or fails against the data.
        """
        context = template_context(data)
        try:
            return self.template.render_block(block, context)
        except (TemplateError, KeyError) as exc:
            raise ExecutionError(self.view_path, str(exc)) from exc

    def __repr__(self) -> str:
        return f"CompiledView({self.view_path!r}, entry={self._entry!r})"
