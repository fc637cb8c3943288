"""Layout chain resolution.

A view may extend a layout, which may extend another layout, and so on.
The chain is resolved by repeatedly asking "what is the parent of this
file?" until a file declares none, then reversed so the root-most layout
comes first and the requested view last. That is the order the files are
handed to kida.

Which file is a layout, and which layout a file extends, are conventions
owned by the caller. The defaults here are:

- parent: the first ``{% extends "..." %}`` directive in the file
- layout: the base name starts with ``_`` (``_layout.html``, ``_base.html``)
  or the view lives under a ``layouts/`` directory
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from wren.errors import CompileError

# (file path) -> parent view path, or None when the file has no layout
type LayoutOf = Callable[[Path], str | None]

# (view path) -> whether the view is a layout rather than a render entry point
type IsLayout = Callable[[str], bool]

# (view path) -> platform file path
type Resolver = Callable[[str], Path]

_EXTENDS_RE = re.compile(r"""\{%-?\s*extends\s+(["'])(?P<name>[^"']+)\1\s*-?%\}""")


@dataclass(frozen=True, slots=True)
class LayoutChain:
    """Ordered sequence of chain files from root layout to requested view.

    Attributes:
        view_paths: Slash-separated view paths, root-most first.
        files: Platform paths, index-aligned with ``view_paths``.
    """

    view_paths: tuple[str, ...]
    files: tuple[Path, ...]

    @property
    def leaf(self) -> str:
        """View path of the requested view (the last chain element)."""
        return self.view_paths[-1]

    @property
    def entry_name(self) -> str:
        """Base name of the leaf file, which the compiled set is entered by."""
        return PurePosixPath(self.leaf).name

    def __len__(self) -> int:
        return len(self.view_paths)


def extends_parent(file_path: Path) -> str | None:
    """Return the view path named by the file's ``{% extends %}`` directive."""
    source = file_path.read_text(encoding="utf-8")
    match = _EXTENDS_RE.search(source)
    if match is None:
        return None
    return match.group("name")


def is_layout_file(view_path: str) -> bool:
    """Default layout predicate: ``_``-prefixed names and ``layouts/`` views."""
    pure = PurePosixPath(view_path)
    return pure.name.startswith("_") or "layouts" in pure.parts[:-1]


def build_chain(view_path: str, *, resolve: Resolver, layout_of: LayoutOf) -> LayoutChain:
    """Walk parent references from *view_path* up to the root layout.

    Raises:
        CompileError: If a chain file cannot be read or the chain loops.
    """
    view_paths: list[str] = []
    files: list[Path] = []
    current: str | None = view_path

    while current is not None:
        if current in view_paths:
            loop = " -> ".join([*view_paths, current])
            raise CompileError(view_path, f"layout chain loops: {loop}")
        file_path = resolve(current)
        view_paths.append(current)
        files.append(file_path)
        try:
            current = layout_of(file_path)
        except (OSError, UnicodeDecodeError) as exc:
            raise CompileError(view_path, f"cannot read {current!r}: {exc}") from exc

    view_paths.reverse()
    files.reverse()
    return LayoutChain(view_paths=tuple(view_paths), files=tuple(files))
