"""The view cache: compile, store, and serve views by view path.

Lifecycle:

1. Constructed once at process start from a ``ViewConfig``.
2. Optionally warmed with ``precompile_all()`` before any request is
   served. This is the only way entries get stored.
3. Read by any number of request threads through ``get_view()`` and
   ``get_partial_view()``. A miss compiles the view for that one call
   and does not store it, so every later miss compiles again; a view
   that failed to compile is retried on its next access.

Concurrent misses for the same view path each compile independently.
The result is redundant work, never a corrupt entry: a ``CompiledView``
is immutable and the store's dict is guarded by a lock.
"""

import logging
import threading
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Any

from kida import Template, TemplateError

from wren.config import ViewConfig
from wren.errors import CompileError
from wren.templating.compiled import CompiledView
from wren.templating.environment import create_environment
from wren.templating.layouts import (
    IsLayout,
    LayoutOf,
    Resolver,
    build_chain,
    extends_parent,
    is_layout_file,
)

logger = logging.getLogger("wren.templating")


@dataclass(frozen=True, slots=True)
class WarmupReport:
    """Outcome of ``ViewCache.precompile_all()``.

    Attributes:
        stored: View paths compiled and stored, in walk order.
        failed: ``(view path, reason)`` for every view that failed to compile.
    """

    stored: tuple[str, ...] = ()
    failed: tuple[tuple[str, str], ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failed


class ViewCache:
    """Compiled views keyed by view path."""

    __slots__ = (
        "_config",
        "_filters",
        "_globals",
        "_is_layout",
        "_layout_of",
        "_lock",
        "_resolve",
        "_views",
    )

    def __init__(
        self,
        config: ViewConfig | None = None,
        *,
        layout_of: LayoutOf = extends_parent,
        is_layout: IsLayout = is_layout_file,
        resolve: Resolver | None = None,
        filters: Mapping[str, Callable[..., Any]] | None = None,
        globals_: Mapping[str, Any] | None = None,
    ) -> None:
        self._config = config or ViewConfig()
        self._layout_of = layout_of
        self._is_layout = is_layout
        self._resolve = resolve or self._config.resolve
        self._filters = dict(filters or {})
        self._globals = dict(globals_ or {})
        self._lock = threading.Lock()
        self._views: dict[str, CompiledView] = {}

    @property
    def config(self) -> ViewConfig:
        return self._config

    def __contains__(self, view_path: object) -> bool:
        with self._lock:
            return view_path in self._views

    def __len__(self) -> int:
        with self._lock:
            return len(self._views)

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            return iter(list(self._views))

    # -- Compilation --

    def compile_view(self, view_path: str) -> CompiledView:
        """Compile *view_path* together with its layout chain.

        Every chain file is read in chain order (root layout first) and
        compiled into one template set, entered at the base name of the
        requested file.

        Raises:
            CompileError: If a chain file is missing, unreadable, or invalid.
        """
        chain = build_chain(view_path, resolve=self._resolve, layout_of=self._layout_of)

        sources: dict[str, str] = {}
        for name, file_path in zip(chain.view_paths, chain.files, strict=True):
            try:
                sources[name] = file_path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise CompileError(view_path, f"cannot read {name!r}: {exc}") from exc

        env = create_environment(self._config, sources, self._filters, self._globals)

        templates: dict[str, Template] = {}
        for name in chain.view_paths:
            try:
                templates[name] = env.get_template(name)
            except TemplateError as exc:
                raise CompileError(view_path, str(exc)) from exc

        return CompiledView(view_path, templates, chain.entry_name)

    # -- Lookup --

    def get_view(self, view_path: str) -> CompiledView | None:
        """Return the stored view, or compile it for this call only.

        Compile failures are logged and reported as ``None``.
        """
        with self._lock:
            view = self._views.get(view_path)
        if view is not None:
            return view

        try:
            return self.compile_view(view_path)
        except CompileError as exc:
            logger.warning("%s", exc)
            return None

    def get_partial_view(self, view_path: str) -> CompiledView | None:
        """Like ``get_view()``, re-entered at the base name of *view_path*."""
        view = self.get_view(view_path)
        if view is None:
            return None
        return view.lookup(PurePosixPath(view_path).name)

    # -- Warm-up --

    def precompile_all(self, root: str | Path | None = None) -> WarmupReport:
        """Compile and store every non-layout view under *root*.

        Defaults to the configured view directory. View paths are taken
        relative to *root* and resolved back through the cache's resolver,
        so *root* should be the directory that resolver points at.
        Failures are logged and skipped; those views are served through
        the lazy path later.

        Returns:
            Which views were stored and which failed, with the reason.
        """
        base = Path(root).resolve() if root is not None else self._config.root
        if not base.is_dir():
            logger.warning("View directory not found: %s", base)
            return WarmupReport()

        stored: list[str] = []
        failed: list[tuple[str, str]] = []
        for file_path in sorted(base.rglob(f"*{self._config.template_ext}")):
            if not file_path.is_file() or file_path.suffix != self._config.template_ext:
                continue
            view_path = self._config.view_path(file_path, base)
            if self._is_layout(view_path):
                continue
            try:
                view = self.compile_view(view_path)
            except CompileError as exc:
                failed.append((view_path, exc.reason))
                logger.warning("%s", exc)
                continue
            with self._lock:
                self._views[view_path] = view
            stored.append(view_path)

        logger.info("Precompiled %d views from %s (%d failed)", len(stored), base, len(failed))
        return WarmupReport(stored=tuple(stored), failed=tuple(failed))

    def clear(self) -> None:
        """Drop every stored view."""
        with self._lock:
            self._views.clear()
