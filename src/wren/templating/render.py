"""Render entry points: full views and partial views.

Failure policy:

- lookup failure (the view does not compile): already logged by the
  cache; nothing is written and the not-found responder is *not* called
- execution failure (the view compiles but fails against its data):
  logged, then the not-found responder answers the request

The first case leaves the response untouched. Callers that need a 404
for unknown views check ``ViewCache.get_view()`` themselves before
rendering.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from wren.config import ViewConfig
from wren.errors import ExecutionError
from wren.http.writer import NotFoundResponder, ResponseWriter, respond_not_found
from wren.templating.cache import ViewCache
from wren.templating.compiled import CompiledView

logger = logging.getLogger("wren.templating")

# Block executed instead of the whole view by partial rendering
CONTENT_BLOCK = "Content"


class ViewRenderer:
    """Renders views from a ``ViewCache`` into response writers."""

    __slots__ = ("_cache", "_not_found")

    def __init__(self, cache: ViewCache, not_found: NotFoundResponder = respond_not_found) -> None:
        self._cache = cache
        self._not_found = not_found

    @property
    def cache(self) -> ViewCache:
        return self._cache

    def render_view(self, writer: ResponseWriter, request: Any, view_path: str, data: Any) -> None:
        """Render the full view at *view_path* into *writer*."""
        view = self._cache.get_view(view_path)
        if view is None:
            return
        self._execute(writer, request, view, None, data)

    def render_partial_view(
        self, writer: ResponseWriter, request: Any, view_path: str, data: Any
    ) -> None:
        """Render the ``Content`` block of *view_path*, or the whole view without one.

        The block is taken from the view itself or, when the view does not
        override it, from the nearest layout that defines it.
        """
        view = self._cache.get_partial_view(view_path)
        if view is None:
            return
        owner = view.find_block(CONTENT_BLOCK)
        if owner is None:
            self._execute(writer, request, view, None, data)
        else:
            self._execute(writer, request, owner, CONTENT_BLOCK, data)

    def _execute(
        self,
        writer: ResponseWriter,
        request: Any,
        view: CompiledView,
        block: str | None,
        data: Any,
    ) -> None:
        try:
            if block is None:
                output = view.execute(data)
            else:
                output = view.execute_block(block, data)
        except ExecutionError:
            logger.exception("View %s failed to render", view.view_path)
            self._not_found(writer, request)
            return
        writer.write(output)


def create_views(
    config: ViewConfig | None = None,
    *,
    filters: Mapping[str, Callable[..., Any]] | None = None,
    globals_: Mapping[str, Any] | None = None,
    not_found: NotFoundResponder = respond_not_found,
) -> ViewRenderer:
    """Build the process-wide view cache and its renderer.

    Called once at startup. Runs the warm-up pass when
    ``config.precompile`` is set, then hands back a renderer to pass to
    whatever owns request routing.
    """
    cache = ViewCache(config, filters=filters, globals_=globals_)
    if cache.config.precompile:
        cache.precompile_all()
    return ViewRenderer(cache, not_found=not_found)
