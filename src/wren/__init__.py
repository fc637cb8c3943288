"""Wren — view templates and typed request binding for small web apps.

Two facilities, used by the same request lifecycle:

- a compiled-view cache that resolves layout chains and renders full
  views or their ``Content`` block
- a binder that copies query-string and form values into dataclasses

Basic usage::

    from wren import QueryParams, ViewConfig, bind_new, create_views

    views = create_views(ViewConfig(view_dir="views"))

    def search(writer, request):
        params = bind_new(SearchParams, QueryParams(request.query_string))
        views.render_view(writer, request, "search/results.html", params)
"""

# Declare free-threading support (PEP 703)
_Py_mod_gil = 0

__version__ = "0.1.0"
__all__ = [
    "BufferedWriter",
    "CompileError",
    "CompiledView",
    "ConfigurationError",
    "ExecutionError",
    "FormData",
    "HTTPError",
    "NotFound",
    "QueryParams",
    "ValueBag",
    "ViewCache",
    "ViewConfig",
    "ViewRenderer",
    "WrenError",
    "bind",
    "bind_new",
    "create_views",
    "field",
    "to_context",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wren`` fast (kida is only imported on first view use)
    while providing a clean top-level API.
    """
    if name == "ViewConfig":
        from wren.config import ViewConfig

        return ViewConfig

    if name in ("ViewCache", "ViewRenderer", "CompiledView", "create_views"):
        from wren import templating as _tmpl

        return getattr(_tmpl, name)

    if name in ("bind", "bind_new", "field", "to_context"):
        from wren import binding as _binding

        return getattr(_binding, name)

    if name == "QueryParams":
        from wren.http.query import QueryParams

        return QueryParams

    if name == "FormData":
        from wren.http.forms import FormData

        return FormData

    if name == "BufferedWriter":
        from wren.http.writer import BufferedWriter

        return BufferedWriter

    if name == "ValueBag":
        from wren._internal.multimap import ValueBag

        return ValueBag

    if name in (
        "CompileError",
        "ConfigurationError",
        "ExecutionError",
        "HTTPError",
        "NotFound",
        "WrenError",
    ):
        from wren import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
