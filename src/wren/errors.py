"""Wren exception hierarchy.

Shared across the view cache, the renderer, and the binder so every
module raises and catches the same types.

Coercion failures have no exception type: the binder resolves them to a
zero value (or leaves the field untouched) and never raises.
"""

from dataclasses import dataclass


class WrenError(Exception):
    """Base for all wren-specific errors."""


class ConfigurationError(WrenError):
    """Raised when view configuration is invalid.

    Typically raised by ``ViewConfig.from_env()`` at process start.
    """


class CompileError(WrenError):
    """A view could not be compiled.

    Covers a missing file, a read failure, a template syntax error, and a
    layout chain that loops back on itself. The view cache logs these and
    turns them into a ``None`` lookup result.
    """

    def __init__(self, view_path: str, reason: str) -> None:
        self.view_path = view_path
        self.reason = reason
        super().__init__(f"cannot compile view {view_path!r}: {reason}")


class ExecutionError(WrenError):
    """A compiled view failed while rendering against its data."""

    def __init__(self, view_path: str, reason: str) -> None:
        self.view_path = view_path
        self.reason = reason
        super().__init__(f"cannot execute view {view_path!r}: {reason}")


@dataclass(frozen=True, slots=True)
class HTTPError(WrenError):
    """An error that maps directly to an HTTP status code."""

    status: int
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — the requested view could not be rendered."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)
