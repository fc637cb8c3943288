"""Response-writer boundary consumed by the view renderer.

Routing and response delivery belong to the host framework. The renderer
only needs somewhere to write rendered text and a way to answer
"not found", so both are expressed as small structural types here.
"""

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from wren.errors import NotFound


@runtime_checkable
class ResponseWriter(Protocol):
    """Anything rendered output can be written to."""

    def write(self, data: str) -> object: ...
    def set_status(self, status: int) -> object: ...


# Invoked with (writer, request) when a view fails to execute
type NotFoundResponder = Callable[[ResponseWriter, Any], object]


class BufferedWriter:
    """In-memory ``ResponseWriter``.

    Collects written chunks so a caller (or a test) can inspect the
    outcome after rendering::

        writer = BufferedWriter()
        renderer.render_view(writer, request, "home/index.html", data)
        writer.status, writer.text
    """

    __slots__ = ("_chunks", "content_type", "status")

    def __init__(self, content_type: str = "text/html; charset=utf-8") -> None:
        self._chunks: list[str] = []
        self.content_type = content_type
        self.status = 200

    def write(self, data: str) -> int:
        self._chunks.append(data)
        return len(data)

    def set_status(self, status: int) -> None:
        self.status = status

    @property
    def text(self) -> str:
        """Everything written so far."""
        return "".join(self._chunks)

    @property
    def written(self) -> bool:
        """Whether anything has been written."""
        return bool(self._chunks)

    def __repr__(self) -> str:
        return f"BufferedWriter(status={self.status}, {len(self.text)} chars)"


def respond_not_found(writer: ResponseWriter, request: Any) -> None:
    """Default not-found collaborator: 404 with a plain body."""
    error = NotFound()
    writer.set_status(error.status)
    writer.write(error.detail)
