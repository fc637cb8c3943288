"""Form bodies as value bags: URL-encoded and multipart.

``parse_form_data()`` dispatches on the request's content type, so the
same binder call serves GET and POST handlers::

    form = parse_form_data(body, content_type)
    params = bind_new(SignupForm, form)

Multipart bodies need ``python-multipart`` (``pip install wren[forms]``).
Uploaded files are not text values, so their parts are dropped and only
the ordinary fields reach the binder.
"""

from typing import Any
from urllib.parse import parse_qs

from wren._internal.multimap import MultiDict
from wren.errors import ConfigurationError

URLENCODED = "application/x-www-form-urlencoded"
MULTIPART = "multipart/form-data"


class FormData(MultiDict):
    """Parsed, immutable form fields. Checkboxes and multi-selects keep every value."""

    __slots__ = ()

    @classmethod
    def from_urlencoded(cls, body: bytes | str, encoding: str = "utf-8") -> FormData:
        """Parse an ``application/x-www-form-urlencoded`` body."""
        if isinstance(body, bytes):
            body = body.decode(encoding, errors="replace")
        return cls(parse_qs(body, keep_blank_values=True, encoding=encoding))


def parse_form_data(body: bytes, content_type: str) -> FormData:
    """Parse a request body according to its ``Content-Type``.

    Raises:
        ConfigurationError: A multipart body arrived but ``python-multipart``
            is not installed.
        ValueError: The content type is not a form encoding, or a multipart
            type carries no boundary.
    """
    media_type = content_type.partition(";")[0].strip().lower()
    if media_type == URLENCODED:
        return FormData.from_urlencoded(body)
    if media_type == MULTIPART:
        return _parse_multipart(body, content_type)
    msg = f"Unsupported form content type: {content_type!r}"
    raise ValueError(msg)


class _FieldCollector:
    """``MultipartParser`` callbacks that keep text fields and skip file parts."""

    __slots__ = ("_buffer", "_header", "_name", "_parse_header", "_upload", "fields")

    def __init__(self, parse_header: Any) -> None:
        self._parse_header = parse_header
        self._header = ""
        self._buffer = bytearray()
        self._name: str | None = None
        self._upload = False
        self.fields: dict[str, list[str]] = {}

    def callbacks(self) -> dict[str, Any]:
        return {
            "on_part_begin": self.part_begin,
            "on_part_data": self.part_data,
            "on_part_end": self.part_end,
            "on_header_field": self.header_field,
            "on_header_value": self.header_value,
        }

    def part_begin(self) -> None:
        self._buffer = bytearray()
        self._name = None
        self._upload = False

    def part_data(self, data: bytes, start: int, end: int) -> None:
        self._buffer += data[start:end]

    def part_end(self) -> None:
        if self._name is None or self._upload:
            return
        value = self._buffer.decode("utf-8", errors="replace")
        self.fields.setdefault(self._name, []).append(value)

    def header_field(self, data: bytes, start: int, end: int) -> None:
        self._header = data[start:end].decode("latin-1").lower()

    def header_value(self, data: bytes, start: int, end: int) -> None:
        if self._header != "content-disposition":
            return
        _, params = self._parse_header(data[start:end])
        if (name := params.get(b"name")) is not None:
            self._name = name.decode("utf-8")
        self._upload = b"filename" in params


def _parse_multipart(body: bytes, content_type: str) -> FormData:
    try:
        from python_multipart.multipart import MultipartParser, parse_options_header
    except ImportError:
        msg = (
            "Multipart form parsing requires the 'python-multipart' package. "
            "Install it with: pip install wren[forms]"
        )
        raise ConfigurationError(msg) from None

    _, options = parse_options_header(content_type.encode("latin-1"))
    boundary = options.get(b"boundary")
    if boundary is None:
        msg = "Multipart form data missing boundary parameter"
        raise ValueError(msg)

    collector = _FieldCollector(parse_options_header)
    parser = MultipartParser(boundary, collector.callbacks())
    parser.write(body)
    parser.finalize()
    return FormData(collector.fields)
