"""Query string parameters as a ``ValueBag``."""

from urllib.parse import parse_qs

from wren._internal.multimap import MultiDict


class QueryParams(MultiDict):
    """Parsed, immutable query string.

    Accepts the raw bytes from the request line (or a ``str``), with or
    without the leading ``?``. Blank values are kept, so ``?flag=`` binds
    ``flag`` to ``""`` rather than leaving it absent.
    """

    __slots__ = ("_raw",)

    _raw: bytes

    def __init__(self, query_string: bytes | str = b"") -> None:
        raw = query_string.encode() if isinstance(query_string, str) else query_string
        raw = raw.removeprefix(b"?")
        text = raw.decode("utf-8", errors="replace")
        super().__init__(parse_qs(text, keep_blank_values=True))
        object.__setattr__(self, "_raw", raw)

    @property
    def raw(self) -> bytes:
        """The query string without its leading ``?``."""
        return self._raw
