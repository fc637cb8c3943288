"""Built-in wren template filters.

Registered on every view environment. They produce values in the same
shapes the binder reads back, so a link or form rendered by a view
round-trips through ``bind()`` unchanged.
"""

from datetime import datetime
from typing import Any
from urllib.parse import quote, urlencode

from wren.binding.coerce import DATETIME_FORMAT


def qs(base: str, **params: Any) -> str:
    """Append query-string parameters to a URL path.

    Omits parameters whose values are falsy (None, "", 0, False, [])
    so callers can pass optional filters without manual guards. Lists
    and tuples repeat the key once per item, matching how multi-valued
    fields are bound.

    Example:
        {{ "/" | qs(page=page + 1, q=search, tag=tags) }}
        → "/?page=3&q=pika&tag=a&tag=b"

    """
    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        if not value:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((key, str(item)) for item in value)
        elif isinstance(value, bool):
            pairs.append((key, "true"))
        else:
            pairs.append((key, str(value)))
    if not pairs:
        return base
    encoded = urlencode(pairs, quote_via=quote)
    sep = "&" if "?" in base else "?"
    return f"{base}{sep}{encoded}"


def stamp(value: datetime | None) -> str:
    """Format a datetime as ``YYYY-MM-DD HH:MM:SS`` (empty for ``None``)."""
    if value is None:
        return ""
    return value.strftime(DATETIME_FORMAT)


# All built-in wren filters, registered automatically on every env.
BUILTIN_FILTERS: dict[str, Any] = {
    "qs": qs,
    "stamp": stamp,
}
