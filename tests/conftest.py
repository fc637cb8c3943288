"""Shared fixtures: on-disk view trees for the cache and renderer tests."""

from collections.abc import Callable
from pathlib import Path

import pytest

from wren.config import ViewConfig
from wren.templating.cache import ViewCache

BASE_LAYOUT = (
    "<html><head><title>{% block title %}Site{% endblock %}</title></head>"
    "<body>{% block Content %}{% endblock %}</body></html>"
)

SECTION_LAYOUT = '{% extends "layouts/_base.html" %}{% block title %}Docs{% endblock %}'

STANDARD_VIEWS: dict[str, str] = {
    "layouts/_base.html": BASE_LAYOUT,
    "layouts/_section.html": SECTION_LAYOUT,
    "home/index.html": (
        '{% extends "layouts/_base.html" %}'
        "{% block Content %}<h1>{{ title }}</h1>{% endblock %}"
    ),
    "docs/page.html": (
        '{% extends "layouts/_section.html" %}'
        "{% block Content %}<article>{{ body }}</article>{% endblock %}"
    ),
    "widgets/card.html": (
        '<div class="card">'
        "{% block Content %}<p>{{ body }}</p>{% endblock %}"
        "</div>"
    ),
    "plain.html": "Hello, {{ name }}!",
}

type WriteViews = Callable[[dict[str, str]], Path]


@pytest.fixture
def write_views(tmp_path: Path) -> WriteViews:
    """Return a helper that writes ``{view path: source}`` under a view root."""
    root = tmp_path / "views"
    root.mkdir()

    def _write(files: dict[str, str]) -> Path:
        for view_path, source in files.items():
            target = root / view_path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(source, encoding="utf-8")
        return root

    return _write


@pytest.fixture
def view_dir(write_views: WriteViews) -> Path:
    """A view root holding ``STANDARD_VIEWS``."""
    return write_views(STANDARD_VIEWS)


@pytest.fixture
def cache(view_dir: Path) -> ViewCache:
    """A cold (not precompiled) cache over ``view_dir``."""
    return ViewCache(ViewConfig(view_dir=view_dir, precompile=False))
