"""View templates: layout chains, the compiled-view cache, and rendering."""

from wren.templating.cache import ViewCache, WarmupReport
from wren.templating.compiled import CompiledView
from wren.templating.layouts import LayoutChain, build_chain, extends_parent, is_layout_file
from wren.templating.render import CONTENT_BLOCK, ViewRenderer, create_views

__all__ = [
    "CONTENT_BLOCK",
    "CompiledView",
    "LayoutChain",
    "ViewCache",
    "ViewRenderer",
    "WarmupReport",
    "build_chain",
    "create_views",
    "extends_parent",
    "is_layout_file",
]
