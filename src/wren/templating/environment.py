"""Kida environment setup for compiled views.

Each compiled view owns one kida Environment whose primary loader holds
exactly the files of its layout chain. ``{% extends %}`` and block
overrides therefore resolve across the chain files and nothing else;
``config.component_dirs`` are searched afterwards for includes and
macro imports shared between views.
"""

from collections.abc import Callable, Mapping
from typing import Any

from kida import ChoiceLoader, DictLoader, Environment, FileSystemLoader

from wren.config import ViewConfig
from wren.templating.filters import BUILTIN_FILTERS


def create_environment(
    config: ViewConfig,
    sources: Mapping[str, str],
    filters: Mapping[str, Callable[..., Any]] | None = None,
    globals_: Mapping[str, Any] | None = None,
) -> Environment:
    """Create a kida Environment over one layout chain.

    Args:
        config: View configuration (escaping and whitespace options).
        sources: Template name -> source for every chain file.
        filters: User filters, registered after (and over) the built-ins.
        globals_: User globals.
    """
    loaders: list[Any] = [DictLoader(dict(sources))]

    # Shared partials and macros
    loaders.extend(FileSystemLoader(str(d)) for d in config.component_dirs)

    env = Environment(
        loader=ChoiceLoader(loaders),
        autoescape=config.autoescape,
        auto_reload=config.debug,
        trim_blocks=config.trim_blocks,
        lstrip_blocks=config.lstrip_blocks,
    )

    env.update_filters(BUILTIN_FILTERS)

    if filters:
        env.update_filters(dict(filters))

    for name, value in (globals_ or {}).items():
        env.add_global(name, value)

    return env
