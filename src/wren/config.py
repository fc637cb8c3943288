"""View configuration.

``ViewConfig`` is frozen; build a new one with ``dataclasses.replace()`` or
``ViewConfig.from_env()`` rather than mutating a shared instance.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path, PurePosixPath

from wren.errors import CompileError, ConfigurationError

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off", ""})


@dataclass(frozen=True, slots=True)
class ViewConfig:
    """View configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = ViewConfig(view_dir="templates", precompile=False)
    """

    # Views
    view_dir: str | Path = "views"
    template_ext: str = ".html"
    precompile: bool = True  # Compile every non-layout view at process start
    component_dirs: tuple[str | Path, ...] = ()  # Extra search paths for includes and imports

    # kida
    autoescape: bool = True
    trim_blocks: bool = True
    lstrip_blocks: bool = True
    debug: bool = False

    @property
    def root(self) -> Path:
        """The view directory as a resolved platform path."""
        return Path(self.view_dir).resolve()

    def resolve(self, view_path: str) -> Path:
        """Convert a slash-separated view path into a platform path.

        Raises:
            CompileError: If the view path is absolute or escapes the root.
        """
        pure = PurePosixPath(view_path)
        if pure.is_absolute() or ".." in pure.parts or not pure.parts:
            raise CompileError(view_path, "view path must be relative to the view root")
        return self.root.joinpath(*pure.parts)

    def view_path(self, file_path: Path, root: Path | None = None) -> str:
        """The slash-separated view path of *file_path*; inverse of :meth:`resolve`."""
        base = root if root is not None else self.root
        return file_path.resolve().relative_to(base.resolve()).as_posix()

    @classmethod
    def from_env(
        cls,
        prefix: str = "WREN_",
        environ: Mapping[str, str] | None = None,
    ) -> ViewConfig:
        """Build a config from ``{prefix}{FIELD}`` environment variables.

        Only scalar fields are read. ``component_dirs`` takes an
        ``os.pathsep``-separated list.

        Raises:
            ConfigurationError: If a boolean variable holds an unknown token.
        """
        env = os.environ if environ is None else environ
        config = cls()
        overrides: dict[str, object] = {}

        for f in fields(cls):
            raw = env.get(f"{prefix}{f.name.upper()}")
            if raw is None:
                continue
            if isinstance(getattr(config, f.name), bool):
                token = raw.strip().lower()
                if token in _TRUE:
                    overrides[f.name] = True
                elif token in _FALSE:
                    overrides[f.name] = False
                else:
                    msg = f"{prefix}{f.name.upper()} must be a boolean, got {raw!r}"
                    raise ConfigurationError(msg)
            elif f.name == "component_dirs":
                overrides[f.name] = tuple(p for p in raw.split(os.pathsep) if p)
            else:
                overrides[f.name] = raw

        ext = overrides.get("template_ext")
        if isinstance(ext, str) and not ext.startswith("."):
            msg = f"{prefix}TEMPLATE_EXT must start with '.', got {ext!r}"
            raise ConfigurationError(msg)

        return replace(config, **overrides)
