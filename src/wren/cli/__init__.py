"""Wren CLI — view warm-up checks and one-off rendering.

Entry point registered as ``wren`` in ``pyproject.toml``::

    [project.scripts]
    wren = "wren.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``wren`` command."""
    parser = argparse.ArgumentParser(
        prog="wren",
        description="Wren — view templates and typed request binding.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level")
    subparsers = parser.add_subparsers(dest="command")

    # -- wren compile -----------------------------------------------------
    compile_parser = subparsers.add_parser("compile", help="Precompile every view in a directory")
    compile_parser.add_argument("view_dir", help="View root directory")
    compile_parser.add_argument(
        "--ext",
        default=".html",
        help="Template file extension (default: .html)",
    )

    # -- wren render ------------------------------------------------------
    render_parser = subparsers.add_parser("render", help="Render one view to stdout")
    render_parser.add_argument("view_dir", help="View root directory")
    render_parser.add_argument("view_path", help="View path relative to the root")
    render_parser.add_argument(
        "--partial",
        action="store_true",
        help="Render the Content block when the view defines one",
    )
    render_parser.add_argument(
        "--data",
        default=None,
        help="Template data as a JSON object",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command == "compile":
        from wren.cli._compile import run_compile

        run_compile(args)
    elif args.command == "render":
        from wren.cli._render import run_render

        run_render(args)
