"""``wren render`` — render a single view to stdout.

Useful for checking a layout chain or a ``Content`` block without
starting an application. Exits with code 1 when nothing was rendered.
"""

import argparse
import json
import sys

from wren.config import ViewConfig
from wren.http.writer import BufferedWriter
from wren.templating.cache import ViewCache
from wren.templating.render import ViewRenderer


def run_render(args: argparse.Namespace) -> None:
    """Render ``args.view_path`` from ``args.view_dir``."""
    data: object = None
    if args.data is not None:
        try:
            data = json.loads(args.data)
        except json.JSONDecodeError as exc:
            print(f"Error: --data is not valid JSON: {exc}", file=sys.stderr)
            raise SystemExit(1) from exc
        if not isinstance(data, dict):
            print("Error: --data must be a JSON object", file=sys.stderr)
            raise SystemExit(1)

    renderer = ViewRenderer(ViewCache(ViewConfig(view_dir=args.view_dir, precompile=False)))
    writer = BufferedWriter()

    if args.partial:
        renderer.render_partial_view(writer, None, args.view_path, data)
    else:
        renderer.render_view(writer, None, args.view_path, data)

    if not writer.written or writer.status != 200:
        print(f"Error: {args.view_path} did not render (status {writer.status})", file=sys.stderr)
        raise SystemExit(1)

    sys.stdout.write(writer.text)
