"""``wren compile`` — warm-up check for a view directory.

Runs the same eager pass the application runs at startup and prints
one line per view. Exits with code 1 if any view fails to compile.
"""

import argparse
import sys
from pathlib import Path

from wren.config import ViewConfig
from wren.templating.cache import ViewCache


def run_compile(args: argparse.Namespace) -> None:
    """Precompile ``args.view_dir`` and report the result."""
    view_dir = Path(args.view_dir)
    if not view_dir.is_dir():
        print(f"Error: view directory not found: {view_dir}", file=sys.stderr)
        raise SystemExit(1)

    cache = ViewCache(ViewConfig(view_dir=view_dir, template_ext=args.ext))
    report = cache.precompile_all()

    for view_path in report.stored:
        print(f"  ok    {view_path}")
    for view_path, reason in report.failed:
        print(f"  FAIL  {view_path}: {reason}")

    print(f"\n{len(report.stored)} compiled, {len(report.failed)} failed")
    if not report.ok:
        raise SystemExit(1)
