# apps/cli/abspath.py
"""
abspath: print each PATH as a canonical absolute path.

Paths are resolved with os.path.realpath and need not exist. On a terminal
the output is colored by what the path is (directory, file, missing).

Usage:
    abspath ../notes ./build/out.txt
    abspath            # the current directory
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from packages.paths import KIND_COLORS, path_kind, resolve
from packages.term import __version__, color_enabled, colorize, error

PROG = "abspath"


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog=PROG, description="Print absolute, canonical forms of paths.")
    ap.add_argument("paths", nargs="*", metavar="PATH",
                    help="paths to resolve (default: current directory)")
    ap.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    use_color = color_enabled(sys.stdout)
    status = 0

    for path in args.paths or [None]:
        try:
            resolved = resolve(path)
        except OSError as e:
            error(PROG, f"{path}: {e.strerror or e}")
            status = 1
            continue
        color = KIND_COLORS[path_kind(resolved)]
        sys.stdout.write(colorize(resolved, color, use_color) + "\n")

    sys.stdout.flush()
    return status


if __name__ == "__main__":
    raise SystemExit(main())
