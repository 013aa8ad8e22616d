# apps/cli/rainbow.py
"""
rainbow: echo arguments, each one in the next color of a rotating palette.

Color is only used when stdout is a terminal; piped output is plain text.

Usage:
    rainbow hello brave new world
    rainbow -n no trailing newline
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional, Sequence

from packages.term import PALETTE, __version__, color_enabled, colorize, palette_color

PROG = "rainbow"


def paint_words(words: Sequence[str], enabled: bool, palette: Sequence[str] = PALETTE) -> List[str]:
    """
    Color each word with the next palette entry, starting over at the first
    color on every call.
    """
    painted = []
    for i, word in enumerate(words):
        painted.append(colorize(word, palette_color(i, palette), enabled))
    return painted


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog=PROG, description="Print arguments in rotating colors.")
    ap.add_argument("-n", dest="newline", action="store_false",
                    help="do not output the trailing newline")
    ap.add_argument("words", nargs="*", metavar="WORD")
    ap.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    line = " ".join(paint_words(args.words, color_enabled(sys.stdout)))
    sys.stdout.write(line + ("\n" if args.newline else ""))
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
