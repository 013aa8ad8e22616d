# apps/cli/uq.py
"""
uq: report or omit repeated lines, without requiring sorted input.

Unlike classic uniq, duplicates do not have to be adjacent: every distinct
line is remembered, and output follows the order in which each line was
first seen.

This script:
  1) Parses and validates options (conflicts are usage errors, exit 2).
  2) Checks every declared input file up front (exit 2 on any problem).
  3) Indexes all records in one pass, aborting above --max-input (exit 1).
  4) Writes the formatted result to the output (stdout by default).

Usage:
    uq names.txt
    uq -c -i a.txt b.txt counts.txt
    uq --all-repeated=separate -d -z < records.bin
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional, Tuple

from packages.term import __version__, die, error, warn
from packages.uq import (
    DEFAULT_MAX_INPUT,
    SEPARATOR_METHODS,
    InputFileError,
    InputTooLarge,
    UqOptions,
    check_input_file,
    index_sources,
    parse_size,
    write_output,
)
from packages.uq.io import STDIO

PROG = "uq"
EXIT_USAGE = 2
EXIT_FATAL = 1


class _Parser(argparse.ArgumentParser):
    """ArgumentParser whose errors end with a pointer to --help."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: {message}\nTry '{self.prog} --help' for more information.\n")


def _size_arg(text: str) -> str:
    try:
        parse_size(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e
    return text


def build_parser() -> argparse.ArgumentParser:
    ap = _Parser(
        prog=PROG,
        description="Filter repeated lines from INPUT (or standard input), "
                    "writing to OUTPUT (or standard output). "
                    "Repeated lines need not be adjacent.",
        usage="%(prog)s [OPTION]... [INPUT]... [OUTPUT]",
    )
    ap.add_argument("-c", "--count", action="store_true",
                    help="prefix lines by the number of occurrences")
    ap.add_argument("-d", "--repeated", action="store_true",
                    help="only print duplicate lines, one for each group")
    ap.add_argument("-D", dest="all_repeated", action="store_const", const="none",
                    help="print all duplicate lines (same as --all-repeated=none)")
    ap.add_argument("--all-repeated", dest="all_repeated", nargs="?", const="none",
                    choices=SEPARATOR_METHODS, metavar="METHOD",
                    help="like -D, but allow separating groups with an empty line; "
                         "METHOD={none(default),prepend,separate}. Write the method "
                         "as --all-repeated=METHOD: a separate word after the option "
                         "is read as METHOD, not as an input file")
    ap.add_argument("-u", "--unique", action="store_true",
                    help="only print unique lines")
    ap.add_argument("-i", "--ignore-case", action="store_true",
                    help="ignore differences in case when comparing")
    ap.add_argument("-z", "--zero-terminated", action="store_true",
                    help="line delimiter is NUL, not newline")
    ap.add_argument("-XM", "--max-input", type=_size_arg, default=DEFAULT_MAX_INPUT, metavar="SIZE",
                    help=f"abort if the input exceeds SIZE bytes; k, m, g suffixes "
                         f"allowed (default: {DEFAULT_MAX_INPUT})")
    ap.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    ap.add_argument("--debug", action="store_true", help=argparse.SUPPRESS)
    ap.add_argument("paths", nargs="*", help=argparse.SUPPRESS)
    return ap


def split_paths(paths: List[str]) -> Tuple[List[str], str]:
    """
    Positional arguments -> (inputs, output).

      []            -> ([], "-")      stdin to stdout
      [a]           -> ([a], "-")
      [a, b, ..., z]-> ([a, b, ...], z)
    """
    if len(paths) <= 1:
        return list(paths), STDIO
    return list(paths[:-1]), paths[-1]


def _silence_stdout() -> None:
    """Point stdout at devnull so the interpreter's final flush cannot fail again."""
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, sys.stdout.fileno())


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    # 1) Options -> typed config; conflicts are usage errors
    opts = UqOptions(
        count=args.count,
        repeated=args.repeated,
        all_repeated=args.all_repeated,
        unique=args.unique,
        ignore_case=args.ignore_case,
        zero_terminated=args.zero_terminated,
        max_input=args.max_input,
    )
    try:
        opts.validate()
    except ValueError as e:
        ap.error(str(e))

    for note in opts.advisories():
        warn(PROG, note)

    # 2) Pre-flight every declared input before reading anything
    inputs, output = split_paths(args.paths)
    bad = 0
    for path in inputs:
        try:
            check_input_file(path)
        except InputFileError as e:
            error(PROG, str(e))
            bad += 1
    if bad:
        return EXIT_USAGE

    # 3) Single pass over the concatenated inputs
    try:
        index = index_sources(inputs, opts)
    except InputTooLarge as e:
        die(PROG, f"{e}; use -XM/--max-input to raise the limit", EXIT_FATAL)
    except OSError as e:
        die(PROG, f"{e.filename or 'input'}: {e.strerror or e}", EXIT_FATAL)

    # 4) Output is opened only now, so an aborted run leaves it untouched
    try:
        if output == STDIO:
            write_output(index, opts, getattr(sys.stdout, "buffer", sys.stdout))
        else:
            with open(output, "wb") as f:
                write_output(index, opts, f)
    except BrokenPipeError:
        # reader went away (e.g. `uq big.txt | head -1`); stop quietly
        _silence_stdout()
        return EXIT_FATAL
    except OSError as e:
        die(PROG, f"{e.filename or 'output'}: {e.strerror or e}", EXIT_FATAL)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
