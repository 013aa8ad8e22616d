"""
Diagnostics on stderr.

Messages are printed through one rich Console bound to stderr, with markup
and highlighting off so paths such as "data[1].txt" are shown verbatim.
"""

from __future__ import annotations

from typing import NoReturn

from rich.console import Console

err_console = Console(stderr=True, markup=False, highlight=False, soft_wrap=True)


def warn(prog: str, msg: str) -> None:
    err_console.print(f"{prog}: warning: {msg}")


def error(prog: str, msg: str) -> None:
    err_console.print(f"{prog}: {msg}")


def die(prog: str, msg: str, status: int = 1) -> NoReturn:
    """Report `msg` and leave with `status`."""
    error(prog, msg)
    raise SystemExit(status)
