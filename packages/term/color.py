"""
Terminal color helper shared by abspath and rainbow.

colorize() is a pure formatting function; whether to call it with
enabled=True is decided once per stream by color_enabled().
"""

from __future__ import annotations

from typing import Sequence, TextIO

from rich.color import ColorSystem
from rich.style import Style

# rainbow rotation order
PALETTE: Sequence[str] = ("red", "yellow", "green", "cyan", "blue", "magenta")


def color_enabled(stream: TextIO) -> bool:
    """True when `stream` is an interactive terminal."""
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def colorize(text: str, color: str, enabled: bool = True) -> str:
    """
    Wrap `text` in ANSI SGR codes for `color` (any rich color name, optionally
    with attributes like "bold blue"). Returns `text` unchanged when disabled.
    """
    if not enabled or not text:
        return text
    return Style.parse(color).render(text, color_system=ColorSystem.STANDARD)


def palette_color(i: int, palette: Sequence[str] = PALETTE) -> str:
    """i-th color of the rotation (wraps around)."""
    return palette[i % len(palette)]
