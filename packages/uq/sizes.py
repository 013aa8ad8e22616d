"""
Human-readable byte sizes for the input ceiling.

Grammar: a non-negative integer optionally followed by one unit letter.
  "512"  -> 512
  "10k"  -> 10 * 1024
  "256m" -> 256 * 1024**2
  "2g"   -> 2 * 1024**3
"""

from __future__ import annotations

import re
from typing import Dict

DEFAULT_MAX_INPUT = "256m"

SIZE_RE = re.compile(r"([0-9]+)([kmg]?)")

MULTIPLIERS: Dict[str, int] = {
    "": 1,
    "k": 1024,
    "m": 1024 ** 2,
    "g": 1024 ** 3,
}


def parse_size(text: str) -> int:
    """
    Convert a size string such as "256m" into a byte count.

    Raises ValueError if `text` does not match the grammar above.
    """
    m = SIZE_RE.fullmatch(text)
    if not m:
        raise ValueError(f"invalid size: {text!r} (expected N, Nk, Nm or Ng)")
    number, unit = m.groups()
    return int(number) * MULTIPLIERS[unit]


def format_size(nbytes: int) -> str:
    """Largest exact unit for `nbytes`, e.g. 268435456 -> "256m"."""
    for unit in ("g", "m", "k"):
        mult = MULTIPLIERS[unit]
        if nbytes and nbytes % mult == 0:
            return f"{nbytes // mult}{unit}"
    return str(nbytes)
