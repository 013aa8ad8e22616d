"""
Absolute path resolution for abspath.

Canonicalization is delegated to os.path.realpath (absolute, symlinks
resolved, "." and ".." collapsed). Paths need not exist.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal, Optional

PathKind = Literal["dir", "file", "missing"]

# colors used by abspath when writing to a terminal
KIND_COLORS = {
    "dir": "blue",
    "file": "green",
    "missing": "red",
}


def resolve(path: Optional[str] = None) -> str:
    """Canonical absolute form of `path` (the current directory if None or empty)."""
    return os.path.realpath(path or os.curdir)


def path_kind(path: str) -> PathKind:
    p = Path(path)
    if p.is_dir():
        return "dir"
    if p.exists():
        return "file"
    return "missing"
