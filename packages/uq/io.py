"""
Record I/O for uq.

- check_input_file: eager pre-flight check of a declared input path.
- iter_records:     split a binary stream into records on a delimiter.
- read_sources:     concatenate records from several inputs ("-" = stdin).
"""

from __future__ import annotations

import os
import stat
import sys
from pathlib import Path
from typing import BinaryIO, Iterable, Iterator, List, Optional, Protocol

STDIO = "-"
CHUNK_SIZE = 64 * 1024


class InputFileError(Exception):
    """A declared input cannot be read; `reason` says which check failed."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


def check_input_file(path: str) -> None:
    """
    Raise InputFileError unless `path` is an existing, readable regular file.
    The literal "-" (standard input) always passes.
    """
    if path == STDIO:
        return
    p = Path(path)
    if not p.exists():
        raise InputFileError(path, "no such file")
    if p.is_dir():
        raise InputFileError(path, "is a directory")
    if not stat.S_ISREG(p.stat().st_mode):
        raise InputFileError(path, "not a regular file")
    if not os.access(p, os.R_OK):
        raise InputFileError(path, "permission denied")


class ByteBudget(Protocol):
    def reserve(self, pending: int) -> None: ...


def iter_records(stream: BinaryIO, delimiter: bytes = b"\n",
                 budget: Optional[ByteBudget] = None) -> Iterator[bytes]:
    """
    Yield records from `stream` without their delimiter.

    A trailing delimiter does not produce an empty final record; a final
    record with no delimiter is still yielded.

    Each chunk is scanned once; an unfinished record is kept as a list of
    pieces and joined when its delimiter arrives. With a `budget`, the
    unfinished record is charged after every chunk, so a record that can
    never fit aborts before the rest of it is read.
    """
    parts: List[bytes] = []
    pending = 0
    step = len(delimiter)
    while True:
        chunk = stream.read(CHUNK_SIZE)
        if not chunk:
            break
        start = 0
        while True:
            end = chunk.find(delimiter, start)
            if end < 0:
                break
            parts.append(chunk[start:end])
            yield b"".join(parts)
            parts = []
            pending = 0
            start = end + step
        tail = chunk[start:]
        if tail:
            parts.append(tail)
            pending += len(tail)
            if budget is not None:
                budget.reserve(pending)
    if parts:
        yield b"".join(parts)


def _stdin_binary() -> BinaryIO:
    return getattr(sys.stdin, "buffer", sys.stdin)


def read_sources(paths: Iterable[str], delimiter: bytes = b"\n",
                 stdin: Optional[BinaryIO] = None,
                 budget: Optional[ByteBudget] = None) -> Iterator[bytes]:
    """
    Records from every path in order. An empty `paths` reads standard input.
    Files are opened lazily, one at a time; `budget` is passed to iter_records.
    """
    paths = list(paths) or [STDIO]
    for path in paths:
        if path == STDIO:
            yield from iter_records(stdin or _stdin_binary(), delimiter, budget)
            continue
        with open(path, "rb") as f:
            yield from iter_records(f, delimiter, budget)
