"""
uq pass primitives.

- build_index:   run the single accumulation pass over records for given options.
- index_sources: the same pass over input paths, with the ceiling enforced
                 while each record is still being read.
- uq_bytes:      whole-buffer convenience (bytes in, bytes out) for library use.

These functions are UI-agnostic: they raise, and the CLI decides how to
report errors and which exit status to use.
"""

from __future__ import annotations

import io
from typing import BinaryIO, Iterable, Optional

from .index import OccurrenceIndex
from .io import iter_records, read_sources
from .options import UqOptions
from .render import render


def _new_index(opts: UqOptions) -> OccurrenceIndex:
    return OccurrenceIndex(
        max_bytes=opts.max_input_bytes,
        ignore_case=opts.ignore_case,
        limit_label=opts.max_input,
    )


def build_index(records: Iterable[bytes], opts: UqOptions) -> OccurrenceIndex:
    """
    Index already-split `records` under `opts` (case folding, byte ceiling).

    Raises InputTooLarge if the ceiling is crossed.
    """
    return _new_index(opts).extend(records)


def index_sources(paths: Iterable[str], opts: UqOptions,
                  stdin: Optional[BinaryIO] = None) -> OccurrenceIndex:
    """
    Read and index every path in order ("-" or no paths = stdin).

    The index doubles as the reader's byte budget, so an oversized record
    raises InputTooLarge after at most one extra chunk is read.
    """
    index = _new_index(opts)
    return index.extend(read_sources(paths, opts.delimiter, stdin=stdin, budget=index))


def uq_bytes(data: bytes, opts: UqOptions | None = None) -> bytes:
    """
    Deduplicate a complete buffer.

    Example:
        uq_bytes(b"b\\na\\nb\\n") -> b"b\\na\\n"
    """
    opts = (opts or UqOptions()).validate()
    index = _new_index(opts)
    index.extend(iter_records(io.BytesIO(data), opts.delimiter, index))
    return b"".join(render(index, opts))
