"""
Output formatting for a finished pass.

Traversal:
  - default           : one representative per key, first-seen order
  - all-repeated mode : every record as it was read

Filter (per traversed record, using the key's final count):
  - unique   : count == 1
  - repeated : count >= 2
  - neither  : everything

Separators (all-repeated mode only), written as a lone delimiter:
  - none     : never
  - prepend  : before the first record of every group, including the first
  - separate : between two emitted records whose keys differ
"""

from __future__ import annotations

from typing import BinaryIO, Hashable, Iterator, Optional, Tuple

from .index import OccurrenceIndex, comparison_key
from .options import COUNT_WIDTH, UqOptions


def _traverse(index: OccurrenceIndex, opts: UqOptions) -> Iterator[Tuple[Hashable, bytes]]:
    if opts.all_repeated is not None:
        for rec in index.original:
            yield comparison_key(rec, index.ignore_case), rec
    else:
        yield from index.deduplicated


def _keep(count: int, opts: UqOptions) -> bool:
    if opts.unique:
        return count == 1
    if opts.repeated:
        return count >= 2
    return True


def render(index: OccurrenceIndex, opts: UqOptions) -> Iterator[bytes]:
    """
    Yield output chunks (records and separator lines, each ending in the
    delimiter) for `index` under `opts`.
    """
    delim = opts.delimiter
    method = opts.all_repeated
    prev_key: Optional[Hashable] = None
    emitted = False

    for key, rec in _traverse(index, opts):
        n = index.counts[key]
        if not _keep(n, opts):
            continue

        new_group = not emitted or key != prev_key
        if method == "prepend" and new_group:
            yield delim
        elif method == "separate" and emitted and key != prev_key:
            yield delim

        if opts.count:
            yield str(n).rjust(COUNT_WIDTH).encode("ascii") + b" " + rec + delim
        else:
            yield rec + delim

        prev_key = key
        emitted = True


def write_output(index: OccurrenceIndex, opts: UqOptions, out: BinaryIO) -> int:
    """Write the rendered output to a binary stream; returns bytes written."""
    written = 0
    for chunk in render(index, opts):
        out.write(chunk)
        written += len(chunk)
    out.flush()
    return written
