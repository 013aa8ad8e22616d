"""
Occurrence index for non-adjacent deduplication.

What this module does:
- Consumes records one at a time (a single forward pass, no sorting).
- Counts occurrences per comparison key (the record, or its case-folded form).
- Remembers first-seen order of keys separately from the counts, so output
  follows first appearance regardless of dict internals.
- Keeps every record in arrival order for the all-repeated output mode.
- Enforces a byte ceiling on the total input and aborts the pass above it.

Typical use:
    idx = OccurrenceIndex(max_bytes=parse_size("256m"), ignore_case=True)
    idx.extend(records)
    idx.count_of(b"foo")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Hashable, Iterable, List, Optional, Tuple

from .sizes import format_size

logger = logging.getLogger(__name__)


class InputTooLarge(RuntimeError):
    """The running byte total crossed the configured ceiling."""

    def __init__(self, limit: str, consumed: int):
        super().__init__(f"input exceeds maximum size of {limit} (at least {consumed} bytes read)")
        self.limit = limit
        self.consumed = consumed


def comparison_key(record: bytes, ignore_case: bool) -> Hashable:
    """
    Key used for equality and counting.

    Case folding decodes as UTF-8 (undecodable bytes survive through
    surrogateescape) so that non-ASCII letters fold too.
    """
    if not ignore_case:
        return record
    return record.decode("utf-8", "surrogateescape").casefold()


@dataclass
class OccurrenceIndex:
    max_bytes: Optional[int] = None
    ignore_case: bool = False
    limit_label: Optional[str] = None  # shown in the abort message; defaults to format_size(max_bytes)

    counts: Dict[Hashable, int] = field(default_factory=dict)
    # (key, first-seen record) in order of first appearance
    deduplicated: List[Tuple[Hashable, bytes]] = field(default_factory=list)
    # every record as read
    original: List[bytes] = field(default_factory=list)
    total_bytes: int = 0

    def add(self, record: bytes) -> int:
        """
        Index one record (without its delimiter) and return its new count.

        The delimiter is charged as one extra byte. A record that pushes the
        total over `max_bytes` raises InputTooLarge and is not indexed.
        """
        self.total_bytes += len(record) + 1
        self._check(self.total_bytes)

        self.original.append(record)
        key = comparison_key(record, self.ignore_case)
        n = self.counts.get(key, 0) + 1
        self.counts[key] = n
        if n == 1:
            self.deduplicated.append((key, record))
        return n

    def reserve(self, pending: int) -> None:
        """
        Charge an unfinished record of `pending` bytes (plus its delimiter)
        against the ceiling without indexing anything.
        """
        self._check(self.total_bytes + pending + 1)

    def _check(self, consumed: int) -> None:
        if self.max_bytes is not None and consumed > self.max_bytes:
            label = self.limit_label or format_size(self.max_bytes)
            logger.debug("ceiling %s crossed after %d records (%d bytes)",
                         label, len(self.original), consumed)
            raise InputTooLarge(label, consumed)

    def extend(self, records: Iterable[bytes]) -> "OccurrenceIndex":
        for rec in records:
            self.add(rec)
        logger.debug("indexed %d records, %d distinct, %d bytes",
                     len(self.original), len(self.counts), self.total_bytes)
        return self

    def count_of(self, record: bytes) -> int:
        """Occurrences of `record`'s key so far (0 if never seen)."""
        return self.counts.get(comparison_key(record, self.ignore_case), 0)

    def __len__(self) -> int:
        return len(self.deduplicated)
