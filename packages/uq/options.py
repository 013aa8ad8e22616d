"""
Typed configuration for a `uq` run.

The command line maps 1:1 onto UqOptions; validate() is the single place
where conflicting combinations are rejected, and advisories() lists the
non-fatal warnings a run should print.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .sizes import DEFAULT_MAX_INPUT, parse_size

# Blank-line policies for --all-repeated
SEPARATOR_METHODS = ("none", "prepend", "separate")

# Width of the right-justified count field (same as classic uniq -c)
COUNT_WIDTH = 7


class OptionConflict(ValueError):
    """Two options were given that cannot be combined."""


@dataclass(frozen=True)
class UqOptions:
    count: bool = False
    repeated: bool = False
    all_repeated: Optional[str] = None  # None, or one of SEPARATOR_METHODS
    unique: bool = False
    ignore_case: bool = False
    zero_terminated: bool = False
    max_input: str = DEFAULT_MAX_INPUT

    @property
    def delimiter(self) -> bytes:
        return b"\0" if self.zero_terminated else b"\n"

    @property
    def max_input_bytes(self) -> int:
        return parse_size(self.max_input)

    def validate(self) -> "UqOptions":
        """
        Reject impossible combinations; returns self so callers can chain.

        Raises:
          OptionConflict  for -d/-u and --all-repeated/-u
          ValueError      for an unknown separator method or bad size
        """
        if self.repeated and self.unique:
            raise OptionConflict("options -d/--repeated and -u/--unique are mutually exclusive")
        if self.all_repeated is not None and self.unique:
            raise OptionConflict("options -D/--all-repeated and -u/--unique are mutually exclusive")
        if self.all_repeated is not None and self.all_repeated not in SEPARATOR_METHODS:
            raise ValueError(
                f"invalid --all-repeated method: {self.all_repeated!r} "
                f"(one of: {', '.join(SEPARATOR_METHODS)})")
        parse_size(self.max_input)
        return self

    def advisories(self) -> List[str]:
        """Human-readable warnings for valid but pointless combinations."""
        notes: List[str] = []
        if self.all_repeated == "none" and not (self.count or self.repeated):
            notes.append(
                "--all-repeated=none without -c or -d prints every input record unchanged")
        return notes
