# charmarkov/core/context_bucket.py
"""
ContextBucket - the per-window collection of CharData records.

Records are kept in first-seen order in a plain list, with a dict index
(char -> position) for constant time lookup on update. That order is the
one the normalizer accumulates over and the sampler scans, so it must not
change once probabilities are computed.
"""

from __future__ import annotations

from typing import Dict, Iterator, List

from .char_data import CharData


class ContextBucket:
    """Ordered, character-unique list of CharData for one context window."""

    def __init__(self) -> None:
        self._records: List[CharData] = []
        self._index: Dict[str, int] = {}

    # Updates -------------------------------------------------------------
    def update(self, ch: str) -> None:
        """
        Count one more occurrence of `ch`. A character new to the bucket is
        appended with count 1.
        """
        pos = self._index.get(ch)
        if pos is not None:
            self._records[pos].count += 1
            return
        self._index[ch] = len(self._records)
        self._records.append(CharData(ch))

    def remove(self, ch: str) -> bool:
        """Drop the record for `ch`. Returns False if it was not present."""
        pos = self._index.pop(ch, None)
        if pos is None:
            return False
        del self._records[pos]
        # positions after the removed one shift down by one
        for rec in self._records[pos:]:
            self._index[rec.chr] -= 1
        return True

    # Lookup --------------------------------------------------------------
    def index_of(self, ch: str) -> int:
        return self._index.get(ch, -1)

    def get(self, index: int) -> CharData:
        """Record at `index`. Negative or too-large indices raise IndexError."""
        if index < 0 or index >= len(self._records):
            raise IndexError(f"bucket index {index} out of range (size {len(self._records)})")
        return self._records[index]

    def first(self) -> CharData:
        return self.get(0)

    def last(self) -> CharData:
        return self.get(len(self._records) - 1)

    def total(self) -> int:
        return sum(rec.count for rec in self._records)

    def to_list(self) -> List[CharData]:
        return list(self._records)

    # Container protocol ----------------------------------------------------
    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[CharData]:
        return iter(self._records)

    def __contains__(self, ch: object) -> bool:
        return ch in self._index

    def __repr__(self) -> str:
        return f"ContextBucket({[(r.chr, r.count) for r in self._records]!r})"

    def __str__(self) -> str:
        if not self._records:
            return ""
        return "(" + " ".join(str(rec) for rec in self._records) + ")"
