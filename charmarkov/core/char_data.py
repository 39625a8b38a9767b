# char_data.py - one character's observed count and its derived probabilities

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


@dataclass
class CharData:
    """
    Frequency record for a single character inside a context bucket.

    Only `count` is meaningful during training. `p` and `cp` stay None
    until the owning bucket is normalized.
    """
    chr: str
    count: int = 1
    p: Optional[float] = None
    cp: Optional[float] = None

    def matches(self, ch: str) -> bool:
        return self.chr == ch

    def __str__(self) -> str:
        return f"({self.chr} {self.count} {self.p} {self.cp})"
