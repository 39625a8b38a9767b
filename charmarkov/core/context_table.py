# context_table.py - window -> ContextBucket mapping for a fixed window length

from __future__ import annotations

from typing import Dict, ItemsView, Iterator, Optional

from .context_bucket import ContextBucket
from .distribution import calculate_probabilities


class ContextTable:
    """Maps each observed context window (a str of `window_length` chars) to its bucket."""

    def __init__(self, window_length: int) -> None:
        self.window_length = window_length
        self._buckets: Dict[str, ContextBucket] = {}

    def get(self, window: str) -> Optional[ContextBucket]:
        return self._buckets.get(window)

    def bucket_for(self, window: str) -> ContextBucket:
        """Return the bucket for `window`, creating an empty one if needed."""
        bucket = self._buckets.get(window)
        if bucket is None:
            if len(window) != self.window_length:
                raise ValueError(
                    f"window {window!r} has length {len(window)}, expected {self.window_length}"
                )
            bucket = ContextBucket()
            self._buckets[window] = bucket
        return bucket

    def normalize(self) -> None:
        for bucket in self._buckets.values():
            calculate_probabilities(bucket)

    def clear(self) -> None:
        self._buckets.clear()

    def items(self) -> ItemsView[str, ContextBucket]:
        return self._buckets.items()

    def __len__(self) -> int:
        return len(self._buckets)

    def __contains__(self, window: object) -> bool:
        return window in self._buckets

    def __iter__(self) -> Iterator[str]:
        return iter(self._buckets)

    def __str__(self) -> str:
        return "".join(f"{window} : {bucket}\n" for window, bucket in self._buckets.items())
