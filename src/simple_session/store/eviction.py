"""Expiry-ordered eviction queue.

A binary min-heap of ``(expires, key)`` entries.  Entries are never removed
by key: a store that deletes a key leaves its entry in place and ignores it
when it is eventually popped.
"""
from __future__ import annotations

import heapq
from dataclasses import dataclass, field
from datetime import datetime


@dataclass(order=True, frozen=True)
class EvictionEntry:
    """A key scheduled for eviction at ``expires``."""

    expires: datetime
    key: str = field(compare=False)


class EvictionQueue:
    """Min-heap of eviction entries ordered by expiry."""

    def __init__(self) -> None:
        self._heap: list[EvictionEntry] = []

    def push(self, key: str, expires: datetime) -> None:
        """Schedule ``key`` for eviction at ``expires``."""
        heapq.heappush(self._heap, EvictionEntry(expires=expires, key=key))

    def pop(self) -> EvictionEntry:
        """Remove and return the entry with the earliest expiry.

        Raises
        ------
        IndexError
            If the queue is empty.
        """
        return heapq.heappop(self._heap)

    def peek(self) -> EvictionEntry:
        """Return the entry with the earliest expiry without removing it.

        Raises
        ------
        IndexError
            If the queue is empty.
        """
        return self._heap[0]

    def __len__(self) -> int:
        return len(self._heap)

    def __repr__(self) -> str:
        return f"EvictionQueue(entries={len(self._heap)})"
