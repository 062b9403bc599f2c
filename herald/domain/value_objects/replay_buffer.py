"""
Replay Buffer Value Object

Architectural Intent:
- Bounded FIFO history of resolved argument tuples for one channel
- Appending at capacity evicts the oldest entry
- Shrinking keeps the EARLIEST entries currently held, not the most recent
"""

from __future__ import annotations

from collections import deque
from typing import Any, Iterator

from herald.domain.errors import BufferSizeNotValidError


class ReplayBuffer:
    def __init__(self, capacity: int = 1) -> None:
        if capacity < 1:
            raise BufferSizeNotValidError(capacity)
        self._entries: deque[tuple[Any, ...]] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._entries.maxlen

    def record(self, args: tuple[Any, ...]) -> None:
        self._entries.append(tuple(args))

    def resize(self, capacity: int) -> None:
        """Change capacity, truncating to the first ``capacity`` entries."""
        if capacity < 1:
            raise BufferSizeNotValidError(capacity)
        kept = list(self._entries)[:capacity]
        self._entries = deque(kept, maxlen=capacity)

    def last(self, amount: int) -> list[tuple[Any, ...]]:
        """Return up to ``amount`` most recent entries, oldest first."""
        if amount < 1:
            raise BufferSizeNotValidError(amount)
        entries = list(self._entries)
        return entries[-amount:]

    def clear(self) -> None:
        self._entries.clear()

    def snapshot(self) -> list[tuple[Any, ...]]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[tuple[Any, ...]]:
        return iter(list(self._entries))
