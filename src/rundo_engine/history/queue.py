"""Fixed-capacity, most-recent-first history storage."""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterable, Iterator, List, Optional

from rundo_engine.errors import require_positive

from .delta import TextDelta


class BoundedHistoryQueue:
    """Double-ended queue of deltas whose head is the most recent entry.

    Pushing past ``capacity`` silently evicts the oldest entry from the tail.
    """

    def __init__(self, capacity: int) -> None:
        self._capacity = require_positive("history capacity", capacity)
        self._entries: Deque[TextDelta] = deque(maxlen=self._capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def is_full(self) -> bool:
        return len(self._entries) == self._capacity

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __iter__(self) -> Iterator[TextDelta]:
        return iter(self._entries)

    def push_front(self, delta: TextDelta) -> None:
        # deque(maxlen) drops from the opposite end on overflow.
        self._entries.appendleft(delta)

    def pop_front(self) -> Optional[TextDelta]:
        if not self._entries:
            return None
        return self._entries.popleft()

    def peek_front(self) -> Optional[TextDelta]:
        if not self._entries:
            return None
        return self._entries[0]

    def clear(self) -> None:
        self._entries.clear()

    def set_capacity(self, capacity: int) -> None:
        """Replace the capacity. Existing entries are discarded, not resized."""

        self._capacity = require_positive("history capacity", capacity)
        self._entries = deque(maxlen=self._capacity)

    def extend_back(self, deltas: Iterable[TextDelta]) -> None:
        """Append older entries behind the current ones, oldest last.

        Entries that would not fit are dropped, since the tail is the oldest
        end of the queue.
        """

        for delta in deltas:
            if self.is_full:
                break
            self._entries.append(delta)

    def to_list(self) -> List[TextDelta]:
        return list(self._entries)


__all__ = ["BoundedHistoryQueue"]
