"""Access-order bookkeeping for the LRU cache."""

from __future__ import annotations

from collections import OrderedDict
from typing import Iterator


class RecencyTracker:
    """Keys ordered least-recently-used first.

    Backed by an OrderedDict (a hash map threaded with a doubly linked list),
    so touching, discarding and popping the oldest key are all O(1) average,
    including relocation of a key from the middle of the order.
    """

    def __init__(self) -> None:
        self._order: OrderedDict[str, None] = OrderedDict()

    def touch(self, key: str) -> None:
        """Append *key* at the most-recent end, relocating it if present."""
        if key in self._order:
            self._order.move_to_end(key)
        else:
            self._order[key] = None

    def discard(self, key: str) -> None:
        self._order.pop(key, None)

    def pop_oldest(self) -> str | None:
        """Remove and return the least-recently-used key, or None when empty."""
        if not self._order:
            return None
        key, _ = self._order.popitem(last=False)
        return key

    def clear(self) -> None:
        self._order.clear()

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, key: object) -> bool:
        return key in self._order

    def __iter__(self) -> Iterator[str]:
        return iter(self._order)
