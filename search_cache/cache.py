"""LRU cache for search result sets.

Entries live in a plain dict; access order lives in a ``RecencyTracker``. Every
public operation updates both under one lock so that the two always hold the
same set of keys.
"""

from __future__ import annotations

import logging
import threading
import time
from contextlib import nullcontext
from typing import Any, Callable, ContextManager, Dict, Iterable, List

from .config import CacheSettings
from .errors import InvalidConfigurationError, InvalidKeyError, InvalidValueError
from .recency import RecencyTracker
from .types import CacheEntry, CacheStats

logger = logging.getLogger(__name__)


class SearchResultCache:
    """Bounded cache with exact least-recently-used eviction.

    Values are ordered result collections. They are copied on the way in and
    on the way out, so callers may freely mutate what they pass or receive.
    ``get`` reorders keys, so it takes the same lock as the mutating calls.
    """

    def __init__(
        self,
        capacity: int,
        *,
        thread_safe: bool = True,
        clock: Callable[[], float] = time.time,
    ):
        if isinstance(capacity, bool) or not isinstance(capacity, int):
            raise InvalidConfigurationError(f"Cache capacity must be an integer: {capacity!r}")
        if capacity <= 0:
            raise InvalidConfigurationError(f"Cache capacity must be positive: {capacity}")

        self._capacity = capacity
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._order = RecencyTracker()
        self._lock: ContextManager[Any] = threading.RLock() if thread_safe else nullcontext()

        self._requests = 0
        self._hits = 0
        self._evictions = 0

    @classmethod
    def from_settings(
        cls, settings: CacheSettings, *, clock: Callable[[], float] = time.time
    ) -> "SearchResultCache":
        return cls(settings.capacity, thread_safe=settings.thread_safe, clock=clock)

    @property
    def capacity(self) -> int:
        return self._capacity

    def get(self, key: str | None) -> List[Any] | None:
        """Return a copy of the cached results, or None on a miss.

        A hit marks *key* most recently used. A ``None`` key is a plain miss
        and is not counted as a request.
        """
        if key is None:
            return None

        with self._lock:
            self._requests += 1
            entry = self._entries.get(key)
            if entry is None:
                return None

            self._order.touch(key)
            entry.access_count += 1
            entry.hit_count += 1
            self._hits += 1
            return list(entry.value)

    def put(self, key: str, value: Iterable[Any]) -> None:
        """Store a copy of *value* under *key*, evicting the LRU key if full.

        Re-putting an existing key replaces its value and creation time and
        never evicts another key.
        """
        if key is None:
            raise InvalidKeyError("Cache key cannot be None")
        results = self._copy_value(value)

        with self._lock:
            previous = self._entries.get(key)
            if previous is None and len(self._entries) >= self._capacity:
                self._evict_lru()

            entry = CacheEntry(value=results, created_at=self._clock())
            if previous is not None:
                entry.access_count = previous.access_count + 1
                entry.hit_count = previous.hit_count
            self._entries[key] = entry
            self._order.touch(key)

    def get_or_load(self, key: str, loader: Callable[[str], Iterable[Any]]) -> List[Any]:
        """Return cached results for *key*, computing and caching them on a miss.

        The loader runs outside the lock; concurrent misses may each call it.
        """
        if key is None:
            raise InvalidKeyError("Cache key cannot be None")
        cached = self.get(key)
        if cached is not None:
            return cached

        results = self._copy_value(loader(key))
        self.put(key, results)
        return results

    def refresh(self, key: str, loader: Callable[[str], Iterable[Any]]) -> List[Any]:
        """Reload *key* with *loader* and store the result, cached or not."""
        if key is None:
            raise InvalidKeyError("Cache key cannot be None")
        results = self._copy_value(loader(key))
        self.put(key, results)
        return results

    def warm_up(self, keys: Iterable[str], loader: Callable[[str], Iterable[Any]]) -> None:
        """Load every key in *keys* that is not cached yet."""
        for key in keys:
            self.get_or_load(key, loader)

    def peek(self, key: str | None) -> CacheEntry | None:
        """Return a snapshot of the entry without touching recency or counters."""
        if key is None:
            return None
        with self._lock:
            entry = self._entries.get(key)
            return entry.snapshot() if entry is not None else None

    def contains_key(self, key: str | None) -> bool:
        if key is None:
            return False
        with self._lock:
            return key in self._entries

    def remove(self, key: str | None) -> bool:
        if key is None:
            return False
        with self._lock:
            removed = self._entries.pop(key, None)
            self._order.discard(key)
            return removed is not None

    def invalidate_if(self, predicate: Callable[[str], bool]) -> int:
        """Remove every key matching *predicate*; return how many were removed."""
        with self._lock:
            doomed = [key for key in self._order if predicate(key)]
            for key in doomed:
                del self._entries[key]
                self._order.discard(key)
        if doomed:
            logger.debug("Invalidated %s cache entries", len(doomed))
        return len(doomed)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._order.clear()
            self._reset_counters()

    def reset_stats(self) -> None:
        """Zero the request, hit and eviction counters; entries are kept."""
        with self._lock:
            self._reset_counters()
        logger.debug("Cache statistics reset")

    def _reset_counters(self) -> None:
        self._requests = 0
        self._hits = 0
        self._evictions = 0

    def keys(self) -> List[str]:
        """Cached keys, least recently used first."""
        with self._lock:
            return list(self._order)

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def is_empty(self) -> bool:
        return self.size() == 0

    def is_full(self) -> bool:
        return self.size() >= self._capacity

    def get_capacity(self) -> int:
        return self._capacity

    def get_stats(self) -> CacheStats:
        with self._lock:
            now = self._clock()
            size = len(self._entries)
            total_age = sum(now - entry.created_at for entry in self._entries.values())
            return CacheStats(
                size=size,
                capacity=self._capacity,
                hit_ratio=self._hits / self._requests if self._requests > 0 else 0.0,
                average_age=total_age / size if size > 0 else 0.0,
                total_requests=self._requests,
                total_hits=self._hits,
                evictions=self._evictions,
            )

    def _evict_lru(self) -> None:
        lru_key = self._order.pop_oldest()
        if lru_key is None:
            return
        del self._entries[lru_key]
        self._evictions += 1
        logger.debug("Evicted least recently used key %s", lru_key)

    @staticmethod
    def _copy_value(value: Iterable[Any]) -> List[Any]:
        if value is None:
            raise InvalidValueError("Search results cannot be None")
        if isinstance(value, (str, bytes)):
            raise InvalidValueError("Search results must be a sequence of records, not a string")
        try:
            return list(value)
        except TypeError as e:
            raise InvalidValueError(f"Search results must be iterable: {value!r}") from e

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains_key(key)

    def __repr__(self) -> str:
        stats = self.get_stats()
        return (
            f"SearchResultCache[Size={stats.size}/{stats.capacity}, "
            f"HitRatio={stats.hit_ratio * 100:.2f}%]"
        )
