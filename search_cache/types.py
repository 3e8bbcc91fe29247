"""Shared datatypes for the search result cache.

These types are intentionally lightweight and dependency-free so they can be
used across the package (cache facade, prefix index, search service).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List


@dataclass(frozen=True)
class Product:
    """Catalog record returned by prefix searches."""

    product_id: str
    name: str
    price: float
    product_type: str = ""


@dataclass
class CacheEntry:
    """One cached result set plus its bookkeeping.

    ``value`` is always a list owned by the cache; callers only ever see copies.
    """

    value: List[Any]
    created_at: float
    access_count: int = 0
    hit_count: int = 0

    def snapshot(self) -> "CacheEntry":
        return CacheEntry(
            value=list(self.value),
            created_at=self.created_at,
            access_count=self.access_count,
            hit_count=self.hit_count,
        )


@dataclass(frozen=True)
class CacheStats:
    """Point-in-time cache statistics."""

    size: int
    capacity: int
    hit_ratio: float
    average_age: float  # seconds
    total_requests: int
    total_hits: int
    evictions: int = 0

    def summary(self) -> str:
        return (
            f"CacheStats[Size={self.size}/{self.capacity}, "
            f"HitRatio={self.hit_ratio * 100:.2f}%, "
            f"AvgAge={self.average_age:.3f}s, "
            f"Requests={self.total_requests}, Hits={self.total_hits}, "
            f"Evictions={self.evictions}]"
        )
