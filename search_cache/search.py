"""Prefix product search backed by the LRU result cache."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Iterable, List

from .cache import SearchResultCache
from .config import DEFAULT_CAPACITY, CacheSettings
from .trie import PrefixIndex
from .types import CacheStats, Product

logger = logging.getLogger(__name__)

KEY_PREFIX = "prefix:"
_LIMIT_MARKER = ":limit:"

ProductSource = Callable[[], Iterable[Product]]


def make_cache_key(prefix: str, limit: int | None = None) -> str:
    """Derive a stable cache key from search parameters."""
    key = f"{KEY_PREFIX}{prefix.strip().lower()}"
    if limit is not None:
        key = f"{key}{_LIMIT_MARKER}{limit}"
    return key


def prefix_from_key(key: str) -> str | None:
    """Return the normalized search prefix encoded in *key*, or None."""
    if not key.startswith(KEY_PREFIX):
        return None
    body = key[len(KEY_PREFIX):]
    head, marker, tail = body.rpartition(_LIMIT_MARKER)
    if marker and tail.isdigit():
        return head
    return body


class CachedSearchService:
    """Prefix search over a product catalog with cached result sets.

    Index reads that fill the cache and index changes that invalidate it run
    under one lock, so a search never caches results that an add or remove
    has already invalidated.
    """

    def __init__(
        self,
        product_source: ProductSource,
        cache: SearchResultCache | None = None,
        *,
        cache_size: int = DEFAULT_CAPACITY,
        settings: CacheSettings | None = None,
    ):
        if product_source is None:
            raise ValueError("product_source cannot be None")

        self._product_source = product_source
        if cache is not None:
            self._cache = cache
        elif settings is not None:
            self._cache = SearchResultCache.from_settings(settings)
        else:
            self._cache = SearchResultCache(cache_size)
        self._index = PrefixIndex()
        self._lock = threading.RLock()
        self._load_index()

    @property
    def cache(self) -> SearchResultCache:
        return self._cache

    def search_by_prefix(self, prefix: str | None) -> List[Product]:
        if prefix is None or not prefix.strip():
            return []
        return self._search_cached(make_cache_key(prefix), lambda: self._index.search(prefix))

    def search_by_prefix_with_limit(self, prefix: str | None, limit: int) -> List[Product]:
        if prefix is None or not prefix.strip() or limit <= 0:
            return []
        return self._search_cached(
            make_cache_key(prefix, limit),
            lambda: self._index.search_with_limit(prefix, limit),
        )

    def add_product(self, product: Product) -> None:
        if product is None:
            raise ValueError("product cannot be None")
        with self._lock:
            self._index.insert(product)
            self._invalidate_for(product)

    def remove_product(self, product: Product | None) -> None:
        if product is None:
            return
        with self._lock:
            self._index.remove(product)
            self._invalidate_for(product)

    def refresh_index(self) -> None:
        """Rebuild the index from the product source and drop all cached results."""
        with self._lock:
            self._index.clear()
            self._cache.clear()
            self._load_index()

    def _search_cached(self, key: str, run: Callable[[], List[Product]]) -> List[Product]:
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        with self._lock:
            results = run()
            self._cache.put(key, results)
        return results

    def get_cache_stats(self) -> CacheStats:
        return self._cache.get_stats()

    def index_size(self) -> int:
        return len(self._index)

    def is_index_empty(self) -> bool:
        return len(self._index) == 0

    def clear(self) -> None:
        with self._lock:
            self._index.clear()
            self._cache.clear()

    def _load_index(self) -> None:
        count = 0
        for product in self._product_source():
            self._index.insert(product)
            count += 1
        logger.debug("Indexed %s products", count)

    def _invalidate_for(self, product: Product) -> None:
        # Any cached prefix of the product's name may now be stale.
        name = product.name.lower()

        def affected(key: str) -> bool:
            prefix = prefix_from_key(key)
            return bool(prefix) and name.startswith(prefix)

        self._cache.invalidate_if(affected)

    def __repr__(self) -> str:
        stats = self._cache.get_stats()
        return (
            f"CachedSearchService[IndexSize={self.index_size()}, "
            f"CacheSize={stats.size}/{stats.capacity}, "
            f"HitRatio={stats.hit_ratio * 100:.2f}%]"
        )
