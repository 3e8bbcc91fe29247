"""Search result cache package.

Public API:
- SearchResultCache, RecencyTracker
- CachedSearchService, PrefixIndex, make_cache_key, prefix_from_key
- CacheEntry, CacheStats, Product
- CacheSettings, load_cache_settings, DEFAULT_CAPACITY, DEFAULT_CONFIG_PATH
- SearchCacheError and its subclasses
"""

from .cache import SearchResultCache
from .config import DEFAULT_CAPACITY, DEFAULT_CONFIG_PATH, CacheSettings, load_cache_settings
from .errors import (
    InvalidConfigurationError,
    InvalidKeyError,
    InvalidValueError,
    SearchCacheError,
)
from .recency import RecencyTracker
from .search import CachedSearchService, make_cache_key, prefix_from_key
from .trie import PrefixIndex
from .types import CacheEntry, CacheStats, Product

__all__ = [
    "CacheEntry",
    "CacheSettings",
    "CacheStats",
    "CachedSearchService",
    "DEFAULT_CAPACITY",
    "DEFAULT_CONFIG_PATH",
    "InvalidConfigurationError",
    "InvalidKeyError",
    "InvalidValueError",
    "PrefixIndex",
    "Product",
    "RecencyTracker",
    "SearchCacheError",
    "SearchResultCache",
    "load_cache_settings",
    "make_cache_key",
    "prefix_from_key",
]
