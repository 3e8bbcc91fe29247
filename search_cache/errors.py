from __future__ import annotations


class SearchCacheError(ValueError):
    """Base class for errors raised by the search result cache."""


class InvalidConfigurationError(SearchCacheError):
    """Raised when cache capacity or settings are invalid."""


class InvalidKeyError(SearchCacheError):
    """Raised when a cache key is missing on a mutating operation."""


class InvalidValueError(SearchCacheError):
    """Raised when a value to cache is missing or not a sequence."""
