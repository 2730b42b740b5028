"""Pattern caching for patterndir.

This package provides :func:`derive`, which turns a query mapping into a
canonical, order-insensitive cache key, and :class:`PatternCache`, a
:mod:`diskcache`-backed store for validated directory answers with a
configurable TTL.

The cache is consumed by :class:`~patterndir.directory.PatternDirectory`
and is controlled by the ``cache`` section of the global configuration
(:class:`~patterndir.models.CacheConfig`).
"""

from patterndir.cache.cache import CacheStore, PatternCache
from patterndir.cache.keys import derive

__all__ = ["CacheStore", "PatternCache", "derive"]
