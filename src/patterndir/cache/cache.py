"""Disk-based storage for validated directory payloads.

Uses :mod:`diskcache` to persist parsed pattern lists on the filesystem with a
configurable time-to-live (TTL). Expiry is owned entirely by the store; the
orchestrator only ever calls :meth:`PatternCache.get` and
:meth:`PatternCache.set`.

Anything offering the same two methods satisfies :class:`CacheStore` and can
replace the disk cache.

See Also:
    :class:`~patterndir.models.CacheConfig` -- the Pydantic model that
    controls ``enabled`` and ``ttl_seconds``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Protocol

import diskcache

from patterndir.models import CacheConfig


class CacheStore(Protocol):
    """Key-value store collaborator used by the directory orchestrator."""

    def get(self, key: str) -> Optional[Any]: ...

    def set(self, key: str, value: Any) -> None: ...


class PatternCache:
    """Disk-backed store for cached directory answers.

    Stores :class:`~patterndir.models.CachedEntry` dicts in a
    :class:`diskcache.Cache` directory. Entries expire after
    :attr:`~patterndir.models.CacheConfig.ttl_seconds`. Individual ``get`` and
    ``set`` calls are atomic, so concurrent requests may share one instance.

    Args:
        cache_dir: Root directory for the cache. A ``patterns/``
            subdirectory is created inside it.
        config: Cache configuration (``enabled`` flag and ``ttl_seconds``).

    Example::

        from patterndir.cache import PatternCache
        from patterndir.models import CacheConfig

        cache = PatternCache("/tmp/patterndir", CacheConfig(ttl_seconds=300))
        cache.set("patterns_ab12", {"patterns": [], "stored_at": 0.0})
        hit = cache.get("patterns_ab12")
    """

    def __init__(self, cache_dir: str | Path, config: CacheConfig) -> None:
        self._config = config
        self._cache: Optional[diskcache.Cache] = None
        self._cache_dir = Path(cache_dir)
        if config.enabled:
            self._cache = diskcache.Cache(str(self._cache_dir / "patterns"))

    def get(self, key: str) -> Optional[Any]:
        """Look up a cached value.

        Returns:
            The stored value, or ``None`` on a miss, after expiry, or when
            caching is disabled.
        """
        if self._cache is None:
            return None
        return self._cache.get(key)

    def set(self, key: str, value: Any) -> None:
        """Store *value* under *key* with the configured TTL.

        Silently ignored when caching is disabled.
        """
        if self._cache is None:
            return
        self._cache.set(key, value, expire=self._config.ttl_seconds)

    def clear(self) -> int:
        """Remove all entries from the cache.

        Returns:
            The number of entries removed.
        """
        if self._cache is None:
            return 0
        return self._cache.clear()

    def stats(self) -> dict[str, Any]:
        """Return cache statistics.

        Returns:
            A ``dict`` with ``enabled`` (bool), and when enabled:
            ``size`` (number of entries), ``directory`` (str path), and
            ``ttl_seconds`` (int).
        """
        if self._cache is None:
            return {"enabled": False}
        return {
            "enabled": True,
            "size": len(self._cache),
            "directory": str(self._cache_dir / "patterns"),
            "ttl_seconds": self._config.ttl_seconds,
        }

    def close(self) -> None:
        """Close the underlying :class:`diskcache.Cache` and release resources."""
        if self._cache is not None:
            self._cache.close()

    def __enter__(self) -> PatternCache:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
