"""Canonical cache keys for directory queries.

Keys are SHA-256 hashes of a JSON rendering of the query mapping with sorted
keys, so identical queries always resolve to the same entry regardless of
parameter ordering. Collection values are sorted, and empty collections (as
well as ``None``) are dropped, so ``{"slug": []}`` keys the same as a query
that never mentioned ``slug``.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any, Mapping

KEY_PREFIX = "patterns_"


def _canonical_value(value: Any) -> Any:
    if isinstance(value, (list, tuple, set, frozenset)):
        # Mixed element types still need a total order.
        return sorted(value, key=lambda v: (type(v).__name__, str(v)))
    return value


def canonicalize(params: Mapping[str, Any]) -> dict[str, Any]:
    """Return *params* with absent-equivalent entries removed and collections sorted."""
    canonical: dict[str, Any] = {}
    for name, value in params.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple, set, frozenset)) and not value:
            continue
        canonical[str(name)] = _canonical_value(value)
    return canonical


def derive(params: Mapping[str, Any]) -> str:
    """Derive the cache key for a query mapping.

    Args:
        params: A normalised query (or the outbound query arguments derived
            from one).

    Returns:
        An opaque, fixed-width string key.
    """
    raw = json.dumps(canonicalize(params), sort_keys=True, separators=(",", ":"), default=str)
    return KEY_PREFIX + hashlib.sha256(raw.encode()).hexdigest()
