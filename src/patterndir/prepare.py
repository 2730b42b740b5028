"""Projection of raw directory records onto the exposed pattern schema.

:func:`prepare_item` is an explicit allow-list: it reads the handful of raw
fields it knows about and builds a :class:`~patterndir.models.PatternItem`,
so anything else the service sends is dropped.
"""

from __future__ import annotations

import re
from typing import Any

from patterndir.models import PatternItem, RawPattern

_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")
_SLUG_INVALID_RE = re.compile(r"[^a-z0-9_-]+")
_SLUG_DASHES_RE = re.compile(r"-{2,}")


def sanitize_text_field(value: Any) -> str:
    """Strip markup and collapse whitespace in a single-line text value."""
    text = _TAG_RE.sub("", str(value))
    return _WHITESPACE_RE.sub(" ", text).strip()


def sanitize_title(value: Any) -> str:
    """Reduce *value* to a lowercase slug."""
    slug = sanitize_text_field(value).lower().replace(" ", "-")
    slug = _SLUG_INVALID_RE.sub("-", slug)
    return _SLUG_DASHES_RE.sub("-", slug).strip("-")


def prepare_item(raw: RawPattern) -> dict[str, Any]:
    """Build the exposed representation of *raw*.

    Returns:
        A dict whose keys are exactly
        :data:`~patterndir.models.PATTERN_FIELDS`.
    """
    keywords = [sanitize_text_field(k) for k in raw.meta.wpop_keywords.split(",")]
    item = PatternItem(
        id=abs(raw.id),
        title=sanitize_text_field(raw.title.rendered),
        content=raw.pattern_content,
        categories=[sanitize_title(c) for c in raw.category_slugs],
        keywords=[k for k in keywords if k],
        description=sanitize_text_field(raw.meta.wpop_description),
        viewport_width=abs(raw.meta.wpop_viewport_width),
        block_types=[sanitize_text_field(b) for b in raw.meta.wpop_block_types],
    )
    return item.model_dump()
