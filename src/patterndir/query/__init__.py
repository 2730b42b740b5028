"""Query parameter schema and validation for the pattern collection."""

from patterndir.query.validator import NormalizedQuery, PatternQuery, QueryValidator

__all__ = ["NormalizedQuery", "PatternQuery", "QueryValidator"]
