"""Validation and normalisation of directory query parameters.

:class:`PatternQuery` is the fixed parameter schema of the pattern
collection. :class:`QueryValidator` runs raw parameters (as they arrive from a
query string or a CLI) through it and either returns a frozen, fully defaulted
:class:`NormalizedQuery` or raises
:class:`~patterndir.exceptions.QueryValidationError` naming every parameter
that failed.

Query strings carry everything as text, so numeric strings are accepted for
integer parameters and ``slug`` may be given as a comma-separated string.
"""

from __future__ import annotations

import logging
from typing import Any, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from patterndir.exceptions import QueryValidationError

logger = logging.getLogger(__name__)


_INTEGER_PARAMS = ("per_page", "page", "offset", "category", "keyword")


class PatternQuery(BaseModel):
    """Fixed parameter schema for the pattern collection.

    ============  ===============  ==========  ================================
    param         kind             default     validity
    ============  ===============  ==========  ================================
    per_page      integer          100         1 <= v <= 100
    page          integer          1           v >= 1
    offset        integer          none        v >= 0
    order         enum             ``desc``    asc, desc
    orderby       enum             ``date``    date, title, favorite_count
    category      integer          none        any integer
    keyword       integer          none        any integer
    search        free text        none        any string
    slug          list of string   empty       any strings
    ============  ===============  ==========  ================================
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    per_page: int = Field(default=100, ge=1, le=100, description="Maximum number of items to be returned in result set.")
    page: int = Field(default=1, ge=1, description="Current page of the collection.")
    offset: Optional[int] = Field(default=None, ge=0, description="Offset the result set by a specific number of items.")
    order: Literal["asc", "desc"] = Field(default="desc", description="Order sort attribute ascending or descending.")
    orderby: Literal["date", "title", "favorite_count"] = Field(default="date", description="Sort collection by post attribute.")
    category: Optional[int] = Field(default=None, description="Limit results to those matching a category ID.")
    keyword: Optional[int] = Field(default=None, description="Limit results to those matching a keyword ID.")
    search: Optional[str] = Field(default=None, description="Limit results to those matching a string.")
    slug: tuple[str, ...] = Field(default=(), description="Limit results to those matching a pattern (slug).")

    @field_validator(*_INTEGER_PARAMS, mode="before")
    @classmethod
    def _reject_bool(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("must be an integer, not a boolean")
        return value

    @field_validator("slug", mode="before")
    @classmethod
    def _split_slug(cls, value: Any) -> Any:
        if isinstance(value, str):
            return tuple(part.strip() for part in value.split(",") if part.strip())
        return value


NormalizedQuery = PatternQuery
"""A validated :class:`PatternQuery`; every key present with one canonical value."""


class QueryValidator:
    """Validates raw query parameters against a parameter schema.

    Args:
        schema: The Pydantic model describing the accepted parameters.
            Defaults to :class:`PatternQuery`.
    """

    def __init__(self, schema: type[PatternQuery] = PatternQuery) -> None:
        self._schema = schema

    @property
    def schema(self) -> type[PatternQuery]:
        return self._schema

    def validate(self, raw: Optional[Mapping[str, Any]]) -> NormalizedQuery:
        """Validate *raw* and fill in defaults.

        Missing parameters and parameters explicitly set to ``None`` take
        their declared default. Unknown parameters are ignored.

        Args:
            raw: Raw parameter mapping, e.g. parsed query-string values.

        Returns:
            The frozen, normalised query.

        Raises:
            QueryValidationError: If any recognised parameter fails its
                kind, range, or enum check. All failures are reported at once.
        """
        present = {k: v for k, v in (raw or {}).items() if v is not None}
        try:
            return self._schema.model_validate(present)
        except PydanticValidationError as exc:
            reasons: dict[str, str] = {}
            for err in exc.errors():
                name = str(err["loc"][0]) if err["loc"] else "query"
                reasons.setdefault(name, f"{name}: {err['msg']}")
            logger.debug("Rejected query parameters: %s", ", ".join(reasons))
            raise QueryValidationError(reasons) from None

    def collection_params(self) -> dict[str, Any]:
        """Describe the accepted parameters as a JSON schema ``properties`` map."""
        return self._schema.model_json_schema()["properties"]
