"""Canonical Pydantic models shared across all patterndir modules.

This is the single source of truth for data shapes in the project. The models
fall into three groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`DirectoryConfig`, :class:`RequestConfig`, :class:`CacheConfig`,
    :class:`OutputConfig`, :class:`PluginsConfig`, and :class:`GlobalConfig`.

**Directory payload models** -- the shapes read from and exposed for the remote
pattern directory:
    :class:`RawTitle`, :class:`RawMeta`, :class:`RawPattern`,
    :class:`PatternItem`, and :class:`CachedEntry`.

**Request/response models** -- the inbound request and what is handed back:
    :class:`RequestMethod`, :class:`DirectoryRequest`,
    :class:`DirectoryResponse`, and :class:`ErrorPayload`.

The query schema itself lives in :mod:`patterndir.query.validator`.
"""

from __future__ import annotations

import enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


DEFAULT_API_URL = "https://api.wordpress.org/patterns/1.0/"


# --- Configuration ---


class DirectoryConfig(BaseModel):
    """Where the directory service lives and how this client introduces itself."""

    api_url: str = Field(
        default=DEFAULT_API_URL, description="Base URL of the pattern directory API"
    )
    locale: str = Field(default="en_US", description="Locale sent with every query")
    wp_version: str = Field(
        default="6.4", description="Version string sent as the wp-version query argument"
    )


class RequestConfig(BaseModel):
    """Outbound HTTP settings applied to every directory fetch."""

    timeout: int = Field(default=30, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")


class CacheConfig(BaseModel):
    """Pattern cache settings stored in :class:`GlobalConfig`."""

    enabled: bool = Field(default=True, description="Enable pattern caching")
    ttl_seconds: int = Field(default=3600, description="Cache TTL in seconds")


class OutputConfig(BaseModel):
    """Default output format, used when neither ``--json`` nor ``--plain`` is given."""

    format: Literal["auto", "json", "plain", "rich"] = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class PluginsConfig(BaseModel):
    """Explicit plugin allow/deny lists stored in :class:`GlobalConfig`."""

    enabled: list[str] = Field(default_factory=list)
    disabled: list[str] = Field(default_factory=list)


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/patterndir/config.json``.

    Loaded and saved by :func:`~patterndir.config.load_global_config` and
    :func:`~patterndir.config.save_global_config`. See
    :func:`~patterndir.config.resolve_config` for the full precedence chain.
    """

    directory: DirectoryConfig = Field(default_factory=DirectoryConfig)
    request: RequestConfig = Field(default_factory=RequestConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)


# --- Directory payloads ---


class RawTitle(BaseModel):
    model_config = ConfigDict(extra="allow")

    rendered: str


class RawMeta(BaseModel):
    model_config = ConfigDict(extra="allow")

    wpop_keywords: str
    wpop_description: str
    wpop_viewport_width: int = 0
    wpop_block_types: list[str] = Field(default_factory=list)

    @field_validator("wpop_viewport_width", mode="before")
    @classmethod
    def _blank_width(cls, value: Any) -> Any:
        # The directory sends "" for patterns without a preferred width.
        if value in ("", None):
            return 0
        return value


class RawPattern(BaseModel):
    """One record as returned by the directory service.

    Only the fields needed to build a :class:`PatternItem` are declared and
    required. Everything else the service sends is preserved in
    ``model_extra`` so hooks can inspect it, but it never reaches the exposed
    representation.
    """

    model_config = ConfigDict(extra="allow")

    id: int
    title: RawTitle
    pattern_content: str
    category_slugs: list[str]
    meta: RawMeta


class PatternItem(BaseModel):
    """The externally exposed representation of a block pattern.

    The key set of every prepared item equals exactly the fields declared
    here, in this order.
    """

    id: int = Field(description="The pattern ID.")
    title: str = Field(description="The pattern title, in human readable format.")
    content: str = Field(description="The pattern content.")
    categories: list[str] = Field(description="The pattern's category slugs.")
    keywords: list[str] = Field(description="The pattern's keywords.")
    description: str = Field(description="A description of the pattern.")
    viewport_width: int = Field(description="The preferred width of the viewport when previewing a pattern, in pixels.")
    block_types: list[str] = Field(description="The block types which can use this pattern.")


PATTERN_FIELDS: tuple[str, ...] = tuple(PatternItem.model_fields)
"""Allow-listed field names of the exposed pattern representation."""


class CachedEntry(BaseModel):
    """What the cache store holds for one cache key."""

    patterns: list[dict[str, Any]]
    stored_at: float


# --- Requests and responses ---


class RequestMethod(str, enum.Enum):
    """Read-only methods accepted by the directory proxy."""

    GET = "GET"
    HEAD = "HEAD"


class DirectoryRequest(BaseModel):
    """An inbound read against the pattern directory.

    Attributes:
        method: ``GET`` for a full body, ``HEAD`` for status and headers only.
        params: Raw query parameters, validated by
            :class:`~patterndir.query.validator.QueryValidator`.
        fields: Optional subset of item fields to keep in the response.
    """

    method: RequestMethod = RequestMethod.GET
    params: dict[str, Any] = Field(default_factory=dict)
    fields: Optional[list[str]] = None

    @field_validator("method", mode="before")
    @classmethod
    def _upper_method(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.upper()
        return value

    @field_validator("fields", mode="before")
    @classmethod
    def _split_fields(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value

    @property
    def is_metadata_only(self) -> bool:
        """``True`` when the caller expects no response body."""
        return self.method is RequestMethod.HEAD


class ErrorPayload(BaseModel):
    """Error body surfaced to the caller."""

    code: str
    message: str
    data: dict[str, Any] = Field(default_factory=dict)


class DirectoryResponse(BaseModel):
    """Status, headers and body produced for a :class:`DirectoryRequest`."""

    status: int = 200
    data: Any = None
    headers: dict[str, str] = Field(default_factory=dict)

    @property
    def is_error(self) -> bool:
        return self.status >= 400

    def as_error(self) -> Optional[ErrorPayload]:
        """Return the error payload carried by this response, if any."""
        if not self.is_error or not isinstance(self.data, dict):
            return None
        return ErrorPayload.model_validate(self.data)
