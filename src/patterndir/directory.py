"""The caching proxy in front of the remote pattern directory.

:class:`PatternDirectory` coordinates one read::

    validate -> derive key -> cache lookup
        hit:  cached records
        miss: fetch -> parse -> store
    -> HEAD?  empty body
    -> pipeline -> response

Validation errors stop the request before the cache or the network is
touched. Transport and structural failures propagate and never write to the
cache, so a bad answer can not replace or poison a good entry. The pipeline
runs on every non-HEAD read, cache hits included, so hook output is never
baked into the cache.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from patterndir.cache import CacheStore, derive
from patterndir.client import RemoteFetcher, ResponseParser
from patterndir.exceptions import PatternDirError
from patterndir.models import CachedEntry, DirectoryRequest, DirectoryResponse, RawPattern
from patterndir.plugins.hooks import PreparePipeline
from patterndir.query import NormalizedQuery, QueryValidator

logger = logging.getLogger(__name__)


class PatternDirectory:
    """Validated, cached, hook-processed reads of the pattern directory.

    Args:
        fetcher: Outbound client for the directory service.
        cache: Key-value store for parsed answers. Expiry is the store's job.
        pipeline: Item projection and hooks. Defaults to a pipeline without
            hooks.
        validator: Query validator. Defaults to the pattern query schema.
        parser: Response parser.

    Example::

        directory = PatternDirectory(RemoteFetcher(), PatternCache(cache_dir, CacheConfig()))
        response = directory.dispatch(DirectoryRequest(params={"category": 2}))
    """

    def __init__(
        self,
        fetcher: RemoteFetcher,
        cache: CacheStore,
        pipeline: Optional[PreparePipeline] = None,
        validator: Optional[QueryValidator] = None,
        parser: Optional[ResponseParser] = None,
    ) -> None:
        self._fetcher = fetcher
        self._cache = cache
        self._pipeline = pipeline or PreparePipeline()
        self._validator = validator or QueryValidator()
        self._parser = parser or ResponseParser()

    @property
    def pipeline(self) -> PreparePipeline:
        return self._pipeline

    def cache_key(self, query: NormalizedQuery) -> str:
        """Derive the cache key for *query* from its outbound arguments."""
        return derive(self._fetcher.build_query_args(query))

    def get_items(self, request: DirectoryRequest) -> DirectoryResponse:
        """Answer *request*.

        Returns:
            A ``200`` response with the prepared items, or with an empty body
            for HEAD requests.

        Raises:
            QueryValidationError: If a query parameter is invalid.
            TransportError: If the directory service could not be reached.
            StructuralError: If the directory answered with a malformed payload.
        """
        query = self._validator.validate(request.params)
        key = self.cache_key(query)

        records = self._load_cached(key)
        cache_status = "HIT"
        if records is None:
            cache_status = "MISS"
            records = self._fetch_and_store(key, query)

        headers = {"X-Cache": cache_status}
        if request.is_metadata_only:
            return DirectoryResponse(status=200, data=[], headers=headers)

        return DirectoryResponse(
            status=200,
            data=self._pipeline.apply(records, request),
            headers=headers,
        )

    def dispatch(self, request: DirectoryRequest) -> DirectoryResponse:
        """Like :meth:`get_items`, but errors become error responses.

        The error body is the error's ``{code, message, data}`` payload and the
        status is the error's HTTP-style status.
        """
        try:
            return self.get_items(request)
        except PatternDirError as exc:
            logger.debug("Request failed with %s: %s", exc.code, exc.message)
            return DirectoryResponse(
                status=exc.status,
                data=exc.to_payload().model_dump(),
            )

    def query(self, params: Optional[Mapping[str, Any]] = None, method: str = "GET") -> DirectoryResponse:
        """Shortcut for :meth:`dispatch` with a freshly built request."""
        return self.dispatch(DirectoryRequest(method=method, params=dict(params or {})))

    def _load_cached(self, key: str) -> Optional[list[RawPattern]]:
        cached = self._cache.get(key)
        if cached is None:
            logger.debug("Cache miss: %s", key)
            return None
        try:
            entry = CachedEntry.model_validate(cached)
            records = [RawPattern.model_validate(p) for p in entry.patterns]
        except ValidationError as exc:
            logger.warning("Discarding unreadable cache entry %s: %s", key, exc)
            return None
        logger.debug("Cache hit: %s (%d patterns)", key, len(records))
        return records

    def _fetch_and_store(self, key: str, query: NormalizedQuery) -> list[RawPattern]:
        body = self._fetcher.fetch(query)
        records = self._parser.parse(body)
        entry = CachedEntry(
            patterns=[r.model_dump() for r in records],
            stored_at=time.time(),
        )
        self._cache.set(key, entry.model_dump())
        logger.debug("Cached %d patterns under %s", len(records), key)
        return records
