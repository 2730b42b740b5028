"""Outbound requests to the pattern directory service.

:class:`RemoteFetcher` maps a normalised query onto the directory's
query-string convention, performs a single blocking ``GET`` through
:class:`httpx.Client`, and classifies the outcome. Every failure to obtain a
2xx body becomes one :class:`~patterndir.exceptions.TransportError`; nothing
is retried here.

The :mod:`httpx` transport is injectable, which lets tests answer requests
with :class:`httpx.MockTransport` instead of the network.
"""

from __future__ import annotations

import logging
from typing import Any, Optional
from urllib.parse import urlsplit

import httpx

from patterndir.exceptions import TransportError
from patterndir.models import DirectoryConfig, RequestConfig
from patterndir.query.validator import NormalizedQuery

logger = logging.getLogger(__name__)


class RemoteFetcher:
    """Fetches raw pattern payloads from the directory service.

    Args:
        directory: Where the service lives plus the locale/version sent with
            every query.
        request: Timeout and SSL settings.
        transport: Optional :mod:`httpx` transport. ``None`` uses the real
            network.

    Example::

        fetcher = RemoteFetcher(DirectoryConfig(), RequestConfig(timeout=10))
        body = fetcher.fetch(QueryValidator().validate({"search": "button"}))
    """

    def __init__(
        self,
        directory: Optional[DirectoryConfig] = None,
        request: Optional[RequestConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._directory = directory or DirectoryConfig()
        self._request = request or RequestConfig()
        self._transport = transport

    @property
    def host(self) -> str:
        """Host name of the directory service."""
        return urlsplit(self._directory.api_url).hostname or self._directory.api_url

    def build_query_args(self, query: NormalizedQuery) -> dict[str, Any]:
        """Map *query* onto the directory's query-string arguments.

        Filters are only sent when set; ``category`` and ``keyword`` travel as
        ``pattern-categories`` and ``pattern-keywords``. Paging and ordering
        are always sent so each expected ``name=value`` appears exactly once.
        """
        args: dict[str, Any] = {
            "locale": self._directory.locale,
            "wp-version": self._directory.wp_version,
        }
        if query.category:
            args["pattern-categories"] = query.category
        if query.keyword:
            args["pattern-keywords"] = query.keyword
        if query.search:
            args["search"] = query.search
        if query.slug:
            args["slug"] = list(query.slug)

        args["per_page"] = query.per_page
        args["page"] = query.page
        if query.offset is not None:
            args["offset"] = query.offset
        args["order"] = query.order
        args["orderby"] = query.orderby
        return args

    def build_url(self, query_args: dict[str, Any]) -> str:
        """Return the full outbound URL for *query_args*."""
        params = []
        for name, value in query_args.items():
            if isinstance(value, list):
                params.extend((f"{name}[]", str(v)) for v in value)
            else:
                params.append((name, str(value)))
        return str(httpx.URL(self._directory.api_url, params=params))

    def fetch(self, query: NormalizedQuery) -> str:
        """Fetch the raw response body for *query*.

        Returns:
            The undecoded response text of a 2xx answer.

        Raises:
            TransportError: On connection failures, timeouts, and non-2xx
                answers.
        """
        url = self.build_url(self.build_query_args(query))
        logger.debug("Fetching patterns: GET %s", url)
        try:
            with httpx.Client(
                timeout=self._request.timeout,
                verify=self._request.verify_ssl,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = client.get(url, headers={"Accept": "application/json"})
        except httpx.HTTPError as exc:
            logger.warning("Pattern directory unreachable at %s: %s", self.host, exc)
            raise TransportError(
                f"An unexpected error occurred connecting to {self.host}. "
                "Something may be wrong with the pattern directory or this "
                "server's configuration.",
                host=self.host,
                details={"reason": str(exc)},
            ) from exc

        if not response.is_success:
            raise TransportError(
                f"The pattern directory at {self.host} answered HTTP {response.status_code}: "
                f"{_error_message(response)}",
                host=self.host,
                details={"remote_status": response.status_code},
            )
        return response.text


def _error_message(response: httpx.Response) -> str:
    """Best-effort error text from a failed directory response."""
    try:
        detail = response.json()
    except ValueError:
        return response.text[:200] if response.text else response.reason_phrase
    if isinstance(detail, dict):
        return str(detail.get("message") or detail.get("error") or detail.get("code") or detail)
    return str(detail)
