"""Remote directory client for patterndir.

Classes:
    :class:`RemoteFetcher` -- builds outbound URLs and fetches raw bodies
    through :mod:`httpx`.
    :class:`ResponseParser` -- strictly validates raw bodies into
    :class:`~patterndir.models.RawPattern` records.

Example::

    from patterndir.client import RemoteFetcher, ResponseParser

    body = RemoteFetcher().fetch(query)
    records = ResponseParser().parse(body)
"""

from patterndir.client.fetcher import RemoteFetcher
from patterndir.client.parser import ResponseParser

__all__ = ["RemoteFetcher", "ResponseParser"]
