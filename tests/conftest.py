"""Shared test fixtures for patterndir.

Provides reusable fixtures for loading directory payload fixtures, a fake
directory service answering through :class:`httpx.MockTransport`, an
on-disk pattern cache in ``tmp_path``, isolated config environments, and a
CLI runner. These fixtures are automatically discovered by pytest.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

import httpx
import pytest

from patterndir.cache import PatternCache
from patterndir.client import RemoteFetcher
from patterndir.directory import PatternDirectory
from patterndir.models import CacheConfig, DirectoryConfig, RequestConfig
from patterndir.output import reset_output
from patterndir.plugins import PreparePipeline


FIXTURES_DIR = Path(__file__).parent / "fixtures"

API_HOST = "api.wordpress.org"


def load_fixture(name: str) -> str:
    """Return the raw text of a payload fixture (``browse-all``, ``search-button``, ...)."""
    return (FIXTURES_DIR / f"{name}.json").read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Fake directory service
# ---------------------------------------------------------------------------


class FakeDirectoryService:
    """Stand-in for the remote directory, recording every request it receives.

    By default it answers ``200`` with ``[]``. Use :meth:`respond_with` to
    serve a body, or :meth:`block` to simulate a refused connection.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._body = "[]"
        self._status = 200
        self._blocked: Optional[str] = None

    @property
    def urls(self) -> list[str]:
        return [str(r.url) for r in self.requests]

    def respond_with(self, body: str, status: int = 200) -> None:
        self._body = body
        self._status = status
        self._blocked = None

    def block(self, host: str = API_HOST) -> None:
        self._blocked = host

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._blocked and request.url.host == self._blocked:
            raise httpx.ConnectError(
                f"Failed to connect to {self._blocked} port 443: Connection refused",
                request=request,
            )
        return httpx.Response(
            status_code=self._status,
            headers={"content-type": "application/json"},
            content=self._body.encode(),
            request=request,
        )

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def directory_service() -> FakeDirectoryService:
    return FakeDirectoryService()


@pytest.fixture
def fetcher(directory_service: FakeDirectoryService) -> RemoteFetcher:
    return RemoteFetcher(
        DirectoryConfig(),
        RequestConfig(timeout=5),
        transport=directory_service.transport,
    )


@pytest.fixture
def cache(tmp_path: Path) -> PatternCache:
    """A PatternCache with default config pointing at tmp_path."""
    c = PatternCache(tmp_path, CacheConfig(enabled=True, ttl_seconds=300))
    yield c
    c.close()


@pytest.fixture
def make_directory(fetcher: RemoteFetcher, cache: PatternCache) -> Callable[..., PatternDirectory]:
    """Factory building a PatternDirectory over the fake service and tmp cache."""

    def _make(hooks=None) -> PatternDirectory:
        return PatternDirectory(fetcher, cache, pipeline=PreparePipeline(hooks))

    return _make


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_CONFIG_HOME, XDG_CACHE_HOME, and XDG_DATA_HOME to
    subdirectories of tmp_path, clears PATTERNDIR_* environment variables,
    and changes the working directory to tmp_path.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setattr("patterndir.config._is_xdg_platform", lambda: True)

    for var in ["PATTERNDIR_API_URL", "PATTERNDIR_LOCALE"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    from typer.testing import CliRunner

    return CliRunner()
