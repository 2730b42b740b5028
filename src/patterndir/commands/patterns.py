"""The ``patterndir patterns`` command -- query the pattern directory.

Builds a :class:`~patterndir.directory.PatternDirectory` from the resolved
configuration (disk cache, plugins discovered from entry points) and prints
the prepared items. ``--head`` performs a metadata-only read: the directory
is still consulted and cached, but no items are prepared or printed.
"""

from __future__ import annotations

from typing import Any, Optional

import typer

from patterndir.cache import PatternCache
from patterndir.client import RemoteFetcher
from patterndir.directory import PatternDirectory
from patterndir.exceptions import PatternDirError
from patterndir.models import DirectoryRequest, GlobalConfig
from patterndir.output import debug, error, format_response, info
from patterndir.plugins import PluginManager


def build_directory(config: GlobalConfig, plugins: PluginManager) -> tuple[PatternDirectory, PatternCache]:
    """Wire a directory from *config*; the caller closes the returned cache."""
    from patterndir.config import get_cache_dir

    cache = PatternCache(get_cache_dir(), config.cache)
    fetcher = RemoteFetcher(config.directory, config.request)
    return PatternDirectory(fetcher, cache, pipeline=plugins.build_pipeline()), cache


def patterns_command(
    ctx: typer.Context,
    category: Optional[int] = typer.Option(None, "--category", help="Limit to a category ID."),
    keyword: Optional[int] = typer.Option(None, "--keyword", help="Limit to a keyword ID."),
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Limit to patterns matching a string."),
    slug: Optional[list[str]] = typer.Option(None, "--slug", help="Limit to a pattern slug (repeatable)."),
    per_page: Optional[str] = typer.Option(None, "--per-page", help="Items per page (1-100)."),
    page: Optional[str] = typer.Option(None, "--page", help="Page of the collection."),
    offset: Optional[str] = typer.Option(None, "--offset", help="Offset the result set."),
    order: Optional[str] = typer.Option(None, "--order", help="asc or desc."),
    orderby: Optional[str] = typer.Option(None, "--orderby", help="date, title or favorite_count."),
    fields: Optional[str] = typer.Option(None, "--fields", help="Comma-separated item fields to keep."),
    head: bool = typer.Option(False, "--head", help="Metadata-only request; print no items."),
) -> None:
    """List block patterns from the pattern directory.

    Paging values are passed through as given so the directory's own
    validation reports bad input.

    Example::

        patterndir patterns --category 2
        patterndir --json patterns --search button --fields id,title
    """
    from patterndir.config import resolve_config

    obj: dict[str, Any] = ctx.obj or {}
    params: dict[str, Any] = {
        "category": category,
        "keyword": keyword,
        "search": search,
        "slug": slug or None,
        "per_page": per_page,
        "page": page,
        "offset": offset,
        "order": order,
        "orderby": orderby,
    }
    request = DirectoryRequest(
        method="HEAD" if head else "GET",
        params={k: v for k, v in params.items() if v is not None},
        fields=fields,
    )

    try:
        config = resolve_config(cli_api_url=obj.get("api_url"), cli_locale=obj.get("locale"))
        plugins = PluginManager()
        loaded = plugins.discover(config)
        if loaded:
            debug(f"Loaded plugins: {', '.join(loaded)}")

        directory, cache = build_directory(config, plugins)
        try:
            response = directory.get_items(request)
        finally:
            cache.close()
            plugins.cleanup()
    except PatternDirError as exc:
        error(f"{exc.code}: {exc.message}")
        raise typer.Exit(code=exc.exit_code) from None

    debug(f"X-Cache: {response.headers.get('X-Cache', '-')}")
    if head:
        info(f"HTTP {response.status} ({response.headers.get('X-Cache', '-')})")
        return
    format_response(response.data)
