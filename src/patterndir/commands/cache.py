"""Cache commands -- inspect and clear the pattern cache."""

from __future__ import annotations

import typer

from patterndir.output import format_response, success

cache_app = typer.Typer(no_args_is_help=True)


@cache_app.command("stats")
def cache_stats() -> None:
    """Show cache location, size and TTL.

    Example::

        patterndir cache stats --json
    """
    from patterndir.cache import PatternCache
    from patterndir.config import get_cache_dir, resolve_config

    config = resolve_config()
    with PatternCache(get_cache_dir(), config.cache) as cache:
        format_response(cache.stats())


@cache_app.command("clear")
def cache_clear() -> None:
    """Remove every cached directory answer."""
    from patterndir.cache import PatternCache
    from patterndir.config import get_cache_dir, resolve_config

    config = resolve_config()
    with PatternCache(get_cache_dir(), config.cache) as cache:
        removed = cache.clear()
    success(f"Removed {removed} cached entries.")
