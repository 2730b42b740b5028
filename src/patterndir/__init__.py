"""patterndir -- a caching proxy for the block pattern directory.

Queries are validated against a fixed parameter schema, keyed
independently of parameter order, fetched from the remote directory with
strict response validation, cached, and post-processed by a chain of item
hooks on every read.

Typical usage::

    from patterndir.cache import PatternCache
    from patterndir.client import RemoteFetcher
    from patterndir.directory import PatternDirectory
    from patterndir.models import CacheConfig, DirectoryRequest

    directory = PatternDirectory(RemoteFetcher(), PatternCache("/tmp/pd", CacheConfig()))
    response = directory.dispatch(DirectoryRequest(params={"search": "button"}))

Modules:
    app: Typer application and CLI entry point.
    directory: The caching orchestrator.
    models: Pydantic models shared across the package.
    config: XDG-aware configuration management.
    exceptions: Exception hierarchy with status and exit-code mapping.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
