"""Built-in CLI sub-commands for patterndir.

Each module defines a Typer app or command that is registered on the root
application in :func:`patterndir.app.main`:

* :mod:`~patterndir.commands.patterns` -- query the pattern directory.
* :mod:`~patterndir.commands.cache` -- inspect and clear the pattern cache.
* :mod:`~patterndir.commands.config` -- view and modify global configuration.
"""
