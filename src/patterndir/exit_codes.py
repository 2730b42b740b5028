"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~patterndir.exceptions.PatternDirError` subclass.
Shell wrappers can inspect the exit code to tell a bad query apart from an
unreachable or misbehaving directory service without parsing stderr.

Example::

    $ patterndir patterns --per-page 200
    $ echo $?
    2   # EXIT_INVALID_USAGE -- per_page is out of range
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The query contained an invalid or out-of-range parameter."""

EXIT_SERVER_ERROR = 5
"""The directory service answered with a payload that violates its contract."""

EXIT_CONNECTION_ERROR = 6
"""The directory service could not be reached (timeout, DNS failure, refused, non-2xx)."""

EXIT_PLUGIN_ERROR = 10
"""A plugin failed to load, initialise, or execute."""
