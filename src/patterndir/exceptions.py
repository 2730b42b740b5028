"""Exception hierarchy for patterndir.

All exceptions inherit from :class:`PatternDirError`, which carries a stable
machine-readable ``code``, an HTTP-style ``status`` and an ``exit_code``
mapped to a constant from :mod:`patterndir.exit_codes`.
:meth:`~patterndir.directory.PatternDirectory.dispatch`
turns these into ``{code, message, data}`` error payloads, while the CLI entry
point exits with the matching code.

Subclass hierarchy::

    PatternDirError          (500, exit 1)
    +-- QueryValidationError (400, exit 2)   rest_invalid_param
    +-- TransportError       (500, exit 6)   patterns_api_failed
    +-- StructuralError      (500, exit 5)   patterns_api_invalid_data
    +-- PluginError          (500, exit 10)
    +-- ConfigError          (500, exit 1)

"Zero results" is never an error: an empty directory answer is a success with
an empty list.
"""

from __future__ import annotations

from typing import Any, Optional

from patterndir.exit_codes import (
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_PLUGIN_ERROR,
    EXIT_SERVER_ERROR,
)


class PatternDirError(Exception):
    """Base exception for all patterndir errors.

    Args:
        message: Human-readable error description.
        details: Extra structured data surfaced in the error payload.
        exit_code: Optional override for the class-level exit code.
    """

    code: str = "patterndir_error"
    status: int = 500
    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None,
        exit_code: int | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if exit_code is not None:
            self.exit_code = exit_code

    def to_payload(self):
        """Convert to the ``{code, message, data}`` error payload."""
        from patterndir.models import ErrorPayload

        return ErrorPayload(
            code=self.code,
            message=self.message,
            data={"status": self.status, **self.details},
        )


class QueryValidationError(PatternDirError):
    """Raised when one or more query parameters fail validation.

    The message always names every offending parameter; per-parameter reasons
    are available under ``details["params"]``.
    """

    code = "rest_invalid_param"
    status = 400
    exit_code = EXIT_INVALID_USAGE

    def __init__(self, params: dict[str, str]):
        self.params = dict(params)
        names = ", ".join(self.params)
        super().__init__(
            f"Invalid parameter(s): {names}",
            details={"params": self.params},
        )


class TransportError(PatternDirError):
    """Raised when the directory service cannot be reached.

    Covers connection failures, timeouts and non-2xx answers. Never retried
    here; a retry policy belongs to the transport.
    """

    code = "patterns_api_failed"
    status = 500
    exit_code = EXIT_CONNECTION_ERROR

    def __init__(self, message: str, host: Optional[str] = None, details: Optional[dict[str, Any]] = None):
        self.host = host
        merged = dict(details or {})
        if host:
            merged.setdefault("host", host)
        super().__init__(message, details=merged)


class StructuralError(PatternDirError):
    """Raised when the directory service answers with a payload of the wrong shape."""

    code = "patterns_api_invalid_data"
    status = 500
    exit_code = EXIT_SERVER_ERROR


class PluginError(PatternDirError):
    """Raised when a plugin fails to load or register its hooks."""

    code = "patterndir_plugin_error"
    exit_code = EXIT_PLUGIN_ERROR


class ConfigError(PatternDirError):
    """Raised for configuration problems (invalid JSON, unknown keys, bad values)."""

    code = "patterndir_config_error"
    exit_code = EXIT_GENERIC_FAILURE
