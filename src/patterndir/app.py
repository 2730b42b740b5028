"""Typer application and CLI entry point for patterndir.

This module wires together the top-level Typer application and registers the
built-in sub-commands (``patterns``, ``cache``, ``config``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers and invokes the Typer app.
:class:`~patterndir.exceptions.PatternDirError` exits with the error's exit
code; any other exception is written to a crash log under the data directory.

See Also:
    :mod:`patterndir.config`: Configuration resolution.
    :mod:`patterndir.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from patterndir import __version__
from patterndir.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="patterndir",
    help="Query the block pattern directory through a local cache.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

from patterndir.commands.cache import cache_app  # noqa: E402
from patterndir.commands.config import config_app  # noqa: E402
from patterndir.commands.patterns import patterns_command  # noqa: E402

app.command("patterns")(patterns_command)
app.add_typer(cache_app, name="cache", help="Pattern cache management.")
app.add_typer(config_app, name="config", help="Configuration management.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"patterndir {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    api_url: Optional[str] = typer.Option(
        None, "--api-url", help="Pattern directory API URL."
    ),
    locale: Optional[str] = typer.Option(
        None, "--locale", help="Locale sent to the directory."
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Initialises the global :class:`~patterndir.output.OutputManager` from
    CLI flags, falling back to ``output.format`` from the resolved config,
    routes library logging to stderr when ``--verbose`` is set, and stores the
    configuration overrides in ``ctx.obj``.
    """
    from patterndir.config import resolve_config
    from patterndir.exceptions import ConfigError
    from patterndir.output import OutputFormat, OutputManager, set_output

    cli_format: Optional[str] = None
    if json_output:
        cli_format = OutputFormat.JSON.value
    elif plain_output:
        cli_format = OutputFormat.PLAIN.value

    try:
        fmt = OutputFormat(resolve_config(cli_format=cli_format).output.format)
    except ConfigError:
        # Commands resolve the config again and report the error themselves.
        fmt = OutputFormat(cli_format or OutputFormat.AUTO.value)

    output = OutputManager(
        format=fmt,
        no_color=no_color,
        quiet=quiet,
        verbose=verbose,
    )
    set_output(output)
    _setup_logging(output.stderr_console if verbose else None)

    ctx.ensure_object(dict)
    ctx.obj["api_url"] = api_url
    ctx.obj["locale"] = locale
    ctx.obj["verbose"] = verbose


def _setup_logging(console: Any) -> None:
    """Send ``patterndir.*`` log records to stderr, at DEBUG when *console* is given."""
    from rich.logging import RichHandler

    logger = logging.getLogger("patterndir")
    logger.handlers.clear()
    if console is None:
        logger.setLevel(logging.WARNING)
        logger.addHandler(logging.NullHandler())
        return
    logger.setLevel(logging.DEBUG)
    logger.addHandler(RichHandler(console=console, show_path=False, markup=False))


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from patterndir.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``patterndir`` console script.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from patterndir.exceptions import PatternDirError
        from patterndir.output import error

        if isinstance(exc, PatternDirError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
