"""Typer application and CLI entry point for apidox.

Commands:

* ``apidox build RECORDINGS`` -- replay a recordings file through a
  :class:`~apidox.recorder.Recorder` and render the resulting document as
  markdown, JSON, or YAML.
* ``apidox inspect RECORDINGS`` -- list the Actions a recordings file
  documents, with their example counts.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``.

See Also:
    :mod:`apidox.config`: Configuration resolution.
    :mod:`apidox.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from apidox import __version__
from apidox.config import load_config
from apidox.exceptions import ApidoxError, InvalidUsageError, InvalidVerbError
from apidox.exit_codes import EXIT_GENERIC_FAILURE
from apidox.loader import load_recordings
from apidox.models import DoxConfig, Interaction
from apidox.output import (
    OutputFormat,
    OutputManager,
    debug,
    error,
    get_output,
    print_data,
    set_output,
    success,
    warning,
)
from apidox.recorder import Recorder
from apidox.render import DocumentFormat, render
from apidox.writer import write_output

app = typer.Typer(
    name="apidox",
    help="Build API documentation from recorded HTTP interactions.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

_log_handler: Optional[logging.Handler] = None


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"apidox {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    """Route the ``apidox`` logger to stderr; DEBUG with --verbose, errors only otherwise.

    Rejected interactions are already reported through the output manager,
    so the library's own warnings stay hidden unless --verbose is given.
    """
    global _log_handler
    logger = logging.getLogger("apidox")
    if _log_handler is not None:
        logger.removeHandler(_log_handler)
    _log_handler = RichHandler(console=Console(stderr=True), show_path=False)
    logger.addHandler(_log_handler)
    logger.setLevel(logging.DEBUG if verbose else logging.ERROR)


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output for tables."
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

    Installs the global :class:`~apidox.output.OutputManager` and configures
    library logging from the CLI flags.
    """
    fmt = OutputFormat.JSON if json_output else OutputFormat.AUTO
    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))
    _configure_logging(verbose)


@contextmanager
def _handle_errors() -> Iterator[None]:
    """Report an :class:`~apidox.exceptions.ApidoxError` and exit with its code."""
    try:
        yield
    except ApidoxError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def _record_all(
    interactions: list[Interaction],
    config: DoxConfig,
) -> tuple[Recorder, list[InvalidVerbError]]:
    """Replay *interactions* through a fresh recorder, collecting rejections."""
    recorder = Recorder(config)
    rejected: list[InvalidVerbError] = []
    for index, interaction in enumerate(interactions):
        try:
            recorder.record(interaction)
        except InvalidVerbError as exc:
            warning(f"Skipping interaction {index} ({interaction.details.description or 'no description'}): {exc}")
            rejected.append(exc)
    return recorder, rejected


@app.command("build")
def build_command(
    recordings: str = typer.Argument(
        ..., help="Recordings file (JSON or YAML), or '-' for stdin."
    ),
    output_path: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Write the document here instead of stdout."
    ),
    fmt: DocumentFormat = typer.Option(
        DocumentFormat.MARKDOWN, "--format", "-f", help="Document format."
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Config file (JSON or YAML)."
    ),
    whitelist: Optional[List[str]] = typer.Option(
        None, "--whitelist", "-w", help="Additional header to render (repeatable, case-sensitive)."
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Fail instead of skipping interactions with an unknown verb."
    ),
) -> None:
    """Build the API document from a recordings file.

    Example::

        apidox build recordings.json -o docs/api.md
        apidox build recordings.json --format yaml -w X-Auth-Token
    """
    with _handle_errors():
        if output_path is not None and output_path.is_dir():
            raise InvalidUsageError(f"Output path is a directory: {output_path}")
        config = load_config(config_path, headers_whitelist=whitelist or None)
        interactions = load_recordings(recordings)
        debug(f"Loaded {len(interactions)} interactions from {recordings}")

        recorder, rejected = _record_all(interactions, config)
        if rejected and strict:
            raise rejected[0]

        text = render(recorder.registry, config, fmt, recorder.document)
        if output_path is None:
            print_data(text.rstrip("\n"))
        else:
            write_output(text, output_path)
            success(
                f"Documented {sum(1 for _ in recorder.registry.actions())} actions "
                f"from {len(recorder.interactions)} interactions in {output_path}"
            )


@app.command("inspect")
def inspect_command(
    recordings: str = typer.Argument(
        ..., help="Recordings file (JSON or YAML), or '-' for stdin."
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Config file (JSON or YAML)."
    ),
) -> None:
    """List the actions documented by a recordings file.

    Example::

        apidox inspect recordings.json
        apidox --json inspect recordings.json
    """
    with _handle_errors():
        config = load_config(config_path)
        recorder, _ = _record_all(load_recordings(recordings), config)

    headers = ["Resource", "Verb", "Path", "Examples"]
    rows: list[list[str]] = []
    for resource, action in recorder.registry.actions():
        rows.append([
            resource.name,
            action.verb,
            action.path_template,
            str(len(action.examples)),
        ])
    get_output().print_table(headers, rows, title=f"Actions ({len(rows)})")


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``apidox`` console script.

    Unhandled :class:`~apidox.exceptions.ApidoxError` instances cause a clean
    exit with the error's ``exit_code``; anything else exits with
    :data:`~apidox.exit_codes.EXIT_GENERIC_FAILURE`.
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except ApidoxError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception as exc:
        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
