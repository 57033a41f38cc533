"""Terminal output for the ``apidox`` CLI.

The rendered document and ``inspect`` tables are the only things written to
stdout, so ``apidox build recordings.json > api.md`` always yields a clean
file. Everything else -- skipped interactions, the "Documented N actions"
summary, errors, ``--verbose`` traces -- goes to stderr.

Rich styling is used only when stdout is a terminal and colour has not been
turned off by ``--no-color``, ``NO_COLOR`` or ``TERM=dumb``.

:func:`~apidox.app.main_callback` installs one :class:`OutputManager` per
invocation with :func:`set_output`; commands call the module-level helpers.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Optional

from rich.console import Console
from rich.table import Table


class OutputFormat(str, Enum):
    """How tables are printed. ``AUTO`` picks ``RICH`` on a colour TTY, else ``PLAIN``."""

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Routes CLI output to stdout or stderr according to its kind.

    Args:
        format: Table format; ``AUTO`` is resolved once, here.
        no_color: Print diagnostics without Rich markup.
        quiet: Drop the success summary written after ``build -o``.
        verbose: Show :meth:`debug` traces.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose

        if format != OutputFormat.AUTO:
            self._format = format
        elif _is_tty() and not self._no_color:
            self._format = OutputFormat.RICH
        else:
            self._format = OutputFormat.PLAIN

        self._tables = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=self._format == OutputFormat.RICH,
        )
        self._diagnostics = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    @property
    def is_quiet(self) -> bool:
        return self._quiet

    @property
    def is_verbose(self) -> bool:
        return self._verbose

    # stdout

    def print_data(self, text: str) -> None:
        """Write *text* to stdout as-is; ``[GET /pokemons/{id}]`` is not markup."""
        sys.stdout.write(text + "\n")
        sys.stdout.flush()

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Print *rows* as a Rich table, a JSON array of objects, or TSV.

        The title is shown only by the Rich table.
        """
        if self._format == OutputFormat.JSON:
            self.print_data(json.dumps([dict(zip(headers, row)) for row in rows], indent=2, ensure_ascii=False))
            return
        if self._format == OutputFormat.PLAIN:
            self.print_data("\n".join("\t".join(line) for line in [headers, *rows]))
            return

        table = Table(title=title, header_style="bold cyan")
        for header in headers:
            table.add_column(header)
        for row in rows:
            table.add_row(*row)
        self._tables.print(table)

    # stderr

    def success(self, message: str) -> None:
        if not self._quiet:
            self._emit(message, f"[green]{message}[/green]")

    def warning(self, message: str) -> None:
        """Report a skipped interaction or similar; shown even with ``--quiet``."""
        self._emit(f"Warning: {message}", f"[yellow]Warning:[/yellow] {message}")

    def error(self, message: str) -> None:
        self._emit(f"Error: {message}", f"[bold red]Error:[/bold red] {message}")

    def debug(self, message: str) -> None:
        if self._verbose:
            self._emit(f"[debug] {message}", f"[dim]\\[debug] {message}[/dim]")

    def _emit(self, plain: str, styled: str) -> None:
        if self._no_color:
            sys.stderr.write(plain + "\n")
            sys.stderr.flush()
        else:
            self._diagnostics.print(styled)


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is set to anything, or ``TERM`` is ``dumb``."""
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """The installed manager; a default one is created on first use."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager so the next call builds a fresh one."""
    global _output
    _output = None


def print_data(text: str) -> None:
    get_output().print_data(text)


def print_table(headers: list[str], rows: list[list[str]], title: Optional[str] = None) -> None:
    get_output().print_table(headers, rows, title)


def success(message: str) -> None:
    get_output().success(message)


def warning(message: str) -> None:
    get_output().warning(message)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)
