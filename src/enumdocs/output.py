"""Run reporting for enumdocs with a fixed stdout/stderr split.

* **stdout** -- the run report: progress lines, per-resource enum counts,
  one ``Updated:`` / ``Would update:`` line per changed file, the closing
  summary, and the ``enums`` table.
* **stderr** -- errors and ``--verbose`` debug lines, nothing else.

``--quiet`` trims the report down to the changed-file lines and the enum
table, which is what CI scripts pipe and grep. Rich styling is used when
stdout is an interactive terminal; ``NO_COLOR``, ``TERM=dumb`` and
``--no-color`` turn it off.

:class:`OutputManager` holds the preferences. :func:`~enumdocs.app.main_callback`
builds one per invocation and installs it with :func:`set_output`; the
module-level functions (:func:`progress`, :func:`updated`, :func:`error`,
...) delegate to that global instance so callers never pass it around.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional, Sequence, Union

from rich.console import Console
from rich.markup import escape
from rich.table import Table


ENUM_TABLE_HEADERS = ("Resource", "Field", "Values")

EnumRow = tuple[str, str, Sequence[str]]
"""One ``enums`` table row: resource name, dotted field, sorted values."""


class OutputFormat(str, Enum):
    """Formats for the ``enums`` table.

    ``AUTO`` resolves to ``RICH`` when stdout is an interactive TTY and colour
    is not disabled, or to ``PLAIN`` otherwise.
    """

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Writes the run report to stdout and errors to stderr.

    Args:
        format: Format for the enum table. ``AUTO`` resolves based on TTY
            detection.
        no_color: Disable all colour and Rich markup.
        quiet: Keep only changed-file lines, tables and errors.
        verbose: Also print debug lines on stderr.
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

        if format == OutputFormat.AUTO:
            self._format = (
                OutputFormat.RICH if _is_tty() and not self._no_color else OutputFormat.PLAIN
            )
        else:
            self._format = format

        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=(self._format == OutputFormat.RICH),
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        """The resolved output format."""
        return self._format

    @property
    def is_quiet(self) -> bool:
        return self._quiet

    @property
    def is_verbose(self) -> bool:
        return self._verbose

    # ------------------------------------------------------------------ #
    # Run report (stdout)
    # ------------------------------------------------------------------ #

    def progress(self, message: str) -> None:
        """Print a progress line such as ``Fetching OpenAPI spec from ...``."""
        if not self._quiet:
            self._report(message)

    def enum_counts(self, counts: Mapping[str, int]) -> None:
        """Print ``  <name>: <n> enum fields`` for every resource, by name."""
        if self._quiet:
            return
        for name in sorted(counts):
            self._report(f"  {name}: {counts[name]} enum fields", style="cyan")

    def updated(self, path: Union[str, Path], *, check: bool = False) -> None:
        """Report one changed file. Printed even with ``--quiet``."""
        label = "Would update" if check else "Updated"
        if self._format == OutputFormat.RICH:
            self._stdout.print(
                f"[yellow]{label}:[/yellow] {escape(str(path))}",
                highlight=False,
                soft_wrap=True,
            )
        else:
            print(f"{label}: {path}", file=sys.stdout, flush=True)

    def summary(self, message: str) -> None:
        """Print the closing line of a run."""
        if not self._quiet:
            self._report(message, style="bold green")

    def enum_table(self, rows: Sequence[EnumRow], title: Optional[str] = None) -> None:
        """Print the Resource Enum Table in the active format.

        * **Rich** -- a :class:`~rich.table.Table` with a title.
        * **JSON** -- an array of ``{"resource", "field", "values"}`` objects,
          ``values`` being a list.
        * **Plain** -- a tab-separated header line, then one row per line
          with the values joined by ``", "``.
        """
        if self._format == OutputFormat.JSON:
            data = [
                {"resource": resource, "field": field, "values": list(values)}
                for resource, field, values in rows
            ]
            print(json.dumps(data, indent=2, ensure_ascii=False), file=sys.stdout, flush=True)

        elif self._format == OutputFormat.PLAIN:
            print("\t".join(ENUM_TABLE_HEADERS), file=sys.stdout, flush=True)
            for resource, field, values in rows:
                print(f"{resource}\t{field}\t{', '.join(values)}", file=sys.stdout, flush=True)

        else:
            table = Table(title=title, show_header=True, header_style="bold cyan")
            for header in ENUM_TABLE_HEADERS:
                table.add_column(header)
            for resource, field, values in rows:
                table.add_row(resource, field, ", ".join(values))
            self._stdout.print(table)

    def _report(self, text: str, style: Optional[str] = None) -> None:
        if self._format == OutputFormat.RICH:
            self._stdout.print(
                text, style=style, markup=False, highlight=False, soft_wrap=True
            )
        else:
            print(text, file=sys.stdout, flush=True)

    # ------------------------------------------------------------------ #
    # Diagnostics (stderr)
    # ------------------------------------------------------------------ #

    def error(self, message: str) -> None:
        """Print a bold-red error to stderr. Never suppressed."""
        if self._no_color:
            print(f"Error: {message}", file=sys.stderr, flush=True)
        else:
            self._stderr.print(f"[bold red]Error:[/bold red] {escape(message)}")

    def debug(self, message: str) -> None:
        """Print a debug line to stderr when ``--verbose`` is active."""
        if self._verbose:
            if self._no_color:
                print(f"[debug] {message}", file=sys.stderr, flush=True)
            else:
                self._stderr.print(f"[dim]\\[debug] {escape(message)}[/dim]", highlight=False)


# ------------------------------------------------------------------ #
# Module-level helpers
# ------------------------------------------------------------------ #


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is set (any value) or ``TERM=dumb``."""
    return os.environ.get("NO_COLOR") is not None or os.environ.get("TERM") == "dumb"


# ------------------------------------------------------------------ #
# Global output instance (set during app startup)
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the global :class:`OutputManager`, creating a default one lazily."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Drop the global manager so the next call builds a fresh one."""
    global _output
    _output = None


def progress(message: str) -> None:
    get_output().progress(message)


def enum_counts(counts: Mapping[str, int]) -> None:
    get_output().enum_counts(counts)


def updated(path: Union[str, Path], *, check: bool = False) -> None:
    get_output().updated(path, check=check)


def summary(message: str) -> None:
    get_output().summary(message)


def enum_table(rows: Sequence[EnumRow], title: Optional[str] = None) -> None:
    get_output().enum_table(rows, title)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)
