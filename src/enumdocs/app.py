"""Typer application and CLI entry point for enumdocs.

Commands:

* ``enumdocs enrich`` -- fetch the OpenAPI document, build the Resource Enum
  Table, and rewrite ``docs/resources`` and ``docs/data-sources`` in place.
  With ``--check`` nothing is written and the exit code reports whether the
  docs are stale.
* ``enumdocs enums`` -- print the Resource Enum Table (optionally for one
  resource) without touching any file.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. Known failures (:class:`~enumdocs.exceptions.EnumDocsError`)
exit with their mapped code; anything else is written to a crash log under
the data directory.

See Also:
    :mod:`enumdocs.config`: Settings precedence resolution.
    :mod:`enumdocs.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any, NoReturn, Optional

import typer

from enumdocs import __version__
from enumdocs.exceptions import CheckFailedError, EnumDocsError, InvalidUsageError
from enumdocs.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="enumdocs",
    help="Enrich provider docs with enum constraints from the OpenAPI spec.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"enumdocs {__version__}")
        raise typer.Exit()


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
        False, "--verbose", "-v", help="Show every enum field and its values."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~enumdocs.output.OutputManager` built from
    the output flags.
    """
    from enumdocs.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(
        OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose)
    )


@app.command("enrich")
def enrich_command(
    spec: Optional[str] = typer.Option(
        None, "--spec", "-s", help="Spec URL, file path, or '-' for stdin."
    ),
    docs_dir: Optional[Path] = typer.Option(
        None, "--docs-dir", "-d", help="Docs root with resources/ and data-sources/."
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="HTTP timeout in seconds."
    ),
    check: bool = typer.Option(
        False, "--check", help="Write nothing; exit non-zero if any doc would change."
    ),
) -> None:
    """Rewrite the Markdown docs with 'Must be one of:' enum constraints.

    Example::

        enumdocs enrich
        enumdocs enrich --spec ./openapi.json --docs-dir website/docs
        enumdocs enrich --check
    """
    from enumdocs.config import resolve_config
    from enumdocs.enrichment.docs import run
    from enumdocs.output import summary

    try:
        config = resolve_config(cli_spec=spec, cli_docs_dir=docs_dir, cli_timeout=timeout)
        report = run(config, check=check)

        count = len(report.updated_files)
        if check and report.changed:
            raise CheckFailedError(
                f"{count} of {report.files_scanned} documentation files are "
                "missing enum constraints. Run: enumdocs enrich"
            )
        if check:
            summary(f"All {report.files_scanned} documentation files are up to date.")
        elif count:
            summary(f"Updated {count} of {report.files_scanned} documentation files.")
        else:
            summary(f"No changes needed ({report.files_scanned} files checked).")
    except EnumDocsError as exc:
        _exit_with(exc)


@app.command("enums")
def enums_command(
    spec: Optional[str] = typer.Option(
        None, "--spec", "-s", help="Spec URL, file path, or '-' for stdin."
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="HTTP timeout in seconds."
    ),
    resource: Optional[str] = typer.Option(
        None, "--resource", "-r", help="Only show this resource or data source."
    ),
) -> None:
    """Show the enum-constrained fields found for each resource.

    Example::

        enumdocs enums
        enumdocs --json enums --resource check
    """
    from enumdocs.config import resolve_config
    from enumdocs.output import OutputFormat, enum_table, get_output, summary
    from enumdocs.parser import load_spec
    from enumdocs.resources import build_enum_table, known_names, lookup_path

    try:
        if resource is not None and lookup_path(resource) is None:
            raise InvalidUsageError(
                f"Unknown resource or data source '{resource}'. "
                f"Known names: {', '.join(known_names())}"
            )

        config = resolve_config(cli_spec=spec, cli_timeout=timeout)
        table = build_enum_table(load_spec(config.spec_source, timeout=config.timeout))
    except EnumDocsError as exc:
        _exit_with(exc)

    names = [resource] if resource is not None else sorted(table)
    rows = [
        (name, field, enum_info.sorted_values())
        for name in names
        for field, enum_info in sorted(table.get(name, {}).items())
    ]

    if not rows and get_output().format != OutputFormat.JSON:
        summary("No enum-constrained fields found.")
        return
    enum_table(rows, title=f"Enum fields ({len(rows)})")


def _exit_with(exc: EnumDocsError) -> NoReturn:
    """Report *exc* on stderr and exit with its mapped code."""
    from enumdocs.output import error

    error(str(exc))
    raise typer.Exit(code=exc.exit_code)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from enumdocs.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    )
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``enumdocs`` console script.

    Unhandled :class:`~enumdocs.exceptions.EnumDocsError` instances cause a
    clean exit with the error's ``exit_code``. All other exceptions produce
    a crash log and a generic failure exit.

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
        from enumdocs.output import error

        if isinstance(exc, EnumDocsError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            log_path = _write_crash_log(exc)
            error(f"Unexpected error. Debug log: {log_path}")
            sys.exit(EXIT_GENERIC_FAILURE)
