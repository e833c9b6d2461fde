"""Typer application and CLI entry point for apimatrix.

The application is a single command::

    apimatrix URL [FORMAT]

It fetches the OpenAPI document at ``URL`` (a local path or ``-`` for stdin
also work), groups its endpoints by first tag, and prints the permissions
report in the requested ``FORMAT`` (``wiki`` by default, or ``markdown``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers and invokes the Typer app.
Unhandled exceptions are written to a crash log under the data directory.

See Also:
    :mod:`apimatrix.report`: The report builder driven by this command.
    :mod:`apimatrix.output`: Output manager initialised in :func:`report_command`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from apimatrix import __version__
from apimatrix.exit_codes import EXIT_GENERIC_FAILURE
from apimatrix.formatters import DEFAULT_FORMAT


app = typer.Typer(
    name="apimatrix",
    help="Print the permissions matrix of an OpenAPI spec.",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"apimatrix {__version__}")
        raise typer.Exit()


@app.command()
def report_command(
    url: str = typer.Argument(
        ..., help="URL of the OpenAPI JSON document (or a file path, or '-' for stdin)."
    ),
    fmt: str = typer.Argument(
        DEFAULT_FORMAT, metavar="FORMAT", help="Output format: wiki or markdown."
    ),
    output_file: Optional[str] = typer.Option(
        None, "-o", "--output", help="Write the report to this file."
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="HTTP timeout in seconds (default 30)."
    ),
    retries: Optional[int] = typer.Option(
        None, "--retries", help="Retries on network errors and 5xx (default 1)."
    ),
    insecure: bool = typer.Option(
        False, "--insecure", help="Do not verify SSL certificates."
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
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Group the endpoints of an OpenAPI spec by tag and print their required roles.

    The format is resolved before anything is fetched, so an unsupported
    format produces no report output at all. The whole report is built
    before the first line is printed.

    Args:
        url: Spec location.
        fmt: Output format name (case-insensitive).
        output_file: Redirect the report to a file path.
        timeout: HTTP timeout override.
        retries: Retry count override.
        insecure: Disable SSL verification.
        no_color: Disable all colour and Rich markup.
        quiet: Suppress non-essential diagnostic output.
        verbose: Enable debug-level diagnostic output.
        version: If ``True``, print the version string and exit.

    Example::

        apimatrix https://petstore3.swagger.io/api/v3/openapi.json markdown
    """
    from apimatrix.config import resolve_fetch_config
    from apimatrix.exceptions import ApiMatrixError
    from apimatrix.formatters import get_formatter
    from apimatrix.output import (
        OutputManager,
        debug,
        error,
        info,
        print_lines,
        set_output,
        success,
    )
    from apimatrix.parser import load_spec
    from apimatrix.report import build_report_from_document, render_report

    set_output(
        OutputManager(
            no_color=no_color,
            quiet=quiet,
            verbose=verbose,
            output_file=output_file,
        )
    )

    try:
        formatter = get_formatter(fmt)
        config = resolve_fetch_config(
            cli_timeout=timeout,
            cli_max_retries=retries,
            cli_verify_ssl=False if insecure else None,
        )
        info(f"Loading OpenAPI document from {'stdin' if url == '-' else url}")
        document = load_spec(url, config=config)
        report = build_report_from_document(document, formatter)
    except ApiMatrixError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    if report is None:
        error("No API defined in the OpenAPI document.")
        return

    print_lines(list(render_report(report, formatter)))
    debug(
        f"Rendered {report.endpoint_count} endpoints in {len(report.groups)} groups"
    )
    if output_file:
        success(f"Report written to {output_file}")


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path.

    Args:
        exc: The unhandled exception to log.

    Returns:
        Absolute path to the written crash log file.
    """
    from apimatrix.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``apimatrix`` console script.

    Installs signal handlers for clean Ctrl-C behaviour and invokes the
    Typer application. Expected failures are reported by the command itself
    and exit with their error's ``exit_code``; anything else produces a
    crash log and a generic failure exit.

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
        from apimatrix.output import error

        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
