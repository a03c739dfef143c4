"""The ``specdocs`` command line.

``generate`` writes the documents, ``inspect`` previews them without touching
disk and ``config`` edits the stored defaults. Global flags set up the
:mod:`specdocs.output` manager before any sub-command runs.

:func:`main` is the console-script entry point. It turns
:class:`~specdocs.exceptions.SpecdocsError` into the error's exit code and
anything else into a crash log under :func:`~specdocs.config.get_data_dir`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any

import typer

from specdocs import __version__
from specdocs.commands.config import config_app
from specdocs.commands.generate import generate_command
from specdocs.commands.inspect import inspect_command
from specdocs.exceptions import SpecdocsError
from specdocs.exit_codes import EXIT_GENERIC_FAILURE
from specdocs.output import OutputFormat, OutputManager, error, set_output

EXIT_CANCELLED = 130

app = typer.Typer(
    name="specdocs",
    help="Generate llms.txt, Markdown and HTML docs from OpenAPI 3.x specs.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
    pretty_exceptions_enable=False,
)

app.command("generate")(generate_command)
app.command("inspect")(inspect_command)
app.add_typer(config_app, name="config", help="Show or change stored defaults.")


def _show_version(value: bool) -> None:
    if value:
        typer.echo(f"specdocs {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_show_version,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Configure output before the sub-command runs."""
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN
    else:
        fmt = OutputFormat.AUTO
    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))


def _cancel(*_: Any) -> None:
    sys.stderr.write("\nCancelled.\n")
    sys.exit(EXIT_CANCELLED)


def _report_crash() -> None:
    """Save the active traceback to a timestamped log and point the user at it."""
    from specdocs.config import get_data_dir

    log_path = get_data_dir() / f"crash-{datetime.now():%Y%m%d-%H%M%S}.log"
    log_path.write_text(traceback.format_exc(), encoding="utf-8")
    error(f"Unexpected error. Debug log: {log_path}")


def main() -> None:
    """Run the CLI; always ends in ``SystemExit``."""
    signal.signal(signal.SIGINT, _cancel)
    try:
        app()
    except KeyboardInterrupt:
        _cancel()
    except SpecdocsError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception:
        _report_crash()
        sys.exit(EXIT_GENERIC_FAILURE)
