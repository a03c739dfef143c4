"""Terminal output for the CLI.

Data goes to stdout: the ``inspect`` tables, JSON documents and config dumps
that scripts pipe into other tools. Everything addressed to the person at the
terminal (progress, success lines, suggestions, errors) goes to stderr, so
``specdocs --json inspect openapi.yaml | jq .documents`` never sees a status
line.

Rich styling is used only when stdout is a terminal and colour has not been
turned off by ``NO_COLOR``, ``TERM=dumb`` or ``--no-color``.

:func:`specdocs.app.main_callback` builds one :class:`OutputManager` from the
global flags and installs it with :func:`set_output`; commands then call the
module-level helpers (:func:`info`, :func:`error`, ...).
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table


class OutputFormat(str, Enum):
    """How data written to stdout is rendered.

    ``AUTO`` becomes ``RICH`` on an interactive, colour-capable terminal and
    ``PLAIN`` otherwise.
    """

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Routes data to stdout and diagnostics to stderr in the chosen format.

    Args:
        format: Rendering for stdout data.
        no_color: Disable colour and Rich markup on both streams.
        quiet: Drop ``info``/``success``/``suggest`` messages. Errors are
            always shown.
        verbose: Show ``debug`` messages.
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
            format = OutputFormat.RICH if _is_tty() and not self._no_color else OutputFormat.PLAIN
        self._format = format

        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=format == OutputFormat.RICH,
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    # ------------------------------------------------------------------ #
    # stdout
    # ------------------------------------------------------------------ #

    def print_data(self, text: str) -> None:
        print(text, file=sys.stdout, flush=True)

    def print_record(self, record: dict[str, Any]) -> None:
        """Write one record (a config dump, the inspect summary) to stdout.

        PLAIN prints ``key<TAB>value`` lines with nested values as compact
        JSON; JSON and RICH print the whole record as indented JSON.
        """
        if self._format == OutputFormat.PLAIN:
            for key, value in record.items():
                if isinstance(value, (dict, list)):
                    value = json.dumps(value, ensure_ascii=False, default=str)
                self.print_data(f"{key}\t{value}")
        elif self._format == OutputFormat.JSON:
            self.print_data(_to_json(record))
        else:
            self._stdout.print(Syntax(_to_json(record), "json", theme="monokai", word_wrap=True))

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Write a table: styled in RICH, tab-separated in PLAIN, records in JSON."""
        if self._format == OutputFormat.JSON:
            self.print_data(_to_json([dict(zip(headers, row)) for row in rows]))
        elif self._format == OutputFormat.PLAIN:
            for row in [headers, *rows]:
                self.print_data("\t".join(row))
        else:
            table = Table(title=title, show_header=True, header_style="bold cyan")
            for header in headers:
                table.add_column(header)
            for row in rows:
                table.add_row(*row)
            self._stdout.print(table)

    # ------------------------------------------------------------------ #
    # stderr
    # ------------------------------------------------------------------ #

    def info(self, message: str) -> None:
        if not self._quiet:
            self._diagnose(message)

    def success(self, message: str) -> None:
        if not self._quiet:
            self._diagnose(message, style="green")

    def suggest(self, message: str) -> None:
        if not self._quiet:
            self._diagnose(f"→ {message}", style="dim")

    def warning(self, message: str) -> None:
        """Shown even with ``--quiet``."""
        self._diagnose(message, prefix="Warning:", prefix_style="yellow")

    def error(self, message: str) -> None:
        self._diagnose(message, prefix="Error:", prefix_style="bold red")

    def debug(self, message: str) -> None:
        if self._verbose:
            self._diagnose(f"[debug] {message}", style="dim")

    def _diagnose(
        self,
        message: str,
        style: Optional[str] = None,
        prefix: str = "",
        prefix_style: str = "",
    ) -> None:
        if self._no_color:
            text = f"{prefix} {message}" if prefix else message
            print(text, file=sys.stderr, flush=True)
            return
        markup = escape(message)
        if style:
            markup = f"[{style}]{markup}[/{style}]"
        if prefix:
            markup = f"[{prefix_style}]{prefix}[/{prefix_style}] {markup}"
        self._stderr.print(markup, soft_wrap=True)


def _to_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """``NO_COLOR`` set to anything, or ``TERM=dumb``."""
    return os.environ.get("NO_COLOR") is not None or os.environ.get("TERM") == "dumb"


# ------------------------------------------------------------------ #
# Global instance
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed manager, creating a default one on first use."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager (tests swap stdout/stderr between runs)."""
    global _output
    _output = None


def print_record(record: dict[str, Any]) -> None:
    get_output().print_record(record)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def suggest(message: str) -> None:
    get_output().suggest(message)


def warning(message: str) -> None:
    get_output().warning(message)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)
