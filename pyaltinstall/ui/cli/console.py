"""
Console output and prompts for the CLI.

Console writes the color-tagged status lines to stdout::

    [INFO]      blue
    [SUCCESS]   green
    [WARNING]   yellow
    [ERROR]     red

ClickPrompter reads the mode key and the per-version answers.
"""

from __future__ import annotations

import sys

import click

from pyaltinstall.core.models.catalog import VersionEntry

_TAGS = {
    "info": ("[INFO]", "blue"),
    "success": ("[SUCCESS]", "green"),
    "warning": ("[WARNING]", "yellow"),
    "error": ("[ERROR]", "red"),
}


class Console:
    """Reporter that prints to the terminal with click."""

    def __init__(self, quiet: bool = False):
        self._quiet = quiet

    def _tagged(self, level: str, message: str) -> None:
        tag, color = _TAGS[level]
        # Errors always print, even in quiet mode
        if self._quiet and level in ("info", "success"):
            return
        click.echo(f"{click.style(tag, fg=color)} {message}")

    def info(self, message: str) -> None:
        self._tagged("info", message)

    def success(self, message: str) -> None:
        self._tagged("success", message)

    def warning(self, message: str) -> None:
        self._tagged("warning", message)

    def error(self, message: str) -> None:
        self._tagged("error", message)

    def echo(self, message: str = "", *, fg: str | None = None, bold: bool = False) -> None:
        if self._quiet:
            return
        click.secho(message, fg=fg, bold=bold)


class ClickPrompter:
    """Prompts read from stdin.

    On a terminal the mode is a single keypress. When stdin is a pipe or
    file, the mode is the first character of the next line, so
    ``printf '2\\n' | pyaltinstall`` works without a controlling tty.
    """

    def choose_mode(self) -> str:
        click.echo("Choose mode [1/2/3]: ", nl=False)
        if sys.stdin is not None and sys.stdin.isatty():
            char = click.getchar()
        else:
            char = self._read_mode_line()
        click.echo()
        return char

    def _read_mode_line(self) -> str:
        # Same stream click.prompt reads, so no buffered input is lost
        # between the mode line and the per-version answers. EOF gives "".
        char = sys.stdin.read(1) if sys.stdin is not None else ""
        if char and char != "\n":
            sys.stdin.readline()
        return char

    def ask_version(self, entry: VersionEntry) -> str:
        return click.prompt(
            "  Install this version? [Y/n/q/a]",
            default="",
            show_default=False,
            prompt_suffix=" ",
        )
