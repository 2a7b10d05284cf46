"""
Reporter protocol — how services talk to the user.

Services emit user-facing progress through a Reporter instead of
printing. The CLI passes its Console; tests pass a RecordingReporter.
"""

from __future__ import annotations

from typing import Protocol


class Reporter(Protocol):
    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def echo(self, message: str = "", *, fg: str | None = None, bold: bool = False) -> None: ...


class NullReporter:
    """Swallows everything. Default when no reporter is given."""

    def info(self, message: str) -> None:
        pass

    def success(self, message: str) -> None:
        pass

    def warning(self, message: str) -> None:
        pass

    def error(self, message: str) -> None:
        pass

    def echo(self, message: str = "", *, fg: str | None = None, bold: bool = False) -> None:
        pass


class RecordingReporter:
    """Keeps every line as ``(level, message)`` — for tests and --json runs."""

    def __init__(self) -> None:
        self.lines: list[tuple[str, str]] = []

    def info(self, message: str) -> None:
        self.lines.append(("info", message))

    def success(self, message: str) -> None:
        self.lines.append(("success", message))

    def warning(self, message: str) -> None:
        self.lines.append(("warning", message))

    def error(self, message: str) -> None:
        self.lines.append(("error", message))

    def echo(self, message: str = "", *, fg: str | None = None, bold: bool = False) -> None:
        self.lines.append(("echo", message))

    def messages(self, level: str | None = None) -> list[str]:
        return [m for lvl, m in self.lines if level is None or lvl == level]

    def contains(self, text: str, level: str | None = None) -> bool:
        return any(text in m for m in self.messages(level))
