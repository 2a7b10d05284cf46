"""
CommandResult model — the outcome of one external command.

The command runner never raises for a failing command: it returns a
CommandResult and the caller decides what the failure means (a fatal
dependency error, a failed build stage, or just a warning).
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class CommandResult(BaseModel):
    """Result of running an external command."""

    command: list[str] = Field(default_factory=list)
    status: Literal["ok", "failed"] = "ok"
    return_code: int | None = 0

    stdout: str = ""
    stderr: str = ""
    error: str | None = None
    duration_ms: int = 0

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Whether the command exited with status 0."""
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        """Whether the command failed or could not be started."""
        return self.status == "failed"

    @property
    def display(self) -> str:
        """The command line as a single string, for messages."""
        return " ".join(self.command)

    def tail(self, lines: int = 15) -> str:
        """Last lines of stderr (or stdout when stderr is empty)."""
        text = self.stderr.strip() or self.stdout.strip()
        if not text:
            return ""
        return "\n".join(text.splitlines()[-lines:])

    @classmethod
    def success(
        cls,
        command: list[str],
        stdout: str = "",
        **kwargs: Any,
    ) -> CommandResult:
        """Create a success result."""
        return cls(command=list(command), status="ok", stdout=stdout, **kwargs)

    @classmethod
    def failure(
        cls,
        command: list[str],
        error: str,
        **kwargs: Any,
    ) -> CommandResult:
        """Create a failure result."""
        kwargs.setdefault("return_code", None)
        return cls(command=list(command), status="failed", error=error, **kwargs)
