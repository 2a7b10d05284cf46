"""
Mock runner — test double for every external command.

Returns success for everything by default. Individual commands can be
scripted to fail or to return specific output, matched by command
prefix (``["make"]`` matches ``["make", "-j8"]``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from pyaltinstall.adapters.base import Runner
from pyaltinstall.core.models.command import CommandResult


@dataclass
class RunCall:
    """One recorded call to the mock."""

    cmd: list[str]
    needs_sudo: bool = False
    cwd: str | None = None
    stream: bool = False
    extra: dict = field(default_factory=dict)


class MockRunner(Runner):
    """Universal mock runner for testing."""

    def __init__(self, default_output: str = ""):
        self._default_output = default_output
        self._responses: list[tuple[list[str], CommandResult | Callable[[RunCall], CommandResult]]] = []
        self._call_log: list[RunCall] = []

    @property
    def name(self) -> str:
        return "mock"

    @property
    def call_log(self) -> list[RunCall]:
        """All calls this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    @property
    def commands(self) -> list[list[str]]:
        """Just the command lists, in call order."""
        return [c.cmd for c in self._call_log]

    def ran(self, *prefix: str) -> bool:
        """Whether any recorded command starts with ``prefix``."""
        return any(c.cmd[: len(prefix)] == list(prefix) for c in self._call_log)

    def calls_matching(self, *prefix: str) -> list[RunCall]:
        return [c for c in self._call_log if c.cmd[: len(prefix)] == list(prefix)]

    def set_response(
        self,
        prefix: list[str],
        result: CommandResult | Callable[[RunCall], CommandResult],
    ) -> None:
        """Respond to commands starting with ``prefix``.

        ``result`` may be a callable receiving the RunCall, for commands
        that need side effects (e.g. writing a downloaded file).
        Later registrations win over earlier ones.
        """
        self._responses.insert(0, (list(prefix), result))

    def set_failure(
        self,
        prefix: list[str],
        error: str = "Mock failure",
        return_code: int = 1,
        stderr: str = "",
    ) -> None:
        """Configure commands starting with ``prefix`` to fail."""
        self.set_response(
            prefix,
            CommandResult.failure(prefix, error=error, return_code=return_code, stderr=stderr),
        )

    def run(
        self,
        cmd: list[str],
        *,
        needs_sudo: bool = False,
        cwd: str | None = None,
        timeout: int | None = None,
        stream: bool = False,
        env_overrides: dict[str, str] | None = None,
    ) -> CommandResult:
        call = RunCall(
            cmd=list(cmd),
            needs_sudo=needs_sudo,
            cwd=cwd,
            stream=stream,
            extra={"timeout": timeout, "env_overrides": env_overrides},
        )
        self._call_log.append(call)

        for prefix, response in self._responses:
            if call.cmd[: len(prefix)] == prefix:
                result = response(call) if callable(response) else response
                return result.model_copy(update={"command": list(cmd)})

        return CommandResult.success(cmd, stdout=self._default_output, metadata={"mock": True})

    def reset(self) -> None:
        """Clear call log and scripted responses."""
        self._call_log.clear()
        self._responses.clear()
