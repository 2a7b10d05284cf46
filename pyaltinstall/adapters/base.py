"""
Runner base — the contract between services and external commands.

Services never call ``subprocess`` directly. They hand a command list
to a Runner and get a CommandResult back. The real implementation lives
in ``adapters.shell.command``; tests use ``adapters.mock.MockRunner``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pyaltinstall.core.models.command import CommandResult


class Runner(ABC):
    """Abstract base class for command runners.

    Runners NEVER raise for a command that fails or cannot be started.
    Failures are captured in the CommandResult with status='failed'.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The runner identifier (e.g., 'shell', 'mock')."""

    @abstractmethod
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
        """Run ``cmd`` and return its result.

        Args:
            cmd: Command list, never a shell string.
            needs_sudo: Prefix with ``sudo`` unless already root.
            cwd: Working directory for the command.
            timeout: Seconds before giving up, or None for no limit.
            stream: Let output go straight to the terminal instead of
                capturing it.
            env_overrides: Extra environment variables.
        """

    def refresh_sudo(self) -> CommandResult:
        """Validate (and cache) sudo credentials — ``sudo -v``.

        Interactive: sudo may ask for a password on the terminal.
        """
        return self.run(["sudo", "-v"], stream=True)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
