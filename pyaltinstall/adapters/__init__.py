"""Adapters — runners for external commands.

Public re-exports for convenient access.
"""

from pyaltinstall.adapters.base import Runner
from pyaltinstall.adapters.mock import MockRunner
from pyaltinstall.adapters.shell.command import ShellCommandRunner

__all__ = [
    "MockRunner",
    "Runner",
    "ShellCommandRunner",
]
