"""
Domain models for the installer.

    from pyaltinstall.core.models import VersionCatalog, RunState, CommandResult
"""

from pyaltinstall.core.models.catalog import VersionCatalog, VersionEntry, version_key
from pyaltinstall.core.models.command import CommandResult
from pyaltinstall.core.models.run import (
    InstallMode,
    InstallOutcome,
    RunPhase,
    RunState,
    VersionResult,
)

__all__ = [
    # catalog.py
    "VersionCatalog",
    "VersionEntry",
    "version_key",
    # command.py
    "CommandResult",
    # run.py
    "InstallMode",
    "InstallOutcome",
    "RunPhase",
    "RunState",
    "VersionResult",
]
