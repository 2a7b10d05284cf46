"""
Status use case — what is installed, what could be, what is missing.

Read-only: checks PATH for every catalog entry and dpkg for the build
packages. Nothing is installed or changed.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pyaltinstall.adapters.base import Runner
from pyaltinstall.core.config.loader import InstallerConfig
from pyaltinstall.core.models.catalog import VersionEntry
from pyaltinstall.core.services.dependencies import DependencyInstaller
from pyaltinstall.core.services.host import HostInfo, detect_host
from pyaltinstall.core.services.presence import Presence, PresenceChecker


@dataclass
class VersionStatus:
    entry: VersionEntry
    presence: Presence

    def to_dict(self) -> dict:
        return {
            "short_label": self.entry.short_label,
            "full_version": self.entry.full_version,
            "executable": self.entry.executable,
            "installed": self.presence.installed,
            "path": self.presence.path,
            "version": self.presence.version,
        }


@dataclass
class StatusResult:
    """Aggregated host status."""

    host: HostInfo | None = None
    versions: list[VersionStatus] = field(default_factory=list)
    packages_installed: list[str] = field(default_factory=list)
    packages_missing: list[str] = field(default_factory=list)
    prefix: str = ""

    @property
    def installed_count(self) -> int:
        return sum(1 for v in self.versions if v.presence.installed)

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        return {
            "host": self.host.to_dict() if self.host else None,
            "prefix": self.prefix,
            "versions": [v.to_dict() for v in self.versions],
            "installed_count": self.installed_count,
            "total": len(self.versions),
            "packages": {
                "installed": list(self.packages_installed),
                "missing": list(self.packages_missing),
            },
        }


def get_status(
    config: InstallerConfig,
    runner: Runner,
    presence: PresenceChecker | None = None,
    *,
    check_packages: bool = True,
) -> StatusResult:
    """Probe every catalog entry (and optionally the apt packages)."""
    presence = presence or PresenceChecker(runner)
    result = StatusResult(host=detect_host(), prefix=config.prefix)

    for entry in config.catalog():
        result.versions.append(
            VersionStatus(entry=entry, presence=presence.check(entry.short_label))
        )

    if check_packages:
        deps = DependencyInstaller(runner, config.build_packages).check_dependencies()
        result.packages_installed = deps["installed"]
        result.packages_missing = deps["missing"]

    return result
