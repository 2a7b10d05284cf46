"""
Presence checking — is ``python<short>`` already on this host?

Read-only checks. Presence is decided by search-path resolution alone;
the ``--version`` call only adds information. A version string that
cannot be obtained or parsed never turns "installed" into "missing".
"""

from __future__ import annotations

import logging
import re
import shutil
from dataclasses import dataclass
from typing import Callable

from pyaltinstall.adapters.base import Runner
from pyaltinstall.core.data.catalog import EXECUTABLE_STEM

logger = logging.getLogger(__name__)

_VERSION_RE = re.compile(r"Python\s+(\d+\.\d+\.\d+\S*)")

# Seconds; each check runs an interpreter once, nothing more.
_PROBE_TIMEOUT = 15


def executable_name(short_label: str) -> str:
    return f"{EXECUTABLE_STEM}{short_label}"


def parse_version_output(output: str) -> str | None:
    """Extract ``3.12.1`` from ``Python 3.12.1``.

    Falls back to the second whitespace-separated token, like
    ``awk '{print $2}'``. Returns None when there is nothing usable.
    """
    match = _VERSION_RE.search(output)
    if match:
        return match.group(1)
    parts = output.split()
    if len(parts) >= 2 and re.match(r"^\d", parts[1]):
        return parts[1]
    return None


@dataclass(frozen=True)
class Presence:
    """Result of probing one short label."""

    short_label: str
    installed: bool
    path: str | None = None
    version: str | None = None

    @property
    def version_display(self) -> str:
        return self.version or "unknown version"


class PresenceChecker:
    """Search-path checks for version-suffixed interpreters.

    Args:
        runner: Runner used for the ``--version`` / pip checks.
        which: Path resolver, ``shutil.which`` unless a test swaps it.
    """

    def __init__(
        self,
        runner: Runner,
        which: Callable[[str], str | None] = shutil.which,
    ):
        self._runner = runner
        self._which = which

    def resolve(self, short_label: str) -> str | None:
        """Absolute path of ``python<short>``, or None."""
        return self._which(executable_name(short_label))

    def check(self, short_label: str) -> Presence:
        """Resolve ``python<short>`` and, when found, ask for its version."""
        path = self.resolve(short_label)
        if path is None:
            logger.debug("%s not found on PATH", executable_name(short_label))
            return Presence(short_label=short_label, installed=False)

        version = self.installed_version(short_label)
        logger.info(
            "Python %s already installed: %s (%s)",
            short_label, version or "version unknown", path,
        )
        return Presence(short_label=short_label, installed=True, path=path, version=version)

    def is_installed(self, short_label: str) -> bool:
        """True iff ``python<short>`` resolves on PATH."""
        return self.check(short_label).installed

    def installed_version(self, short_label: str) -> str | None:
        """Version reported by ``python<short> --version``, if parseable."""
        exe = executable_name(short_label)
        result = self._runner.run([exe, "--version"], timeout=_PROBE_TIMEOUT)
        if not result.ok:
            logger.debug("Version check failed for %s: %s", exe, result.error)
            return None
        # Python 2 printed its version to stderr
        version = parse_version_output(f"{result.stdout} {result.stderr}")
        if version is None:
            logger.debug("Unparseable version output from %s: %r", exe, result.stdout)
        return version

    def has_pip(self, short_label: str) -> bool:
        """Whether ``python<short> -m pip`` works."""
        exe = executable_name(short_label)
        result = self._runner.run([exe, "-m", "pip", "--version"], timeout=_PROBE_TIMEOUT)
        return result.ok

    def installed_executables(self, labels: list[str]) -> list[tuple[str, str | None]]:
        """``[(executable, version)]`` for each label that now resolves."""
        found: list[tuple[str, str | None]] = []
        for label in labels:
            if self.resolve(label) is not None:
                found.append((executable_name(label), self.installed_version(label)))
        return found
