"""
Build dependency installation — apt packages CPython needs to compile.

``install_dependencies`` mutates the system (sudo apt); any failure is a
DependencyError and the run stops there. ``check_dependencies`` is a
read-only dpkg-query check used by ``status``.
"""

from __future__ import annotations

import logging

from pyaltinstall.adapters.base import Runner
from pyaltinstall.core.data.catalog import BUILD_PACKAGES
from pyaltinstall.core.errors import DependencyError

logger = logging.getLogger(__name__)


class DependencyInstaller:
    """Install (or check) the fixed list of build packages via apt."""

    def __init__(
        self,
        runner: Runner,
        packages: list[str] | None = None,
        *,
        stream: bool = False,
    ):
        self._runner = runner
        self._packages = list(packages if packages is not None else BUILD_PACKAGES)
        self._stream = stream

    @property
    def packages(self) -> list[str]:
        return list(self._packages)

    def install_dependencies(self) -> None:
        """Refresh the apt index and install the build packages.

        Safe to re-run: apt skips packages that are already satisfied.

        Raises:
            DependencyError: If either apt command fails.
        """
        logger.info("Installing %d build packages", len(self._packages))

        update = self._runner.run(["apt", "update"], needs_sudo=True, stream=self._stream)
        if not update.ok:
            raise DependencyError("apt update", update.tail() or update.error or "")

        install = self._runner.run(
            ["apt", "install", "-y", *self._packages],
            needs_sudo=True,
            stream=self._stream,
        )
        if not install.ok:
            raise DependencyError("apt install", install.tail() or install.error or "")

        logger.debug("Build packages satisfied in %dms", install.duration_ms)

    def is_package_installed(self, pkg: str) -> bool:
        """``dpkg-query -W -f=${Status} PKG`` reports ``install ok installed``."""
        result = self._runner.run(["dpkg-query", "-W", "-f=${Status}", pkg], timeout=10)
        return result.ok and "install ok installed" in result.stdout

    def check_dependencies(self) -> dict[str, list[str]]:
        """Which build packages are installed.

        Returns:
            {"missing": ["pkg1", ...], "installed": ["pkg2", ...]}
        """
        missing: list[str] = []
        installed: list[str] = []
        for pkg in self._packages:
            if self.is_package_installed(pkg):
                installed.append(pkg)
            else:
                missing.append(pkg)
        return {"missing": missing, "installed": installed}
