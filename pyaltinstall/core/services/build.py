"""
Build-and-install worker — one Python version from tarball to altinstall.

Pipeline (halts at the first failing stage):

    workspace → fetch → extract → configure → make -jN → make altinstall
    → ldconfig → remove workspace → verify on PATH → bootstrap pip

Only ``make altinstall`` is ever used: it installs ``python3.X`` without
touching the unsuffixed ``python3`` / ``python`` names.
"""

from __future__ import annotations

import contextlib
import logging
import os
import shutil
import tarfile
import tempfile
from collections.abc import Iterator
from pathlib import Path
from typing import Callable

from pyaltinstall.adapters.base import Runner
from pyaltinstall.core.config.loader import InstallerConfig
from pyaltinstall.core.errors import BootstrapWarning, BuildError, BuildStage
from pyaltinstall.core.models.command import CommandResult
from pyaltinstall.core.services.presence import PresenceChecker, executable_name
from pyaltinstall.core.services.reporting import NullReporter, Reporter

logger = logging.getLogger(__name__)

INSTALL_TARGET = "altinstall"


class BuildWorker:
    """Builds and altinstalls single versions.

    Args:
        config: Effective installer configuration.
        runner: Runner for every external command.
        presence: Presence checker used for verification and pip checks.
        reporter: Where user-facing stage lines go.
        stream: Show configure/make output live instead of capturing it.
        which: Path resolver for picking the download tool.
    """

    def __init__(
        self,
        config: InstallerConfig,
        runner: Runner,
        presence: PresenceChecker,
        reporter: Reporter | None = None,
        *,
        stream: bool = False,
        which: Callable[[str], str | None] = shutil.which,
    ):
        self._config = config
        self._runner = runner
        self._presence = presence
        self._reporter = reporter or NullReporter()
        self._stream = stream
        self._which = which
        self.bootstrap_warnings: list[BootstrapWarning] = []

    # ── Public API ──────────────────────────────────────────────

    def build_and_install(self, short_label: str, full_version: str) -> str:
        """Build, install and verify one version.

        Returns:
            The installed version string reported by the new interpreter
            (``full_version`` when its output cannot be parsed).

        Raises:
            BuildError: Naming the stage that failed.
        """
        self._reporter.info(f"Installing Python {full_version}...")

        with self.workspace(short_label, full_version) as workspace:
            archive = self._fetch(short_label, full_version, workspace)
            source_dir = self._extract(short_label, full_version, archive, workspace)
            self._configure(short_label, source_dir)
            self._compile(short_label, source_dir)
            self._install(short_label, source_dir)
            self._refresh_library_cache()

        presence = self._presence.check(short_label)
        if not presence.installed:
            raise BuildError(
                BuildStage.VERIFY,
                short_label,
                f"{executable_name(short_label)} not found on PATH after install",
            )

        version = presence.version or full_version
        self._reporter.success(f"Python {short_label} installed successfully: {version}")
        self._bootstrap_pip(short_label, presence.path)
        return version

    @contextlib.contextmanager
    def workspace(self, short_label: str, full_version: str) -> Iterator[Path]:
        """Exclusive scratch directory, removed on every exit path."""
        root = Path(self._config.workspace_root)
        try:
            root.mkdir(parents=True, exist_ok=True)
            path = Path(tempfile.mkdtemp(prefix=f"python-{full_version}-", dir=root))
        except OSError as e:
            raise BuildError(
                BuildStage.WORKSPACE,
                short_label,
                f"Cannot create build directory under {root}: {e}",
            ) from e
        logger.debug("Created workspace %s", path)
        try:
            yield path
        finally:
            self._remove_workspace(path)

    def configure_command(self) -> list[str]:
        return ["./configure", *self._config.configure_flags, f"--prefix={self._config.prefix}"]

    def compile_command(self) -> list[str]:
        return ["make", f"-j{self._config.effective_jobs()}"]

    def install_command(self) -> list[str]:
        return ["make", INSTALL_TARGET]

    # ── Stages ──────────────────────────────────────────────────

    def _fetch(self, short_label: str, full_version: str, workspace: Path) -> Path:
        url = self._config.source_url(full_version)
        archive = workspace / f"Python-{full_version}.tgz"

        if self._which("curl"):
            cmd = ["curl", "-fSL", "-o", str(archive), url]
        elif self._which("wget"):
            cmd = ["wget", "-O", str(archive), url]
        else:
            raise BuildError(
                BuildStage.FETCH,
                short_label,
                "No download tool available (curl, wget). Install one first.",
            )

        self._reporter.info(f"Downloading Python {full_version} source...")
        result = self._runner.run(cmd, cwd=str(workspace))
        if not result.ok:
            raise BuildError(BuildStage.FETCH, short_label, _describe(result, url))
        if not archive.is_file():
            raise BuildError(BuildStage.FETCH, short_label, f"{url} produced no file")
        return archive

    def _extract(
        self,
        short_label: str,
        full_version: str,
        archive: Path,
        workspace: Path,
    ) -> Path:
        # Python ships the "data" filter from 3.12 (and security backports)
        extract_kwargs = {"filter": "data"} if hasattr(tarfile, "data_filter") else {}
        try:
            with tarfile.open(archive, "r:gz") as tar:
                tar.extractall(workspace, **extract_kwargs)
        except (tarfile.TarError, OSError, EOFError) as e:
            raise BuildError(BuildStage.EXTRACT, short_label, f"{archive.name}: {e}") from e

        source_dir = workspace / f"Python-{full_version}"
        if not source_dir.is_dir():
            raise BuildError(
                BuildStage.EXTRACT,
                short_label,
                f"{archive.name} has no Python-{full_version}/ directory",
            )
        return source_dir

    def _configure(self, short_label: str, source_dir: Path) -> None:
        self._reporter.info("Configuring build...")
        self._run_stage(BuildStage.CONFIGURE, short_label, self.configure_command(), source_dir)

    def _compile(self, short_label: str, source_dir: Path) -> None:
        self._reporter.info(f"Compiling with {self._config.effective_jobs()} cores...")
        self._run_stage(BuildStage.COMPILE, short_label, self.compile_command(), source_dir)

    def _install(self, short_label: str, source_dir: Path) -> None:
        self._reporter.info(f"Installing Python {short_label} (make {INSTALL_TARGET})...")
        self._run_stage(
            BuildStage.INSTALL,
            short_label,
            self.install_command(),
            source_dir,
            needs_sudo=True,
        )

    def _refresh_library_cache(self) -> None:
        result = self._runner.run(["ldconfig"], needs_sudo=True)
        if not result.ok:
            logger.warning("ldconfig failed: %s", result.error)
            self._reporter.warning(f"Shared library cache refresh failed: {result.error}")

    def _run_stage(
        self,
        stage: BuildStage,
        short_label: str,
        cmd: list[str],
        source_dir: Path,
        *,
        needs_sudo: bool = False,
    ) -> None:
        # No timeout: an LTO + PGO build takes many minutes
        result = self._runner.run(
            cmd,
            cwd=str(source_dir),
            needs_sudo=needs_sudo,
            stream=self._stream,
        )
        if not result.ok:
            raise BuildError(stage, short_label, _describe(result))
        logger.debug("%s for %s took %dms", stage.value, short_label, result.duration_ms)

    def _remove_workspace(self, path: Path) -> None:
        try:
            shutil.rmtree(path)
            logger.debug("Removed workspace %s", path)
            return
        except FileNotFoundError:
            return
        except OSError as e:
            # make altinstall under sudo leaves root-owned files behind
            logger.debug("rmtree %s failed (%s), retrying with sudo", path, e)

        result = self._runner.run(["rm", "-rf", str(path)], needs_sudo=True)
        if not result.ok:
            logger.warning("Could not remove workspace %s: %s", path, result.error)
            self._reporter.warning(f"Could not remove build directory {path}")

    def _bootstrap_pip(self, short_label: str, exe_path: str | None) -> None:
        if self._presence.has_pip(short_label):
            return

        # sudo resets PATH to secure_path, which may not include the prefix
        exe = exe_path or executable_name(short_label)
        self._reporter.info(f"Installing pip for Python {short_label}...")
        needs_sudo = not os.access(self._config.prefix, os.W_OK)
        result = self._runner.run(
            [exe, "-m", "ensurepip", "--default-pip"],
            needs_sudo=needs_sudo,
        )
        if result.ok:
            return

        warning = BootstrapWarning(
            f"pip bootstrap failed for Python {short_label}: {_describe(result)}"
        )
        self.bootstrap_warnings.append(warning)
        logger.warning("%s", warning)
        self._reporter.warning(str(warning))


def _describe(result: CommandResult, context: str = "") -> str:
    """One-line failure description plus the output tail."""
    parts = [result.error or "failed"]
    if context:
        parts.append(context)
    message = " — ".join(parts)
    tail = result.tail(10)
    if tail:
        message += "\n" + tail
    return message
