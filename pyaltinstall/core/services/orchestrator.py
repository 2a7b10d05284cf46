"""
Install orchestrator — the run from banner to summary.

State machine::

    init ──► mode_select ──► iterating ──► done
                  │               │
                  └──► cancelled ◄┘  (mode 3, or Q between versions)

Per version: already present → record and move on; otherwise install
(all mode) or ask (interactive mode). A failed build is recorded and the
loop continues. Only a DependencyError stops the run early.
"""

from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Protocol

from pyaltinstall.core.data.catalog import BUILD_TIME_HINT, DISK_SPACE_HINT
from pyaltinstall.core.errors import BuildError, DependencyError
from pyaltinstall.core.models.catalog import VersionCatalog, VersionEntry
from pyaltinstall.core.models.command import CommandResult
from pyaltinstall.core.models.run import (
    InstallMode,
    InstallOutcome,
    RunPhase,
    RunState,
    VersionResult,
)
from pyaltinstall.core.services.build import BuildWorker
from pyaltinstall.core.services.dependencies import DependencyInstaller
from pyaltinstall.core.services.host import HostInfo
from pyaltinstall.core.services.presence import PresenceChecker
from pyaltinstall.core.services.reporting import NullReporter, Reporter

logger = logging.getLogger(__name__)


class Answer(str, Enum):
    """Recognised replies to the per-version prompt."""

    YES = "y"
    NO = "n"
    QUIT = "q"
    ALL = "a"


class Prompter(Protocol):
    def choose_mode(self) -> str:
        """Read the single-character mode choice."""
        ...

    def ask_version(self, entry: VersionEntry) -> str:
        """Read the reply to "Install this version? [Y/n/q/a]"."""
        ...


class SudoValidator(Protocol):
    def refresh_sudo(self) -> CommandResult: ...


def parse_mode(reply: str) -> InstallMode:
    """``2`` → all, ``3`` → cancelled, anything else → interactive."""
    first = reply.strip()[:1]
    if first == "2":
        return InstallMode.ALL
    if first == "3":
        return InstallMode.CANCELLED
    return InstallMode.INTERACTIVE


def parse_answer(reply: str) -> Answer | None:
    """Map a prompt reply to an Answer; None means "ask again".

    Empty input is YES. Only the first character counts, any case.
    """
    first = reply.strip()[:1].lower()
    if first == "":
        return Answer.YES
    try:
        return Answer(first)
    except ValueError:
        return None


class Orchestrator:
    """Drives one installation run over a catalog.

    Args:
        catalog: Versions to consider, already in install order.
        presence: Probes for already-installed interpreters.
        worker: Builds one version.
        dependencies: Installs apt build packages once per run.
        prompter: Source of user decisions.
        reporter: Where user-facing lines go.
        sudo: Validates sudo before the first privileged command.
        host: Host details for the banner.
        bin_dir: Directory the interpreters are installed into.
    """

    def __init__(
        self,
        catalog: VersionCatalog,
        presence: PresenceChecker,
        worker: BuildWorker,
        dependencies: DependencyInstaller,
        prompter: Prompter,
        reporter: Reporter | None = None,
        *,
        sudo: SudoValidator | None = None,
        host: HostInfo | None = None,
        bin_dir: str = "/usr/local/bin",
    ):
        self._catalog = catalog
        self._presence = presence
        self._worker = worker
        self._dependencies = dependencies
        self._prompter = prompter
        self._reporter = reporter or NullReporter()
        self._sudo = sudo
        self._host = host
        self._bin_dir = bin_dir

    # ── Run ─────────────────────────────────────────────────────

    def run(self, mode: InstallMode | None = None, *, show_summary: bool = True) -> RunState:
        """Execute the whole run.

        Args:
            mode: Preselected mode; None asks the user.
            show_summary: Print the closing summary block.

        Returns:
            The final RunState (phase ``done`` or ``cancelled``).

        Raises:
            DependencyError: Build packages or sudo could not be set up.
        """
        state = RunState(total=len(self._catalog))

        self._show_banner()
        self._show_catalog()

        state.phase = RunPhase.MODE_SELECT
        state.mode = mode if mode is not None else self._select_mode()

        if state.mode == InstallMode.CANCELLED:
            self._reporter.info("Installation cancelled.")
            state.phase = RunPhase.CANCELLED
            return state

        if state.mode == InstallMode.ALL:
            self._reporter.info("Will install all available versions automatically")
        else:
            self._reporter.info("Will prompt for each version individually")

        self._prepare()

        state.phase = RunPhase.ITERATING
        self._reporter.info(f"Starting installation loop for {state.total} versions...")
        for entry in self._catalog:
            if state.cancelled:
                break
            self.process_entry(entry, state)

        if not state.cancelled:
            state.phase = RunPhase.DONE
        logger.info("Run finished: %s", state.to_dict())

        if show_summary:
            self.show_summary(state)
        return state

    def process_entry(self, entry: VersionEntry, state: RunState) -> None:
        """Handle one catalog entry: skip, ask, or build."""
        label = entry.short_label
        self._reporter.echo()
        self._reporter.echo(f"===== Python {label} ({entry.full_version}) =====", fg="blue")

        presence = self._presence.check(label)
        if presence.installed:
            self._reporter.success(
                f"Python {label} already installed: {presence.version_display}"
            )
            state.record(VersionResult(
                entry=entry,
                outcome=InstallOutcome.ALREADY_PRESENT,
                installed_version=presence.version,
            ))
            self._show_progress(state)
            return

        if state.mode == InstallMode.ALL:
            self._reporter.info(f"Auto-installing Python {label}...")
        else:
            answer = self._ask(entry)
            if answer == Answer.QUIT:
                self._reporter.info("Installation cancelled by user")
                state.phase = RunPhase.CANCELLED
                return
            if answer == Answer.NO:
                self._reporter.info(f"Skipping Python {label}")
                state.record(VersionResult(entry=entry, outcome=InstallOutcome.SKIPPED))
                self._show_progress(state)
                return
            if answer == Answer.ALL:
                self._reporter.info("Installing remaining versions automatically...")
                state.mode = InstallMode.ALL

        state.record(self._attempt(entry))
        self._show_progress(state)

    # ── Steps ───────────────────────────────────────────────────

    def _select_mode(self) -> InstallMode:
        self._reporter.echo("Installation modes:", fg="blue")
        self._reporter.echo("  1. Interactive - prompt for each version (recommended)")
        self._reporter.echo("  2. Install all - install all versions automatically")
        self._reporter.echo("  3. Cancel")
        self._reporter.echo()
        return parse_mode(self._prompter.choose_mode())

    def _prepare(self) -> None:
        if self._sudo is not None:
            self._reporter.info("Checking sudo access...")
            result = self._sudo.refresh_sudo()
            if not result.ok:
                raise DependencyError("sudo -v", result.error or "")

        self._reporter.info("Installing build dependencies...")
        self._dependencies.install_dependencies()
        self._reporter.success("Dependencies installed")

    def _ask(self, entry: VersionEntry) -> Answer:
        self._reporter.echo(
            f"Install Python {entry.short_label} ({entry.full_version})?", fg="yellow"
        )
        self._reporter.echo(f"  📦 Compilation time: {BUILD_TIME_HINT}")
        self._reporter.echo(f"  💾 Disk space required: {DISK_SPACE_HINT}")
        self._reporter.echo(f"  🔧 Will be installed as: {self._bin_dir}/{entry.executable}")
        self._reporter.echo()

        while True:
            answer = parse_answer(self._prompter.ask_version(entry))
            if answer is not None:
                return answer
            self._reporter.echo("Please answer Y, n, q, or a")

    def _attempt(self, entry: VersionEntry) -> VersionResult:
        label = entry.short_label
        self._reporter.info(f"Starting compilation of Python {label}...")
        start = time.monotonic()
        try:
            version = self._worker.build_and_install(label, entry.full_version)
        except BuildError as e:
            self._reporter.error(f"Failed to install Python {label} ({e.stage.value} stage)")
            self._reporter.error(str(e))
            return VersionResult(
                entry=entry,
                outcome=InstallOutcome.FAILED,
                error=e,
                duration_s=time.monotonic() - start,
            )
        except Exception as e:
            # One broken build must not stop the remaining versions
            logger.exception("Unexpected error building Python %s", label)
            self._reporter.error(f"Failed to install Python {label}: {e}")
            return VersionResult(
                entry=entry,
                outcome=InstallOutcome.FAILED,
                duration_s=time.monotonic() - start,
            )

        duration = time.monotonic() - start
        self._reporter.success(f"Python {label} completed in {int(duration)}s")
        return VersionResult(
            entry=entry,
            outcome=InstallOutcome.INSTALLED,
            installed_version=version,
            duration_s=duration,
        )

    # ── Output ──────────────────────────────────────────────────

    def _show_banner(self) -> None:
        labels = self._catalog.labels()
        span = f"{labels[0]} - {labels[-1]}" if labels else "(none)"
        self._reporter.echo("========================================", fg="blue")
        self._reporter.echo("  Python altinstall - Source Compilation", fg="blue")
        self._reporter.echo(f"     Installing Python {span}", fg="blue")
        self._reporter.echo("========================================", fg="blue")
        self._reporter.echo()
        if self._host is not None:
            self._reporter.info(f"System: {self._host.distro}")
            self._reporter.info(f"Architecture: {self._host.machine}")
            self._reporter.info(f"Available cores: {self._host.cpu_count}")
            self._reporter.echo()

    def _show_catalog(self) -> None:
        self._reporter.info("Available Python versions for installation:")
        for entry in self._catalog:
            if self._presence.resolve(entry.short_label) is not None:
                status = "(already installed)"
            else:
                status = "(available)"
            self._reporter.echo(f"  Python {entry.short_label} -> {entry.full_version} {status}")
        self._reporter.echo()

    def _show_progress(self, state: RunState) -> None:
        self._reporter.echo(
            f"Progress: {state.installed_count} installed, "
            f"{len(state.failed_labels)} failed, {state.remaining} remaining",
            fg="blue",
        )

    def show_summary(self, state: RunState) -> None:
        r = self._reporter
        r.echo()
        r.echo("========================================", fg="blue")
        r.echo("         Installation Summary", fg="blue")
        r.echo("========================================", fg="blue")

        r.info(f"Successfully installed: {state.installed_count}/{state.total} versions")
        if state.already_present_count:
            r.info(f"Already present: {state.already_present_count}")
        if state.skipped_count:
            r.info(f"Skipped: {state.skipped_count}")
        if state.failed_labels:
            r.warning(f"Failed versions: {' '.join(state.failed_labels)}")
        if state.cancelled:
            r.warning("Run cancelled before all versions were processed")

        r.echo()
        r.info("Installed Python executables:")
        for exe, version in self._presence.installed_executables(self._catalog.labels()):
            r.echo(f"  {exe} -> {version or 'unknown'}")

        latest = self._catalog.latest()
        example = latest.executable if latest else "python3"
        r.echo()
        r.echo("=== Interactive Prompts ===", fg="green")
        r.echo("  Y/Enter - Install this version")
        r.echo("  n       - Skip this version")
        r.echo("  q       - Quit installation")
        r.echo("  a       - Install this and all remaining versions")
        r.echo()
        r.echo("=== Usage Examples ===", fg="green")
        r.echo(f"  {example} --version             # Check the interpreter")
        r.echo(f"  {example} -m pip install pkg    # Install a package")
        r.echo(f"  {example} script.py             # Run a script")
        r.echo()
        r.echo("=== Poetry Integration ===", fg="green")
        r.echo(f"  poetry env use {example}")
        r.echo(f"  poetry env use {self._bin_dir}/{example}  # Full path")
        r.echo()
        r.echo("=== Virtual Environments ===", fg="green")
        r.echo(f"  {example} -m venv myenv")
        r.echo("  source myenv/bin/activate")
        r.echo()

        if state.failed_labels:
            r.warning("Installation finished with failures.")
        else:
            r.success("Installation completed! Python versions installed via altinstall.")
        r.info(f"Binaries located in: {self._bin_dir}/")

        if state.installed_count > 0:
            r.echo()
            r.echo("✨ Ready to use with Poetry! Try:", fg="green")
            r.echo(f"poetry env use {example}", fg="blue")
