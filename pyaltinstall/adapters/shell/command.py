"""
Shell command runner — the SINGLE PLACE where ``subprocess.run`` is
called for install operations.

Privilege is requested per command: ``needs_sudo=True`` prefixes the
command with ``sudo`` unless the process is already root. The sudo
credential is expected to have been cached by ``refresh_sudo()`` at the
start of a run, so sudo prompts on the terminal if it has expired.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time

from pyaltinstall.adapters.base import Runner
from pyaltinstall.core.models.command import CommandResult

logger = logging.getLogger(__name__)

# Keep captured output bounded; a full CPython build log is several MB.
_OUTPUT_TAIL_CHARS = 8000


class ShellCommandRunner(Runner):
    """Run external commands with optional sudo, capture or streaming."""

    @property
    def name(self) -> str:
        return "shell"

    def is_available(self, tool: str) -> bool:
        return shutil.which(tool) is not None

    def refresh_sudo(self) -> CommandResult:
        if os.geteuid() == 0:
            return CommandResult.success(["sudo", "-v"], metadata={"root": True})
        return super().refresh_sudo()

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
        original = list(cmd)

        # ── Sudo handling ──
        if needs_sudo and os.geteuid() != 0:
            cmd = ["sudo"] + original

        # ── Environment ──
        env = None
        if env_overrides:
            env = os.environ.copy()
            for key, value in env_overrides.items():
                env[key] = os.path.expandvars(value)

        logger.debug("Executing: %s (cwd=%s, stream=%s)", " ".join(cmd), cwd, stream)

        # ── Execute ──
        start = time.monotonic()
        try:
            result = subprocess.run(
                cmd,
                capture_output=not stream,
                text=True,
                timeout=timeout,
                env=env,
                cwd=cwd,
            )
        except FileNotFoundError:
            return CommandResult.failure(
                original,
                error=f"Command not found: {cmd[0]}",
            )
        except subprocess.TimeoutExpired:
            return CommandResult.failure(
                original,
                error=f"Command timed out ({timeout}s)",
                metadata={"timeout": timeout},
            )
        except OSError as e:
            logger.exception("Subprocess error: %s", cmd)
            return CommandResult.failure(original, error=str(e))

        elapsed_ms = int((time.monotonic() - start) * 1000)
        stdout = (result.stdout or "")[-_OUTPUT_TAIL_CHARS:]
        stderr = (result.stderr or "")[-_OUTPUT_TAIL_CHARS:]

        if result.returncode == 0:
            return CommandResult.success(
                original,
                stdout=stdout,
                stderr=stderr,
                duration_ms=elapsed_ms,
                metadata={"sudo": cmd[0] == "sudo" and needs_sudo},
            )

        logger.debug("Command failed (exit %d): %s", result.returncode, " ".join(cmd))
        return CommandResult.failure(
            original,
            error=f"Command failed (exit {result.returncode})",
            return_code=result.returncode,
            stdout=stdout,
            stderr=stderr,
            duration_ms=elapsed_ms,
        )
