"""
Installer errors.

Two failure scopes exist:

    DependencyError   fatal, aborts the whole run before any build
    BuildError        per-version, recorded and the run continues

``BootstrapWarning`` is never raised out of the worker; a version whose
pip bootstrap failed is still an installed version.
"""

from __future__ import annotations

from enum import Enum


class BuildStage(str, Enum):
    """The stage of the per-version pipeline that failed."""

    WORKSPACE = "workspace"
    FETCH = "fetch"
    EXTRACT = "extract"
    CONFIGURE = "configure"
    COMPILE = "compile"
    INSTALL = "install"
    VERIFY = "verify"


class InstallerError(Exception):
    """Base class for installer failures."""


class ConfigError(InstallerError):
    """Raised when the installer configuration is invalid."""


class CatalogError(ConfigError):
    """Raised when a version catalog has duplicate or malformed entries."""


class DependencyError(InstallerError):
    """Raised when the system package manager fails."""

    def __init__(self, step: str, detail: str = "") -> None:
        self.step = step
        self.detail = detail
        message = f"Dependency installation failed during '{step}'"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class BuildError(InstallerError):
    """Raised when one stage of a version build fails."""

    def __init__(self, stage: BuildStage, short_label: str, detail: str = "") -> None:
        self.stage = stage
        self.short_label = short_label
        self.detail = detail
        message = f"Python {short_label}: {stage.value} failed"
        if detail:
            message += f" — {detail}"
        super().__init__(message)

    def to_dict(self) -> dict:
        return {
            "stage": self.stage.value,
            "short_label": self.short_label,
            "detail": self.detail,
        }


class BootstrapWarning(UserWarning):
    """pip could not be bootstrapped for an otherwise working interpreter."""
