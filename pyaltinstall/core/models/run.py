"""
Run models — per-version outcomes and the orchestrator's RunState.

RunState is owned by the orchestrator and only mutated while iterating
the catalog. Once the loop moves past a version its VersionResult is
final.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pyaltinstall.core.errors import BuildError
from pyaltinstall.core.models.catalog import VersionEntry


class InstallMode(str, Enum):
    INTERACTIVE = "interactive"
    ALL = "all"
    CANCELLED = "cancelled"


class RunPhase(str, Enum):
    INIT = "init"
    MODE_SELECT = "mode_select"
    ITERATING = "iterating"
    DONE = "done"
    CANCELLED = "cancelled"


class InstallOutcome(str, Enum):
    ALREADY_PRESENT = "already_present"
    INSTALLED = "installed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class VersionResult:
    """Recorded outcome for one catalog entry."""

    entry: VersionEntry
    outcome: InstallOutcome
    installed_version: str | None = None
    error: BuildError | None = None
    duration_s: float = 0.0

    def to_dict(self) -> dict:
        result: dict = {
            "short_label": self.entry.short_label,
            "full_version": self.entry.full_version,
            "outcome": self.outcome.value,
        }
        if self.installed_version:
            result["installed_version"] = self.installed_version
        if self.error is not None:
            result["error"] = self.error.to_dict()
        if self.duration_s:
            result["duration_s"] = round(self.duration_s, 1)
        return result


@dataclass
class RunState:
    """Mutable state of one orchestrated run."""

    mode: InstallMode = InstallMode.INTERACTIVE
    phase: RunPhase = RunPhase.INIT
    installed_count: int = 0
    failed_labels: list[str] = field(default_factory=list)
    results: list[VersionResult] = field(default_factory=list)
    total: int = 0

    @property
    def cancelled(self) -> bool:
        return self.phase == RunPhase.CANCELLED

    @property
    def already_present_count(self) -> int:
        return self.count(InstallOutcome.ALREADY_PRESENT)

    @property
    def skipped_count(self) -> int:
        return self.count(InstallOutcome.SKIPPED)

    @property
    def remaining(self) -> int:
        """Catalog entries not yet visited."""
        return self.total - len(self.results)

    @property
    def has_failures(self) -> bool:
        return bool(self.failed_labels)

    def count(self, outcome: InstallOutcome) -> int:
        return sum(1 for r in self.results if r.outcome == outcome)

    def outcome_for(self, short_label: str) -> InstallOutcome | None:
        for r in self.results:
            if r.entry.short_label == short_label:
                return r.outcome
        return None

    def record(self, result: VersionResult) -> None:
        """Append a per-version result and update the counters."""
        self.results.append(result)
        if result.outcome == InstallOutcome.INSTALLED:
            self.installed_count += 1
        elif result.outcome == InstallOutcome.FAILED:
            self.failed_labels.append(result.entry.short_label)

    def to_dict(self) -> dict:
        return {
            "mode": self.mode.value,
            "phase": self.phase.value,
            "total": self.total,
            "installed_count": self.installed_count,
            "already_present_count": self.already_present_count,
            "skipped_count": self.skipped_count,
            "failed": list(self.failed_labels),
            "results": [r.to_dict() for r in self.results],
        }
