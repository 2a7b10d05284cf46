"""
Version catalog models — which Python versions this tool can install.

A VersionEntry pairs the user-facing short label ("3.12") with the exact
patch release that gets downloaded ("3.12.1"). The catalog is sorted once,
numerically, when it is built; iteration order is the install order.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from pyaltinstall.core.data.catalog import DEFAULT_VERSIONS, EXECUTABLE_STEM
from pyaltinstall.core.errors import CatalogError

_SHORT_RE = re.compile(r"^\d+\.\d+$")
_FULL_RE = re.compile(r"^\d+\.\d+\.\d+(?:(?:a|b|rc)\d+)?$")


def version_key(version: str) -> tuple[int, ...]:
    """Numeric sort key: ``"3.10"`` sorts after ``"3.9"``."""
    return tuple(int(part) for part in re.findall(r"\d+", version))


class VersionEntry(BaseModel):
    """One installable interpreter version."""

    model_config = ConfigDict(frozen=True)

    short_label: str
    full_version: str

    @field_validator("short_label")
    @classmethod
    def _check_short(cls, value: str) -> str:
        if not _SHORT_RE.match(value):
            raise ValueError(f"short label must look like '3.12', got {value!r}")
        return value

    @field_validator("full_version")
    @classmethod
    def _check_full(cls, value: str) -> str:
        if not _FULL_RE.match(value):
            raise ValueError(f"full version must look like '3.12.1', got {value!r}")
        return value

    @model_validator(mode="after")
    def _full_matches_short(self) -> VersionEntry:
        if not self.full_version.startswith(self.short_label + "."):
            raise ValueError(
                f"{self.full_version} is not a release of {self.short_label}"
            )
        return self

    @property
    def executable(self) -> str:
        """Version-suffixed executable name, e.g. ``python3.12``."""
        return f"{EXECUTABLE_STEM}{self.short_label}"

    @property
    def sort_key(self) -> tuple[int, ...]:
        return version_key(self.full_version)


class VersionCatalog:
    """Ordered, immutable collection of VersionEntry keyed by short label."""

    def __init__(self, entries: list[VersionEntry] | tuple[VersionEntry, ...]):
        seen: set[str] = set()
        for entry in entries:
            if entry.short_label in seen:
                raise CatalogError(f"Duplicate catalog entry: {entry.short_label}")
            seen.add(entry.short_label)
        self._entries: tuple[VersionEntry, ...] = tuple(
            sorted(entries, key=lambda e: e.sort_key)
        )

    @classmethod
    def from_mapping(cls, versions: Mapping[str, str]) -> VersionCatalog:
        """Build a catalog from ``{short_label: full_version}``.

        Raises:
            CatalogError: If any entry is malformed.
        """
        entries: list[VersionEntry] = []
        for short, full in versions.items():
            try:
                entries.append(VersionEntry(short_label=str(short), full_version=str(full)))
            except ValueError as e:
                raise CatalogError(f"Invalid catalog entry {short!r}: {e}") from e
        return cls(entries)

    @classmethod
    def default(cls) -> VersionCatalog:
        """The built-in catalog."""
        return cls.from_mapping(DEFAULT_VERSIONS)

    def __iter__(self) -> Iterator[VersionEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, short_label: object) -> bool:
        return any(e.short_label == short_label for e in self._entries)

    def __repr__(self) -> str:
        return f"<VersionCatalog {', '.join(self.labels())}>"

    @property
    def entries(self) -> tuple[VersionEntry, ...]:
        return self._entries

    def get(self, short_label: str) -> VersionEntry | None:
        for entry in self._entries:
            if entry.short_label == short_label:
                return entry
        return None

    def labels(self) -> list[str]:
        return [e.short_label for e in self._entries]

    def latest(self) -> VersionEntry | None:
        """Highest version in the catalog, or None when empty."""
        return self._entries[-1] if self._entries else None

    def to_dict(self) -> dict[str, str]:
        return {e.short_label: e.full_version for e in self._entries}
