"""
Host detection — what the banner shows before anything is installed.
"""

from __future__ import annotations

import os
import platform
from dataclasses import dataclass
from pathlib import Path

OS_RELEASE = Path("/etc/os-release")


@dataclass(frozen=True)
class HostInfo:
    distro: str
    machine: str
    cpu_count: int

    def to_dict(self) -> dict:
        return {"distro": self.distro, "machine": self.machine, "cpu_count": self.cpu_count}


def read_distro(os_release: Path = OS_RELEASE) -> str:
    """PRETTY_NAME from /etc/os-release, like ``lsb_release -d``."""
    try:
        with open(os_release, encoding="utf-8") as f:
            for line in f:
                if line.startswith("PRETTY_NAME="):
                    return line.split("=", 1)[1].strip().strip('"')
    except OSError:
        pass
    return f"{platform.system()} (unknown)"


def detect_host(os_release: Path = OS_RELEASE) -> HostInfo:
    return HostInfo(
        distro=read_distro(os_release),
        machine=platform.machine(),
        cpu_count=os.cpu_count() or 1,
    )


def is_root() -> bool:
    """Whether the process runs with superuser identity."""
    return os.geteuid() == 0
