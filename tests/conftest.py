"""
Shared test fixtures and configuration.
"""

from __future__ import annotations

import io
import tarfile
from pathlib import Path

import pytest

from pyaltinstall.adapters.mock import MockRunner, RunCall
from pyaltinstall.core.config.loader import InstallerConfig
from pyaltinstall.core.models.command import CommandResult


class FakePath:
    """Stand-in for ``shutil.which`` backed by a set of names."""

    def __init__(self, *names: str, bin_dir: str = "/usr/local/bin"):
        self.names: set[str] = set(names)
        self.bin_dir = bin_dir

    def __call__(self, name: str) -> str | None:
        if name in self.names:
            return f"{self.bin_dir}/{name}"
        return None

    def add(self, name: str) -> None:
        self.names.add(name)


def make_source_tarball(dest_dir: Path, full_version: str, top_dir: str | None = None) -> Path:
    """Write a minimal ``Python-X.Y.Z.tgz`` containing a configure script."""
    top = top_dir or f"Python-{full_version}"
    archive = dest_dir / f"fixture-{full_version}.tgz"
    with tarfile.open(archive, "w:gz") as tar:
        data = b"#!/bin/sh\nexit 0\n"
        info = tarfile.TarInfo(f"{top}/configure")
        info.size = len(data)
        info.mode = 0o755
        tar.addfile(info, io.BytesIO(data))
    return archive


def download_response(source: Path):
    """Mock response for curl/wget that 'downloads' ``source``."""

    def _respond(call: RunCall) -> CommandResult:
        flag = "-o" if call.cmd[0] == "curl" else "-O"
        target = Path(call.cmd[call.cmd.index(flag) + 1])
        target.write_bytes(source.read_bytes())
        return CommandResult.success(call.cmd)

    return _respond


def altinstall_response(path: FakePath, short_label: str):
    """Mock response for ``make altinstall`` that puts python<short> on PATH."""

    def _respond(call: RunCall) -> CommandResult:
        path.add(f"python{short_label}")
        return CommandResult.success(call.cmd)

    return _respond


@pytest.fixture
def runner() -> MockRunner:
    return MockRunner()


@pytest.fixture
def fake_path() -> FakePath:
    """Only curl is on PATH; no versioned interpreters yet."""
    return FakePath("curl")


@pytest.fixture
def workspace_root(tmp_path: Path) -> Path:
    root = tmp_path / "work"
    root.mkdir()
    return root


@pytest.fixture
def config(workspace_root: Path) -> InstallerConfig:
    return InstallerConfig(
        workspace_root=str(workspace_root),
        jobs=4,
        versions={"3.9": "3.9.18", "3.10": "3.10.13"},
    )
