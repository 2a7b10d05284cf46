"""
Install use case — wire config, runner and UI into an Orchestrator.
"""

from __future__ import annotations

import shutil
from typing import Callable

from pyaltinstall.adapters.base import Runner
from pyaltinstall.core.config.loader import InstallerConfig
from pyaltinstall.core.services.build import BuildWorker
from pyaltinstall.core.services.dependencies import DependencyInstaller
from pyaltinstall.core.services.host import HostInfo, detect_host
from pyaltinstall.core.services.orchestrator import Orchestrator, Prompter
from pyaltinstall.core.services.presence import PresenceChecker
from pyaltinstall.core.services.reporting import Reporter


def build_orchestrator(
    config: InstallerConfig,
    runner: Runner,
    prompter: Prompter,
    reporter: Reporter,
    *,
    stream: bool = False,
    which: Callable[[str], str | None] = shutil.which,
    host: HostInfo | None = None,
) -> Orchestrator:
    """Assemble an Orchestrator for the configured catalog.

    Args:
        config: Effective installer configuration.
        runner: Runner for every external command.
        prompter: Source of user decisions.
        reporter: Console (or recording reporter for --json).
        stream: Show apt/configure/make output live.
        which: Path resolver used by the presence checker and fetcher.
        host: Host info for the banner; detected when omitted.
    """
    presence = PresenceChecker(runner, which=which)
    worker = BuildWorker(config, runner, presence, reporter, stream=stream, which=which)
    dependencies = DependencyInstaller(runner, config.build_packages, stream=stream)
    return Orchestrator(
        catalog=config.catalog(),
        presence=presence,
        worker=worker,
        dependencies=dependencies,
        prompter=prompter,
        reporter=reporter,
        sudo=runner,
        host=host or detect_host(),
        bin_dir=config.bin_dir,
    )
