"""
pyaltinstall — CLI entrypoint.

Usage:
    pyaltinstall                 # interactive install (same as `install`)
    pyaltinstall install --all
    pyaltinstall status
    python -m pyaltinstall.main --help
"""

from __future__ import annotations

import json
import shutil
import sys
from pathlib import Path

import click

from pyaltinstall import __version__
from pyaltinstall.adapters.shell.command import ShellCommandRunner
from pyaltinstall.core.config.loader import InstallerConfig, load_config
from pyaltinstall.core.errors import ConfigError, DependencyError
from pyaltinstall.core.models.run import InstallMode
from pyaltinstall.core.observability.logging_config import configure_logging, resolve_verbosity
from pyaltinstall.core.services.host import is_root
from pyaltinstall.core.services.reporting import RecordingReporter
from pyaltinstall.ui.cli.console import ClickPrompter, Console

ROOT_REFUSAL = "Don't run this script as root. It will use sudo when needed."


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="pyaltinstall")
@click.option("--verbose", "-v", is_flag=True, help="Verbose logging; stream build output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Debug logging; stream build output.")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to pyaltinstall.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """pyaltinstall — build Python versions from source, side by side.

    Every version is installed with `make altinstall` as python3.X;
    the system python3 is never replaced.
    """
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None
    # Tests inject a MockRunner / fake resolver through obj
    ctx.obj.setdefault("runner", ShellCommandRunner())
    ctx.obj.setdefault("which", shutil.which)

    verbosity = resolve_verbosity(debug=debug, verbose=verbose, quiet=quiet)
    configure_logging(verbosity)
    ctx.obj["stream"] = verbosity.stream_output

    if ctx.invoked_subcommand is None:
        ctx.invoke(install)


def _load_config(ctx: click.Context) -> InstallerConfig:
    """Load config or exit 1 with an [ERROR] line."""
    try:
        return load_config(ctx.obj.get("config_path"))
    except ConfigError as e:
        Console().error(str(e))
        sys.exit(1)


def _refuse_root() -> None:
    if is_root():
        Console().error(ROOT_REFUSAL)
        sys.exit(1)


@cli.command()
@click.option("--all", "install_all", is_flag=True, help="Install every missing version without asking.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Print the run result as JSON (requires --all).")
@click.option("--strict", is_flag=True, help="Exit with code 2 if any version failed.")
@click.pass_context
def install(ctx: click.Context, install_all: bool, as_json: bool, strict: bool) -> None:
    """Install the catalog versions (interactive unless --all)."""
    from pyaltinstall.core.use_cases.install import build_orchestrator

    if as_json and not install_all:
        raise click.UsageError("--json needs --all (interactive prompts would corrupt the JSON)")

    _refuse_root()
    cfg = _load_config(ctx)

    console = Console(quiet=ctx.obj.get("quiet", False))
    reporter = RecordingReporter() if as_json else console
    orchestrator = build_orchestrator(
        cfg,
        ctx.obj["runner"],
        ClickPrompter(),
        reporter,
        stream=ctx.obj.get("stream", False) and not as_json,
        which=ctx.obj["which"],
    )

    try:
        state = orchestrator.run(
            mode=InstallMode.ALL if install_all else None,
            show_summary=not as_json,
        )
    except DependencyError as e:
        if as_json:
            click.echo(json.dumps({"error": str(e)}, indent=2))
        else:
            console.error(str(e))
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(state.to_dict(), indent=2))

    if strict and state.has_failures:
        sys.exit(2)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--no-packages", is_flag=True, help="Skip the apt package check.")
@click.pass_context
def status(ctx: click.Context, as_json: bool, no_packages: bool) -> None:
    """Show which catalog versions are installed and which build packages are missing."""
    from pyaltinstall.core.services.presence import PresenceChecker
    from pyaltinstall.core.use_cases.status import get_status

    cfg = _load_config(ctx)
    runner = ctx.obj["runner"]
    result = get_status(
        cfg,
        runner,
        PresenceChecker(runner, which=ctx.obj["which"]),
        check_packages=not no_packages,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    click.secho(f"\n🐍 Python versions ({result.installed_count}/{len(result.versions)} installed)", fg="cyan", bold=True)
    for v in result.versions:
        if v.presence.installed:
            click.secho(f"   ✓ {v.entry.executable:<12}", fg="green", nl=False)
            click.echo(f" {v.presence.version_display:<10} → {v.presence.path}")
        else:
            click.secho(f"   ✗ {v.entry.executable:<12}", fg="yellow", nl=False)
            click.echo(f" available ({v.entry.full_version})")

    if not no_packages:
        click.echo()
        if result.packages_missing:
            click.secho(f"📦 Missing build packages ({len(result.packages_missing)}):", fg="yellow", bold=True)
            for pkg in result.packages_missing:
                click.echo(f"   • {pkg}")
        else:
            click.secho("📦 All build packages installed", fg="green")

    click.echo()


@cli.command()
@click.pass_context
def deps(ctx: click.Context) -> None:
    """Install the apt build dependencies only."""
    from pyaltinstall.core.services.dependencies import DependencyInstaller

    _refuse_root()
    cfg = _load_config(ctx)
    console = Console(quiet=ctx.obj.get("quiet", False))
    runner = ctx.obj["runner"]

    installer = DependencyInstaller(runner, cfg.build_packages, stream=ctx.obj.get("stream", False))
    console.info("Installing build dependencies...")
    try:
        sudo = runner.refresh_sudo()
        if not sudo.ok:
            raise DependencyError("sudo -v", sudo.error or "")
        installer.install_dependencies()
    except DependencyError as e:
        console.error(str(e))
        sys.exit(1)
    console.success("Dependencies installed")


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def catalog(ctx: click.Context, as_json: bool) -> None:
    """List the versions this tool installs, in install order."""
    cfg = _load_config(ctx)
    versions = cfg.catalog()

    if as_json:
        click.echo(json.dumps(versions.to_dict(), indent=2))
        return

    click.secho(f"\n📋 Catalog ({len(versions)} versions)", fg="cyan", bold=True)
    for entry in versions:
        click.echo(f"   {entry.short_label:<6} → {entry.full_version:<10} {cfg.bin_dir}/{entry.executable}")
    click.echo()


from pyaltinstall.ui.cli.config import config

cli.add_command(config)


if __name__ == "__main__":
    cli()
