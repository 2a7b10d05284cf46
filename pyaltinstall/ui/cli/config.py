"""
CLI commands for installer configuration.
"""

from __future__ import annotations

import json
import sys

import click


@click.group()
def config() -> None:
    """Installer configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate pyaltinstall.yml and show the effective settings."""
    from pyaltinstall.core.config.loader import load_config, resolve_config_path
    from pyaltinstall.core.errors import ConfigError

    config_path = ctx.obj.get("config_path")
    source = resolve_config_path(config_path)

    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        if as_json:
            click.echo(json.dumps({"valid": False, "error": str(e)}, indent=2))
        else:
            click.secho("❌ Configuration errors:", fg="red", bold=True)
            click.echo(f"   • {e}")
        sys.exit(1)

    if as_json:
        data = cfg.model_dump(mode="json")
        data["valid"] = True
        data["source"] = str(source) if source and source.is_file() else None
        click.echo(json.dumps(data, indent=2))
        return

    click.secho("✅ Configuration is valid", fg="green", bold=True)
    if source and source.is_file():
        click.echo(f"   File: {source}")
    else:
        click.echo("   File: (none, built-in defaults)")
    click.echo(f"   Prefix: {cfg.prefix}")
    click.echo(f"   Workspace root: {cfg.workspace_root}")
    click.echo(f"   Jobs: {cfg.effective_jobs()}")
    click.echo(f"   Versions: {', '.join(cfg.catalog().labels())}")
    click.echo(f"   Build packages: {len(cfg.build_packages)}")
    click.echo(f"   Configure flags: {' '.join(cfg.configure_flags)}")
    click.echo()
