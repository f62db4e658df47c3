"""
CLI commands for drop-in backups.

Read-only view over ``core.services.backup``.
"""

from __future__ import annotations

import click

from slsinjector.core.errors import InjectorError
from slsinjector.ui.cli._common import echo_json, fail, resolve_config


@click.group()
def backups() -> None:
    """Backups — drop-ins moved aside by install and uninstall."""


@backups.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_backups_cmd(ctx: click.Context, as_json: bool) -> None:
    """List backups of the drop-in, oldest first."""
    from slsinjector.core.services.backup import list_backups
    from slsinjector.core.use_cases.preflight import require_supported

    try:
        config = resolve_config(ctx)
        require_supported(config)
    except (InjectorError, OSError) as e:
        fail(e)

    records = list_backups(config.backup_dir, config.dropin_file.name)

    if as_json:
        echo_json({
            "backup_dir": str(config.backup_dir),
            "backups": [r.to_dict() for r in records],
        })
        return

    if not records:
        click.secho(f"No backups found in {config.backup_dir}", fg="yellow")
        return

    click.secho(f"📦 Backups in {config.backup_dir} ({len(records)}):", fg="cyan", bold=True)
    for r in records:
        color = "red" if r.tag == "removed" else "white"
        click.secho(f"   [{r.tag:<7}] ", fg=color, nl=False)
        click.echo(f"{r.timestamp:%Y-%m-%d %H:%M:%S}  {r.path.name}")
