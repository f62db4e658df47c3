"""
slssteam-injector — CLI entrypoint.

Usage:
    slssteam-injector install
    slssteam-injector uninstall
    slssteam-injector status
    slssteam-injector backups list

Exit codes: 0 ok, 1 failure, 2 systemctl missing, 3 unsupported OS,
64 usage error.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import click

from slsinjector import __version__
from slsinjector.core.errors import EXIT_FAILURE, EXIT_OK, EXIT_USAGE, InjectorError
from slsinjector.core.observability.logging_config import (
    ENV_FILE,
    resolve_level,
    setup_logging,
)
from slsinjector.core.services.os_detect import OS_RELEASE_PATH
from slsinjector.ui.cli._common import (
    echo_json,
    fail,
    resolve_config,
    service_manager,
    warn,
)


class InjectorGroup(click.Group):
    """Click group that reports usage errors with ``EXIT_USAGE``.

    Click's own usage exit code (2) collides with the
    "systemctl missing" code.
    """

    def main(self, *args, **kwargs):  # type: ignore[override]
        kwargs["standalone_mode"] = False
        try:
            rv = super().main(*args, **kwargs)
        except click.UsageError as e:
            e.show()
            sys.exit(EXIT_USAGE)
        except click.ClickException as e:
            e.show()
            sys.exit(e.exit_code)
        except click.Abort:
            click.echo("Aborted!", err=True)
            sys.exit(EXIT_FAILURE)
        sys.exit(rv if isinstance(rv, int) else EXIT_OK)


@click.group(cls=InjectorGroup, invoke_without_command=True)
@click.version_option(version=__version__, prog_name="slssteam-injector")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--home",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Home directory to resolve paths under (default: $HOME).",
)
@click.option(
    "--os-release",
    "os_release",
    type=click.Path(dir_okay=False, path_type=Path),
    default=OS_RELEASE_PATH,
    show_default=True,
    help="os-release file used for OS detection.",
)
@click.option(
    "--settings",
    "settings_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Settings YAML (default: ~/.config/slssteam-injector/settings.yml).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    home: Path | None,
    os_release: Path,
    settings_path: Path | None,
) -> None:
    """slssteam-injector — manage the SLSsteam LD_AUDIT drop-in."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["home"] = (home or Path.home()).expanduser()
    ctx.obj["os_release"] = os_release
    ctx.obj["settings_path"] = settings_path

    # ── Logging setup (once, at process start) ──────────────────
    try:
        setup_logging(
            resolve_level(debug=debug, verbose=verbose, quiet=quiet),
            log_file=os.environ.get(ENV_FILE),
        )
    except OSError as e:
        fail(e)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_usage())
        click.echo("Commands: install | uninstall | status | backups")
        sys.exit(EXIT_USAGE)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def install(ctx: click.Context, as_json: bool) -> None:
    """Write or refresh the LD_AUDIT drop-in and force SafeMode on."""
    from slsinjector.core.use_cases.install import run_install

    try:
        config = resolve_config(ctx)
        result = run_install(config, service_manager(ctx))
    except (InjectorError, OSError) as e:
        fail(e)

    rec = result.reconcile
    if as_json:
        echo_json(result.to_dict())
        return

    quiet = ctx.obj.get("quiet", False)
    click.echo(result.platform_label)
    if not quiet:
        for lib in rec.libraries:
            click.echo(f"Found library: {lib}")

    if result.safemode.warning:
        warn(result.safemode.warning)
    else:
        click.echo("SafeMode has been enabled in config.yaml.")

    if not rec.changed:
        click.secho(
            "Systemd configuration matches current files. No drop-in changes needed.",
            fg="green",
        )
        return

    click.echo("File list changed or new install. Updating configuration...")
    if rec.backup:
        click.echo(f"Backed up existing drop-in to: {rec.backup.path}")
    click.echo(f"Wrote drop-in with new file list: {rec.dropin_file}")

    if rec.reload_error:
        warn(f"systemctl --user daemon-reload failed: {rec.reload_error}")
    click.secho("✅ Install complete. Return to Gaming Mode to play.", fg="green", bold=True)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def uninstall(ctx: click.Context, as_json: bool) -> None:
    """Move the drop-in to the backup directory. SafeMode is left as is."""
    from slsinjector.core.use_cases.uninstall import run_uninstall

    try:
        config = resolve_config(ctx)
        result = run_uninstall(config, service_manager(ctx))
    except (InjectorError, OSError) as e:
        fail(e)

    rec = result.reconcile
    if as_json:
        echo_json(result.to_dict())
        return

    click.echo(result.platform_label)
    if rec.outcome == "absent":
        click.echo("No drop-in active. Nothing to uninstall.")
        return

    assert rec.backup is not None  # always set when something was removed
    click.echo(f"Uninstalled drop-in. Backup saved to: {rec.backup.path}")
    if rec.reload_error:
        warn(f"systemctl --user daemon-reload failed: {rec.reload_error}")
    click.secho("✅ Uninstall complete. Return to Gaming Mode to apply.", fg="green", bold=True)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def status(ctx: click.Context, as_json: bool) -> None:
    """Show the drop-in, SafeMode and live service environment."""
    from slsinjector.core.use_cases.status import get_status

    try:
        config = resolve_config(ctx)
        result = get_status(config, service_manager(ctx))
    except (InjectorError, OSError) as e:
        fail(e)

    if as_json:
        echo_json(result.to_dict())
        return

    report = result.report
    click.echo(f"OS: {result.platform_label}")
    click.echo(f"Service Target: {report.service_name}")
    click.echo(f"Drop-in location: {report.dropin_file}")

    if report.present:
        click.secho("Status: FILE PRESENT", fg="green")
        click.echo("Contents:\n--------------------------------")
        click.echo(report.contents or "", nl=False)
        click.echo("--------------------------------")
    else:
        click.secho("Status: FILE MISSING (Not Installed)", fg="yellow")

    click.echo()
    click.echo("SafeMode Status in config.yaml:")
    safemode = result.safemode
    if not safemode.present:
        click.echo("  (Config file missing)")
    elif safemode.line is None:
        click.echo("  (SafeMode key not found)")
    else:
        click.echo(f"  {safemode.line}")

    click.echo()
    click.echo(f"Checking if Service '{report.service_name}' sees LD_AUDIT:")
    if not report.live_available:
        click.secho(f"  [Unknown] {report.live_error}", fg="yellow")
    elif report.ld_audit_loaded:
        click.secho("  [OK] Systemd has loaded LD_AUDIT for this service.", fg="green")
        for assignment in report.live_assignments:
            click.echo(f"  {assignment}")
    else:
        click.echo("  [Inactive] LD_AUDIT is NOT loaded in the service environment.")

    click.echo()
    click.echo(f"Scanning {report.library_dir} for {config.library_suffix} files:")
    if not report.library_dir_exists:
        click.echo("  (Directory missing)")
    elif not report.libraries:
        click.echo("  (none found)")
    else:
        for lib in report.libraries:
            click.echo(f"  {lib}")

    if report.latest_backup is not None:
        latest = report.latest_backup
        click.echo()
        click.echo(f"Backups: {len(report.backups)} (latest: {latest.tag}, {latest.path.name})")


# ── Register sub-command groups from slsinjector/ui/cli/ ──────────

from slsinjector.ui.cli.backups import backups

cli.add_command(backups)


if __name__ == "__main__":
    cli()
