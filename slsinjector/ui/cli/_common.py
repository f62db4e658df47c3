"""
Helpers shared by the CLI commands.

Thin glue between the click context and the core: build the config
once per invocation, pick the service manager, and turn a
failure into ``ERROR: ...`` plus the right exit code.
"""

from __future__ import annotations

import sys
from typing import NoReturn

import click

from slsinjector.adapters.systemd import ServiceManager, SystemctlUser
from slsinjector.core.errors import EXIT_FAILURE
from slsinjector.core.models import InjectorConfig


def resolve_config(ctx: click.Context) -> InjectorConfig:
    """Build (or reuse) the ``InjectorConfig`` for this invocation."""
    from slsinjector.core.config.loader import load_config

    obj = ctx.find_root().obj
    if "config" not in obj:
        obj["config"] = load_config(
            home=obj["home"],
            os_release=obj["os_release"],
            settings_path=obj.get("settings_path"),
        )
    return obj["config"]


def service_manager(ctx: click.Context) -> ServiceManager:
    """The manager from ``ctx.obj`` (tests inject one) or ``systemctl --user``."""
    obj = ctx.find_root().obj
    if obj.get("service_manager") is None:
        obj["service_manager"] = SystemctlUser()
    return obj["service_manager"]


def fail(error: Exception) -> NoReturn:
    click.secho(f"ERROR: {error}", fg="red", err=True)
    sys.exit(getattr(error, "exit_code", EXIT_FAILURE))


def warn(message: str) -> None:
    click.secho(f"WARNING: {message}", fg="yellow", err=True)


def echo_json(data: dict) -> None:
    import json

    click.echo(json.dumps(data, indent=2, default=str))
