"""Adapters — bindings for external tools.

Public re-exports for convenient access.
"""

from slsinjector.adapters.shell.command import run_command
from slsinjector.adapters.systemd import ServiceManager, SystemctlUser

__all__ = [
    "ServiceManager",
    "SystemctlUser",
    "run_command",
]
