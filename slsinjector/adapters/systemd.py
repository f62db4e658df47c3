"""
systemd user manager adapter.

Two calls matter: ``daemon-reload`` after the drop-in changes, and
``show --property=Environment`` to see what the live unit actually got.
Both go through ``run_command`` and report failures in the result dict.
"""

from __future__ import annotations

import logging
import shlex
import shutil
from typing import Any, Protocol

from slsinjector.adapters.shell.command import run_command

logger = logging.getLogger(__name__)


class ServiceManager(Protocol):
    """What the reconciler needs from a service manager."""

    def is_available(self) -> bool: ...

    def daemon_reload(self) -> dict[str, Any]: ...

    def show_environment(self, unit: str) -> dict[str, Any]: ...


class SystemctlUser:
    """``systemctl --user`` bound to the calling user's manager."""

    def __init__(self, executable: str = "systemctl", timeout: int = 30) -> None:
        self.executable = executable
        self.timeout = timeout

    def is_available(self) -> bool:
        return shutil.which(self.executable) is not None

    def daemon_reload(self) -> dict[str, Any]:
        result = run_command(
            [self.executable, "--user", "daemon-reload"],
            timeout=self.timeout,
        )
        if result["ok"]:
            logger.info("systemctl --user daemon-reload ok")
        else:
            logger.info("daemon-reload failed: %s", result.get("error"))
        return result

    def show_environment(self, unit: str) -> dict[str, Any]:
        """Return the unit's ``Environment=`` property.

        On success the dict also carries ``environment``: the list of
        ``KEY=value`` assignments systemd reports.
        """
        result = run_command(
            [self.executable, "--user", "show", unit, "--property=Environment"],
            timeout=self.timeout,
        )
        if result["ok"]:
            result["environment"] = parse_environment(result.get("stdout", ""))
        return result

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} executable={self.executable!r}>"


def parse_environment(output: str) -> list[str]:
    """Split ``Environment=A=1 B=2`` output into assignments.

    systemctl quotes assignments whose value holds whitespace, e.g.
    ``Environment="LD_AUDIT=/home/my user/a.so" HOME=/home/u``.
    """
    assignments: list[str] = []
    for line in output.splitlines():
        key, sep, rest = line.strip().partition("=")
        if not sep or key != "Environment":
            continue
        try:
            tokens = shlex.split(rest)
        except ValueError:
            logger.debug("Unbalanced quotes in Environment=%s", rest)
            tokens = rest.split()
        assignments.extend(token for token in tokens if token)
    return assignments
