"""
Preflight checks shared by every verb.
"""

from __future__ import annotations

from slsinjector.adapters.systemd import ServiceManager
from slsinjector.core.errors import (
    EnvironmentUnsupportedError,
    ServiceManagerUnavailableError,
)
from slsinjector.core.models import InjectorConfig


def require_supported(config: InjectorConfig) -> None:
    if not config.platform.supported:
        raise EnvironmentUnsupportedError(
            "This tool currently only supports Bazzite and SteamOS."
        )


def require_service_manager(manager: ServiceManager) -> None:
    if not manager.is_available():
        raise ServiceManagerUnavailableError("systemctl not found.")
