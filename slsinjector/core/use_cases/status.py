"""
Status use case — aggregate drop-in, SafeMode and live-unit state.

Never mutates anything, and works without systemctl.
"""

from __future__ import annotations

from dataclasses import dataclass

from slsinjector.adapters.systemd import ServiceManager
from slsinjector.core.models import InjectorConfig
from slsinjector.core.services.reconciler import DropInReconciler, StatusReport
from slsinjector.core.services.safemode import SafeModeState, read_safemode
from slsinjector.core.use_cases.preflight import require_supported


@dataclass
class StatusResult:
    platform_label: str
    report: StatusReport
    safemode: SafeModeState

    def to_dict(self) -> dict:
        return {
            "platform": self.platform_label,
            **self.report.to_dict(),
            "safemode": {**self.safemode.to_dict(), "display": self.safemode.display},
        }


def get_status(config: InjectorConfig, manager: ServiceManager) -> StatusResult:
    require_supported(config)
    return StatusResult(
        platform_label=config.platform.label,
        report=DropInReconciler(config, manager).status(),
        safemode=read_safemode(config.safemode_config),
    )
