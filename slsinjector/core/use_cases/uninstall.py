"""
Uninstall use case — move the drop-in aside and reload.

SafeMode is deliberately left as install set it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from slsinjector.adapters.systemd import ServiceManager
from slsinjector.core.models import InjectorConfig
from slsinjector.core.services.reconciler import DropInReconciler, ReconcileResult
from slsinjector.core.use_cases.preflight import require_service_manager, require_supported

logger = logging.getLogger(__name__)


@dataclass
class UninstallResult:
    platform_label: str
    service_name: str
    reconcile: ReconcileResult

    def to_dict(self) -> dict:
        return {
            "platform": self.platform_label,
            "service": self.service_name,
            **self.reconcile.to_dict(),
        }


def run_uninstall(config: InjectorConfig, manager: ServiceManager, **kwargs) -> UninstallResult:
    require_supported(config)
    require_service_manager(manager)

    result = DropInReconciler(config, manager, **kwargs).remove()
    logger.info("uninstall: %s", result.outcome)
    return UninstallResult(
        platform_label=config.platform.label,
        service_name=config.service_name,
        reconcile=result,
    )
