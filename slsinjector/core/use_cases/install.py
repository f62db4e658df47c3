"""
Install use case — SafeMode enforcement plus drop-in reconcile.

Order matters:
    1. platform + systemctl preflight
    2. compute the desired drop-in (aborts before any write)
    3. force SafeMode on
    4. reconcile the drop-in
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from slsinjector.adapters.systemd import ServiceManager
from slsinjector.core.models import InjectorConfig
from slsinjector.core.services.reconciler import DropInReconciler, ReconcileResult
from slsinjector.core.services.safemode import SafeModeResult, enforce_safemode
from slsinjector.core.use_cases.preflight import require_service_manager, require_supported

logger = logging.getLogger(__name__)


@dataclass
class InstallResult:
    platform_label: str
    service_name: str
    safemode: SafeModeResult
    reconcile: ReconcileResult

    def to_dict(self) -> dict:
        return {
            "platform": self.platform_label,
            "service": self.service_name,
            "safemode": self.safemode.to_dict(),
            **self.reconcile.to_dict(),
        }


def run_install(config: InjectorConfig, manager: ServiceManager, **kwargs) -> InstallResult:
    """Run the full install flow.

    Extra keyword arguments go to ``DropInReconciler``.

    Raises:
        InjectorError: Any fatal condition; nothing has been written
            when a preflight or scan error is raised.
    """
    require_supported(config)
    require_service_manager(manager)

    reconciler = DropInReconciler(config, manager, **kwargs)
    desired = reconciler.compute_desired()

    safemode = enforce_safemode(config.safemode_config)
    result = reconciler.reconcile(desired)
    logger.info("install: %s", result.outcome)

    return InstallResult(
        platform_label=config.platform.label,
        service_name=config.service_name,
        safemode=safemode,
        reconcile=result,
    )
