"""
Target platform — which distribution we run on and which unit we patch.

Produced by ``services.os_detect.classify_os`` from /etc/os-release.
The enumeration is closed: anything that isn't Bazzite or SteamOS is
``UNSUPPORTED`` and carries no service name.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class OsFamily(str, Enum):
    """Supported distribution families."""

    BAZZITE = "bazzite"
    STEAMOS = "steamos"
    UNSUPPORTED = "unsupported"


# Gaming-session unit each family launches Steam under
SERVICE_NAMES: dict[OsFamily, str] = {
    OsFamily.BAZZITE: "gamescope-session-plus@steam.service",
    OsFamily.STEAMOS: "gamescope-session.service",
}

LABELS: dict[OsFamily, str] = {
    OsFamily.BAZZITE: "Bazzite Detected",
    OsFamily.STEAMOS: "SteamOS Detected",
    OsFamily.UNSUPPORTED: "Unsupported OS",
}


class TargetPlatform(BaseModel):
    """Detected OS family plus the systemd user unit it implies."""

    model_config = ConfigDict(frozen=True)

    family: OsFamily
    label: str = ""
    service_name: str = ""

    @classmethod
    def for_family(cls, family: OsFamily) -> TargetPlatform:
        return cls(
            family=family,
            label=LABELS[family],
            service_name=SERVICE_NAMES.get(family, ""),
        )

    @property
    def supported(self) -> bool:
        return self.family is not OsFamily.UNSUPPORTED
