"""
InjectorConfig — every path and name the reconciler needs, resolved once.

Built by ``core.config.loader.load_config`` at startup and passed
explicitly into services.  Core code never looks at ``$HOME`` or
/etc/os-release on its own.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict

from slsinjector.core.models.platform import TargetPlatform

# systemd specifier expanded to the user's home directory
HOME_PLACEHOLDER = "%h"


class InjectorConfig(BaseModel):
    """Immutable runtime configuration."""

    model_config = ConfigDict(frozen=True)

    home: Path
    platform: TargetPlatform

    library_dir: Path
    library_suffix: str = ".so"

    service_dir: Path
    dropin_file: Path
    backup_dir: Path

    safemode_config: Path
    placeholder: str = HOME_PLACEHOLDER

    @property
    def service_name(self) -> str:
        return self.platform.service_name
