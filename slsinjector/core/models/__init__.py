"""
Domain models — Pydantic types for the injector.

All models are re-exported here for convenient access:

    from slsinjector.core.models import InjectorConfig, LibrarySet, TargetPlatform
"""

from slsinjector.core.models.config import HOME_PLACEHOLDER, InjectorConfig
from slsinjector.core.models.library import (
    BackupRecord,
    BackupTag,
    DropInDocument,
    LibrarySet,
)
from slsinjector.core.models.platform import OsFamily, TargetPlatform

__all__ = [
    # library.py
    "BackupRecord",
    "BackupTag",
    "DropInDocument",
    # config.py
    "HOME_PLACEHOLDER",
    "InjectorConfig",
    "LibrarySet",
    # platform.py
    "OsFamily",
    "TargetPlatform",
]
