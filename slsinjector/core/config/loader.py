"""
Configuration loader — builds the one ``InjectorConfig`` for a run.

Precedence, highest first:
    CLI options  >  settings.yml  >  built-in defaults

The settings file is optional.  When present it is read with PyYAML
and validated with pydantic; anything it doesn't recognise is an error.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from slsinjector.core.errors import ConfigError
from slsinjector.core.models.config import InjectorConfig
from slsinjector.core.models.platform import TargetPlatform
from slsinjector.core.services.os_detect import OS_RELEASE_PATH, detect_platform

logger = logging.getLogger(__name__)

SETTINGS_FILE = Path(".config") / "slssteam-injector" / "settings.yml"

DEFAULT_LIBRARY_DIR = Path(".local") / "share" / "SLSsteam"
DEFAULT_SAFEMODE_CONFIG = Path(".config") / "SLSsteam" / "config.yaml"
DEFAULT_DROPIN_NAME = "slssteam.conf"
SYSTEMD_USER_DIR = Path(".config") / "systemd" / "user"
BACKUP_SUBDIR = "backups"


class Settings(BaseModel):
    """User overrides from settings.yml.  Relative paths resolve under home."""

    model_config = ConfigDict(extra="forbid")

    library_dir: Path | None = None
    library_suffix: str = ".so"
    dropin_name: str = DEFAULT_DROPIN_NAME
    safemode_config: Path | None = None


def default_settings_path(home: Path) -> Path:
    return home / SETTINGS_FILE


def load_settings(path: Path | None) -> Settings:
    """Load and validate settings.yml.

    A missing file at the default location just means defaults.

    Raises:
        ConfigError: The file is unreadable, not YAML, or invalid.
    """
    if path is None or not path.is_file():
        return Settings()

    logger.debug("Loading settings from %s", path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return Settings()
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {path}: {e}") from e


def _under_home(home: Path, value: Path | None, default: Path) -> Path:
    path = (value or default).expanduser()
    return path if path.is_absolute() else home / path


def build_config(
    home: Path,
    platform: TargetPlatform,
    settings: Settings | None = None,
) -> InjectorConfig:
    """Resolve every path for *platform* under *home*."""
    settings = settings or Settings()
    if "/" in settings.dropin_name or not settings.dropin_name.endswith(".conf"):
        raise ConfigError(
            f"dropin_name must be a bare '*.conf' filename, got {settings.dropin_name!r}"
        )

    service_dir = home / SYSTEMD_USER_DIR / f"{platform.service_name}.d"
    return InjectorConfig(
        home=home,
        platform=platform,
        library_dir=_under_home(home, settings.library_dir, DEFAULT_LIBRARY_DIR),
        library_suffix=settings.library_suffix,
        service_dir=service_dir,
        dropin_file=service_dir / settings.dropin_name,
        backup_dir=service_dir / BACKUP_SUBDIR,
        safemode_config=_under_home(home, settings.safemode_config, DEFAULT_SAFEMODE_CONFIG),
    )


def load_config(
    *,
    home: Path,
    os_release: Path = OS_RELEASE_PATH,
    settings_path: Path | None = None,
) -> InjectorConfig:
    """Detect the platform, read settings, and build the config.

    The platform may come back unsupported; callers decide when that
    is fatal (every CLI verb treats it as such).

    Raises:
        ConfigError: An explicitly given settings file is missing, or
            any settings file is invalid.
    """
    if settings_path is not None and not settings_path.is_file():
        raise ConfigError(f"Settings file not found: {settings_path}")

    platform = detect_platform(os_release)
    settings = load_settings(settings_path or default_settings_path(home))
    config = build_config(home, platform, settings)
    logger.info("Config: %s on %s", config.dropin_file, platform.family.value)
    return config
