"""
OS detection — classify the host from /etc/os-release.

Pure classification plus one small read helper.  Bazzite is checked
first because its os-release may also mention SteamOS heritage.
"""

from __future__ import annotations

import logging
from pathlib import Path

from slsinjector.core.models.platform import OsFamily, TargetPlatform

logger = logging.getLogger(__name__)

OS_RELEASE_PATH = Path("/etc/os-release")

# Checked in order; first substring hit wins
_FAMILY_MARKERS: tuple[tuple[str, OsFamily], ...] = (
    ("bazzite", OsFamily.BAZZITE),
    ("steamos", OsFamily.STEAMOS),
)


def classify_os(os_release: str) -> TargetPlatform:
    """Map os-release text to a ``TargetPlatform``.

    Matching is a case-insensitive substring search over the whole
    file, so ``ID``, ``ID_LIKE``, ``NAME`` and ``VARIANT_ID`` all count.
    Anything else yields the ``UNSUPPORTED`` variant.
    """
    text = os_release.lower()
    for marker, family in _FAMILY_MARKERS:
        if marker in text:
            return TargetPlatform.for_family(family)
    return TargetPlatform.for_family(OsFamily.UNSUPPORTED)


def read_os_release(path: Path = OS_RELEASE_PATH) -> str:
    """Return the os-release contents, or ``""`` when unreadable."""
    try:
        return path.read_text(encoding="utf-8", errors="ignore")
    except OSError as e:
        logger.debug("Cannot read %s: %s", path, e)
        return ""


def parse_os_release(os_release: str) -> dict[str, str]:
    """Parse ``KEY=value`` lines into a dict (quotes stripped)."""
    fields: dict[str, str] = {}
    for line in os_release.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        fields[key.strip()] = value.strip().strip('"').strip("'")
    return fields


def detect_platform(path: Path = OS_RELEASE_PATH) -> TargetPlatform:
    """Read and classify the host's os-release file."""
    text = read_os_release(path)
    platform = classify_os(text)
    logger.debug(
        "os-release %s → %s (%s)",
        path, platform.family.value, parse_os_release(text).get("PRETTY_NAME", "?"),
    )
    return platform
