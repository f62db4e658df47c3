"""
SafeMode flag — force ``SafeMode: yes`` in SLSsteam's config.yaml.

Line-oriented on purpose: comments and key order in the user's YAML
survive the edit.  PyYAML is only used to read the value back.

Install forces the flag on.  Nothing in this package turns it off.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

import yaml

from slsinjector.core.errors import ConfigError, SafeModeKeyMissingError
from slsinjector.core.persistence.atomic_write import write_atomic

logger = logging.getLogger(__name__)

SAFEMODE_KEY = "SafeMode"
FORCED_VALUE = "yes"

_KEY_RE = re.compile(rf"^{SAFEMODE_KEY}:.*$")


@dataclass
class SafeModeResult:
    """Outcome of ``enforce_safemode``."""

    path: Path
    present: bool = False   # config file exists
    changed: bool = False   # file content was rewritten
    warning: str | None = None

    def to_dict(self) -> dict:
        return {
            "path": str(self.path),
            "present": self.present,
            "changed": self.changed,
            "warning": self.warning,
        }


@dataclass
class SafeModeState:
    """What ``read_safemode`` found."""

    path: Path
    present: bool = False
    line: str | None = None       # raw "SafeMode: ..." line
    enabled: bool | None = None   # YAML-interpreted value

    @property
    def display(self) -> str:
        if not self.present:
            return "absent"
        if self.line is None:
            return "key missing"
        return self.line

    def to_dict(self) -> dict:
        return {
            "path": str(self.path),
            "present": self.present,
            "line": self.line,
            "enabled": self.enabled,
        }


def force_safemode_text(text: str) -> str:
    """Return *text* with every ``SafeMode:`` line set to ``yes``.

    Raises:
        SafeModeKeyMissingError: *text* is non-blank and has no such line.
    """
    if not text.strip():
        return f"{SAFEMODE_KEY}: {FORCED_VALUE}\n"

    lines = text.splitlines(keepends=True)
    found = False
    out: list[str] = []
    for line in lines:
        body = line.rstrip("\r\n")
        if _KEY_RE.match(body):
            found = True
            out.append(f"{SAFEMODE_KEY}: {FORCED_VALUE}" + line[len(body):])
        else:
            out.append(line)

    if not found:
        raise SafeModeKeyMissingError(
            f"No '{SAFEMODE_KEY}:' key found in a non-empty config file"
        )
    return "".join(out)


def enforce_safemode(path: Path) -> SafeModeResult:
    """Force ``SafeMode: yes`` in *path*.

    A missing file is a warning, not an error.  The file is only
    rewritten when its content actually changes.
    """
    result = SafeModeResult(path=path)
    if not path.is_file():
        result.warning = f"config.yaml not found at {path}. Skipping SafeMode check."
        logger.info(result.warning)
        return result

    result.present = True
    try:
        current = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ConfigError(f"{path} is not valid UTF-8: {e.reason}") from e
    try:
        updated = force_safemode_text(current)
    except SafeModeKeyMissingError as e:
        raise SafeModeKeyMissingError(f"{e}: {path}") from e

    if updated != current:
        mode = path.stat().st_mode & 0o777
        write_atomic(path, updated, mode=mode)
        result.changed = True
        logger.info("SafeMode forced to %s in %s", FORCED_VALUE, path)
    else:
        logger.debug("SafeMode already %s in %s", FORCED_VALUE, path)
    return result


def read_safemode(path: Path) -> SafeModeState:
    """Report the current SafeMode line without modifying anything."""
    state = SafeModeState(path=path)
    if not path.is_file():
        return state
    state.present = True

    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning("Cannot read %s: %s", path, e)
        return state

    for line in text.splitlines():
        if _KEY_RE.match(line):
            state.line = line
            break
    if state.line is None:
        return state

    try:
        parsed = yaml.safe_load(state.line)
    except yaml.YAMLError:
        parsed = None
    if isinstance(parsed, dict):
        value = parsed.get(SAFEMODE_KEY)
        state.enabled = value if isinstance(value, bool) else None
    return state
