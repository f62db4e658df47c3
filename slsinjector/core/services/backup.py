"""
Backup store — move prior drop-ins aside instead of deleting them.

Names follow ``<original-name>.<tag>.<YYYYmmddTHHMMSS>``.  A name that
is already taken within the same second gets a ``.<n>`` serial rather
than overwriting the earlier backup.  Records are never pruned.
"""

from __future__ import annotations

import logging
import re
import shutil
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from slsinjector.core.models.library import BackupRecord, BackupTag

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y%m%dT%H%M%S"

_BACKUP_RE = re.compile(
    r"^(?P<name>.+)\.(?P<tag>bak|removed)\.(?P<ts>\d{8}T\d{6})(?:\.(?P<serial>\d+))?$"
)


def backup_name(original: str, tag: BackupTag, when: datetime, serial: int = 0) -> str:
    name = f"{original}.{tag}.{when.strftime(TIMESTAMP_FORMAT)}"
    return f"{name}.{serial}" if serial else name


def move_to_backup(
    path: Path,
    backup_dir: Path,
    tag: BackupTag,
    *,
    now: Callable[[], datetime] = datetime.now,
) -> BackupRecord:
    """Move *path* into *backup_dir* under a tagged, timestamped name.

    Returns:
        The record for the new backup file.
    """
    backup_dir.mkdir(parents=True, exist_ok=True)
    when = now().replace(microsecond=0)

    serial = 0
    dest = backup_dir / backup_name(path.name, tag, when)
    while dest.exists():
        serial += 1
        dest = backup_dir / backup_name(path.name, tag, when, serial)

    shutil.move(str(path), str(dest))
    logger.info("Backed up %s → %s", path, dest)
    return BackupRecord(
        path=dest,
        original_name=path.name,
        tag=tag,
        timestamp=when,
        serial=serial,
    )


def parse_backup(path: Path) -> BackupRecord | None:
    """Parse a backup filename, or ``None`` if it isn't one of ours."""
    m = _BACKUP_RE.match(path.name)
    if not m:
        return None
    try:
        when = datetime.strptime(m.group("ts"), TIMESTAMP_FORMAT)
    except ValueError:
        return None
    return BackupRecord(
        path=path,
        original_name=m.group("name"),
        tag=m.group("tag"),
        timestamp=when,
        serial=int(m.group("serial") or 0),
    )


def list_backups(backup_dir: Path, original_name: str | None = None) -> list[BackupRecord]:
    """All backup records in *backup_dir*, oldest first.

    Args:
        original_name: Only return backups of this drop-in filename.
    """
    if not backup_dir.is_dir():
        return []
    records: list[BackupRecord] = []
    for entry in backup_dir.iterdir():
        if not entry.is_file():
            continue
        record = parse_backup(entry)
        if record is None:
            continue
        if original_name is not None and record.original_name != original_name:
            continue
        records.append(record)
    return sorted(records, key=lambda r: r.sort_key)
