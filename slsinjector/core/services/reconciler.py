"""
Drop-in reconciler — keep the LD_AUDIT drop-in equal to the library set.

    compute  →  compare  →  (back up)  →  atomic write  →  daemon-reload

The reconciler exclusively owns the drop-in file and the backups it
creates.  It reads the library directory, and it never touches the
SafeMode flag (that is the install use case's job).

Ordering: the backup move always happens before the new file is
written, and the new file is renamed into place from a temp file.  A
crash in between leaves the target absent, not corrupt.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

from slsinjector.adapters.systemd import ServiceManager
from slsinjector.core.models import BackupRecord, DropInDocument, InjectorConfig
from slsinjector.core.persistence.atomic_write import DEFAULT_MODE, write_atomic
from slsinjector.core.services.backup import list_backups, move_to_backup
from slsinjector.core.services.dropin import build_document
from slsinjector.core.services.library_scan import list_libraries, scan_libraries

logger = logging.getLogger(__name__)

Outcome = Literal["installed", "updated", "unchanged", "removed", "absent"]

LD_AUDIT = "LD_AUDIT"


@dataclass
class ReconcileResult:
    """What a reconcile or remove call did."""

    outcome: Outcome
    dropin_file: str
    backup: BackupRecord | None = None
    libraries: list[str] = field(default_factory=list)
    reloaded: bool = False
    reload_error: str | None = None

    @property
    def changed(self) -> bool:
        return self.outcome in ("installed", "updated", "removed")

    def to_dict(self) -> dict:
        return {
            "outcome": self.outcome,
            "changed": self.changed,
            "dropin_file": self.dropin_file,
            "backup": self.backup.to_dict() if self.backup else None,
            "libraries": self.libraries,
            "reloaded": self.reloaded,
            "reload_error": self.reload_error,
        }


@dataclass
class StatusReport:
    """Read-only snapshot of the drop-in and the live unit."""

    service_name: str
    dropin_file: str
    present: bool = False
    contents: str | None = None
    live_available: bool = False
    live_error: str | None = None
    ld_audit_loaded: bool = False
    live_assignments: list[str] = field(default_factory=list)
    library_dir: str = ""
    library_dir_exists: bool = False
    libraries: list[str] = field(default_factory=list)
    backups: list[BackupRecord] = field(default_factory=list)

    @property
    def latest_backup(self) -> BackupRecord | None:
        return self.backups[-1] if self.backups else None

    def to_dict(self) -> dict:
        return {
            "service": self.service_name,
            "dropin_file": self.dropin_file,
            "present": self.present,
            "contents": self.contents,
            "live": {
                "available": self.live_available,
                "error": self.live_error,
                "ld_audit_loaded": self.ld_audit_loaded,
                "assignments": self.live_assignments,
            },
            "library_dir": self.library_dir,
            "library_dir_exists": self.library_dir_exists,
            "libraries": self.libraries,
            "backups": [b.to_dict() for b in self.backups],
        }


class DropInReconciler:
    """Compute, apply, remove and report the LD_AUDIT drop-in.

    Args:
        config: Resolved paths and unit name.
        manager: Service manager used for reloads and live queries.
        now: Clock for backup timestamps.
    """

    def __init__(
        self,
        config: InjectorConfig,
        manager: ServiceManager,
        *,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.config = config
        self.manager = manager
        self.now = now

    # ── Pure / read-only ────────────────────────────────────────

    def compute_desired(self) -> DropInDocument:
        """Scan the library directory and build the desired document.

        Raises:
            SourceMissingError: Library directory is absent.
            EmptySetError: No matching libraries.
        """
        libraries = scan_libraries(
            self.config.library_dir,
            self.config.home,
            suffix=self.config.library_suffix,
            placeholder=self.config.placeholder,
        )
        return build_document(libraries)

    def status(self) -> StatusReport:
        cfg = self.config
        report = StatusReport(
            service_name=cfg.service_name,
            dropin_file=str(cfg.dropin_file),
            library_dir=str(cfg.library_dir),
            library_dir_exists=cfg.library_dir.is_dir(),
        )

        if cfg.dropin_file.is_file():
            report.present = True
            report.contents = cfg.dropin_file.read_text(encoding="utf-8", errors="replace")

        if self.manager.is_available():
            live = self.manager.show_environment(cfg.service_name)
            if live.get("ok"):
                report.live_available = True
                report.live_assignments = [
                    a for a in live.get("environment", []) if a.startswith(f"{LD_AUDIT}=")
                ]
                report.ld_audit_loaded = bool(report.live_assignments)
            else:
                report.live_error = live.get("error", "unknown error")
        else:
            report.live_error = "systemctl not found"

        report.libraries = [
            str(p) for p in list_libraries(cfg.library_dir, cfg.library_suffix)
        ]
        report.backups = list_backups(cfg.backup_dir, cfg.dropin_file.name)
        return report

    # ── Mutating ────────────────────────────────────────────────

    def reconcile(self, desired: DropInDocument | None = None) -> ReconcileResult:
        """Bring the drop-in in line with *desired* (computed if omitted).

        Identical content is a no-op: no backup, no write, no reload.
        """
        if desired is None:
            desired = self.compute_desired()

        target = self.config.dropin_file
        content = desired.to_bytes()
        libraries = [str(p) for p in desired.sources]
        backup: BackupRecord | None = None

        existed = target.is_file()
        if existed:
            if target.read_bytes() == content:
                logger.info("Drop-in %s already matches; nothing to do", target)
                return ReconcileResult(
                    outcome="unchanged",
                    dropin_file=str(target),
                    libraries=libraries,
                )
            logger.info("Library list changed; replacing %s", target)
            backup = move_to_backup(target, self.config.backup_dir, "bak", now=self.now)

        write_atomic(target, content, mode=DEFAULT_MODE)
        logger.info("Wrote drop-in %s", target)

        result = ReconcileResult(
            outcome="updated" if existed else "installed",
            dropin_file=str(target),
            backup=backup,
            libraries=libraries,
        )
        self._reload(result)
        return result

    def remove(self) -> ReconcileResult:
        """Move the drop-in into the backup directory tagged ``removed``."""
        target = self.config.dropin_file
        if not target.is_file():
            logger.info("No drop-in at %s; nothing to remove", target)
            return ReconcileResult(outcome="absent", dropin_file=str(target))

        backup = move_to_backup(target, self.config.backup_dir, "removed", now=self.now)
        result = ReconcileResult(outcome="removed", dropin_file=str(target), backup=backup)
        self._reload(result)
        return result

    def _reload(self, result: ReconcileResult) -> None:
        """Best-effort reload; failure is recorded, never rolled back."""
        reload = self.manager.daemon_reload()
        result.reloaded = bool(reload.get("ok"))
        if not result.reloaded:
            result.reload_error = reload.get("error", "daemon-reload failed")
