"""
Library set, drop-in document and backup record models.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

BackupTag = Literal["bak", "removed"]


class LibrarySet(BaseModel):
    """Sorted, portable-encoded library paths.

    ``paths`` holds the original absolute paths in sort order;
    ``portable`` holds the same entries with the home prefix replaced.
    """

    model_config = ConfigDict(frozen=True)

    paths: tuple[Path, ...]
    portable: tuple[str, ...]

    @field_validator("portable")
    @classmethod
    def _non_empty(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("a library set needs at least one entry")
        return value

    @property
    def value(self) -> str:
        """Colon-joined LD_AUDIT value."""
        return ":".join(self.portable)


class DropInDocument(BaseModel):
    """The ``[Service]`` fragment that sets LD_AUDIT.

    ``sources`` keeps the absolute library paths the value was built
    from; it is not part of the rendered text.
    """

    model_config = ConfigDict(frozen=True)

    section: str = "Service"
    variable: str = "LD_AUDIT"
    value: str
    sources: tuple[Path, ...] = ()

    def render(self) -> str:
        return f'[{self.section}]\nEnvironment="{self.variable}={self.value}"\n'

    def to_bytes(self) -> bytes:
        return self.render().encode("utf-8")


class BackupRecord(BaseModel):
    """A prior drop-in that was moved aside."""

    model_config = ConfigDict(frozen=True)

    path: Path
    original_name: str
    tag: BackupTag
    timestamp: datetime
    serial: int = 0

    @property
    def sort_key(self) -> tuple[datetime, int, int]:
        # Same second: an update backup can only precede a removal
        return (self.timestamp, self.serial, 1 if self.tag == "removed" else 0)

    def to_dict(self) -> dict:
        return {
            "path": str(self.path),
            "tag": self.tag,
            "timestamp": self.timestamp.isoformat(),
            "serial": self.serial,
        }
