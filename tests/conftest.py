"""
Shared test fixtures and configuration.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

import pytest

from slsinjector.core.config.loader import build_config
from slsinjector.core.models import InjectorConfig, OsFamily, TargetPlatform


class FakeServiceManager:
    """Stands in for ``systemctl --user``; records every call."""

    def __init__(
        self,
        *,
        available: bool = True,
        reload_ok: bool = True,
        environment: list[str] | None = None,
        show_ok: bool = True,
    ) -> None:
        self.available = available
        self.reload_ok = reload_ok
        self.environment = environment or []
        self.show_ok = show_ok
        self.reloads = 0
        self.shown: list[str] = []

    def is_available(self) -> bool:
        return self.available

    def daemon_reload(self) -> dict[str, Any]:
        self.reloads += 1
        if self.reload_ok:
            return {"ok": True, "stdout": ""}
        return {"ok": False, "error": "Failed to connect to bus"}

    def show_environment(self, unit: str) -> dict[str, Any]:
        self.shown.append(unit)
        if not self.show_ok:
            return {"ok": False, "error": "Unit not found"}
        return {"ok": True, "stdout": "", "environment": list(self.environment)}


class StepClock:
    """Deterministic clock; each call advances by *step* seconds."""

    def __init__(self, start: datetime | None = None, step: int = 1) -> None:
        self.current = start or datetime(2026, 10, 19, 12, 0, 0)
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + timedelta(seconds=self.step)
        return value


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def os_release_text(fixtures_dir: Path):
    """Return a factory: distro name → sample os-release content."""

    def _read(name: str) -> str:
        return (fixtures_dir / "os-release" / name).read_text()

    return _read


@pytest.fixture
def os_release_file(tmp_path: Path, os_release_text):
    """Return a factory writing a sample os-release into tmp_path."""

    def _write(name: str) -> Path:
        path = tmp_path / f"os-release.{name}"
        path.write_text(os_release_text(name))
        return path

    return _write


@pytest.fixture
def os_release(os_release_file) -> Path:
    """An os-release file identifying Bazzite."""
    return os_release_file("bazzite")


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """A fake home directory."""
    h = tmp_path / "home" / "u"
    h.mkdir(parents=True)
    return h


@pytest.fixture
def config(home: Path) -> InjectorConfig:
    return build_config(home, TargetPlatform.for_family(OsFamily.BAZZITE))


@pytest.fixture
def fake_manager():
    """Return a factory for fake service managers."""
    return FakeServiceManager


@pytest.fixture
def manager(fake_manager) -> FakeServiceManager:
    return fake_manager()


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def frozen_clock() -> StepClock:
    """A clock that never advances: every backup lands in the same second."""
    return StepClock(step=0)


@pytest.fixture
def make_libraries():
    """Return a helper creating placeholder library files in a directory."""

    def _make(directory: Path, *names: str) -> list[Path]:
        directory.mkdir(parents=True, exist_ok=True)
        created = []
        for name in names:
            p = directory / name
            p.write_bytes(b"\x7fELF")
            created.append(p)
        return created

    return _make
