"""
Tests for SafeMode enforcement and reporting.
"""

import textwrap
from pathlib import Path

import pytest

from slsinjector.core.errors import ConfigError, SafeModeKeyMissingError
from slsinjector.core.services.safemode import (
    enforce_safemode,
    force_safemode_text,
    read_safemode,
)

CONFIG = textwrap.dedent("""\
    # SLSsteam config
    DisableFamilyShareLock: yes
    SafeMode: no
    AppIds:
      - 440
""")


class TestForceSafemodeText:
    def test_flips_no_to_yes(self):
        out = force_safemode_text(CONFIG)
        assert "SafeMode: yes\n" in out
        assert "SafeMode: no" not in out

    def test_preserves_other_lines(self):
        out = force_safemode_text(CONFIG)
        assert out.replace("SafeMode: yes", "SafeMode: no") == CONFIG

    def test_empty_text_gets_key(self):
        assert force_safemode_text("") == "SafeMode: yes\n"
        assert force_safemode_text("  \n") == "SafeMode: yes\n"

    def test_missing_key_fails_loudly(self):
        with pytest.raises(SafeModeKeyMissingError):
            force_safemode_text("Other: 1\n")

    def test_indented_key_does_not_count(self):
        with pytest.raises(SafeModeKeyMissingError):
            force_safemode_text("Nested:\n  SafeMode: no\n")

    def test_keeps_crlf(self):
        assert force_safemode_text("SafeMode: no\r\n") == "SafeMode: yes\r\n"


class TestEnforceSafemode:
    def test_missing_file_is_warning(self, tmp_path: Path):
        result = enforce_safemode(tmp_path / "config.yaml")
        assert result.present is False
        assert result.changed is False
        assert "not found" in result.warning

    def test_rewrites_file(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text(CONFIG)
        result = enforce_safemode(path)
        assert result.changed is True
        assert "SafeMode: yes" in path.read_text()

    def test_already_yes_is_untouched(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("SafeMode: yes\n")
        path.chmod(0o600)
        result = enforce_safemode(path)
        assert result.changed is False
        assert path.stat().st_mode & 0o777 == 0o600

    def test_preserves_permissions(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text(CONFIG)
        path.chmod(0o600)
        enforce_safemode(path)
        assert path.stat().st_mode & 0o777 == 0o600

    def test_missing_key_leaves_file_alone(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("Other: 1\n")
        with pytest.raises(SafeModeKeyMissingError, match="config.yaml"):
            enforce_safemode(path)
        assert path.read_text() == "Other: 1\n"

    def test_undecodable_file_is_config_error(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        raw = b"Name: \xff\xfe\nSafeMode: no\n"
        path.write_bytes(raw)
        with pytest.raises(ConfigError, match="not valid UTF-8"):
            enforce_safemode(path)
        assert path.read_bytes() == raw


class TestReadSafemode:
    def test_absent(self, tmp_path: Path):
        state = read_safemode(tmp_path / "config.yaml")
        assert state.present is False
        assert state.display == "absent"

    def test_key_missing(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("Other: 1\n")
        state = read_safemode(path)
        assert state.present is True
        assert state.display == "key missing"

    def test_reads_value(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text(CONFIG)
        state = read_safemode(path)
        assert state.line == "SafeMode: no"
        assert state.enabled is False

    def test_yaml_truthy_values(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        for raw in ("yes", "true", "on"):
            path.write_text(f"SafeMode: {raw}\n")
            assert read_safemode(path).enabled is True

    def test_undecodable_file_still_reports_line(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_bytes(b"Name: \xff\xfe\nSafeMode: no\n")
        state = read_safemode(path)
        assert state.present is True
        assert state.line == "SafeMode: no"
        assert state.enabled is False
