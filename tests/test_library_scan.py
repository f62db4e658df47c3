"""
Tests for library scanning and drop-in rendering.
"""

from pathlib import Path

import pytest

from slsinjector.core.errors import EmptySetError, SourceMissingError
from slsinjector.core.models.library import LibrarySet
from slsinjector.core.services.dropin import build_document
from slsinjector.core.services.library_scan import (
    list_libraries,
    scan_libraries,
    to_portable,
)


class TestToPortable:
    def test_replaces_home_prefix(self):
        assert to_portable("/home/u/SLS/libfoo.so", "/home/u") == "%h/SLS/libfoo.so"

    def test_trailing_slash_on_home(self):
        assert to_portable("/home/u/SLS/a.so", "/home/u/") == "%h/SLS/a.so"

    def test_only_whole_component(self):
        assert to_portable("/home/user2/a.so", "/home/u") == "/home/user2/a.so"

    def test_outside_home_unchanged(self):
        assert to_portable("/opt/lib/a.so", "/home/u") == "/opt/lib/a.so"

    def test_only_prefix_replaced(self):
        # home appearing again deeper in the path stays literal
        assert to_portable("/home/u/x/home/u/a.so", "/home/u") == "%h/x/home/u/a.so"


class TestListLibraries:
    def test_suffix_filter_and_sort(self, tmp_path: Path, make_libraries):
        make_libraries(tmp_path, "libc.so", "liba.so", "readme.txt", "libb.so.1")
        names = [p.name for p in list_libraries(tmp_path)]
        assert names == ["liba.so", "libc.so"]

    def test_skips_directories(self, tmp_path: Path, make_libraries):
        (tmp_path / "dir.so").mkdir()
        make_libraries(tmp_path, "real.so")
        assert [p.name for p in list_libraries(tmp_path)] == ["real.so"]

    def test_not_recursive(self, tmp_path: Path, make_libraries):
        make_libraries(tmp_path / "sub", "deep.so")
        make_libraries(tmp_path, "top.so")
        assert [p.name for p in list_libraries(tmp_path)] == ["top.so"]

    def test_missing_dir_is_empty(self, tmp_path: Path):
        assert list_libraries(tmp_path / "missing") == []


class TestScanLibraries:
    def test_concrete_scenario(self, home: Path, make_libraries):
        make_libraries(home / "SLS", "libfoo.so", "libbar.so")
        libs = scan_libraries(home / "SLS", home)
        assert libs.value == "%h/SLS/libbar.so:%h/SLS/libfoo.so"
        assert build_document(libs).render() == (
            '[Service]\nEnvironment="LD_AUDIT=%h/SLS/libbar.so:%h/SLS/libfoo.so"\n'
        )

    def test_enumeration_order_does_not_matter(self, home: Path, monkeypatch, make_libraries):
        make_libraries(home / "SLS", "a.so", "b.so", "c.so")
        expected = scan_libraries(home / "SLS", home).value

        original = Path.iterdir

        def reversed_iterdir(self):
            return iter(sorted(original(self), reverse=True))

        monkeypatch.setattr(Path, "iterdir", reversed_iterdir)
        assert scan_libraries(home / "SLS", home).value == expected
        assert expected == "%h/SLS/a.so:%h/SLS/b.so:%h/SLS/c.so"

    def test_missing_directory(self, home: Path):
        with pytest.raises(SourceMissingError):
            scan_libraries(home / "nope", home)

    def test_missing_directory_is_file_not_found(self, home: Path):
        with pytest.raises(FileNotFoundError):
            scan_libraries(home / "nope", home)

    def test_empty_directory(self, home: Path):
        (home / "SLS").mkdir()
        with pytest.raises(EmptySetError):
            scan_libraries(home / "SLS", home)

    def test_custom_suffix(self, home: Path, make_libraries):
        make_libraries(home / "SLS", "a.so", "b.audit")
        libs = scan_libraries(home / "SLS", home, suffix=".audit")
        assert libs.value == "%h/SLS/b.audit"


class TestDropInDocument:
    def test_render_is_deterministic(self):
        libs = LibrarySet(paths=(Path("/x/a.so"),), portable=("/x/a.so",))
        assert build_document(libs).to_bytes() == build_document(libs).to_bytes()

    def test_library_set_rejects_empty(self):
        with pytest.raises(ValueError):
            LibrarySet(paths=(), portable=())

    def test_document_keeps_absolute_sources(self):
        libs = LibrarySet(
            paths=(Path("/home/u/SLS/a.so"), Path("/home/u/SLS/b.so")),
            portable=("%h/SLS/a.so", "%h/SLS/b.so"),
        )
        doc = build_document(libs)
        assert doc.sources == libs.paths
        assert "/home/u" not in doc.render()
