"""Tests for pargrep.utils.files module."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from pargrep.utils.error_handling import EnumerationError
from pargrep.utils.files import collect_files, file_extension, iter_files, should_search_file


def _names(root: Path, files) -> list[str]:
    return [p.relative_to(root).as_posix() for p in files]


class TestFileExtension:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("a.txt", "txt"),
            ("archive.tar.gz", "gz"),
            ("Makefile", None),
            (".bashrc", None),
            ("notes.", ""),
            ("UPPER.TXT", "TXT"),
        ],
    )
    def test_extension(self, name, expected):
        assert file_extension(name) == expected


class TestShouldSearchFile:
    def test_directory_is_not_candidate(self, tmp_path: Path):
        assert not should_search_file(tmp_path, None)

    def test_extension_case_sensitive(self, tmp_path: Path):
        p = tmp_path / "a.TXT"
        p.write_text("x")
        assert should_search_file(p, "TXT")
        assert not should_search_file(p, "txt")


class TestIterFiles:
    def test_recursive_all_files_sorted(self, sample_tree: Path):
        files = collect_files(sample_tree)
        assert _names(sample_tree, files) == [
            "a.md",
            "a.txt",
            "code.py",
            "sub/b.txt",
            "sub/deeper/c.txt",
        ]

    def test_extension_filter(self, sample_tree: Path):
        files = collect_files(sample_tree, extension="txt")
        assert _names(sample_tree, files) == ["a.txt", "sub/b.txt", "sub/deeper/c.txt"]

    def test_non_recursive(self, sample_tree: Path):
        files = collect_files(sample_tree, recursive=False)
        assert _names(sample_tree, files) == ["a.md", "a.txt", "code.py"]

    def test_empty_directory(self, tmp_path: Path):
        assert collect_files(tmp_path) == []

    def test_missing_root_raises(self, tmp_path: Path):
        with pytest.raises(EnumerationError) as exc_info:
            collect_files(tmp_path / "missing")
        assert exc_info.value.file_path == tmp_path / "missing"

    def test_root_is_a_file_raises(self, tmp_path: Path):
        p = tmp_path / "plain.txt"
        p.write_text("x")
        with pytest.raises(EnumerationError):
            collect_files(p)

    def test_is_lazy(self, sample_tree: Path):
        it = iter_files(sample_tree)
        assert next(it).name == "a.md"

    def test_undecodable_file_name_is_skipped(self, tmp_path: Path):
        (tmp_path / "plain.txt").write_text("foo\n")
        try:
            (tmp_path / os.fsdecode(b"caf\xe9.txt")).write_text("foo\n")
        except (OSError, UnicodeError):
            pytest.skip("file system rejects non-UTF-8 names")

        assert _names(tmp_path, collect_files(tmp_path)) == ["plain.txt"]


@pytest.fixture
def linked_tree(tmp_path: Path) -> Path:
    outside = tmp_path / "outside"
    outside.mkdir()
    (outside / "x.txt").write_text("x")
    root = tmp_path / "root"
    root.mkdir()
    try:
        (root / "link").symlink_to(outside, target_is_directory=True)
    except (OSError, NotImplementedError):
        pytest.skip("cannot create symlinks here")
    return root


class TestSymlinks:
    def test_symlinked_directory_followed_by_default(self, linked_tree: Path):
        assert _names(linked_tree, collect_files(linked_tree)) == ["link/x.txt"]

    def test_follow_disabled(self, linked_tree: Path):
        assert collect_files(linked_tree, follow_symlinks=False) == []

    def test_link_cycle_terminates(self, linked_tree: Path):
        (linked_tree / "a.txt").write_text("a")
        (linked_tree / "loop").symlink_to(linked_tree, target_is_directory=True)
        assert _names(linked_tree, collect_files(linked_tree)) == ["a.txt", "link/x.txt"]
