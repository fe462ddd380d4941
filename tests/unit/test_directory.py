"""
Tests for directory comparison and diff generation.
"""

from pathlib import Path
from typing import Callable

import pytest

from ccsync.comparison import DiffGenerator, DirectoryComparator
from ccsync.comparison.directory import collect_files
from ccsync.comparison.models import DirectoryComparison
from ccsync.core.errors import FileAccessError


@pytest.fixture
def skill_pair(temp_dir: Path, write_file: Callable[..., Path]) -> tuple[Path, Path]:
    source = temp_dir / "src" / "helper"
    dest = temp_dir / "dst" / "helper"
    write_file(source / "SKILL.md", "skill\n")
    write_file(dest / "SKILL.md", "skill\n")
    write_file(source / "added.md", "new\n")
    write_file(source / "lib" / "changed.md", "line1\nline2 changed\nline3\n")
    write_file(dest / "lib" / "changed.md", "line1\nline2\nline3\n")
    write_file(dest / "removed.md", "gone\n")
    return source, dest


class TestCollectFiles:
    """Tests for collect_files."""

    def test_missing_root(self, temp_dir: Path) -> None:
        assert collect_files(temp_dir / "nope") == set()

    def test_relative_paths(self, temp_dir: Path, write_file: Callable[..., Path]) -> None:
        write_file(temp_dir / "root" / "a.md")
        write_file(temp_dir / "root" / "x" / "y" / "b.md")
        assert collect_files(temp_dir / "root") == {Path("a.md"), Path("x/y/b.md")}

    def test_walks_symlinked_subdirectory(
        self,
        temp_dir: Path,
        write_file: Callable[..., Path],
        make_symlink: Callable[..., Path],
    ) -> None:
        write_file(temp_dir / "shared" / "ref.md")
        write_file(temp_dir / "skill" / "SKILL.md")
        make_symlink(temp_dir / "skill" / "refs", temp_dir / "shared", target_is_directory=True)

        assert collect_files(temp_dir / "skill") == {Path("SKILL.md"), Path("refs/ref.md")}
        assert collect_files(temp_dir / "skill", follow_symlinks=False) == {Path("SKILL.md")}

    def test_looping_directory_link_terminates(
        self,
        temp_dir: Path,
        write_file: Callable[..., Path],
        make_symlink: Callable[..., Path],
    ) -> None:
        write_file(temp_dir / "skill" / "SKILL.md")
        write_file(temp_dir / "skill" / "sub" / "a.md")
        make_symlink(temp_dir / "skill" / "sub" / "back", Path(".."), target_is_directory=True)

        assert collect_files(temp_dir / "skill") == {Path("SKILL.md"), Path("sub/a.md")}

    def test_comparator_matches_materialised_copy(
        self,
        temp_dir: Path,
        write_file: Callable[..., Path],
        make_symlink: Callable[..., Path],
    ) -> None:
        write_file(temp_dir / "shared" / "ref.md", "ref\n")
        write_file(temp_dir / "src" / "SKILL.md", "skill\n")
        make_symlink(temp_dir / "src" / "refs", temp_dir / "shared", target_is_directory=True)
        write_file(temp_dir / "dst" / "SKILL.md", "skill\n")
        write_file(temp_dir / "dst" / "refs" / "ref.md", "ref\n")

        assert DirectoryComparator().compare(temp_dir / "src", temp_dir / "dst").is_identical()
        preserving = DirectoryComparator(follow_symlinks=False)
        assert preserving.compare(temp_dir / "src", temp_dir / "dst").removed == {
            Path("refs/ref.md")
        }


class TestDirectoryComparator:
    """Tests for DirectoryComparator."""

    def test_four_way_partition(self, skill_pair: tuple[Path, Path]) -> None:
        source, dest = skill_pair
        comparison = DirectoryComparator().compare(source, dest)

        assert comparison.added == {Path("added.md")}
        assert comparison.modified == {Path("lib/changed.md")}
        assert comparison.removed == {Path("removed.md")}
        assert comparison.unchanged == {Path("SKILL.md")}
        assert not comparison.is_identical()
        assert comparison.change_count == 3

    def test_partition_is_disjoint_and_complete(self, skill_pair: tuple[Path, Path]) -> None:
        source, dest = skill_pair
        comparison = DirectoryComparator().compare(source, dest)
        parts = [comparison.added, comparison.modified, comparison.removed, comparison.unchanged]

        assert sum(len(p) for p in parts) == len(comparison.all_paths)
        assert comparison.all_paths == collect_files(source) | collect_files(dest)

    def test_identical_directories(self, temp_dir: Path, write_file: Callable[..., Path]) -> None:
        for side in ("src", "dst"):
            write_file(temp_dir / side / "SKILL.md", "same\n")
            write_file(temp_dir / side / "sub" / "f.md", "same\n")
        comparison = DirectoryComparator().compare(temp_dir / "src", temp_dir / "dst")
        assert comparison.is_identical()
        assert comparison.change_count == 0

    def test_is_source_newer(
        self,
        temp_dir: Path,
        write_file: Callable[..., Path],
        set_mtime: Callable[[Path, float], None],
    ) -> None:
        src_file = write_file(temp_dir / "src" / "SKILL.md", "a")
        dst_file = write_file(temp_dir / "dst" / "SKILL.md", "b")
        set_mtime(src_file, 2_000_000)
        set_mtime(dst_file, 1_000_000)

        comparator = DirectoryComparator()
        assert comparator.is_source_newer(temp_dir / "src", temp_dir / "dst")
        assert not comparator.is_source_newer(temp_dir / "dst", temp_dir / "src")

    def test_is_source_newer_with_empty_sides(
        self, temp_dir: Path, write_file: Callable[..., Path]
    ) -> None:
        write_file(temp_dir / "src" / "SKILL.md", "a")
        (temp_dir / "empty").mkdir()

        comparator = DirectoryComparator()
        assert comparator.is_source_newer(temp_dir / "src", temp_dir / "empty")
        assert not comparator.is_source_newer(temp_dir / "empty", temp_dir / "src")

    def test_newest_file(
        self,
        temp_dir: Path,
        write_file: Callable[..., Path],
        set_mtime: Callable[[Path, float], None],
    ) -> None:
        old = write_file(temp_dir / "d" / "old.md", "a")
        new = write_file(temp_dir / "d" / "sub" / "new.md", "b")
        set_mtime(old, 1_000_000)
        set_mtime(new, 3_000_000)
        assert DirectoryComparator().newest_file(temp_dir / "d") == new
        assert DirectoryComparator().newest_file(temp_dir / "missing") is None


class TestDiffGenerator:
    """Tests for DiffGenerator."""

    def test_unified_diff_direction(self, temp_dir: Path, write_file: Callable[..., Path]) -> None:
        source = write_file(temp_dir / "src.md", "a\nb\nc\n")
        dest = write_file(temp_dir / "dst.md", "a\nx\nc\n")
        diff = DiffGenerator().generate(source, dest)

        assert diff.startswith(f"--- {dest}\n+++ {source}\n")
        assert "-x\n" in diff
        assert "+b\n" in diff

    def test_identical_files_produce_empty_diff(
        self, temp_dir: Path, write_file: Callable[..., Path]
    ) -> None:
        source = write_file(temp_dir / "src.md", "same\n")
        dest = write_file(temp_dir / "dst.md", "same\n")
        assert DiffGenerator().generate(source, dest) == ""

    def test_count_changes(self, temp_dir: Path, write_file: Callable[..., Path]) -> None:
        source = write_file(temp_dir / "src.md", "a\nb\nc\nd\n")
        dest = write_file(temp_dir / "dst.md", "a\nx\nc\n")
        assert DiffGenerator.count_changes(source, dest) == (2, 1)

    def test_unreadable_file(self, temp_dir: Path, write_file: Callable[..., Path]) -> None:
        source = write_file(temp_dir / "src.md", "a\n")
        with pytest.raises(FileAccessError, match="Failed to read destination file"):
            DiffGenerator().generate(source, temp_dir / "missing.md")

    def test_directory_summary(self, skill_pair: tuple[Path, Path]) -> None:
        source, dest = skill_pair
        comparison = DirectoryComparator().compare(source, dest)
        summary = DiffGenerator().generate_directory_summary(comparison, source, dest, "helper")

        assert summary.startswith("Directory diff: helper\n")
        assert "Files to add:\n  + added.md" in summary
        assert "Files to modify:\n  ~ lib/changed.md (+1 -1 lines)" in summary
        assert "Files to remove:\n  - removed.md" in summary
        assert "Directories are identical" not in summary

    def test_identical_directory_summary(self, temp_dir: Path) -> None:
        summary = DiffGenerator().generate_directory_summary(
            DirectoryComparison(), temp_dir, temp_dir, "helper"
        )
        assert summary == "Directory diff: helper\n\nDirectories are identical\n"
