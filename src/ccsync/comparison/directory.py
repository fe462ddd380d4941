"""
Recursive directory comparison for marker-anchored directories.

Every relative file path found under either root lands in exactly one
of the added, modified, removed or unchanged sets.
"""

from __future__ import annotations

import os
from pathlib import Path

from ccsync.comparison.hashing import FileHasher
from ccsync.comparison.models import DirectoryComparison
from ccsync.comparison.timestamp import TimestampComparator
from ccsync.core.errors import FileAccessError


def _raise_walk_error(error: OSError) -> None:
    raise FileAccessError(f"Failed to read directory: {error.filename}: {error}") from error


def collect_files(root: Path, follow_symlinks: bool = True) -> set[Path]:
    """Relative paths of all regular files under root; empty if root is missing.

    With follow_symlinks, symlinked subdirectories are walked as if they were
    real ones, matching what a non-preserving copy puts on disk. Each
    directory is entered at most once, so a looping link cannot recurse.
    """
    files: set[Path] = set()
    if not root.exists():
        return files

    visited: set[tuple[int, int]] = set()
    for dirpath, dirnames, filenames in os.walk(
        root, followlinks=follow_symlinks, onerror=_raise_walk_error
    ):
        if follow_symlinks:
            try:
                st = os.stat(dirpath)
            except OSError as e:
                raise FileAccessError(f"Failed to read directory: {dirpath}: {e}") from e
            key = (st.st_dev, st.st_ino)
            if key in visited:
                dirnames[:] = []
                continue
            visited.add(key)

        current = Path(dirpath)
        for filename in filenames:
            path = current / filename
            if path.is_file():
                files.add(path.relative_to(root))
    return files


class DirectoryComparator:
    """Compares two directory trees file by file."""

    def __init__(self, hasher: FileHasher | None = None, follow_symlinks: bool = True) -> None:
        self.hasher = hasher or FileHasher()
        self.follow_symlinks = follow_symlinks

    def compare(self, source: Path, destination: Path) -> DirectoryComparison:
        source_files = collect_files(source, self.follow_symlinks)
        dest_files = collect_files(destination, self.follow_symlinks)
        comparison = DirectoryComparison()

        for rel_path in source_files:
            if rel_path not in dest_files:
                comparison.added.add(rel_path)
            elif self.hasher.hash(source / rel_path) == self.hasher.hash(destination / rel_path):
                comparison.unchanged.add(rel_path)
            else:
                comparison.modified.add(rel_path)

        comparison.removed = dest_files - source_files
        return comparison

    def newest_file(self, root: Path) -> Path | None:
        """The most recently modified file in a tree."""
        newest: Path | None = None
        newest_time = 0
        for rel_path in collect_files(root, self.follow_symlinks):
            path = root / rel_path
            mtime = TimestampComparator.modified_time(path)
            if newest is None or mtime > newest_time:
                newest, newest_time = path, mtime
        return newest

    def is_source_newer(self, source: Path, destination: Path) -> bool:
        """Compare the newest file of each tree."""
        source_newest = self.newest_file(source)
        dest_newest = self.newest_file(destination)

        if source_newest is None:
            return False
        if dest_newest is None:
            return True
        return TimestampComparator.is_newer(source_newest, dest_newest)
