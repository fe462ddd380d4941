"""
Diff generation for review before approving a sync action.

Diffs treat the destination as the "before" side and the source as the
"after" side, so they show what a sync would change.
"""

from __future__ import annotations

import difflib
from pathlib import Path

from ccsync.comparison.models import DirectoryComparison
from ccsync.core.errors import FileAccessError

DIFF_CONTEXT_LINES = 3


def _read_lines(path: Path, role: str) -> list[str]:
    try:
        return path.read_text(encoding="utf-8").splitlines(keepends=True)
    except (OSError, UnicodeDecodeError) as exc:
        raise FileAccessError(f"Failed to read {role} file: {path}: {exc}", path) from exc


class DiffGenerator:
    """Renders unified line diffs and directory change summaries."""

    def __init__(self, context_lines: int = DIFF_CONTEXT_LINES) -> None:
        self.context_lines = context_lines

    def generate(self, source: Path, destination: Path) -> str:
        """Unified diff from destination to source."""
        return self.generate_from_content(
            _read_lines(source, "source"),
            _read_lines(destination, "destination"),
            source,
            destination,
        )

    def generate_from_content(
        self,
        source_lines: list[str],
        dest_lines: list[str],
        source_path: Path,
        dest_path: Path,
    ) -> str:
        lines = []
        for line in difflib.unified_diff(
            dest_lines,
            source_lines,
            fromfile=str(dest_path),
            tofile=str(source_path),
            n=self.context_lines,
        ):
            lines.append(line if line.endswith("\n") else line + "\n")
        return "".join(lines)

    @staticmethod
    def count_changes(source: Path, destination: Path) -> tuple[int, int]:
        """Return (added, removed) line counts from destination to source."""
        source_lines = _read_lines(source, "source")
        dest_lines = _read_lines(destination, "destination")
        added = removed = 0
        matcher = difflib.SequenceMatcher(None, dest_lines, source_lines, autojunk=False)
        for tag, i1, i2, j1, j2 in matcher.get_opcodes():
            if tag in ("replace", "delete"):
                removed += i2 - i1
            if tag in ("replace", "insert"):
                added += j2 - j1
        return added, removed

    def generate_directory_summary(
        self,
        comparison: DirectoryComparison,
        source_dir: Path,
        dest_dir: Path,
        name: str,
    ) -> str:
        """Summarise added, modified and removed files of a directory pair."""
        lines = [f"Directory diff: {name}", ""]

        if comparison.added:
            lines.append("Files to add:")
            lines.extend(f"  + {p.as_posix()}" for p in sorted(comparison.added))
            lines.append("")

        if comparison.modified:
            lines.append("Files to modify:")
            for rel_path in sorted(comparison.modified):
                try:
                    added, removed = self.count_changes(source_dir / rel_path, dest_dir / rel_path)
                    lines_info = f" (+{added} -{removed} lines)"
                except FileAccessError:
                    lines_info = ""
                lines.append(f"  ~ {rel_path.as_posix()}{lines_info}")
            lines.append("")

        if comparison.removed:
            lines.append("Files to remove:")
            lines.extend(f"  - {p.as_posix()}" for p in sorted(comparison.removed))
            lines.append("")

        if comparison.is_identical():
            lines.append("Directories are identical")

        return "\n".join(lines).rstrip("\n") + "\n"
