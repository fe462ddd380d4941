"""
Candidate discovery for configuration trees.

Three fixed subtree conventions are scanned:

- ``agents/``: flat, direct ``*.md`` children only
- ``skills/``: one level, each subdirectory holding a ``SKILL.md`` marker
  is one candidate carrying its whole contents
- ``commands/``: recursive, every ``*.md`` at any depth

A missing subtree yields nothing. An unreadable subtree, a broken symlink
or a symlink loop becomes a warning and the affected candidates are dropped.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Iterable

from ccsync.core.errors import CcsyncError
from ccsync.core.logging import get_logger
from ccsync.core.models import ConfigType
from ccsync.scanner.symlinks import SymlinkResolver, resolved_target

logger = get_logger(__name__)

MARKDOWN_SUFFIX = ".md"
SKILL_MARKER = "SKILL.md"


class ScanMode(Enum):
    """How a subtree is traversed."""

    FLAT = auto()
    ONE_LEVEL = auto()
    RECURSIVE = auto()


SUBTREES: dict[ConfigType, tuple[str, ScanMode]] = {
    ConfigType.AGENTS: ("agents", ScanMode.FLAT),
    ConfigType.SKILLS: ("skills", ScanMode.ONE_LEVEL),
    ConfigType.COMMANDS: ("commands", ScanMode.RECURSIVE),
}


@dataclass(frozen=True)
class ScannedFile:
    """A candidate found during scanning."""

    path: Path
    mode: ScanMode
    resolved_path: Path

    @property
    def is_dir(self) -> bool:
        return self.mode == ScanMode.ONE_LEVEL


@dataclass
class ScanResult:
    """Candidates plus non-fatal warnings from one scan."""

    files: list[ScannedFile] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


class FileFilter:
    """Restricts scanning to selected artifact kinds."""

    def __init__(self, types: Iterable[ConfigType] | None = None) -> None:
        selected = set(types or ())
        if not selected or ConfigType.ALL in selected:
            selected = set(SUBTREES)
        self.types = selected

    def includes(self, config_type: ConfigType) -> bool:
        return config_type in self.types


def _is_candidate_file(path: Path) -> bool:
    return path.suffix == MARKDOWN_SUFFIX and (path.is_symlink() or path.is_file())


def scan_flat(base: Path) -> list[Path]:
    """Direct ``*.md`` children of base."""
    return sorted(path for path in base.iterdir() if _is_candidate_file(path))


def scan_one_level(base: Path) -> list[Path]:
    """Immediate subdirectories of base that contain the marker file."""
    return sorted(
        path
        for path in base.iterdir()
        if path.is_dir() and (path / SKILL_MARKER).is_file()
    )


def _raise_walk_error(error: OSError) -> None:
    raise error


def scan_recursive(base: Path) -> list[Path]:
    """Every ``*.md`` file under base, without descending into symlinked directories."""
    files: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(base, onerror=_raise_walk_error):
        dirnames.sort()
        current = Path(dirpath)
        for filename in sorted(filenames):
            path = current / filename
            if _is_candidate_file(path):
                files.append(path)
    return files


_SCANNERS = {
    ScanMode.FLAT: scan_flat,
    ScanMode.ONE_LEVEL: scan_one_level,
    ScanMode.RECURSIVE: scan_recursive,
}


class Scanner:
    """Walks the known subtrees and resolves symlinked candidates."""

    def __init__(self, file_filter: FileFilter | None = None, preserve_symlinks: bool = False) -> None:
        self.file_filter = file_filter or FileFilter()
        self.symlink_resolver = SymlinkResolver(preserve=preserve_symlinks)

    def scan(self, base_path: Path) -> ScanResult:
        result = ScanResult()

        for config_type, (name, mode) in SUBTREES.items():
            if not self.file_filter.includes(config_type):
                continue
            subtree = base_path / name
            try:
                paths = self.scan_directory(subtree, mode)
            except OSError as exc:
                self._warn(result, f"Failed to scan {name} directory: {exc}", subtree=str(subtree))
                continue

            for path in paths:
                try:
                    resolved = self.symlink_resolver.resolve(path)
                except CcsyncError as exc:
                    self._warn(result, f"Symlink resolution failed: {exc}", path=str(path))
                    continue
                result.files.append(
                    ScannedFile(path=path, mode=mode, resolved_path=resolved_target(resolved))
                )

        return result

    @staticmethod
    def scan_directory(path: Path, mode: ScanMode) -> list[Path]:
        if not path.is_dir():
            return []
        return _SCANNERS[mode](path)

    @staticmethod
    def _warn(result: ScanResult, message: str, **context: str) -> None:
        logger.warning(message, **context)
        result.warnings.append(message)
