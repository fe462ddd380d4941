"""
Sync actions and their derivation from comparison results.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from ccsync.comparison.models import (
    ComparisonResult,
    Conflict,
    DestinationOnly,
    Identical,
    SourceOnly,
)
from ccsync.core.models import ConflictStrategy

IDENTICAL_CONTENT = "identical content"
SOURCE_MISSING = "source doesn't exist"
EXCLUDED_BY_PATTERN = "excluded by pattern"


@dataclass(frozen=True)
class CreateAction:
    """Copy a file that is missing at the destination."""

    source: Path
    dest: Path


@dataclass(frozen=True)
class CreateDirectoryAction:
    """Copy a whole directory that is missing at the destination."""

    source: Path
    dest: Path


@dataclass(frozen=True)
class SkipAction:
    """No filesystem effect."""

    path: Path
    reason: str


@dataclass(frozen=True)
class ConflictAction:
    """Both files exist with different content."""

    source: Path
    dest: Path
    strategy: ConflictStrategy
    source_newer: bool


@dataclass(frozen=True)
class DirectoryConflictAction:
    """Both directories exist with different content."""

    source: Path
    dest: Path
    strategy: ConflictStrategy
    source_newer: bool


SyncAction = Union[
    CreateAction,
    CreateDirectoryAction,
    SkipAction,
    ConflictAction,
    DirectoryConflictAction,
]


def needs_approval(action: SyncAction) -> bool:
    """Skips are automatic; everything else may be put to an approver."""
    return not isinstance(action, SkipAction)


class SyncActionResolver:
    """Maps a file comparison result to the action to perform."""

    @staticmethod
    def resolve(source: Path, dest: Path, comparison: ComparisonResult) -> SyncAction:
        if isinstance(comparison, Identical):
            return SkipAction(path=source, reason=IDENTICAL_CONTENT)
        if isinstance(comparison, SourceOnly):
            return CreateAction(source=source, dest=dest)
        if isinstance(comparison, DestinationOnly):
            return SkipAction(path=dest, reason=SOURCE_MISSING)
        if isinstance(comparison, Conflict):
            return ConflictAction(
                source=source,
                dest=dest,
                strategy=comparison.strategy,
                source_newer=comparison.source_newer,
            )
        raise TypeError(f"Unknown comparison result: {comparison!r}")
