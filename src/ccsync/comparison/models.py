"""
Comparison result types.

A comparison is transient: it is recomputed for every candidate and
never cached between runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from ccsync.core.models import ConflictStrategy


@dataclass(frozen=True)
class Identical:
    """Both files exist with equal content digests."""


@dataclass(frozen=True)
class SourceOnly:
    """Only the source file exists."""


@dataclass(frozen=True)
class DestinationOnly:
    """Only the destination file exists."""


@dataclass(frozen=True)
class Conflict:
    """Both files exist with different content."""

    source_newer: bool
    strategy: ConflictStrategy


ComparisonResult = Union[Identical, SourceOnly, DestinationOnly, Conflict]


@dataclass
class DirectoryComparison:
    """Four-way partition of the relative file paths under two roots."""

    added: set[Path] = field(default_factory=set)
    modified: set[Path] = field(default_factory=set)
    removed: set[Path] = field(default_factory=set)
    unchanged: set[Path] = field(default_factory=set)

    def is_identical(self) -> bool:
        return not (self.added or self.modified or self.removed)

    @property
    def change_count(self) -> int:
        return len(self.added) + len(self.modified) + len(self.removed)

    @property
    def all_paths(self) -> set[Path]:
        return self.added | self.modified | self.removed | self.unchanged
