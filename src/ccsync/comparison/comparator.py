"""
File comparison.

The comparator only detects differences; the configured strategy is
carried through unchanged for the action resolver and executor.
"""

from __future__ import annotations

from pathlib import Path

from ccsync.comparison.hashing import FileHasher
from ccsync.comparison.models import (
    ComparisonResult,
    Conflict,
    DestinationOnly,
    Identical,
    SourceOnly,
)
from ccsync.comparison.timestamp import TimestampComparator
from ccsync.core.errors import ComparisonError
from ccsync.core.models import ConflictStrategy


class FileComparator:
    """Classifies a source/destination file pair."""

    def __init__(self, hasher: FileHasher | None = None) -> None:
        self.hasher = hasher or FileHasher()

    def compare(
        self,
        source: Path,
        destination: Path,
        strategy: ConflictStrategy,
    ) -> ComparisonResult:
        source_exists = source.exists()
        dest_exists = destination.exists()

        if not source_exists and not dest_exists:
            raise ComparisonError(
                f"Neither source nor destination file exists: "
                f"source={source}, dest={destination}"
            )
        if not dest_exists:
            return SourceOnly()
        if not source_exists:
            return DestinationOnly()

        if self.hasher.hash(source) == self.hasher.hash(destination):
            return Identical()

        return Conflict(
            source_newer=TimestampComparator.is_newer(source, destination),
            strategy=strategy,
        )
