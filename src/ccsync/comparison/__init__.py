"""
ccsync comparison module.

Content hashing, timestamp ordering, file and directory classification,
and diff rendering.
"""

from ccsync.comparison.comparator import FileComparator
from ccsync.comparison.diff import DiffGenerator
from ccsync.comparison.directory import DirectoryComparator
from ccsync.comparison.hashing import FileHasher
from ccsync.comparison.models import (
    ComparisonResult,
    Conflict,
    DestinationOnly,
    DirectoryComparison,
    Identical,
    SourceOnly,
)
from ccsync.comparison.timestamp import TimestampComparator

__all__ = [
    "ComparisonResult",
    "Conflict",
    "DestinationOnly",
    "DiffGenerator",
    "DirectoryComparator",
    "DirectoryComparison",
    "FileComparator",
    "FileHasher",
    "Identical",
    "SourceOnly",
    "TimestampComparator",
]
