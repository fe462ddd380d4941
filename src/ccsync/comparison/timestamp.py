"""Modification-time comparison."""

from __future__ import annotations

import os
from pathlib import Path

from ccsync.core.errors import FileAccessError


class TimestampComparator:
    """Orders paths by modification time."""

    @staticmethod
    def modified_time(path: Path) -> int:
        """Modification time in nanoseconds."""
        try:
            return os.stat(path).st_mtime_ns
        except OSError as exc:
            raise FileAccessError(f"Failed to read metadata for: {path}: {exc}", path) from exc

    @classmethod
    def is_newer(cls, source: Path, destination: Path) -> bool:
        """True when source was modified strictly after destination."""
        return cls.modified_time(source) > cls.modified_time(destination)

    @classmethod
    def compare_times(cls, source: Path, destination: Path) -> int:
        """Return -1, 0 or 1 as source is older, equal or newer."""
        source_time = cls.modified_time(source)
        dest_time = cls.modified_time(destination)
        return (source_time > dest_time) - (source_time < dest_time)
