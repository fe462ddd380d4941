"""
ccsync error types.

Every per-candidate failure derives from CcsyncError so the engine can
collect it and keep going. A user abort is a separate hierarchy.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ccsync.sync.result import SyncResult


class CcsyncError(Exception):
    """Base class for ccsync errors."""


class ConfigError(CcsyncError):
    """Raised when configuration cannot be read, parsed or validated."""


class FileAccessError(CcsyncError):
    """Raised when a filesystem operation fails."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class ComparisonError(CcsyncError):
    """Raised when two paths cannot be compared."""


class SymlinkError(CcsyncError):
    """Base class for symlink resolution failures."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path


class BrokenSymlinkError(SymlinkError):
    """Raised when a symlink target does not exist."""

    def __init__(self, path: Path, target: Path) -> None:
        super().__init__(f"Broken symlink: {path} -> {target}", path)
        self.target = target


class SymlinkLoopError(SymlinkError):
    """Raised when a symlink chain revisits a path."""

    def __init__(self, path: Path, revisited: Path) -> None:
        super().__init__(f"Symlink loop detected: {path} -> {revisited}", path)
        self.revisited = revisited


class ConflictError(CcsyncError):
    """Raised when a conflict is hit under the fail strategy."""

    def __init__(self, message: str, source: Path, dest: Path) -> None:
        super().__init__(message)
        self.source = source
        self.dest = dest


class SyncFailedError(CcsyncError):
    """Raised after a run that recorded at least one error."""

    def __init__(self, result: SyncResult) -> None:
        self.result = result
        self.errors = list(result.errors)
        super().__init__(
            f"Sync failed with {len(self.errors)} error(s):\n  - "
            + "\n  - ".join(self.errors)
        )


class SyncAbortedException(Exception):
    """Raised when the user aborts a sync run."""

    def __init__(self, reason: str = "User aborted sync operation") -> None:
        super().__init__(reason)
        self.reason = reason
