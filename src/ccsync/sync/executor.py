"""
Physical execution of sync actions.

Every action updates the run's counters. In dry-run mode the counters
and log lines are produced as usual but the filesystem is left alone.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable
from pathlib import Path

from ccsync.core.errors import ConflictError, FileAccessError
from ccsync.core.logging import get_logger
from ccsync.core.models import ConflictStrategy
from ccsync.sync.actions import (
    ConflictAction,
    CreateAction,
    CreateDirectoryAction,
    DirectoryConflictAction,
    SkipAction,
    SyncAction,
)
from ccsync.sync.result import SyncResult

logger = get_logger(__name__)

DEST_NEWER = "destination newer"


class FileOperationExecutor:
    """Performs the filesystem effect of each action."""

    def __init__(self, dry_run: bool = False, preserve_symlinks: bool = False) -> None:
        self.dry_run = dry_run
        self.preserve_symlinks = preserve_symlinks

    def execute(self, action: SyncAction, result: SyncResult) -> None:
        if isinstance(action, CreateAction):
            self._apply("Would create", action.dest, lambda: self.copy_file(action.source, action.dest))
            result.created += 1
        elif isinstance(action, CreateDirectoryAction):
            self._apply(
                "Would create directory",
                action.dest,
                lambda: self.copy_directory(action.source, action.dest),
            )
            result.created += 1
        elif isinstance(action, SkipAction):
            if self.dry_run:
                logger.info("[DRY RUN] Would skip", path=str(action.path), reason=action.reason)
            result.record_skip(action.reason)
        elif isinstance(action, ConflictAction):
            self._handle_conflict(action, result, is_dir=False)
        elif isinstance(action, DirectoryConflictAction):
            self._handle_conflict(action, result, is_dir=True)
        else:
            raise TypeError(f"Unknown sync action: {action!r}")

    def _handle_conflict(
        self,
        action: ConflictAction | DirectoryConflictAction,
        result: SyncResult,
        is_dir: bool,
    ) -> None:
        label = "directory" if is_dir else "file"
        strategy = action.strategy

        if strategy == ConflictStrategy.FAIL:
            prefix = "Directory conflict" if is_dir else "Conflict"
            raise ConflictError(
                f"{prefix}: {action.source} <-> {action.dest} (use --conflict to resolve)",
                action.source,
                action.dest,
            )

        if strategy == ConflictStrategy.SKIP:
            if self.dry_run:
                logger.info(f"[DRY RUN] Would skip {label} conflict", dest=str(action.dest))
            result.conflicts += 1
            return

        if strategy == ConflictStrategy.NEWER and not action.source_newer:
            if self.dry_run:
                logger.info(f"[DRY RUN] Would skip {label} (destination newer)", dest=str(action.dest))
            result.record_skip(DEST_NEWER)
            return

        # OVERWRITE, or NEWER with a newer source
        if is_dir:
            self._apply(
                "Would overwrite directory",
                action.dest,
                lambda: self.replace_directory(action.source, action.dest),
            )
        else:
            self._apply("Would overwrite", action.dest, lambda: self.copy_file(action.source, action.dest))
        result.updated += 1

    def _apply(self, preview: str, dest: Path, operation: Callable[[], None]) -> None:
        if self.dry_run:
            logger.info(f"[DRY RUN] {preview}", dest=str(dest))
            return
        operation()
        logger.debug(preview.replace("Would ", "").capitalize(), dest=str(dest))

    def copy_file(self, source: Path, dest: Path) -> None:
        """Copy one file, creating missing parent directories."""
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FileAccessError(f"Failed to create directory: {dest.parent}: {exc}", dest.parent) from exc

        keep_link = self.preserve_symlinks and source.is_symlink()
        try:
            if keep_link and (dest.is_symlink() or dest.exists()):
                dest.unlink()
            shutil.copy2(source, dest, follow_symlinks=not keep_link)
        except OSError as exc:
            raise FileAccessError(f"Failed to copy {source} to {dest}: {exc}", dest) from exc

    def copy_directory(self, source: Path, dest: Path) -> None:
        """Recursively copy a directory tree, parents before children."""
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.copytree(source, dest, symlinks=self.preserve_symlinks, dirs_exist_ok=True)
        except OSError as exc:
            raise FileAccessError(f"Failed to copy directory {source} to {dest}: {exc}", dest) from exc

    def replace_directory(self, source: Path, dest: Path) -> None:
        """Remove the destination subtree, then copy the source tree in its place."""
        try:
            if dest.is_symlink():
                dest.unlink()
            elif dest.exists():
                shutil.rmtree(dest)
        except OSError as exc:
            raise FileAccessError(f"Failed to remove directory: {dest}: {exc}", dest) from exc
        self.copy_directory(source, dest)
