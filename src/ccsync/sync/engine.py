"""
ccsync sync engine.

Drives one run end to end: scan, filter, compare, resolve, optionally
approve, execute, aggregate. Candidates are processed one at a time in
scan order. Per-candidate errors are collected and the run is reported
as failed only after every candidate has been attempted; a user abort
stops the run immediately.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ccsync.comparison.comparator import FileComparator
from ccsync.comparison.directory import DirectoryComparator
from ccsync.core.config import SyncConfig
from ccsync.core.errors import CcsyncError, SyncAbortedException, SyncFailedError
from ccsync.core.logging import SyncRunLogger, get_logger
from ccsync.core.models import ConflictStrategy, SyncDirection
from ccsync.core.patterns import PatternMatcher
from ccsync.scanner.scanner import FileFilter, ScannedFile, Scanner, ScanResult
from ccsync.sync.actions import (
    EXCLUDED_BY_PATTERN,
    IDENTICAL_CONTENT,
    CreateDirectoryAction,
    DirectoryConflictAction,
    SkipAction,
    SyncAction,
    SyncActionResolver,
    needs_approval,
)
from ccsync.sync.approval import ApprovalOutcome, Approver, upgrade_approved
from ccsync.sync.executor import FileOperationExecutor
from ccsync.sync.result import USER_SKIPPED, SyncResult

logger = get_logger(__name__)


@dataclass
class PlannedAction:
    """Classification of one candidate without executing it."""

    relative_path: Path
    candidate: ScannedFile
    action: SyncAction | None = None
    error: str | None = None


@dataclass
class SyncPlan:
    actions: list[PlannedAction] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def pending(self) -> list[PlannedAction]:
        """Planned actions that would change something or need a decision."""
        return [p for p in self.actions if p.action is not None and needs_approval(p.action)]


class SyncEngine:
    """Synchronizes one configuration tree into another."""

    def __init__(
        self,
        config: SyncConfig,
        direction: SyncDirection,
        file_filter: FileFilter | None = None,
    ) -> None:
        self.config = config
        self.direction = direction
        self.file_filter = file_filter or FileFilter()
        self.pattern_matcher = PatternMatcher.from_config(config, direction)
        self.file_comparator = FileComparator()
        self.directory_comparator = DirectoryComparator(
            self.file_comparator.hasher, follow_symlinks=not config.preserve_symlinks
        )

    @property
    def conflict_strategy(self) -> ConflictStrategy:
        return self.config.effective_strategy

    def sync(
        self,
        source_root: Path,
        dest_root: Path,
        approver: Approver | None = None,
    ) -> SyncResult:
        """Run a sync and return its statistics.

        Raises:
            SyncAbortedException: the approver aborted the run.
            SyncFailedError: at least one candidate failed; carries the result.
        """
        result = SyncResult()
        executor = FileOperationExecutor(
            dry_run=self.config.dry_run,
            preserve_symlinks=self.config.preserve_symlinks,
        )

        with SyncRunLogger(
            logger,
            direction=self.direction.value,
            source=str(source_root),
            dest=str(dest_root),
            dry_run=self.config.dry_run,
        ) as run_log:
            scan_result = self.scan(source_root)
            result.warnings.extend(scan_result.warnings)

            for candidate in scan_result.files:
                try:
                    action = self.determine_action(candidate, source_root, dest_root)
                except (CcsyncError, OSError) as exc:
                    self._record_error(result, candidate.path, exc)
                    continue

                if approver is not None and needs_approval(action):
                    approved = self._apply_approval(action, approver, result)
                    if approved is None:
                        continue
                    action = approved

                try:
                    executor.execute(action, result)
                except (CcsyncError, OSError) as exc:
                    self._record_error(result, candidate.path, exc)

            result.finalize()
            run_log.record(result)
            if not result.is_success:
                raise SyncFailedError(result)

        return result

    def plan(self, source_root: Path, dest_root: Path) -> SyncPlan:
        """Classify every candidate without touching either tree."""
        scan_result = self.scan(source_root)
        plan = SyncPlan(warnings=list(scan_result.warnings))
        for candidate in scan_result.files:
            planned = PlannedAction(
                relative_path=candidate.path.relative_to(source_root),
                candidate=candidate,
            )
            try:
                planned.action = self.determine_action(candidate, source_root, dest_root)
            except (CcsyncError, OSError) as exc:
                planned.error = str(exc)
            plan.actions.append(planned)
        return plan

    def scan(self, source_root: Path) -> ScanResult:
        scanner = Scanner(self.file_filter, preserve_symlinks=self.config.preserve_symlinks)
        return scanner.scan(source_root)

    def determine_action(
        self,
        candidate: ScannedFile,
        source_root: Path,
        dest_root: Path,
    ) -> SyncAction:
        """Compare one candidate with its destination counterpart."""
        rel_path = candidate.path.relative_to(source_root)
        source = candidate.resolved_path

        if not self.pattern_matcher.should_include(rel_path, candidate.is_dir, candidate.path):
            return SkipAction(path=candidate.path, reason=EXCLUDED_BY_PATTERN)

        dest = dest_root / rel_path

        if not candidate.is_dir:
            comparison = self.file_comparator.compare(source, dest, self.conflict_strategy)
            return SyncActionResolver.resolve(source, dest, comparison)

        if not dest.exists():
            return CreateDirectoryAction(source=source, dest=dest)

        if self.directory_comparator.compare(source, dest).is_identical():
            return SkipAction(path=source, reason=IDENTICAL_CONTENT)

        return DirectoryConflictAction(
            source=source,
            dest=dest,
            strategy=self.conflict_strategy,
            source_newer=self.directory_comparator.is_source_newer(source, dest),
        )

    @staticmethod
    def _apply_approval(
        action: SyncAction,
        approver: Approver,
        result: SyncResult,
    ) -> SyncAction | None:
        decision = approver(action)
        if decision.outcome == ApprovalOutcome.PROCEED:
            return upgrade_approved(action)
        if decision.outcome == ApprovalOutcome.DECLINE:
            result.record_skip(USER_SKIPPED)
            return None
        raise SyncAbortedException(decision.reason or "User aborted sync operation")

    @staticmethod
    def _record_error(result: SyncResult, path: Path, exc: Exception) -> None:
        logger.error("Sync action failed", path=str(path), error=str(exc))
        result.record_error(str(exc))
