"""
ccsync sync module.

Action resolution, approval, execution and orchestration of a sync run.
"""

from ccsync.sync.actions import (
    ConflictAction,
    CreateAction,
    CreateDirectoryAction,
    DirectoryConflictAction,
    SkipAction,
    SyncAction,
    SyncActionResolver,
)
from ccsync.sync.approval import (
    ActionApprover,
    AlwaysApprove,
    ApprovalDecision,
    ApprovalOutcome,
)
from ccsync.sync.engine import PlannedAction, SyncEngine, SyncPlan
from ccsync.sync.executor import FileOperationExecutor
from ccsync.sync.reporting import SyncReporter
from ccsync.sync.result import SyncResult

__all__ = [
    "ActionApprover",
    "AlwaysApprove",
    "ApprovalDecision",
    "ApprovalOutcome",
    "ConflictAction",
    "CreateAction",
    "CreateDirectoryAction",
    "DirectoryConflictAction",
    "FileOperationExecutor",
    "PlannedAction",
    "SkipAction",
    "SyncAction",
    "SyncActionResolver",
    "SyncEngine",
    "SyncPlan",
    "SyncReporter",
    "SyncResult",
]
