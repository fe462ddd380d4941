"""
Approval contract between the engine and whoever decides on actions.

The engine asks once per eligible action, in scan order, and waits for
the answer. How the answer is obtained (terminal prompt, test stub,
auto-approve) is up to the approver.
"""

from __future__ import annotations

import dataclasses
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto

from ccsync.core.models import ConflictStrategy
from ccsync.sync.actions import ConflictAction, DirectoryConflictAction, SyncAction


class ApprovalOutcome(Enum):
    """Tri-state answer to an approval request."""

    PROCEED = auto()
    DECLINE = auto()
    ABORT = auto()


@dataclass(frozen=True)
class ApprovalDecision:
    outcome: ApprovalOutcome
    reason: str = ""

    @classmethod
    def proceed(cls) -> ApprovalDecision:
        return cls(ApprovalOutcome.PROCEED)

    @classmethod
    def decline(cls) -> ApprovalDecision:
        return cls(ApprovalOutcome.DECLINE)

    @classmethod
    def abort(cls, reason: str = "User aborted sync operation") -> ApprovalDecision:
        return cls(ApprovalOutcome.ABORT, reason)


Approver = Callable[[SyncAction], ApprovalDecision]


class ActionApprover(ABC):
    """Base class for stateful approvers."""

    @abstractmethod
    def approve(self, action: SyncAction) -> ApprovalDecision:
        """Decide on a single action."""

    def __call__(self, action: SyncAction) -> ApprovalDecision:
        return self.approve(action)


class AlwaysApprove(ActionApprover):
    """Approves every action."""

    def approve(self, action: SyncAction) -> ApprovalDecision:
        return ApprovalDecision.proceed()


def upgrade_approved(action: SyncAction) -> SyncAction:
    """An approved fail-strategy conflict is consent to overwrite."""
    if (
        isinstance(action, (ConflictAction, DirectoryConflictAction))
        and action.strategy == ConflictStrategy.FAIL
    ):
        return dataclasses.replace(action, strategy=ConflictStrategy.OVERWRITE)
    return action
