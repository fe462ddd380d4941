"""
Per-run sync statistics.

A SyncResult is owned by one run: the engine mutates it while
processing candidates and finalizes it once before handing it out.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime

USER_SKIPPED = "user skipped"


@dataclass
class SyncResult:
    created: int = 0
    updated: int = 0
    deleted: int = 0
    skipped: int = 0
    conflicts: int = 0
    skip_reasons: Counter[str] = field(default_factory=Counter)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    started_at: datetime = field(default_factory=datetime.now)
    ended_at: datetime | None = None

    def record_skip(self, reason: str | None = None) -> None:
        self.skipped += 1
        if reason:
            self.skip_reasons[reason] += 1

    def record_error(self, message: str) -> None:
        self.errors.append(message)

    def finalize(self) -> None:
        if self.ended_at is None:
            self.ended_at = datetime.now()

    @property
    def total_operations(self) -> int:
        return self.created + self.updated + self.deleted

    @property
    def is_success(self) -> bool:
        return not self.errors

    @property
    def duration_seconds(self) -> float | None:
        if self.ended_at is None:
            return None
        return (self.ended_at - self.started_at).total_seconds()

    def to_dict(self) -> dict[str, object]:
        return {
            "created": self.created,
            "updated": self.updated,
            "deleted": self.deleted,
            "skipped": self.skipped,
            "conflicts": self.conflicts,
            "skip_reasons": dict(self.skip_reasons),
            "total_operations": self.total_operations,
            "success": self.is_success,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "started_at": self.started_at.isoformat(),
            "ended_at": self.ended_at.isoformat() if self.ended_at else None,
        }
