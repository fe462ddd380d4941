"""
ccsync Interactive Approval.

Terminal prompter asked once per action that needs a decision.
"""

from __future__ import annotations

from enum import Enum, auto

import click
from rich.console import Console
from rich.syntax import Syntax

from ccsync.comparison import DiffGenerator, DirectoryComparator
from ccsync.core.errors import CcsyncError
from ccsync.core.logging import get_logger
from ccsync.sync.actions import (
    ConflictAction,
    CreateAction,
    CreateDirectoryAction,
    DirectoryConflictAction,
    SkipAction,
    SyncAction,
)
from ccsync.sync.approval import ActionApprover, ApprovalDecision

logger = get_logger(__name__)

PROMPT_TEXT = "Proceed? [y/n/a/s/d/q] (yes/no/all/skip-all/diff/quit)"


class UserChoice(Enum):
    YES = auto()
    NO = auto()
    ALL = auto()
    SKIP_ALL = auto()
    DIFF = auto()
    QUIT = auto()


class SessionDecision(Enum):
    ASK_EACH = auto()
    APPROVE_ALL = auto()
    SKIP_ALL = auto()


CHOICES: dict[str, UserChoice] = {
    "": UserChoice.NO,
    "y": UserChoice.YES,
    "yes": UserChoice.YES,
    "n": UserChoice.NO,
    "no": UserChoice.NO,
    "a": UserChoice.ALL,
    "all": UserChoice.ALL,
    "s": UserChoice.SKIP_ALL,
    "skip": UserChoice.SKIP_ALL,
    "skip-all": UserChoice.SKIP_ALL,
    "none": UserChoice.SKIP_ALL,
    "d": UserChoice.DIFF,
    "diff": UserChoice.DIFF,
    "q": UserChoice.QUIT,
    "quit": UserChoice.QUIT,
    "exit": UserChoice.QUIT,
}


def parse_choice(answer: str) -> UserChoice | None:
    """Map typed input to a choice; None for unrecognised input."""
    return CHOICES.get(answer.strip().lower())


def describe_action(action: SyncAction) -> str:
    """One-paragraph description of an action for the prompt."""
    if isinstance(action, CreateAction):
        return f"Create new file:\n  Source: {action.source}\n  Dest:   {action.dest}"
    if isinstance(action, CreateDirectoryAction):
        return f"Create new directory:\n  Source: {action.source}\n  Dest:   {action.dest}"
    if isinstance(action, SkipAction):
        return f"Skip ({action.reason}):\n  {action.path}"

    newer = "source newer" if action.source_newer else "dest newer"
    kind = "Directory conflict" if isinstance(action, DirectoryConflictAction) else "Conflict"
    return (
        f"{kind} detected ({newer}):\n"
        f"  Source: {action.source}\n"
        f"  Dest:   {action.dest}\n"
        f"  Strategy: {action.strategy.value}"
    )


class InteractivePrompter(ActionApprover):
    """
    Asks the user about each action.

    "all" and "skip-all" answers hold for the rest of the run; "diff"
    shows what would change and asks again.
    """

    def __init__(self, console: Console | None = None, follow_symlinks: bool = True) -> None:
        self.console = console or Console()
        self.session_state = SessionDecision.ASK_EACH
        self.diff_generator = DiffGenerator()
        self.directory_comparator = DirectoryComparator(follow_symlinks=follow_symlinks)

    def approve(self, action: SyncAction) -> ApprovalDecision:
        if self.session_state == SessionDecision.APPROVE_ALL:
            return ApprovalDecision.proceed()
        if self.session_state == SessionDecision.SKIP_ALL:
            return ApprovalDecision.decline()

        self.console.print()
        self.console.print(describe_action(action))

        while True:
            choice = self._ask()
            if choice == UserChoice.YES:
                return ApprovalDecision.proceed()
            if choice == UserChoice.NO:
                return ApprovalDecision.decline()
            if choice == UserChoice.ALL:
                self.session_state = SessionDecision.APPROVE_ALL
                return ApprovalDecision.proceed()
            if choice == UserChoice.SKIP_ALL:
                self.session_state = SessionDecision.SKIP_ALL
                return ApprovalDecision.decline()
            if choice == UserChoice.QUIT:
                logger.info("User quit interactive approval")
                return ApprovalDecision.abort()
            self.show_diff(action)

    def _ask(self) -> UserChoice:
        while True:
            answer = click.prompt(PROMPT_TEXT, default="", show_default=False)
            choice = parse_choice(answer)
            if choice is not None:
                return choice
            self.console.print(
                "[red]Invalid choice. Please enter y/n/a/s/d/q or the full word.[/red]"
            )

    def show_diff(self, action: SyncAction) -> None:
        """Render what approving the action would change."""
        try:
            if isinstance(action, ConflictAction):
                diff = self.diff_generator.generate(action.source, action.dest)
                self.console.print(Syntax(diff or "No textual differences\n", "diff"))
            elif isinstance(action, DirectoryConflictAction):
                comparison = self.directory_comparator.compare(action.source, action.dest)
                self.console.print(
                    self.diff_generator.generate_directory_summary(
                        comparison, action.source, action.dest, action.dest.name
                    )
                )
            elif isinstance(action, (CreateAction, CreateDirectoryAction)):
                self.console.print("\n--- New entry (no diff available) ---")
                self.console.print(f"Dest:   {action.dest}")
            else:
                self.console.print("\n--- No diff (entry will be skipped) ---")
        except CcsyncError as e:
            self.console.print(f"[yellow]Warning: Failed to generate diff: {e}[/yellow]")
