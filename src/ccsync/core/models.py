"""
ccsync shared enumerations.

Defines the policy and direction types used by configuration,
comparison and the sync engine.
"""

from __future__ import annotations

from enum import Enum


class ConflictStrategy(Enum):
    """Policy for a path that exists on both sides with different content."""

    FAIL = "fail"  # Record an error for the candidate
    OVERWRITE = "overwrite"  # Replace destination with source
    SKIP = "skip"  # Leave destination untouched
    NEWER = "newer"  # Overwrite only when source is newer

    @classmethod
    def from_string(cls, value: str) -> ConflictStrategy:
        """Create ConflictStrategy from string value."""
        value_lower = value.lower().strip()
        for strategy in cls:
            if strategy.value == value_lower:
                return strategy
        raise ValueError(f"Unknown conflict strategy: {value}")


class SyncDirection(Enum):
    """Direction of a sync run."""

    TO_LOCAL = "to-local"  # global -> project
    TO_GLOBAL = "to-global"  # project -> global


class FileType(Enum):
    """File type selector for typed sync rules."""

    TEXT = "text"
    BINARY = "binary"
    SYMLINK = "symlink"
    ANY = "any"


class ConfigType(Enum):
    """Artifact kinds kept in a configuration tree."""

    AGENTS = "agents"
    SKILLS = "skills"
    COMMANDS = "commands"
    ALL = "all"
