"""
Gitignore-style include/exclude matching.

Ignore patterns drop paths; include patterns are compiled as negated
ignores so they re-admit paths an earlier ignore pattern dropped.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import TYPE_CHECKING, Iterable

from pathspec import GitIgnoreSpec

from ccsync.core.errors import ConfigError
from ccsync.core.models import FileType, SyncDirection

if TYPE_CHECKING:
    from ccsync.core.config import SyncConfig

BINARY_SNIFF_BYTES = 8192


def _compile_line(line: str, kind: str, pattern: str) -> str:
    try:
        GitIgnoreSpec.from_lines([line])
    except ValueError as exc:
        raise ConfigError(f"Invalid {kind} pattern: '{pattern}': {exc}") from exc
    return line


def detect_file_type(path: Path) -> FileType:
    """Classify a file as symlink, binary or text."""
    if path.is_symlink():
        return FileType.SYMLINK
    try:
        with open(path, "rb") as handle:
            chunk = handle.read(BINARY_SNIFF_BYTES)
    except OSError:
        return FileType.TEXT
    return FileType.BINARY if b"\0" in chunk else FileType.TEXT


@dataclass(frozen=True)
class TypedRule:
    """A rule that only applies to candidates of one file type."""

    spec: GitIgnoreSpec
    file_type: FileType
    include: bool


class PatternMatcher:
    """Compiled include/exclude rules consulted per relative path."""

    def __init__(
        self,
        ignore_patterns: Iterable[str] = (),
        include_patterns: Iterable[str] = (),
        typed_rules: Iterable[TypedRule] = (),
    ) -> None:
        lines = [_compile_line(p, "ignore", p) for p in ignore_patterns]
        lines += [_compile_line(f"!{p}", "include", p) for p in include_patterns]
        self._spec = GitIgnoreSpec.from_lines(lines) if lines else None
        self._typed_rules = list(typed_rules)

    @classmethod
    def from_config(cls, config: SyncConfig, direction: SyncDirection) -> PatternMatcher:
        """Build a matcher from config patterns plus the rules for one direction."""
        ignore = list(config.ignore)
        include = list(config.include)
        typed: list[TypedRule] = []

        for rule in config.rules:
            if not rule.applies_to(direction):
                continue
            if rule.file_type in (None, FileType.ANY):
                (include if rule.include else ignore).extend(rule.patterns)
                continue
            kind = "include" if rule.include else "ignore"
            for pattern in rule.patterns:
                _compile_line(pattern, kind, pattern)
            typed.append(
                TypedRule(
                    spec=GitIgnoreSpec.from_lines(rule.patterns),
                    file_type=rule.file_type,
                    include=rule.include,
                )
            )

        return cls(ignore, include, typed)

    @property
    def is_empty(self) -> bool:
        return self._spec is None and not self._typed_rules

    def should_include(
        self,
        relative_path: PurePath | str,
        is_dir: bool = False,
        path: Path | None = None,
    ) -> bool:
        """Decide whether a relative path takes part in the sync."""
        candidate = PurePath(relative_path).as_posix()
        if is_dir:
            candidate = candidate.rstrip("/") + "/"

        included = True
        if self._spec is not None:
            included = not self._spec.match_file(candidate)

        if self._typed_rules and not is_dir and path is not None:
            file_type = detect_file_type(path)
            for rule in self._typed_rules:
                if rule.file_type == file_type and rule.spec.match_file(candidate):
                    included = rule.include

        return included
