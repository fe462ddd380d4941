"""
Symlink resolution with loop and broken-link detection.

Chains are followed one hop at a time. The visited set belongs to a
single resolve() call, so unrelated links that share a target never
report a false loop.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from ccsync.core.errors import BrokenSymlinkError, FileAccessError, SymlinkLoopError


@dataclass(frozen=True)
class Regular:
    """Not a symlink."""

    path: Path


@dataclass(frozen=True)
class SymlinkPreserved:
    """A symlink kept as a link."""

    path: Path


@dataclass(frozen=True)
class SymlinkResolved:
    """A symlink followed to its final, non-link target."""

    path: Path
    canonical: Path


ResolvedPath = Union[Regular, SymlinkPreserved, SymlinkResolved]


def resolved_target(resolved: ResolvedPath) -> Path:
    """Path whose content represents the candidate."""
    if isinstance(resolved, SymlinkResolved):
        return resolved.canonical
    return resolved.path


def _canonical_hop(link: Path) -> tuple[Path, Path]:
    """Return (raw target, canonical location of the next hop) for one link."""
    raw_target = Path(os.readlink(link))
    target = raw_target if raw_target.is_absolute() else link.parent / raw_target
    try:
        if target.name in ("", ".", ".."):
            return target, target.resolve(strict=True)
        parent = target.parent.resolve(strict=True)
    except (OSError, RuntimeError) as exc:
        raise BrokenSymlinkError(link, target) from exc
    return target, parent / target.name


class SymlinkResolver:
    """Classifies paths as regular, preserved symlink or resolved symlink."""

    def __init__(self, preserve: bool = False) -> None:
        self.preserve = preserve

    def resolve(self, path: Path) -> ResolvedPath:
        try:
            is_link = path.is_symlink()
            path.lstat()
        except OSError as exc:
            raise FileAccessError(f"Failed to read metadata for {path}: {exc}", path) from exc

        if not is_link:
            return Regular(path)
        if self.preserve:
            return SymlinkPreserved(path)

        visited: set[Path] = {path.parent.resolve() / path.name}
        current = path
        while True:
            target, hop = _canonical_hop(current)
            if not hop.is_symlink() and not hop.exists():
                raise BrokenSymlinkError(path, target)
            if hop in visited:
                raise SymlinkLoopError(path, hop)
            visited.add(hop)
            if not hop.is_symlink():
                return SymlinkResolved(path, hop)
            current = hop
