"""
ccsync scanner module.

Discovers sync candidates in a configuration tree.
"""

from ccsync.scanner.scanner import (
    FileFilter,
    ScanMode,
    ScanResult,
    ScannedFile,
    Scanner,
)
from ccsync.scanner.symlinks import (
    Regular,
    ResolvedPath,
    SymlinkPreserved,
    SymlinkResolved,
    SymlinkResolver,
)

__all__ = [
    "FileFilter",
    "Regular",
    "ResolvedPath",
    "ScanMode",
    "ScanResult",
    "ScannedFile",
    "Scanner",
    "SymlinkPreserved",
    "SymlinkResolved",
    "SymlinkResolver",
]
