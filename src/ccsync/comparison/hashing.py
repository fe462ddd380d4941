"""
Content hashing for change detection.

Two files are identical exactly when their SHA-256 digests match.
"""

from __future__ import annotations

import hashlib
from pathlib import Path

from ccsync.core.errors import FileAccessError

CHUNK_SIZE = 64 * 1024
DIGEST_SIZE = 32


class FileHasher:
    """Streams files through SHA-256 in fixed-size chunks."""

    def __init__(self, chunk_size: int = CHUNK_SIZE) -> None:
        self.chunk_size = chunk_size

    def hash(self, path: Path) -> bytes:
        """Return the 32-byte digest of a file's content."""
        hasher = hashlib.sha256()
        try:
            handle = open(path, "rb")
        except OSError as exc:
            raise FileAccessError(f"Failed to open file for hashing: {path}: {exc}", path) from exc

        with handle:
            try:
                while chunk := handle.read(self.chunk_size):
                    hasher.update(chunk)
            except OSError as exc:
                raise FileAccessError(f"Failed to read file: {path}: {exc}", path) from exc

        return hasher.digest()

    def hash_hex(self, path: Path) -> str:
        return self.hash(path).hex()

    def same_content(self, first: Path, second: Path) -> bool:
        return self.hash(first) == self.hash(second)
