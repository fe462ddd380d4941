"""
ccsync - Content-aware sync for agent, skill and command configuration.

Synchronizes a global configuration tree and a project tree in either
direction, with hash-based change detection and pluggable conflict
resolution.
"""

__version__ = "0.1.0"
__author__ = "ccsync contributors"

from ccsync.core.config import SyncConfig
from ccsync.sync.engine import SyncEngine

__all__ = ["SyncConfig", "SyncEngine", "__version__"]
