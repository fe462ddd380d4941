"""
ccsync Core - configuration, logging, errors and pattern matching.
"""

from ccsync.core.config import LoggingConfig, SyncConfig, SyncRule, load_config
from ccsync.core.errors import (
    CcsyncError,
    ConfigError,
    SyncAbortedException,
    SyncFailedError,
)
from ccsync.core.logging import get_logger, setup_logging
from ccsync.core.models import ConfigType, ConflictStrategy, FileType, SyncDirection
from ccsync.core.patterns import PatternMatcher

__all__ = [
    "CcsyncError",
    "ConfigError",
    "ConfigType",
    "ConflictStrategy",
    "FileType",
    "LoggingConfig",
    "PatternMatcher",
    "SyncAbortedException",
    "SyncConfig",
    "SyncDirection",
    "SyncFailedError",
    "SyncRule",
    "get_logger",
    "load_config",
    "setup_logging",
]
