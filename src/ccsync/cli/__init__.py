"""
ccsync CLI Module.

Provides the command-line interface and interactive approval.
"""

from ccsync.cli.main import cli, main

__all__ = ["main", "cli"]
