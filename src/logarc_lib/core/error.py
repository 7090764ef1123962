# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Exception types used throughout logarc.

Each exception carries an associated exit code used by logarc commands
to report failures consistently.
"""

from .config import CFG


class LogArcError(Exception):
    """Common exception type for all expected logarc errors."""

    exit_code = CFG.exit_codes.default


class ArchiveError(LogArcError):
    """Raised when an archive cannot be created or published."""

    pass


class HistoryError(LogArcError):
    """Raised when the archive history cannot be written or read."""

    pass
