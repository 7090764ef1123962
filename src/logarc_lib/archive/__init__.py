# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Utilities for archiving log files.

This module provides the `Archiver` class, which collects the regular files
of a directory into a timestamped gzip-compressed tar archive and optionally
removes the archived originals.
"""

from .archiver import ArchiveRequest, ArchiveResult, Archiver, FileCandidate, SkipReason

__all__ = [
    "ArchiveRequest",
    "ArchiveResult",
    "Archiver",
    "FileCandidate",
    "SkipReason",
]
