# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Core implementation of the logarc command-line tool.

This package provides the logic behind logarc's archiving workflow: scanning
a log directory, filtering out files that should not be archived, streaming
the remaining files into a gzip-compressed tar archive that is published
atomically, and recording every run in an append-only history file.
"""

from .logarc import __version__, cli

__all__ = [
    "__version__",
    "cli",
    "archive",
    "core",
    "history",
]
