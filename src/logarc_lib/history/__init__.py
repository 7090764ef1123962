# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Utilities for recording and presenting the archive history.

This module provides the `HistoryRecorder` class, which appends one record
per archiving run to the append-only history file of a destination directory,
the `HistoryEntry` record type, and the `HistoryPresenter` for displaying it.
"""

from .entry import HistoryEntry
from .presenter import HistoryPresenter
from .recorder import HistoryRecorder

__all__ = [
    "HistoryEntry",
    "HistoryPresenter",
    "HistoryRecorder",
]
