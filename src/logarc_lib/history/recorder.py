# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import logging
from pathlib import Path

from logarc_lib.archive.archiver import ArchiveResult
from logarc_lib.core.config import CFG
from logarc_lib.core.error import HistoryError
from logarc_lib.core.logger import get_logger

from .entry import HistoryEntry

logger = get_logger(__name__)


class HistoryRecorder:
    """
    Appends records of archiving runs to the history file of a destination directory
    and reads them back.

    The history file is append-only; existing records are never modified.
    """

    def __init__(self, dest_dir: Path, diagnostics: logging.Logger | None = None):
        """
        Initialize the HistoryRecorder.

        Args:
            dest_dir (Path): Directory containing the archives and the history file.
            diagnostics (logging.Logger | None): Logger receiving the
                diagnostic output. Defaults to the module logger.
        """
        self._path = dest_dir / CFG.history.file_name
        self._logger = diagnostics or logger

    @property
    def path(self) -> Path:
        """Path to the history file."""
        return self._path

    def record(self, result: ArchiveResult) -> HistoryEntry:
        """
        Append a record of an archiving run to the history file.

        The file is created if it does not exist.

        Args:
            result (ArchiveResult): The result of the archiving run.

        Returns:
            HistoryEntry: The appended entry.

        Raises:
            HistoryError: If the history file cannot be opened, written, or closed.
        """
        entry = HistoryEntry.fromResult(result)
        try:
            with self._path.open("a", encoding="utf-8") as f:
                f.write(entry.toLine())
        except OSError as e:
            raise HistoryError(
                f"Failed to append to history file '{self._path}': {e}."
            ) from e

        self._logger.debug(f"Recorded '{entry.archive}' in '{self._path}'.")
        return entry

    def read(self) -> list[HistoryEntry]:
        """
        Read all records of the history file in the order they were written.

        Malformed lines are skipped with a warning.

        Returns:
            list[HistoryEntry]: Parsed history entries. Empty if the file does not exist.

        Raises:
            HistoryError: If the history file exists but cannot be read.
        """
        if not self._path.is_file():
            self._logger.debug(f"History file '{self._path}' does not exist.")
            return []

        try:
            lines = self._path.read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError) as e:
            raise HistoryError(
                f"Failed to read history file '{self._path}': {e}."
            ) from e

        entries = []
        for number, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            try:
                entries.append(HistoryEntry.fromLine(line))
            except HistoryError as e:
                self._logger.warning(f"Line {number}: {e}")

        return entries
