# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from dataclasses import dataclass
from datetime import datetime
from typing import Self

from logarc_lib.archive.archiver import ArchiveResult
from logarc_lib.core.config import CFG
from logarc_lib.core.error import HistoryError


@dataclass(frozen=True)
class HistoryEntry:
    """
    A single record of the archive history file.
    """

    # Human-readable time of the record, including the time zone.
    timestamp: str
    # Base name of the archive file.
    archive: str
    # Number of archived files.
    files: int
    # Total number of archived bytes.
    total_bytes: int

    # Keys of the tab-separated fields following the timestamp.
    _KEYS = ("archive", "files", "total_bytes")

    @classmethod
    def fromResult(cls, result: ArchiveResult, time: datetime | None = None) -> Self:
        """
        Create a history entry describing an archiving run.

        Args:
            result (ArchiveResult): The result of the run.
            time (datetime | None): Time of the record. Defaults to the current local time.

        Returns:
            HistoryEntry: The new entry.
        """
        if time is None:
            time = datetime.now().astimezone()
        return cls(
            timestamp=time.strftime(CFG.date_formats.human),
            archive=result.archive_path.name,
            files=result.files_archived,
            total_bytes=result.total_bytes,
        )

    @classmethod
    def fromLine(cls, line: str) -> Self:
        """
        Parse a line of the history file.

        Args:
            line (str): The line to parse. Trailing newline is ignored.

        Returns:
            HistoryEntry: The parsed entry.

        Raises:
            HistoryError: If the line is not a valid history record.
        """
        fields = line.rstrip("\r\n").split("\t")
        if len(fields) != len(cls._KEYS) + 1:
            raise HistoryError(f"Malformed history record '{line.strip()}'.")

        timestamp, *pairs = fields
        values = {}
        for key, pair in zip(cls._KEYS, pairs):
            found_key, sep, value = pair.partition("=")
            if not sep or found_key != key:
                raise HistoryError(
                    f"Malformed history record '{line.strip()}': expected '{key}=' field."
                )
            values[key] = value

        try:
            return cls(
                timestamp=timestamp,
                archive=values["archive"],
                files=int(values["files"]),
                total_bytes=int(values["total_bytes"]),
            )
        except ValueError as e:
            raise HistoryError(
                f"Malformed history record '{line.strip()}': {e}."
            ) from e

    def toLine(self) -> str:
        """
        Get the line representing this entry in the history file.
        """
        return (
            f"{self.timestamp}\tarchive={self.archive}"
            f"\tfiles={self.files}\ttotal_bytes={self.total_bytes}\n"
        )
