# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import gzip
import logging
import os
import shutil
import stat
import tarfile
import tempfile
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Self

from logarc_lib.core.common import (
    construct_archive_name,
    is_compressed,
    is_tmp_archive,
    resolve_dest_dir,
    to_absolute,
)
from logarc_lib.core.config import CFG
from logarc_lib.core.error import ArchiveError
from logarc_lib.core.logger import get_logger

logger = get_logger(__name__, show_time=True)


@dataclass(frozen=True)
class ArchiveRequest:
    """
    Description of a single archiving run.
    """

    # Absolute path to the directory with the files to archive.
    source_dir: Path
    # Absolute path to the directory where the archive is published.
    dest_dir: Path
    # Delete each original file once it has been written into the archive.
    remove_originals: bool = False
    # Report every include/skip decision.
    verbose: bool = False

    @classmethod
    def fromPaths(
        cls,
        source_dir: Path,
        dest_dir: Path | None = None,
        remove_originals: bool = False,
        verbose: bool = False,
    ) -> Self:
        """
        Create a request with absolute directories.

        Args:
            source_dir (Path): Directory with the files to archive.
            dest_dir (Path | None): Destination directory. Defaults to
                the `archives` directory inside `source_dir`.
            remove_originals (bool): Delete originals after archiving them.
            verbose (bool): Report every include/skip decision.

        Returns:
            ArchiveRequest: The request with absolute paths.
        """
        source_dir = to_absolute(source_dir)
        return cls(
            source_dir,
            resolve_dest_dir(source_dir, dest_dir),
            remove_originals,
            verbose,
        )


@dataclass(frozen=True)
class ArchiveResult:
    """
    Outcome of a successful archiving run.
    """

    # Absolute path of the published archive.
    archive_path: Path
    # Number of files written into the archive.
    files_archived: int
    # Sum of the byte counts of all files written into the archive.
    total_bytes: int
    # Number of directory entries that were not archived.
    skipped: int = 0


class SkipReason(Enum):
    """
    Reason for excluding a directory entry from the archive.
    """

    DIRECTORY = "directory"
    ARCHIVE_DIRECTORY = "archive directory"
    COMPRESSED = "already compressed file"
    HISTORY_FILE = "history file"
    IN_PROGRESS_ARCHIVE = "archive in progress"
    STAT_FAILED = "unreadable entry"
    NOT_REGULAR = "non-regular file"


@dataclass(frozen=True)
class FileCandidate:
    """
    A directory entry evaluated against the exclusion rules.
    """

    name: str
    path: Path
    skip_reason: SkipReason | None = None

    @property
    def qualifies(self) -> bool:
        return self.skip_reason is None


class Archiver:
    """
    Collects regular files of a directory into a gzip-compressed tar archive.

    The archive is written to a temporary file next to its final path and
    renamed only after all of its layers were successfully closed, so the
    final path never refers to an incomplete archive.
    """

    def __init__(
        self, request: ArchiveRequest, diagnostics: logging.Logger | None = None
    ):
        """
        Initialize the Archiver.

        Args:
            request (ArchiveRequest): The archiving run to perform.
            diagnostics (logging.Logger | None): Logger receiving the
                diagnostic output. Defaults to the module logger.
        """
        self._request = request
        self._logger = diagnostics or logger
        # temporary file of the archive currently being written
        self._tmp_path: Path | None = None

    def archive(self) -> ArchiveResult:
        """
        Archive all qualifying files of the source directory.

        Subdirectories, compressed files, archives still being written, the history
        file and non-regular files are skipped. A file that cannot be read is skipped with a warning.

        Returns:
            ArchiveResult: The published archive and the counters of the run.

        Raises:
            ArchiveError: If the source directory cannot be read, the destination
                directory cannot be created, or the archive cannot be written or published.
        """
        self._ensureSourceDir()
        self._makeDestDir()

        archive_path, out = self._openTmpArchive(datetime.now())
        tmp_path = self._tmp_path = Archiver._tmpPath(archive_path)
        self._logger.debug(f"Writing archive into '{tmp_path}'.")

        gz = None
        tar = None
        try:
            # an empty filename keeps the temporary name out of the gzip header
            gz = gzip.GzipFile(filename="", fileobj=out, mode="wb")
            tar = tarfile.open(fileobj=gz, mode="w", format=tarfile.PAX_FORMAT)

            files_archived = 0
            total_bytes = 0
            skipped = 0
            for candidate in self._scan():
                if not candidate.qualifies:
                    skipped += 1
                    continue

                if (copied := self._addFile(tar, candidate)) is None:
                    skipped += 1
                    continue

                files_archived += 1
                total_bytes += copied
                self._decision(f"Archived '{candidate.name}' ({copied} bytes).")

                if self._request.remove_originals:
                    self._removeOriginal(candidate)

            Archiver._closeLayers(tar, gz, out)
            self._publish(tmp_path, archive_path)
        except BaseException:
            self._discard(tmp_path, tar, gz, out)
            raise

        return ArchiveResult(archive_path, files_archived, total_bytes, skipped)

    def _ensureSourceDir(self) -> None:
        """
        Make sure that the source directory exists and is a directory.

        Raises:
            ArchiveError: If the source directory is not an accessible directory.
        """
        source = self._request.source_dir
        try:
            is_dir = stat.S_ISDIR(source.stat().st_mode)
        except OSError as e:
            raise ArchiveError(f"Cannot access directory '{source}': {e}.") from e

        if not is_dir:
            raise ArchiveError(f"'{source}' is not a directory.")

    def _makeDestDir(self) -> None:
        """
        Create the destination directory if it does not already exist.

        Raises:
            ArchiveError: If the directory cannot be created.
        """
        dest = self._request.dest_dir
        self._logger.debug(f"Ensuring that the destination directory '{dest}' exists.")
        try:
            dest.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ArchiveError(
                f"Cannot create destination directory '{dest}': {e}."
            ) from e

    def _openTmpArchive(self, timestamp: datetime) -> tuple[Path, BinaryIO]:
        """
        Exclusively create the temporary file for a new archive.

        The plain timestamped name is tried first. If the archive or its temporary
        file already exists, a numeric suffix is added to the name.

        Args:
            timestamp (datetime): Time used to name the archive.

        Returns:
            tuple[Path, BinaryIO]: The final archive path and the opened temporary file.

        Raises:
            ArchiveError: If the temporary file cannot be created or no free name is found.
        """
        for attempt in range(CFG.archiver.max_name_attempts):
            archive_path = self._request.dest_dir / construct_archive_name(
                timestamp, attempt
            )
            tmp_path = Archiver._tmpPath(archive_path)

            if archive_path.exists():
                self._logger.debug(f"Archive '{archive_path}' already exists.")
                continue

            try:
                return archive_path, tmp_path.open("xb")
            except FileExistsError:
                self._logger.debug(f"Temporary archive '{tmp_path}' already exists.")
            except OSError as e:
                raise ArchiveError(
                    f"Failed to create archive file '{tmp_path}': {e}."
                ) from e

        raise ArchiveError(
            f"Could not find a free archive name in '{self._request.dest_dir}' "
            f"after {CFG.archiver.max_name_attempts} attempts."
        )

    def _scan(self) -> Iterator[FileCandidate]:
        """
        Evaluate all immediate entries of the source directory.

        Yields:
            FileCandidate: Evaluated entry of the source directory.

        Raises:
            ArchiveError: If the source directory cannot be listed.
        """
        source = self._request.source_dir
        try:
            with os.scandir(source) as it:
                entries = list(it)
        except OSError as e:
            raise ArchiveError(f"Failed to list directory '{source}': {e}.") from e

        if CFG.archiver.sort_entries:
            entries.sort(key=lambda e: e.name)

        for entry in entries:
            yield self._evaluate(entry)

    def _evaluate(self, entry: os.DirEntry) -> FileCandidate:
        """
        Apply the exclusion rules to a single directory entry.

        Args:
            entry (os.DirEntry): The entry to evaluate.

        Returns:
            FileCandidate: The entry with the reason for skipping it, if any.
        """
        name = entry.name
        path = self._request.source_dir / name

        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError:
            is_dir = False

        if is_dir:
            if name == self._request.dest_dir.name:
                self._decision(f"Skipping archive directory '{name}'.")
                return FileCandidate(name, path, SkipReason.ARCHIVE_DIRECTORY)
            # subdirectories are never archived
            self._logger.debug(f"Skipping directory '{name}'.")
            return FileCandidate(name, path, SkipReason.DIRECTORY)

        # the destination may be the source directory itself
        if path == self._tmp_path or is_tmp_archive(name):
            self._decision(f"Skipping archive in progress '{name}'.")
            return FileCandidate(name, path, SkipReason.IN_PROGRESS_ARCHIVE)

        if is_compressed(name):
            self._decision(f"Skipping already compressed file '{name}'.")
            return FileCandidate(name, path, SkipReason.COMPRESSED)

        if name == CFG.history.file_name:
            self._decision(f"Skipping history file '{name}'.")
            return FileCandidate(name, path, SkipReason.HISTORY_FILE)

        try:
            mode = path.lstat().st_mode
        except OSError as e:
            self._logger.warning(f"Unable to stat '{path}': {e}.")
            return FileCandidate(name, path, SkipReason.STAT_FAILED)

        if not stat.S_ISREG(mode):
            self._logger.warning(f"Skipping non-regular file '{name}'.")
            return FileCandidate(name, path, SkipReason.NOT_REGULAR)

        return FileCandidate(name, path)

    def _addFile(self, tar: tarfile.TarFile, candidate: FileCandidate) -> int | None:
        """
        Write a single file into the archive under its bare name.

        The file is first copied into a staging buffer so that a failure while
        reading it never leaves a partial entry in the archive.

        Args:
            tar (tarfile.TarFile): The archive being written.
            candidate (FileCandidate): The file to archive.

        Returns:
            int | None: Number of bytes written, or None if the file was skipped.

        Raises:
            ArchiveError: If writing into the archive fails.
        """
        path = candidate.path
        try:
            with (
                path.open("rb") as src,
                tempfile.SpooledTemporaryFile(
                    max_size=CFG.archiver.spool_max_size,
                    dir=self._request.dest_dir,
                ) as spool,
            ):
                info = tar.gettarinfo(arcname=candidate.name, fileobj=src)
                if info is None or not (info.isreg() or info.islnk()):
                    self._logger.warning(f"'{path}' is no longer a regular file.")
                    return None

                # hard links are stored with their content
                info.type = tarfile.REGTYPE
                info.linkname = ""
                shutil.copyfileobj(src, spool)
                info.size = spool.tell()
                # fails for headers that cannot be encoded
                info.tobuf(tar.format, tar.encoding, tar.errors)

                spool.seek(0)
                Archiver._writeEntry(tar, info, spool)
                return info.size
        except (OSError, ValueError) as e:
            self._logger.warning(f"Unable to archive '{path}': {e}.")
            return None

    @staticmethod
    def _writeEntry(tar: tarfile.TarFile, info: tarfile.TarInfo, data: BinaryIO) -> None:
        """
        Write a header and its data into the archive.

        Raises:
            ArchiveError: If the archive stream cannot be written.
        """
        try:
            tar.addfile(info, data)
        except OSError as e:
            raise ArchiveError(
                f"Failed to write '{info.name}' into the archive: {e}."
            ) from e

    def _removeOriginal(self, candidate: FileCandidate) -> None:
        """
        Delete an archived file from the source directory.
        """
        try:
            candidate.path.unlink()
            self._decision(f"Removed original file '{candidate.name}'.")
        except OSError as e:
            self._logger.warning(f"Unable to remove '{candidate.path}': {e}.")

    @staticmethod
    def _closeLayers(tar: tarfile.TarFile, gz: gzip.GzipFile, out: BinaryIO) -> None:
        """
        Close the tar layer, the gzip layer, and the output file, in this order.

        Raises:
            ArchiveError: If any of the layers fails to flush.
        """
        for layer, closable in [("tar", tar), ("gzip", gz), ("output file", out)]:
            try:
                closable.close()
            except OSError as e:
                raise ArchiveError(f"Error closing {layer} of the archive: {e}.") from e

    def _publish(self, tmp_path: Path, archive_path: Path) -> None:
        """
        Atomically rename the temporary archive to its final path.

        Raises:
            ArchiveError: If the rename fails.
        """
        try:
            tmp_path.rename(archive_path)
        except OSError as e:
            raise ArchiveError(
                f"Failed to rename archive to final path '{archive_path}': {e}."
            ) from e

        self._logger.debug(f"Published archive '{archive_path}'.")

    def _discard(
        self,
        tmp_path: Path,
        tar: tarfile.TarFile | None,
        gz: gzip.GzipFile | None,
        out: BinaryIO,
    ) -> None:
        """
        Close all layers of an unfinished archive and remove its temporary file.

        Errors are only reported since the archive is being abandoned anyway.
        """
        for closable in [tar, gz, out]:
            if closable is None:
                continue
            try:
                closable.close()
            except Exception as e:
                self._logger.warning(f"Error closing temporary archive: {e}.")

        try:
            tmp_path.unlink(missing_ok=True)
        except OSError as e:
            self._logger.warning(f"Failed to remove temporary archive '{tmp_path}': {e}.")

    def _decision(self, message: str) -> None:
        """
        Report an include/skip decision. The decision is only visible in verbose or debug mode.
        """
        self._logger.log(
            logging.INFO if self._request.verbose else logging.DEBUG, message
        )

    @staticmethod
    def _tmpPath(archive_path: Path) -> Path:
        return archive_path.with_name(f"{archive_path.name}{CFG.archiver.tmp_suffix}")
