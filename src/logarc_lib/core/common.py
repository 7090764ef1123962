# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
General utility functions for logarc.

This module provides helpers for resolving directories, constructing archive
file names, classifying file names, formatting byte counts, and sizing
rich panels.
"""

from datetime import datetime
from pathlib import Path

from rich.console import Console

from .config import CFG


def to_absolute(path: Path) -> Path:
    """
    Make a path absolute without resolving symlinks.

    Args:
        path (Path): Relative or absolute path.

    Returns:
        Path: The absolute path.
    """
    return path if path.is_absolute() else path.absolute()


def resolve_dest_dir(source_dir: Path, dest_dir: Path | None) -> Path:
    """
    Get the absolute destination directory for archives of `source_dir`.

    Args:
        source_dir (Path): The directory with log files.
        dest_dir (Path | None): Explicitly requested destination directory.
            If None, the default archive directory inside `source_dir` is used.

    Returns:
        Path: Absolute path to the destination directory.
    """
    if dest_dir is None:
        dest_dir = source_dir / CFG.archiver.default_dest_dir_name

    return to_absolute(dest_dir)


def construct_archive_name(timestamp: datetime, attempt: int = 0) -> str:
    """
    Construct the file name of an archive created at `timestamp`.

    The first attempt yields e.g. `logs_archive_20251017_142501.tar.gz`.
    Subsequent attempts insert the attempt number before the suffix
    (`logs_archive_20251017_142501_1.tar.gz`).

    Args:
        timestamp (datetime): Time of the archive creation.
        attempt (int): Number of the attempt to find a free name.

    Returns:
        str: Name of the archive file.
    """
    stem = f"{CFG.archiver.archive_prefix}{timestamp.strftime(CFG.date_formats.filename)}"
    if attempt > 0:
        stem = f"{stem}_{attempt}"

    return f"{stem}{CFG.archiver.archive_suffix}"


def is_compressed(name: str) -> bool:
    """
    Check whether a file name looks like an already compressed file.

    Args:
        name (str): Name of the file.

    Returns:
        bool: True if the name ends with any of the compressed suffixes (case-insensitive).
    """
    lname = name.lower()
    return any(lname.endswith(s.lower()) for s in CFG.archiver.compressed_suffixes)


def is_tmp_archive(name: str) -> bool:
    """
    Check whether a file name belongs to an archive that is still being written.

    Args:
        name (str): Name of the file.

    Returns:
        bool: True if the name looks like `logs_archive_<...>.tar.gz.tmp`.
    """
    return name.startswith(CFG.archiver.archive_prefix) and name.endswith(
        f"{CFG.archiver.archive_suffix}{CFG.archiver.tmp_suffix}"
    )


def format_bytes(size: int) -> str:
    """
    Format a byte count into a human-readable string using binary units.

    Args:
        size (int): Number of bytes.

    Returns:
        str: Formatted size, e.g. `512 B` or `1.5 KiB`.
    """
    if abs(size) < 1024:
        return f"{size} B"

    value = float(size)
    for unit in ["KiB", "MiB", "GiB"]:
        value /= 1024
        if abs(value) < 1024:
            return f"{value:.1f} {unit}"

    return f"{value / 1024:.1f} TiB"


def get_panel_width(
    console: Console, factor: int, min_width: int | None, max_width: int | None
) -> int:
    """
    Calculate the width of a panel relative to the console width, constrained by
    optional minimum and maximum width values.

    Args:
        console (Console): A rich Console-like object that provides terminal size.
        factor (int): A divisor used to scale down the terminal width.
        min_width (int | None): The minimum allowable panel width.
        max_width (int | None): The maximum allowable panel width.

    Returns:
        int: The computed panel width after applying scaling and bounds.
    """
    panel_width = console.size.width // factor
    if min_width is not None:
        panel_width = max(panel_width, min_width)
    if max_width is not None:
        panel_width = min(panel_width, max_width)

    return panel_width
