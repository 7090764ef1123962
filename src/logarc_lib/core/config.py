# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Configuration system for logarc.

This module defines dataclasses representing all configurable aspects of logarc,
including archive naming, filtering rules, history logging, presentation settings,
date formats, and exit codes.

The `Config` class loads user configuration from a TOML file (if available)
and provides a globally accessible `CFG` instance.
"""

import os
import tomllib
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Self


@dataclass
class ArchiverSettings:
    """Settings for Archiver operations."""

    # Name of the destination directory created inside the log directory by default.
    default_dest_dir_name: str = "archives"
    # Prefix of the archive file name.
    archive_prefix: str = "logs_archive_"
    # Suffix of the archive file name.
    archive_suffix: str = ".tar.gz"
    # Suffix appended to the final archive path while the archive is being written.
    tmp_suffix: str = ".tmp"
    # Files ending with any of these suffixes (case-insensitive) are considered compressed.
    compressed_suffixes: list[str] = field(
        default_factory=lambda: [".gz", ".tgz", ".tar.gz"]
    )
    # Archive directory entries in name order instead of the order given by the filesystem.
    sort_entries: bool = True
    # Size (in bytes) of a file copy kept in memory before it is staged on disk.
    spool_max_size: int = 8 * 1024 * 1024
    # Maximum number of archive names tried when the timestamped name is already taken.
    max_name_attempts: int = 100


@dataclass
class HistorySettings:
    """Settings for the archive history log."""

    # Name of the history file stored in the destination directory.
    file_name: str = "archive_history.log"


@dataclass
class EnvironmentVariables:
    """Environment variable names used by logarc."""

    # Enables logarc debug mode.
    debug_mode: str = "LOGARC_DEBUG"
    # Explicit path to the logarc config file.
    config: str = "LOGARC_CONFIG"


@dataclass
class HistoryPresenterSettings:
    """Settings for HistoryPresenter."""

    # Maximal width of the history panel.
    max_width: int | None = None
    # Minimal width of the history panel.
    min_width: int | None = 80
    # Style used for border lines.
    border_style: str = "white"
    # Style used for the title.
    title_style: str = "white bold"
    # Style used for table headers.
    headers_style: str = "default bold"
    # Style used for table values.
    main_style: str = "white"
    # Style used for the summary below the table.
    secondary_style: str = "grey70"


@dataclass
class DateFormats:
    """Date and time format strings."""

    # Standard date format used by logarc.
    standard: str = "%Y-%m-%d %H:%M:%S"
    # Sortable date format used in archive file names.
    filename: str = "%Y%m%d_%H%M%S"
    # Human-readable date format (with time zone) used in the history file.
    human: str = "%Y-%m-%d %H:%M:%S %Z"


@dataclass
class ExitCodes:
    """Exit codes used for various errors."""

    # Default error code for failures of logarc commands.
    default: int = 1
    # Returned when the command line is used incorrectly.
    usage: int = 2
    # Returned on an unexpected or unhandled error.
    unexpected_error: int = 99


@dataclass
class Config:
    """Main configuration for logarc."""

    archiver: ArchiverSettings = field(default_factory=ArchiverSettings)
    history: HistorySettings = field(default_factory=HistorySettings)
    env_vars: EnvironmentVariables = field(default_factory=EnvironmentVariables)
    history_presenter: HistoryPresenterSettings = field(
        default_factory=HistoryPresenterSettings
    )
    date_formats: DateFormats = field(default_factory=DateFormats)
    exit_codes: ExitCodes = field(default_factory=ExitCodes)

    # Name of the logarc binary.
    binary_name: str = "logarc"

    @classmethod
    def load(cls, config_path: Path | None = None) -> Self:
        """
        Load configuration from TOML file or use defaults.

        Args:
            config_path: Explicit path to config file. If None, searches standard locations.

        Returns:
            Config instance with loaded or default values.
        """
        if config_path is None:
            config_path = Config._get_config_path()

        try:
            if config_path and config_path.exists():
                with config_path.open("rb") as f:
                    config_data = tomllib.load(f)
                return _dict_to_dataclass(cls, config_data)
        except Exception as e:
            raise ValueError(f"Could not read logarc config '{config_path}': {e}.")

        # no config found - use defaults
        return cls()

    @staticmethod
    def _get_config_path() -> Path | None:
        """
        Search for config file in standard locations (XDG compliant).
        Returns the first existing config file, or None.
        """
        config_locations: list[Path | None] = [
            # 1. Explicit environment variable (highest priority)
            Path(env_path)
            if (env_path := os.getenv(EnvironmentVariables.config))
            else None,
            # 2. Current working directory
            Path.cwd() / "logarc_config.toml",
            # 3. XDG config home
            Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
            / "logarc"
            / "config.toml",
        ]

        for path in config_locations:
            if path and path.is_file():
                return path

        return None


def _dict_to_dataclass(cls, data: dict[str, Any]):
    """
    Recursively convert a dictionary to a dataclass instance.
    Nested tables are converted into nested dataclasses.
    """
    if not is_dataclass(cls):
        return data

    field_values = {}
    for field_info in fields(cls):
        name = field_info.name
        if name not in data:
            continue

        value = data[name]
        if is_dataclass(field_info.type) and isinstance(value, dict):
            value = _dict_to_dataclass(field_info.type, value)
        field_values[name] = value

    return cls(**field_values)


# Global configuration for logarc.
CFG = Config.load()
