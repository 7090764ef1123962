# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from datetime import datetime
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from logarc_lib.core.common import (
    construct_archive_name,
    format_bytes,
    get_panel_width,
    is_compressed,
    is_tmp_archive,
    resolve_dest_dir,
    to_absolute,
)


def test_to_absolute_keeps_absolute_path():
    path = Path("/var/log/app")
    assert to_absolute(path) == path


def test_to_absolute_relative_path(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert to_absolute(Path("logs")) == tmp_path / "logs"


def test_resolve_dest_dir_default(tmp_path):
    assert resolve_dest_dir(tmp_path, None) == tmp_path / "archives"


def test_resolve_dest_dir_explicit_relative(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert resolve_dest_dir(Path("/var/log"), Path("out")) == tmp_path / "out"


def test_construct_archive_name_first_attempt():
    ts = datetime(2025, 3, 7, 9, 5, 1)
    assert construct_archive_name(ts) == "logs_archive_20250307_090501.tar.gz"


def test_construct_archive_name_later_attempt():
    ts = datetime(2025, 12, 31, 23, 59, 59)
    assert construct_archive_name(ts, 2) == "logs_archive_20251231_235959_2.tar.gz"


@pytest.mark.parametrize(
    "name, expected",
    [
        ("app.log", False),
        ("app.log.gz", True),
        ("APP.LOG.GZ", True),
        ("bundle.tgz", True),
        ("bundle.TAR.GZ", True),
        ("notes.gzip", False),
        ("archive.tar", False),
        ("gz", False),
    ],
)
def test_is_compressed(name, expected):
    assert is_compressed(name) == expected


@pytest.mark.parametrize(
    "name, expected",
    [
        ("logs_archive_20251017_142501.tar.gz.tmp", True),
        ("logs_archive_20251017_142501_3.tar.gz.tmp", True),
        ("logs_archive_20251017_142501.tar.gz", False),
        ("logs_archive_20251017_142501.tmp", False),
        ("app.log.tar.gz.tmp", False),
        ("notes.tmp", False),
    ],
)
def test_is_tmp_archive(name, expected):
    assert is_tmp_archive(name) == expected


@pytest.mark.parametrize(
    "size, expected",
    [
        (0, "0 B"),
        (1023, "1023 B"),
        (1024, "1.0 KiB"),
        (1536, "1.5 KiB"),
        (5 * 1024**2, "5.0 MiB"),
        (3 * 1024**4, "3.0 TiB"),
        (2048 * 1024**4, "2048.0 TiB"),
    ],
)
def test_format_bytes(size, expected):
    assert format_bytes(size) == expected


@pytest.mark.parametrize(
    "width, min_width, max_width, expected",
    [
        (100, None, None, 100),
        (50, 80, None, 80),
        (200, None, 120, 120),
        (100, 80, 120, 100),
    ],
)
def test_get_panel_width(width, min_width, max_width, expected):
    console = MagicMock()
    console.size.width = width

    assert get_panel_width(console, 1, min_width, max_width) == expected
