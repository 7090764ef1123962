# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


from dataclasses import dataclass, field

import pytest

from logarc_lib.core.config import Config, _dict_to_dataclass


def test_dict_to_dataclass_simple_conversion():
    @dataclass
    class SimpleConfig:
        name: str = "default"
        count: int = 0

    result = _dict_to_dataclass(SimpleConfig, {"name": "test", "count": 42})

    assert isinstance(result, SimpleConfig)
    assert result.name == "test"
    assert result.count == 42


def test_dict_to_dataclass_nested_conversion():
    @dataclass
    class Inner:
        value: int = 0

    @dataclass
    class Outer:
        inner: Inner = field(default_factory=Inner)
        name: str = "default"

    result = _dict_to_dataclass(Outer, {"inner": {"value": 99}, "name": "outer"})

    assert isinstance(result.inner, Inner)
    assert result.inner.value == 99
    assert result.name == "outer"


def test_dict_to_dataclass_extra_fields_ignored():
    @dataclass
    class Settings:
        valid: str = "default"

    result = _dict_to_dataclass(Settings, {"valid": "value", "invalid": "ignored"})

    assert result.valid == "value"
    assert not hasattr(result, "invalid")


def test_dict_to_dataclass_non_dataclass_returns_unchanged():
    data = {"key": "value"}
    assert _dict_to_dataclass(str, data) == data


def test_get_config_path_env_variable_highest_priority(tmp_path, monkeypatch):
    config_file = tmp_path / "custom_config.toml"
    config_file.write_text("")
    (tmp_path / "logarc_config.toml").write_text("")

    monkeypatch.setenv("LOGARC_CONFIG", str(config_file))
    monkeypatch.chdir(tmp_path)

    assert Config._get_config_path() == config_file


def test_get_config_path_current_directory_second_priority(tmp_path, monkeypatch):
    config_file = tmp_path / "logarc_config.toml"
    config_file.write_text("")

    xdg_config = tmp_path / "config"
    (xdg_config / "logarc").mkdir(parents=True)
    (xdg_config / "logarc" / "config.toml").write_text("")

    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("LOGARC_CONFIG", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg_config))

    assert Config._get_config_path() == config_file


def test_get_config_path_xdg_config_home_third_priority(tmp_path, monkeypatch):
    xdg_config = tmp_path / "config"
    (xdg_config / "logarc").mkdir(parents=True)
    config_file = xdg_config / "logarc" / "config.toml"
    config_file.write_text("")

    other_dir = tmp_path / "other"
    other_dir.mkdir()

    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg_config))
    monkeypatch.chdir(other_dir)
    monkeypatch.delenv("LOGARC_CONFIG", raising=False)

    assert Config._get_config_path() == config_file


def test_get_config_path_returns_none_when_no_config_exists(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("LOGARC_CONFIG", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "nonexistent"))

    assert Config._get_config_path() is None


def test_load_with_explicit_path(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text("""
binary_name = "lga"

[archiver]
default_dest_dir_name = "old"
compressed_suffixes = [".gz", ".zst"]
sort_entries = false

[history]
file_name = "runs.log"

[exit_codes]
default = 3
""")

    config = Config.load(config_file)

    assert config.binary_name == "lga"
    assert config.archiver.default_dest_dir_name == "old"
    assert config.archiver.compressed_suffixes == [".gz", ".zst"]
    assert config.archiver.sort_entries is False
    assert config.history.file_name == "runs.log"
    assert config.exit_codes.default == 3

    # non-overriden values
    assert config.archiver.archive_prefix == "logs_archive_"
    assert config.archiver.tmp_suffix == ".tmp"
    assert config.exit_codes.unexpected_error == 99


def test_load_returns_defaults_when_file_missing(tmp_path):
    assert Config.load(tmp_path / "does_not_exist.toml") == Config()


def test_load_empty_config_file_uses_all_defaults(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text("")

    assert Config.load(config_file) == Config()


def test_load_without_path_searches_standard_locations(tmp_path, monkeypatch):
    (tmp_path / "logarc_config.toml").write_text('binary_name = "lga"\n')

    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("LOGARC_CONFIG", raising=False)

    assert Config.load().binary_name == "lga"


def test_load_with_invalid_toml_raises_error(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text("""
[archiver
sort_entries = true
""")  # missing closing bracket

    with pytest.raises(ValueError, match="Could not read logarc config"):
        Config.load(config_file)


def test_default_formats():
    config = Config()

    assert config.date_formats.filename == "%Y%m%d_%H%M%S"
    assert config.date_formats.human == "%Y-%m-%d %H:%M:%S %Z"
    assert config.history.file_name == "archive_history.log"
