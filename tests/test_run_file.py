"""Tests for run file and config storage"""

import logging

import pytest

from runedit.core import config as config_module
from runedit.core.config import (
    ConfigInvalidError,
    ConfigNotFoundError,
    create_config,
    load_config,
    load_config_or_none,
)
from runedit.core.logging_setup import setup_logging
from runedit.core.run_file import (
    RunFileError,
    load_run,
    run_display_name,
    run_file_name,
    save_run,
)
from runedit.core.yaml_io import read_model, write_model
from runedit.models.config import EditorConfig
from runedit.models.run import TimingMethod


def test_run_file_round_trip(tmp_path, sample_run):
    """Test a saved run loads back unchanged"""
    path = tmp_path / run_file_name("any")
    save_run(path, sample_run)

    loaded = load_run(path)

    assert loaded.model_dump() == sample_run.model_dump()
    assert loaded.segments[1].segment_history[2].real_time == 15.0


def test_load_run_errors(tmp_path):
    """Test missing, empty, malformed and invalid run files"""
    with pytest.raises(RunFileError):
        load_run(tmp_path / "missing.run.yaml")

    empty = tmp_path / "empty.run.yaml"
    empty.write_text("")
    with pytest.raises(RunFileError):
        load_run(empty)

    broken = tmp_path / "broken.run.yaml"
    broken.write_text("segments: [unclosed")
    with pytest.raises(RunFileError):
        load_run(broken)

    invalid = tmp_path / "invalid.run.yaml"
    invalid.write_text("game_name: Game\nsegments: []\n")
    with pytest.raises(RunFileError):
        load_run(invalid)


def test_run_display_name(tmp_path):
    """Test the .run.yaml suffix is stripped for display"""
    assert run_display_name(tmp_path / "celeste.run.yaml") == "celeste"
    assert run_display_name(tmp_path / "other.yaml") == "other"


def test_config_round_trip(tmp_path, monkeypatch):
    """Test creating and loading .runedit/config.yaml"""
    monkeypatch.chdir(tmp_path)

    assert not config_module.CONFIG_FILE.exists()
    assert load_config_or_none() is None

    create_config(str(tmp_path))

    assert config_module.CONFIG_FILE.exists()
    config = load_config()
    assert config.folder == str(tmp_path)
    assert config.log_level == "INFO"
    assert config.default_timing_method == TimingMethod.REAL_TIME


def test_config_errors(tmp_path, monkeypatch):
    """Test missing and invalid config files"""
    monkeypatch.chdir(tmp_path)

    with pytest.raises(ConfigNotFoundError):
        load_config()

    config_module.CONFIG_DIR.mkdir()
    config_module.CONFIG_FILE.write_text("")
    with pytest.raises(ConfigInvalidError):
        load_config()

    config_module.CONFIG_FILE.write_text("folder: relative\n")
    with pytest.raises(ConfigInvalidError):
        load_config()

    config_module.CONFIG_FILE.write_text("folder: [oops\n")
    with pytest.raises(ConfigInvalidError):
        load_config()


def test_create_config_settings(tmp_path, monkeypatch):
    """Test log level and timing method are validated and saved"""
    monkeypatch.chdir(tmp_path)

    create_config(str(tmp_path), log_level="debug", default_timing_method=TimingMethod.GAME_TIME)

    config = load_config()
    assert config.log_level == "DEBUG"
    assert config.default_timing_method == TimingMethod.GAME_TIME
    assert "default_timing_method: GameTime" in config_module.CONFIG_FILE.read_text()


def test_create_config_rejects_bad_settings(tmp_path, monkeypatch):
    """Test a rejected setting raises and writes nothing"""
    monkeypatch.chdir(tmp_path)

    with pytest.raises(ConfigInvalidError):
        create_config("relative/folder")
    with pytest.raises(ConfigInvalidError):
        create_config(str(tmp_path), log_level="chatty")

    assert not config_module.CONFIG_FILE.exists()
    assert load_config_or_none() is None


def test_read_model_reports_with_given_error(tmp_path):
    """Test YAML and validation failures surface as the caller's error"""

    class StorageError(Exception):
        pass

    path = tmp_path / "nested" / "config.yaml"
    config = EditorConfig(folder=str(tmp_path))
    assert write_model(path, config) == path
    assert read_model(path, EditorConfig, StorageError, "config file") == config

    path.write_text("folder: [oops\n")
    with pytest.raises(StorageError, match="Invalid YAML in config file"):
        read_model(path, EditorConfig, StorageError, "config file")

    path.write_text("")
    with pytest.raises(StorageError, match="Config file is empty"):
        read_model(path, EditorConfig, StorageError, "config file")

    path.write_text("log_level: INFO\n")
    with pytest.raises(StorageError, match="Invalid config file"):
        read_model(path, EditorConfig, StorageError, "config file")


def test_setup_logging_creates_folder(tmp_path):
    """Test the log folder is created"""
    log_file = tmp_path / "logs" / "runedit.log"

    assert setup_logging("debug", log_file) == log_file
    assert log_file.parent.is_dir()
    logging.getLogger("runedit.test").info("hello")
