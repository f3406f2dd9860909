"""Tests for the runedit CLI"""

from typer.testing import CliRunner

from runedit import __version__
from runedit.cli import app
from runedit.core.config import load_config, load_config_or_none
from runedit.core.run_file import load_run, save_run
from runedit.models.run import TimingMethod


runner = CliRunner()


def test_version():
    """Test --version prints the version"""
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_show(tmp_path, sample_run):
    """Test show prints the segments of a run"""
    path = tmp_path / "any.run.yaml"
    save_run(path, sample_run)

    result = runner.invoke(app, ["show", str(path)])

    assert result.exit_code == 0
    assert "Start" in result.output
    assert "End" in result.output
    assert "25.00" in result.output


def test_show_missing_file(tmp_path):
    """Test show reports a missing run file"""
    result = runner.invoke(app, ["show", str(tmp_path / "missing.run.yaml")])

    assert result.exit_code == 1
    assert "Error" in result.output


def test_new_creates_run(tmp_path):
    """Test new writes a run file with the given segments"""
    path = tmp_path / "celeste"

    result = runner.invoke(
        app,
        ["new", str(path), "--game", "Celeste", "--category", "Any%", "-s", "Prologue", "-s", "City"],
    )

    assert result.exit_code == 0
    run = load_run(tmp_path / "celeste.run.yaml")
    assert run.game_name == "Celeste"
    assert [s.name for s in run.segments] == ["Prologue", "City"]


def test_new_refuses_overwrite(tmp_path):
    """Test new keeps an existing file unless forced"""
    path = tmp_path / "any.run.yaml"
    runner.invoke(app, ["new", str(path)])

    result = runner.invoke(app, ["new", str(path)])
    assert result.exit_code == 1

    result = runner.invoke(app, ["new", str(path), "--force", "--game", "Other"])
    assert result.exit_code == 0
    assert load_run(path).game_name == "Other"


def test_default_command_without_config(tmp_path, monkeypatch):
    """Test running without a config explains how to create one"""
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, [])

    assert result.exit_code == 1
    assert "runedit init" in result.output


def test_init_writes_settings(tmp_path, monkeypatch):
    """Test init saves the folder, log level and default timing method"""
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, ["init", "--log-level", "debug", "--game-time"], input=f"{tmp_path}\n")

    assert result.exit_code == 0
    config = load_config()
    assert config.folder == str(tmp_path)
    assert config.log_level == "DEBUG"
    assert config.default_timing_method == TimingMethod.GAME_TIME


def test_init_rejects_unknown_log_level(tmp_path, monkeypatch):
    """Test init refuses a log level logging doesn't know"""
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, ["init", "--log-level", "chatty"], input=f"{tmp_path}\n")

    assert result.exit_code == 1
    assert "Invalid config" in result.output
    assert load_config_or_none() is None
