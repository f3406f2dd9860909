"""Tests for runedit models"""

import pytest
from pydantic import ValidationError

from runedit.models.config import EditorConfig
from runedit.models.run import (
    PERSONAL_BEST,
    Run,
    Segment,
    Time,
    TimingMethod,
    default_run,
    is_valid_comparison_name,
)
from runedit.models.state import Buttons, SegmentRow, SelectionState, Snapshot


def test_time_get_and_with_value():
    """Test Time.get() and Time.with_value() per timing method"""
    time = Time(real_time=1.5)

    assert time.get(TimingMethod.REAL_TIME) == 1.5
    assert time.get(TimingMethod.GAME_TIME) is None

    updated = time.with_value(TimingMethod.GAME_TIME, 2.0)
    assert updated.game_time == 2.0
    assert updated.real_time == 1.5
    assert time.game_time is None  # Original untouched


def test_run_requires_a_segment():
    """Test that a run without segments is rejected"""
    with pytest.raises(ValidationError):
        Run(segments=[])


def test_run_puts_personal_best_first():
    """Test that Personal Best is always the first comparison"""
    run = Run(custom_comparisons=["Mine"], segments=[Segment(name="A")])

    assert run.custom_comparisons == [PERSONAL_BEST, "Mine"]
    assert run.comparison_names == ["Mine"]


def test_run_rejects_duplicate_comparisons():
    """Test that comparison names must be unique"""
    with pytest.raises(ValidationError):
        Run(custom_comparisons=[PERSONAL_BEST, "A", "A"], segments=[Segment(name="A")])


def test_run_fills_comparisons_for_every_segment():
    """Test that every segment gets a time for every comparison"""
    run = Run(
        custom_comparisons=[PERSONAL_BEST, "Mine"],
        segments=[Segment(name="A", comparisons={"Stale": Time(real_time=1.0)})],
    )

    assert list(run.segments[0].comparisons) == [PERSONAL_BEST, "Mine"]
    assert list(run.new_segment("B").comparisons) == [PERSONAL_BEST, "Mine"]


def test_run_clone_is_independent():
    """Test Run.clone() makes a deep copy"""
    run = default_run(segment_names=["A", "B"])
    copy = run.clone()
    copy.segments[0].name = "Changed"

    assert run.segments[0].name == "A"


def test_default_run():
    """Test default_run() gives a single "Time" segment"""
    run = default_run()

    assert [s.name for s in run.segments] == ["Time"]
    assert run.attempt_count == 0
    assert run.custom_comparisons == [PERSONAL_BEST]


def test_is_valid_comparison_name():
    """Test reserved and race comparison names are refused"""
    assert is_valid_comparison_name("My Run")
    assert not is_valid_comparison_name("")
    assert not is_valid_comparison_name(PERSONAL_BEST)
    assert not is_valid_comparison_name("Best Segments")
    assert not is_valid_comparison_name("[Race] Someone")


def test_snapshot_selection_helpers():
    """Test Snapshot.active_index and selected_indices"""
    rows = tuple(
        SegmentRow(
            index=i,
            name=f"S{i}",
            split_time="",
            segment_time="",
            best_segment_time="",
            comparison_times=(),
            selected=state,
        )
        for i, state in enumerate([
            SelectionState.SELECTED,
            SelectionState.NOT_SELECTED,
            SelectionState.ACTIVE,
        ])
    )
    snapshot = Snapshot(
        game="",
        category="",
        offset="",
        attempts="0",
        timing_method=TimingMethod.REAL_TIME,
        comparison_names=(),
        segments=rows,
        buttons=Buttons(),
    )

    assert snapshot.active_index == 2
    assert snapshot.selected_indices == (0, 2)


def test_snapshot_is_frozen():
    """Test that snapshots can't be mutated"""
    buttons = Buttons()
    with pytest.raises(ValidationError):
        buttons.can_remove = True


def test_editor_config_validation(tmp_path):
    """Test EditorConfig folder and log level validation"""
    config = EditorConfig(folder=str(tmp_path), log_level="debug")
    assert config.log_level == "DEBUG"
    assert config.default_timing_method == TimingMethod.REAL_TIME

    with pytest.raises(ValidationError):
        EditorConfig(folder="relative/path")

    with pytest.raises(ValidationError):
        EditorConfig(folder=str(tmp_path), log_level="LOUD")


def test_editor_config_run_files(tmp_path):
    """Test EditorConfig.get_run_files() only finds .run.yaml files"""
    (tmp_path / "b.run.yaml").write_text("")
    (tmp_path / "a.run.yaml").write_text("")
    (tmp_path / "notes.yaml").write_text("")

    config = EditorConfig(folder=str(tmp_path))

    assert [p.name for p in config.get_run_files()] == ["a.run.yaml", "b.run.yaml"]
