"""Tests for the comparison column set"""

from runedit.engine.editor import RunEditor
from runedit.models.run import PERSONAL_BEST, Run, Segment, Time, default_run
from runedit.session.comparisons import ComparisonColumns


def make_columns(run=None):
    editor = RunEditor(run or default_run(segment_names=["A", "B"]))
    columns = ComparisonColumns(editor)
    return editor, columns


def test_add_comparison():
    """Test adding a comparison and syncing from the engine"""
    editor, columns = make_columns()

    assert columns.add("Mine")
    columns.sync(editor.to_state().comparison_names)

    assert columns.names == ("Mine",)
    assert "Mine" in columns
    assert columns.index_of("Mine") == 0
    assert columns.name_at(0) == "Mine"
    assert columns.name_at(1) is None


def test_add_rejects_duplicates_and_reserved_names():
    """Test duplicate, reserved and race names are refused"""
    editor, columns = make_columns()
    columns.add("Mine")

    assert not columns.add("Mine")
    assert not columns.add(PERSONAL_BEST)
    assert not columns.add("Best Segments")
    assert not columns.add("[Race] Someone")
    assert not columns.add("")
    assert editor.run.comparison_names == ["Mine"]


def test_rename_keeps_position():
    """Test renaming keeps the column in place"""
    editor, columns = make_columns()
    columns.add("One")
    columns.add("Two")

    assert columns.rename("One", "Uno")
    columns.sync(editor.to_state().comparison_names)

    assert columns.names == ("Uno", "Two")


def test_rename_conflicts():
    """Test renaming onto an existing or reserved name fails"""
    editor, columns = make_columns()
    columns.add("One")
    columns.add("Two")

    assert not columns.rename("One", "Two")
    assert not columns.rename("One", "One")
    assert not columns.rename("One", "Worst Segments")
    assert not columns.rename(PERSONAL_BEST, "Three")
    assert not columns.rename("Missing", "Three")
    assert editor.run.comparison_names == ["One", "Two"]


def test_remove_comparison():
    """Test removing a comparison drops its times from every segment"""
    editor, columns = make_columns()
    columns.add("One")

    assert columns.remove("One")
    assert not columns.remove("One")
    assert not columns.remove(PERSONAL_BEST)
    assert all("One" not in s.comparisons for s in editor.run.segments)


def test_import_matches_segments_by_name():
    """Test importing another run's PB as a comparison"""
    other = Run(segments=[
        Segment(name="A", comparisons={PERSONAL_BEST: Time(real_time=10.0)}),
        Segment(name="Extra", comparisons={PERSONAL_BEST: Time(real_time=15.0)}),
        Segment(name="B", comparisons={PERSONAL_BEST: Time(real_time=20.0)}),
    ])
    editor, columns = make_columns(default_run(segment_names=["A", "B", "C"]))

    assert columns.import_from(other, "Imported")

    segments = editor.run.segments
    assert segments[0].comparison("Imported").real_time == 10.0
    assert segments[1].comparison("Imported").real_time == 20.0
    assert segments[2].comparison("Imported").real_time is None


def test_import_rejects_conflicting_name():
    """Test an import under a taken name adds nothing"""
    editor, columns = make_columns()
    columns.add("Taken")

    assert not columns.import_from(default_run(segment_names=["A"]), "Taken")
    assert editor.run.comparison_names == ["Taken"]
