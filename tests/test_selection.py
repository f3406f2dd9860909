"""Tests for the segment selection model"""

from runedit.models.state import SelectionState
from runedit.session.selection import SelectionModel


def test_initial_selection():
    """Test the first segment starts selected and active"""
    selection = SelectionModel()

    assert selection.active == 0
    assert selection.selected == [0]
    assert selection.state_of(0) == SelectionState.ACTIVE
    assert selection.state_of(1) == SelectionState.NOT_SELECTED


def test_focus_selects_only():
    """Test focus() replaces the selection"""
    selection = SelectionModel()
    selection.select_additional(2)
    selection.focus(3)

    assert selection.selected == [3]
    assert selection.active == 3


def test_select_additional_keeps_active():
    """Test additional selections don't steal the active segment"""
    selection = SelectionModel()
    selection.select_additional(2)

    assert selection.selected == [0, 2]
    assert selection.active == 0
    assert selection.state_of(2) == SelectionState.SELECTED


def test_unselect_active_leaves_no_active():
    """Test unselecting the active segment clears it"""
    selection = SelectionModel()
    selection.select_additional(1)
    selection.unselect(0)

    assert selection.active is None
    assert selection.selected == [1]

    # Next additional selection becomes active
    selection.select_additional(4)
    assert selection.active == 4


def test_select_additional_becomes_active_when_none():
    """Test a selection with no active segment picks up the next one"""
    selection = SelectionModel(active=None)
    selection.select_additional(2)

    assert selection.active == 2


def test_toggle_additional():
    """Test toggling in and out of the selection"""
    selection = SelectionModel()
    selection.toggle_additional(1)
    assert selection.is_selected(1)

    selection.toggle_additional(1)
    assert not selection.is_selected(1)


def test_shift():
    """Test following moved segments"""
    selection = SelectionModel(active=1)
    selection.select_additional(2)
    selection.shift(1)

    assert selection.selected == [2, 3]
    assert selection.active == 2

    selection.shift(-2)
    assert selection.selected == [0, 1]
    assert selection.active == 0
