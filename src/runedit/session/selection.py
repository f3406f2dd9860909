"""Segment selection - one active segment plus any number of selected ones"""

from typing import List, Optional, Set

from runedit.models.state import SelectionState


class SelectionModel:
    """Tracks which segment rows are selected and which one is active.

    The active segment is always selected. There is at most one, and there
    may be none after the active segment was unselected.
    """

    def __init__(self, active: Optional[int] = 0):
        self._selected: Set[int] = set()
        self._active: Optional[int] = None
        if active is not None:
            self.focus(active)

    @property
    def active(self) -> Optional[int]:
        return self._active

    @property
    def selected(self) -> List[int]:
        return sorted(self._selected)

    def state_of(self, index: int) -> SelectionState:
        if index == self._active:
            return SelectionState.ACTIVE
        if index in self._selected:
            return SelectionState.SELECTED
        return SelectionState.NOT_SELECTED

    def is_selected(self, index: int) -> bool:
        return index in self._selected

    def focus(self, index: int) -> None:
        """Select only this segment and make it active"""
        self._selected = {index}
        self._active = index

    def select_only(self, index: int) -> None:
        self.focus(index)

    def select_additional(self, index: int) -> None:
        """Add to the selection; becomes active only if nothing is"""
        self._selected.add(index)
        if self._active is None:
            self._active = index

    def unselect(self, index: int) -> None:
        self._selected.discard(index)
        if self._active == index:
            self._active = None

    def toggle_additional(self, index: int) -> None:
        if index in self._selected:
            self.unselect(index)
        else:
            self.select_additional(index)

    def shift(self, step: int) -> None:
        """Follow the selected segments after they moved by ``step``"""
        self._selected = {i + step for i in self._selected}
        if self._active is not None:
            self._active += step
