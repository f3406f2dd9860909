"""Field validation cells - raw user text kept apart from the committed value"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from runedit.engine.timespan import is_count, is_duration
from runedit.models.state import FieldKind


class FieldGrammar(str, Enum):
    """What a field's text must look like"""
    DURATION = "duration"
    COUNT = "count"


@dataclass
class FieldCell:
    """One editable text field.

    While the user types, ``raw_text`` echoes the keystrokes and ``is_valid``
    says whether the last text was accepted. The committed value is only
    touched through the ``commit`` callable, and only for text that parses.
    Blurring throws the echo away in favour of the committed value.
    """
    grammar: FieldGrammar = FieldGrammar.DURATION
    raw_text: str = ""
    is_valid: bool = True
    editing: bool = False

    def matches_grammar(self, text: str) -> bool:
        if self.grammar == FieldGrammar.COUNT:
            return is_count(text)
        return is_duration(text)

    def focus(self, committed: str) -> None:
        """Start editing from the committed text"""
        if not self.editing:
            self.raw_text = committed
            self.is_valid = True
            self.editing = True

    def set_raw(self, text: str, commit: Callable[[str], bool]) -> bool:
        """Echo the text and commit it if it parses; returns whether it was accepted"""
        self.raw_text = text
        self.editing = True
        if not self.matches_grammar(text):
            self.is_valid = False
            return False
        self.is_valid = commit(text)
        return self.is_valid

    def blur(self, committed: str) -> None:
        """Mirror the committed value again"""
        self.raw_text = committed
        self.is_valid = True
        self.editing = False

    def reset(self) -> None:
        self.raw_text = ""
        self.is_valid = True
        self.editing = False

    def display(self, committed: str) -> str:
        """Text the view should show for this field"""
        return self.raw_text if self.editing else committed


def duration_cell() -> FieldCell:
    return FieldCell(grammar=FieldGrammar.DURATION)


def count_cell() -> FieldCell:
    return FieldCell(grammar=FieldGrammar.COUNT)


@dataclass
class RowState:
    """Cells of the active segment row; comparison cells are keyed by column"""
    index: int = 0
    split_time: FieldCell = field(default_factory=duration_cell)
    segment_time: FieldCell = field(default_factory=duration_cell)
    best_segment_time: FieldCell = field(default_factory=duration_cell)
    comparisons: List[FieldCell] = field(default_factory=list)

    def comparison(self, column: int) -> FieldCell:
        while column >= len(self.comparisons):
            self.comparisons.append(duration_cell())
        return self.comparisons[column]

    def cell(self, kind: FieldKind, column: Optional[int] = None) -> FieldCell:
        if kind == FieldKind.SPLIT_TIME:
            return self.split_time
        if kind == FieldKind.SEGMENT_TIME:
            return self.segment_time
        if kind == FieldKind.BEST_SEGMENT_TIME:
            return self.best_segment_time
        if column is None:
            raise ValueError("comparison cells need a column")
        return self.comparison(column)

    def cells(self) -> List[FieldCell]:
        return [self.split_time, self.segment_time, self.best_segment_time, *self.comparisons]

    def reset(self, index: int) -> None:
        """Move to another row, dropping every in-flight edit"""
        self.index = index
        for cell in self.cells():
            cell.reset()

    def invalidate_column(self, column: int) -> None:
        if column < len(self.comparisons):
            self.comparisons[column].reset()

    def truncate(self, column_count: int) -> None:
        del self.comparisons[column_count:]
