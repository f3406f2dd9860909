"""Editor state models - read-only projections rendered by the view"""

from enum import Enum
from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict

from runedit.models.run import TimingMethod


GAME_SLOT = "game"


class FieldKind(str, Enum):
    """Time fields of the active segment that go through text parsing"""
    SPLIT_TIME = "SplitTime"
    SEGMENT_TIME = "SegmentTime"
    BEST_SEGMENT_TIME = "BestSegmentTime"
    COMPARISON_TIME = "ComparisonTime"


class SelectionState(str, Enum):
    """Selection tag of a segment row"""
    NOT_SELECTED = "NotSelected"
    SELECTED = "Selected"
    ACTIVE = "Active"


class Buttons(BaseModel):
    """Which structural operations the engine currently allows"""
    model_config = ConfigDict(frozen=True)

    can_remove: bool = False
    can_move_up: bool = False
    can_move_down: bool = False


class SegmentState(BaseModel):
    """Engine projection of one segment, times already formatted"""
    model_config = ConfigDict(frozen=True)

    name: str
    split_time: str = ""
    segment_time: str = ""
    best_segment_time: str = ""
    comparison_times: Tuple[str, ...] = ()

    # Set only in the first state read after the icon changed
    icon_change: Optional[str] = None


class RunState(BaseModel):
    """Engine projection of the run being edited"""
    model_config = ConfigDict(frozen=True)

    game: str
    category: str
    offset: str
    attempts: str
    timing_method: TimingMethod
    comparison_names: Tuple[str, ...]
    segments: Tuple[SegmentState, ...]
    buttons: Buttons
    icon_change: Optional[str] = None


class SegmentRow(BaseModel):
    """A segment as shown in the editor table"""
    model_config = ConfigDict(frozen=True)

    index: int
    name: str
    split_time: str
    segment_time: str
    best_segment_time: str
    comparison_times: Tuple[str, ...]
    selected: SelectionState = SelectionState.NOT_SELECTED
    icon_url: str = ""

    @property
    def is_selected(self) -> bool:
        return self.selected != SelectionState.NOT_SELECTED

    @property
    def is_active(self) -> bool:
        return self.selected == SelectionState.ACTIVE


class Snapshot(BaseModel):
    """Immutable view data, replaced after every commit"""
    model_config = ConfigDict(frozen=True)

    game: str
    category: str
    offset: str
    attempts: str
    timing_method: TimingMethod
    comparison_names: Tuple[str, ...]
    segments: Tuple[SegmentRow, ...]
    buttons: Buttons
    game_icon_url: str = ""

    @property
    def active_index(self) -> Optional[int]:
        for row in self.segments:
            if row.is_active:
                return row.index
        return None

    @property
    def selected_indices(self) -> Tuple[int, ...]:
        return tuple(row.index for row in self.segments if row.is_selected)
