"""Interfaces the editing session expects from the timing engine"""

from typing import Iterable, Optional, Protocol, Union

from runedit.models.run import Run, TimingMethod
from runedit.models.state import FieldKind, RunState


class Proposal(Protocol):
    """A suggested sum of best correction"""
    message: str


class CleanupHandle(Protocol):
    """Lazy, finite sequence of sum of best corrections"""

    def next(self) -> Optional[Proposal]: ...

    def apply(self, proposal: Proposal) -> None: ...

    def dispose(self) -> None: ...


class RunEditorCapability(Protocol):
    """Mutations and projections of a run owned by the engine"""

    def set_game_name(self, name: str) -> None: ...

    def set_category_name(self, name: str) -> None: ...

    def parse_and_set_offset(self, text: str) -> bool: ...

    def parse_and_set_attempt_count(self, text: str) -> bool: ...

    def select_timing_method(self, method: TimingMethod) -> None: ...

    def set_selection(self, indices: Iterable[int], active: Optional[int]) -> None: ...

    def insert_segment(self, position: int) -> int: ...

    def remove_selected_segments(self) -> bool: ...

    def move_selected(self, direction: int) -> bool: ...

    def set_active_segment_name(self, name: str) -> bool: ...

    def parse_and_set_active_field(
        self, kind: FieldKind, text: str, comparison: Optional[str] = None
    ) -> bool: ...

    def add_comparison(self, name: str) -> bool: ...

    def rename_comparison(self, old: str, new: str) -> bool: ...

    def remove_comparison(self, name: str) -> bool: ...

    def import_comparison(self, other: Run, name: str) -> bool: ...

    def set_icon(self, slot: Union[str, int], data: bytes) -> bool: ...

    def remove_icon(self, slot: Union[str, int]) -> None: ...

    def clean_sum_of_best(self) -> CleanupHandle: ...

    def clear_history(self) -> None: ...

    def clear_times(self) -> None: ...

    def to_state(self) -> RunState: ...

    def close(self) -> Run: ...
