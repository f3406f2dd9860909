"""Run editor engine - owns a Run and applies validated edits to it"""

import logging
from typing import Iterable, List, Optional, Set, Union

from runedit.engine.cleaner import SumOfBestCleaner
from runedit.engine.images import encode_icon, icon_url
from runedit.engine.timespan import ParseError, format_duration, parse_count, parse_duration
from runedit.models.run import (
    PERSONAL_BEST,
    Run,
    Time,
    TimingMethod,
    is_valid_comparison_name,
)
from runedit.models.state import (
    GAME_SLOT,
    Buttons,
    FieldKind,
    RunState,
    SegmentState,
)


logger = logging.getLogger(__name__)

IconSlot = Union[str, int]


class EditorClosedError(Exception):
    """Raised when a closed editor is used"""

    pass


class RunEditor:
    """Editable view of a Run that only ever holds a valid run.

    The editor takes ownership of the run it is given. Every mutator either
    applies completely or reports failure and leaves the run untouched.
    """

    def __init__(self, run: Run, timing_method: TimingMethod = TimingMethod.REAL_TIME):
        self._run = run
        self._method = timing_method
        self._selected: List[int] = [0]
        self._active: Optional[int] = 0
        self._closed = False

        # Icon slots whose change hasn't been reported by to_state() yet
        self._dirty_icons: Set[IconSlot] = {GAME_SLOT, *range(len(run.segments))}

    @property
    def run(self) -> Run:
        """The run being edited (read only)"""
        return self._run

    @property
    def timing_method(self) -> TimingMethod:
        return self._method

    def close(self) -> Run:
        """Give up ownership and return the edited run"""
        self._check_open()
        self._closed = True
        return self._run

    def _check_open(self) -> None:
        if self._closed:
            raise EditorClosedError("run editor was already closed")

    # Metadata

    def set_game_name(self, name: str) -> None:
        self._check_open()
        self._run.game_name = name

    def set_category_name(self, name: str) -> None:
        self._check_open()
        self._run.category_name = name

    def parse_and_set_offset(self, text: str) -> bool:
        self._check_open()
        try:
            offset = parse_duration(text)
        except ParseError:
            return False
        self._run.offset = offset or 0.0
        return True

    def parse_and_set_attempt_count(self, text: str) -> bool:
        self._check_open()
        try:
            count = parse_count(text)
        except ParseError:
            return False
        self._run.attempt_count = count or 0
        return True

    def select_timing_method(self, method: TimingMethod) -> None:
        self._check_open()
        self._method = method

    # Selection

    def set_selection(self, indices: Iterable[int], active: Optional[int]) -> None:
        """Replace the selection; the active index must be part of it"""
        self._check_open()
        selected = sorted(set(indices))
        count = len(self._run.segments)
        if any(i < 0 or i >= count for i in selected):
            raise ValueError(f"selection {selected} out of range for {count} segments")
        if active is not None and active not in selected:
            raise ValueError(f"active segment {active} is not selected")
        self._selected = selected
        self._active = active

    @property
    def selected_indices(self) -> List[int]:
        return list(self._selected)

    @property
    def active_index(self) -> Optional[int]:
        return self._active

    def buttons(self) -> Buttons:
        count = len(self._run.segments)
        selected = self._selected
        return Buttons(
            can_remove=bool(selected) and len(selected) < count,
            can_move_up=bool(selected) and min(selected) > 0,
            can_move_down=bool(selected) and max(selected) < count - 1,
        )

    # Segments

    def insert_segment(self, position: int) -> int:
        """Insert an empty segment and select it; returns its index"""
        self._check_open()
        position = max(0, min(position, len(self._run.segments)))
        self._run.segments.insert(position, self._run.new_segment())
        self.set_selection([position], position)
        self._mark_segment_icons_dirty()
        return position

    def remove_selected_segments(self) -> bool:
        self._check_open()
        if not self.buttons().can_remove:
            return False

        removed = set(self._selected)
        segments = self._run.segments
        for index in sorted(removed):
            following = next((j for j in range(index + 1, len(segments)) if j not in removed), None)
            if following is not None:
                self._merge_history(segments[index].segment_history, segments[following].segment_history)

        self._run.segments = [s for i, s in enumerate(segments) if i not in removed]
        new_active = min(min(removed), len(self._run.segments) - 1)
        self.set_selection([new_active], new_active)
        self._mark_segment_icons_dirty()
        return True

    @staticmethod
    def _merge_history(removed: dict, following: dict) -> None:
        """Fold a removed segment's history into the segment after it"""
        for attempt_id, time in removed.items():
            if attempt_id not in following:
                continue
            merged = following[attempt_id]
            for method in TimingMethod:
                a, b = time.get(method), merged.get(method)
                merged = merged.with_value(method, a + b if a is not None and b is not None else None)
            following[attempt_id] = merged

    def move_selected(self, direction: int) -> bool:
        """Move every selected segment one place up (-1) or down (+1)"""
        self._check_open()
        buttons = self.buttons()
        if direction < 0 and not buttons.can_move_up:
            return False
        if direction > 0 and not buttons.can_move_down:
            return False
        if direction == 0:
            return False

        step = -1 if direction < 0 else 1
        segment_times = {
            (name, method): self._segment_times(name, method)
            for name in self._run.custom_comparisons
            for method in TimingMethod
        }

        segments = self._run.segments
        for index in sorted(self._selected, reverse=step > 0):
            other = index + step
            segments[index], segments[other] = segments[other], segments[index]
            for times in segment_times.values():
                times[index], times[other] = times[other], times[index]

        for (name, method), times in segment_times.items():
            self._set_segment_times(name, method, times)

        active = self._active + step if self._active is not None else None
        self.set_selection([i + step for i in self._selected], active)
        self._mark_segment_icons_dirty()
        return True

    def _segment_times(self, comparison: str, method: TimingMethod) -> List[Optional[float]]:
        """Split times of a comparison turned into per-segment durations"""
        times: List[Optional[float]] = []
        previous = 0.0
        for segment in self._run.segments:
            split = segment.comparison(comparison).get(method)
            if split is None:
                times.append(None)
            else:
                times.append(split - previous)
                previous = split
        return times

    def _set_segment_times(self, comparison: str, method: TimingMethod, times: List[Optional[float]]) -> None:
        total = 0.0
        for segment, duration in zip(self._run.segments, times):
            split = None
            if duration is not None:
                total += duration
                split = total
            segment.comparisons[comparison] = segment.comparison(comparison).with_value(method, split)

    def set_active_segment_name(self, name: str) -> bool:
        self._check_open()
        if self._active is None:
            return False
        self._run.segments[self._active].name = name
        return True

    def parse_and_set_active_field(self, kind: FieldKind, text: str, comparison: Optional[str] = None) -> bool:
        """Parse a time and store it on the active segment.

        Empty text clears the time. Negative times are rejected.
        """
        self._check_open()
        if self._active is None:
            return False
        try:
            value = parse_duration(text)
        except ParseError:
            return False
        if value is not None and value < 0:
            return False

        segment = self._run.segments[self._active]
        method = self._method
        if kind == FieldKind.SPLIT_TIME:
            segment.comparisons[PERSONAL_BEST] = segment.personal_best_split_time.with_value(method, value)
        elif kind == FieldKind.SEGMENT_TIME:
            times = self._segment_times(PERSONAL_BEST, method)
            times[self._active] = value
            self._set_segment_times(PERSONAL_BEST, method, times)
        elif kind == FieldKind.BEST_SEGMENT_TIME:
            segment.best_segment_time = segment.best_segment_time.with_value(method, value)
        elif kind == FieldKind.COMPARISON_TIME:
            if comparison not in self._run.custom_comparisons:
                return False
            segment.comparisons[comparison] = segment.comparison(comparison).with_value(method, value)
        else:
            return False
        return True

    # Comparisons

    def add_comparison(self, name: str) -> bool:
        self._check_open()
        if not is_valid_comparison_name(name) or name in self._run.custom_comparisons:
            return False
        self._run.custom_comparisons.append(name)
        for segment in self._run.segments:
            segment.comparisons[name] = Time()
        return True

    def rename_comparison(self, old: str, new: str) -> bool:
        self._check_open()
        if old == PERSONAL_BEST or old not in self._run.custom_comparisons:
            return False
        if not is_valid_comparison_name(new) or new in self._run.custom_comparisons:
            return False

        position = self._run.custom_comparisons.index(old)
        self._run.custom_comparisons[position] = new
        for segment in self._run.segments:
            segment.comparisons = {
                (new if name == old else name): time for name, time in segment.comparisons.items()
            }
        return True

    def remove_comparison(self, name: str) -> bool:
        self._check_open()
        if name == PERSONAL_BEST or name not in self._run.custom_comparisons:
            return False
        self._run.custom_comparisons.remove(name)
        for segment in self._run.segments:
            segment.comparisons.pop(name, None)
        return True

    def import_comparison(self, other: Run, name: str) -> bool:
        """Add another run's Personal Best as a comparison, matching segments by name"""
        self._check_open()
        if not self.add_comparison(name):
            return False

        cursor = 0
        for segment in self._run.segments:
            for index in range(cursor, len(other.segments)):
                if other.segments[index].name == segment.name:
                    segment.comparisons[name] = other.segments[index].personal_best_split_time.model_copy()
                    cursor = index + 1
                    break
        return True

    # Icons

    def set_icon(self, slot: IconSlot, data: bytes) -> bool:
        """Store icon bytes; returns False for data that isn't an image"""
        self._check_open()
        encoded = encode_icon(data)
        if encoded is None:
            logger.debug("Ignoring icon for slot %r: unrecognised image data", slot)
            return False
        self._store_icon(slot, encoded)
        return True

    def remove_icon(self, slot: IconSlot) -> None:
        self._check_open()
        self._store_icon(slot, "")

    def _store_icon(self, slot: IconSlot, encoded: str) -> None:
        if slot == GAME_SLOT:
            self._run.game_icon = encoded
        else:
            self._run.segments[slot].icon = encoded
        self._dirty_icons.add(slot)

    def _mark_segment_icons_dirty(self) -> None:
        self._dirty_icons.update(range(len(self._run.segments)))

    # History

    def clean_sum_of_best(self) -> SumOfBestCleaner:
        self._check_open()
        return SumOfBestCleaner(self._run, self._method)

    def clear_history(self) -> None:
        self._check_open()
        self._run.attempt_history = []
        for segment in self._run.segments:
            segment.segment_history = {}

    def clear_times(self) -> None:
        self._check_open()
        self.clear_history()
        self._run.attempt_count = 0
        for segment in self._run.segments:
            segment.best_segment_time = Time()
            segment.comparisons = {name: Time() for name in segment.comparisons}

    # State

    def to_state(self) -> RunState:
        """Formatted projection of the run; reports icon changes once"""
        self._check_open()
        method = self._method
        names = self._run.comparison_names
        segment_times = self._segment_times(PERSONAL_BEST, method)

        segments = []
        for index, segment in enumerate(self._run.segments):
            segments.append(SegmentState(
                name=segment.name,
                split_time=format_duration(segment.personal_best_split_time.get(method)),
                segment_time=format_duration(segment_times[index]),
                best_segment_time=format_duration(segment.best_segment_time.get(method)),
                comparison_times=tuple(
                    format_duration(segment.comparison(name).get(method)) for name in names
                ),
                icon_change=icon_url(segment.icon) if index in self._dirty_icons else None,
            ))

        state = RunState(
            game=self._run.game_name,
            category=self._run.category_name,
            offset=format_duration(self._run.offset),
            attempts=str(self._run.attempt_count),
            timing_method=method,
            comparison_names=tuple(names),
            segments=tuple(segments),
            buttons=self.buttons(),
            icon_change=icon_url(self._run.game_icon) if GAME_SLOT in self._dirty_icons else None,
        )
        self._dirty_icons.clear()
        return state
