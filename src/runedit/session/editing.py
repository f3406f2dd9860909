"""Editing session - the single object the view talks to while a run is edited"""

import logging
from typing import Callable, Optional

from runedit.engine.editor import RunEditor
from runedit.models.run import Run, TimingMethod
from runedit.models.state import (
    GAME_SLOT,
    FieldKind,
    SegmentRow,
    Snapshot,
)
from runedit.session.capability import RunEditorCapability
from runedit.session.cleanup import CleanupResult, CleanupWorkflow, run_cleanup
from runedit.session.comparisons import ComparisonColumns
from runedit.session.field import FieldCell, RowState, count_cell, duration_cell
from runedit.session.icons import IconCache
from runedit.session.selection import SelectionModel


logger = logging.getLogger(__name__)


class SessionClosedError(Exception):
    """Raised when a closed editing session is used"""

    pass


class EditingSession:
    """Mediates every edit between the view and the engine.

    The session exclusively owns its engine handle. Each mutator forwards to
    the engine and, if the engine accepted it, replaces ``snapshot`` exactly
    once. Failed mutations leave the run and the snapshot as they were; only
    the originating field cell keeps the rejected text.
    """

    def __init__(self, editor: RunEditorCapability):
        self._editor = editor
        self._closed = False

        self.selection = SelectionModel(active=0)
        self.icons = IconCache()
        self.columns = ComparisonColumns(editor)
        self.offset_cell: FieldCell = duration_cell()
        self.attempts_cell: FieldCell = count_cell()
        self.row = RowState(index=0)

        self._editor.set_selection(self.selection.selected, self.selection.active)
        self._snapshot = self._build_snapshot()

    @classmethod
    def open(cls, run: Run, timing_method: TimingMethod = TimingMethod.REAL_TIME) -> "EditingSession":
        """Edit a private copy of ``run``; the original stays untouched until saved"""
        return cls(RunEditor(run.clone(), timing_method))

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self, save: bool) -> Optional[Run]:
        """End the session, returning the edited run when saving"""
        self._check_open()
        run = self._editor.close()
        self._closed = True
        if save:
            logger.info("Saving edited run %s - %s", run.game_name, run.category_name)
            return run
        logger.info("Discarding edited run %s - %s", run.game_name, run.category_name)
        return None

    def _check_open(self) -> None:
        if self._closed:
            raise SessionClosedError("editing session was already closed")

    # Snapshot handling

    def _refresh(self) -> None:
        self._snapshot = self._build_snapshot()

    def _build_snapshot(self) -> Snapshot:
        state = self._editor.to_state()
        self.columns.sync(state.comparison_names)

        rows = tuple(
            SegmentRow(
                index=index,
                name=segment.name,
                split_time=segment.split_time,
                segment_time=segment.segment_time,
                best_segment_time=segment.best_segment_time,
                comparison_times=segment.comparison_times,
                selected=self.selection.state_of(index),
                icon_url=self.icons.segment_icon(index, segment.icon_change),
            )
            for index, segment in enumerate(state.segments)
        )
        return Snapshot(
            game=state.game,
            category=state.category,
            offset=state.offset,
            attempts=state.attempts,
            timing_method=state.timing_method,
            comparison_names=state.comparison_names,
            segments=rows,
            buttons=state.buttons,
            game_icon_url=self.icons.game_icon(state.icon_change),
        )

    def _apply_selection(self) -> None:
        """Hand the selection to the engine and keep the row cells on the active row"""
        self._editor.set_selection(self.selection.selected, self.selection.active)
        active = self.selection.active
        if active is not None and active != self.row.index:
            self.row.reset(active)

    def _reset_cells(self) -> None:
        self.offset_cell.reset()
        self.attempts_cell.reset()
        self.row.reset(self.row.index)

    # Metadata

    def set_game_name(self, name: str) -> None:
        self._check_open()
        self._editor.set_game_name(name)
        self._refresh()

    def set_category_name(self, name: str) -> None:
        self._check_open()
        self._editor.set_category_name(name)
        self._refresh()

    def parse_and_set_offset(self, text: str) -> bool:
        self._check_open()
        accepted = self.offset_cell.set_raw(text, self._editor.parse_and_set_offset)
        if accepted:
            self._refresh()
        else:
            logger.debug("Offset %r not accepted", text)
        return accepted

    def blur_offset(self) -> None:
        self.offset_cell.blur(self._snapshot.offset)

    def parse_and_set_attempt_count(self, text: str) -> bool:
        self._check_open()
        accepted = self.attempts_cell.set_raw(text, self._editor.parse_and_set_attempt_count)
        if accepted:
            self._refresh()
        else:
            logger.debug("Attempt count %r not accepted", text)
        return accepted

    def blur_attempt_count(self) -> None:
        self.attempts_cell.blur(self._snapshot.attempts)

    def select_timing_method(self, method: TimingMethod) -> None:
        self._check_open()
        self._editor.select_timing_method(method)
        self._reset_cells()
        self._refresh()

    # Selection

    def _valid_index(self, index: int) -> bool:
        return 0 <= index < len(self._snapshot.segments)

    def focus(self, index: int) -> None:
        self._check_open()
        if not self._valid_index(index):
            return
        self.selection.focus(index)
        self._apply_selection()
        self._refresh()

    def select_only(self, index: int) -> None:
        self.focus(index)

    def select_additional(self, index: int) -> None:
        self._check_open()
        if not self._valid_index(index):
            return
        self.selection.select_additional(index)
        self._apply_selection()
        self._refresh()

    def unselect(self, index: int) -> None:
        self._check_open()
        if not self._valid_index(index):
            return
        self.selection.unselect(index)
        self._apply_selection()
        self._refresh()

    def toggle_selection(self, index: int) -> None:
        self._check_open()
        if not self._valid_index(index):
            return
        self.selection.toggle_additional(index)
        self._apply_selection()
        self._refresh()

    # Segments

    def insert_above(self) -> None:
        self._check_open()
        anchor = self._anchor(first=True)
        self._insert_at(anchor if anchor is not None else 0)

    def insert_below(self) -> None:
        self._check_open()
        anchor = self._anchor(first=False)
        self._insert_at(anchor + 1 if anchor is not None else len(self._snapshot.segments))

    def _anchor(self, first: bool) -> Optional[int]:
        if self.selection.active is not None:
            return self.selection.active
        selected = self.selection.selected
        if not selected:
            return None
        return selected[0] if first else selected[-1]

    def _insert_at(self, position: int) -> None:
        index = self._editor.insert_segment(position)
        self.selection.focus(index)
        self.row.reset(index)
        self._apply_selection()
        self._refresh()

    def remove_selected(self) -> bool:
        self._check_open()
        selected = self.selection.selected
        if not self._snapshot.buttons.can_remove or not selected:
            return False
        if not self._editor.remove_selected_segments():
            return False

        remaining = len(self._snapshot.segments) - len(selected)
        new_active = min(selected[0], remaining - 1)
        self.selection.focus(new_active)
        self.row.reset(new_active)
        self._apply_selection()
        self._refresh()
        return True

    def move_selected_up(self) -> bool:
        return self._move(-1)

    def move_selected_down(self) -> bool:
        return self._move(1)

    def _move(self, step: int) -> bool:
        self._check_open()
        buttons = self._snapshot.buttons
        if not (buttons.can_move_up if step < 0 else buttons.can_move_down):
            return False
        if not self._editor.move_selected(step):
            return False

        moved = self.row.index in self.selection.selected
        self.selection.shift(step)
        self.row.reset(self.row.index + step if moved else self.row.index)
        self._apply_selection()
        self._refresh()
        return True

    def set_segment_name(self, name: str) -> bool:
        self._check_open()
        if not self._editor.set_active_segment_name(name):
            return False
        self._refresh()
        return True

    # Active segment times

    def set_split_time(self, text: str) -> bool:
        return self._set_active_field(FieldKind.SPLIT_TIME, text)

    def set_segment_time(self, text: str) -> bool:
        return self._set_active_field(FieldKind.SEGMENT_TIME, text)

    def set_best_segment_time(self, text: str) -> bool:
        return self._set_active_field(FieldKind.BEST_SEGMENT_TIME, text)

    def set_comparison_time(self, column: int, text: str) -> bool:
        return self._set_active_field(FieldKind.COMPARISON_TIME, text, column)

    def _set_active_field(self, kind: FieldKind, text: str, column: Optional[int] = None) -> bool:
        self._check_open()
        cell = self.row.cell(kind, column)
        comparison = self.columns.name_at(column) if column is not None else None

        def commit(value: str) -> bool:
            if kind == FieldKind.COMPARISON_TIME and comparison is None:
                return False
            return self._editor.parse_and_set_active_field(kind, value, comparison)

        accepted = cell.set_raw(text, commit)
        if accepted:
            self._refresh()
        else:
            logger.debug("%s %r not accepted for segment %s", kind.value, text, self.selection.active)
        return accepted

    def committed_field_text(self, kind: FieldKind, column: Optional[int] = None) -> str:
        """Committed text of a field on the row being edited"""
        segments = self._snapshot.segments
        if not 0 <= self.row.index < len(segments):
            return ""
        row = segments[self.row.index]
        if kind == FieldKind.SPLIT_TIME:
            return row.split_time
        if kind == FieldKind.SEGMENT_TIME:
            return row.segment_time
        if kind == FieldKind.BEST_SEGMENT_TIME:
            return row.best_segment_time
        if column is not None and 0 <= column < len(row.comparison_times):
            return row.comparison_times[column]
        return ""

    def field_text(self, kind: FieldKind, column: Optional[int] = None) -> str:
        """What the view should show: the user's echo while editing, else the committed text"""
        return self.row.cell(kind, column).display(self.committed_field_text(kind, column))

    def blur_field(self, kind: FieldKind, column: Optional[int] = None) -> None:
        self.row.cell(kind, column).blur(self.committed_field_text(kind, column))

    # Comparisons

    def add_comparison(self, name: str) -> bool:
        self._check_open()
        if not self.columns.add(name):
            return False
        self._refresh()
        return True

    def rename_comparison(self, old: str, new: str) -> bool:
        self._check_open()
        if not self.columns.rename(old, new):
            return False
        self._refresh()
        return True

    def remove_comparison(self, name: str) -> bool:
        self._check_open()
        column = self.columns.index_of(name)
        if not self.columns.remove(name):
            return False
        if column is not None:
            self.row.invalidate_column(column)
        self._refresh()
        self.row.truncate(len(self.columns))
        return True

    def import_comparison(self, run: Run, name: str) -> bool:
        self._check_open()
        if not self.columns.import_from(run, name):
            return False
        self._refresh()
        return True

    # History

    def sum_of_best_cleanup(self) -> CleanupWorkflow:
        """Start a cleanup pass; the snapshot refreshes once when it ends"""
        self._check_open()
        return CleanupWorkflow(self._editor.clean_sum_of_best(), on_finish=self._refresh)

    def clean_sum_of_best(self, confirm: Callable[[str], bool]) -> CleanupResult:
        return run_cleanup(self.sum_of_best_cleanup(), confirm)

    def clear_history(self) -> None:
        self._check_open()
        self._editor.clear_history()
        self._refresh()

    def clear_times(self) -> None:
        self._check_open()
        self._editor.clear_times()
        self._reset_cells()
        self._refresh()

    # Icons

    @property
    def game_icon_url(self) -> str:
        return self._snapshot.game_icon_url

    def segment_icon_url(self, index: int) -> str:
        return self.icons.segment_icon(index)

    def set_game_icon(self, data: bytes) -> bool:
        self._check_open()
        if not self._editor.set_icon(GAME_SLOT, data):
            return False
        self._refresh()
        return True

    def remove_game_icon(self) -> None:
        self._check_open()
        self._editor.remove_icon(GAME_SLOT)
        self._refresh()

    def set_segment_icon(self, index: int, data: bytes) -> bool:
        """Select the segment and give it an icon; bad image data is ignored"""
        self._check_open()
        if not self._valid_index(index):
            return False
        self.selection.select_only(index)
        self._apply_selection()
        ok = self._editor.set_icon(index, data)
        self._refresh()
        return ok

    def remove_segment_icon(self, index: int) -> None:
        self._check_open()
        if not self._valid_index(index):
            return
        self.selection.select_only(index)
        self._apply_selection()
        self._editor.remove_icon(index)
        self._refresh()
