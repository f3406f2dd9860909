"""Run editor screen - edit segments, comparisons and icons of a run"""

from pathlib import Path
from typing import Dict, List, Optional, Tuple

from textual import work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import Screen
from textual.widgets import Button, DataTable, Footer, Input, Label, Static

from runedit.core.run_file import RunFileError, load_run, run_display_name
from runedit.models.run import TimingMethod
from runedit.models.state import FieldKind, SegmentRow, SelectionState
from runedit.session import (
    ADD_CONFLICT_MESSAGE,
    RENAME_CONFLICT_MESSAGE,
    EditingSession,
    FieldCell,
)
from runedit.tui.widgets import ConfirmModal, PromptModal


FIXED_COLUMNS = ("", "Icon", "Segment Name", "Split Time", "Segment Time", "Best Segment")

ROW_FIELDS: Dict[str, FieldKind] = {
    "split-input": FieldKind.SPLIT_TIME,
    "segment-input": FieldKind.SEGMENT_TIME,
    "best-input": FieldKind.BEST_SEGMENT_TIME,
}

SELECTION_MARKERS = {
    SelectionState.ACTIVE: "[bold green]●[/]",
    SelectionState.SELECTED: "[cyan]○[/]",
    SelectionState.NOT_SELECTED: " ",
}

TIMING_METHOD_LABELS = {
    TimingMethod.REAL_TIME: "Real Time",
    TimingMethod.GAME_TIME: "Game Time",
}


class RunEditorScreen(Screen):
    """Screen for editing a run through an EditingSession.

    Controls (segment table focused):
    - Enter: Make the highlighted segment the active one
    - Space: Add/remove the highlighted segment to/from the selection
    - i/o: Insert a segment above/below
    - x: Remove selected segments
    - ctrl+up/ctrl+down: Move selected segments
    - c/r/d/m: Add/rename/remove/import comparison
    - g/G, e/E: Set/remove game icon, set/remove segment icon
    - t: Switch timing method
    - s: Clean sum of best
    - ctrl+s: Save and close, Escape: Close without saving
    """

    BINDINGS = [
        Binding("ctrl+s", "close_editor(True)", "Save", priority=True),
        Binding("escape", "discard", "Discard"),
        Binding("i", "insert_above", "Insert Above"),
        Binding("o", "insert_below", "Insert Below"),
        Binding("x", "remove_segments", "Remove"),
        Binding("ctrl+up", "move_up", "Move Up"),
        Binding("ctrl+down", "move_down", "Move Down"),
        Binding("space", "toggle_selection", "Select", show=False),
        Binding("c", "add_comparison", "Add Comparison"),
        Binding("r", "rename_comparison", "Rename Comparison", show=False),
        Binding("d", "remove_comparison", "Remove Comparison", show=False),
        Binding("m", "import_comparison", "Import Comparison", show=False),
        Binding("g", "set_game_icon", "Game Icon", show=False),
        Binding("G", "remove_game_icon", "Remove Game Icon", show=False),
        Binding("e", "set_segment_icon", "Segment Icon", show=False),
        Binding("E", "remove_segment_icon", "Remove Segment Icon", show=False),
        Binding("t", "switch_timing_method", "Timing Method"),
        Binding("s", "clean_sum_of_best", "Clean SoB"),
        Binding("h", "clear_history", "Clear History", show=False),
        Binding("T", "clear_times", "Clear Times", show=False),
    ]

    def __init__(self, session: EditingSession, source_file: Path):
        super().__init__()
        self.session = session
        self.source_file = source_file
        self._columns: Tuple[str, ...] = ()
        self._input_columns: Optional[Tuple[str, ...]] = None
        self._comparison_inputs: List[Input] = []

    def compose(self) -> ComposeResult:
        yield Static(id="header", classes="title")
        yield Static(
            "[dim]Enter[/]=activate  [dim]Space[/]=select  [dim]i/o[/]=insert  [dim]x[/]=remove  "
            "[dim]c/r/d/m[/]=comparisons  [dim]g/e[/]=icons  [dim]s[/]=clean SoB  "
            "[dim]ctrl+s[/]=save  [dim]Esc[/]=discard",
            classes="help-text",
        )

        with Horizontal(id="run-info"):
            with Vertical(classes="info-field"):
                yield Label("Game")
                yield Input(id="game-input")
            with Vertical(classes="info-field"):
                yield Label("Category")
                yield Input(id="category-input")
            with Vertical(classes="info-field"):
                yield Label("Start Timer At")
                yield Input(id="offset-input")
            with Vertical(classes="info-field"):
                yield Label("Attempts")
                yield Input(id="attempts-input")
            with Vertical(classes="info-field"):
                yield Label("Timing Method")
                yield Static(id="timing-method")
                yield Static(id="game-icon")

        with Horizontal(id="action-bar"):
            yield Button("Insert Above", id="insert-above-btn")
            yield Button("Insert Below", id="insert-below-btn")
            yield Button("Remove Segment", id="remove-btn", variant="error")
            yield Button("Move Up", id="move-up-btn")
            yield Button("Move Down", id="move-down-btn")
            yield Button("Add Comparison", id="add-comparison-btn", variant="primary")
            yield Button("Import Comparison", id="import-comparison-btn")
            yield Button("Clean Sum of Best", id="clean-sob-btn", variant="warning")

        with Horizontal(id="editor-body"):
            yield DataTable(id="segments", cursor_type="row", zebra_stripes=True)

            with VerticalScroll(id="row-editor"):
                yield Static(id="row-header")
                yield Label("Segment Name")
                yield Input(id="name-input")
                yield Label("Split Time")
                yield Input(id="split-input")
                yield Label("Segment Time")
                yield Input(id="segment-input")
                yield Label("Best Segment")
                yield Input(id="best-input")
                yield Vertical(id="comparison-inputs")

        yield Footer()

    def on_mount(self) -> None:
        self._update_display()
        self.query_one("#segments", DataTable).focus()

    # Rendering

    def _update_display(self) -> None:
        """Re-render everything from the session's current snapshot"""
        snapshot = self.session.snapshot

        header = self.query_one("#header", Static)
        header.update(f"[bold]{snapshot.game or 'Untitled'}[/bold] - {snapshot.category}  |  {self.source_file.name}")

        self._update_table()
        self._update_info_inputs()
        self._update_row_editor()

        buttons = snapshot.buttons
        self.query_one("#remove-btn", Button).disabled = not buttons.can_remove
        self.query_one("#move-up-btn", Button).disabled = not buttons.can_move_up
        self.query_one("#move-down-btn", Button).disabled = not buttons.can_move_down

        self.query_one("#timing-method", Static).update(TIMING_METHOD_LABELS[snapshot.timing_method])
        icon = self.query_one("#game-icon", Static)
        icon.update("[green]▣ game icon[/]" if snapshot.game_icon_url else "[dim]no game icon[/dim]")

    def _update_table(self) -> None:
        snapshot = self.session.snapshot
        table = self.query_one("#segments", DataTable)
        cursor_row = table.cursor_row

        if snapshot.comparison_names != self._columns or not table.columns:
            table.clear(columns=True)
            table.add_columns(*FIXED_COLUMNS, *snapshot.comparison_names)
            self._columns = snapshot.comparison_names
        else:
            table.clear()

        for row in snapshot.segments:
            table.add_row(*self._row_cells(row), key=str(row.index))

        if snapshot.segments:
            table.move_cursor(row=min(cursor_row, len(snapshot.segments) - 1), animate=False)

    def _row_cells(self, row: SegmentRow) -> Tuple[str, ...]:
        icon = "▣" if row.icon_url else ""
        return (
            SELECTION_MARKERS[row.selected],
            icon,
            row.name,
            row.split_time,
            row.segment_time,
            row.best_segment_time,
            *row.comparison_times,
        )

    def _update_info_inputs(self) -> None:
        snapshot = self.session.snapshot
        self._set_input("#game-input", snapshot.game)
        self._set_input("#category-input", snapshot.category)
        self._set_input(
            "#offset-input",
            self.session.offset_cell.display(snapshot.offset),
            self.session.offset_cell,
        )
        self._set_input(
            "#attempts-input",
            self.session.attempts_cell.display(snapshot.attempts),
            self.session.attempts_cell,
        )

    def _update_row_editor(self) -> None:
        session = self.session
        snapshot = session.snapshot
        active = snapshot.active_index

        row_header = self.query_one("#row-header", Static)
        if active is None:
            row_header.update("[dim]No active segment - press Enter on a segment[/dim]")
        else:
            row_header.update(f"[bold]Segment {active + 1} of {len(snapshot.segments)}[/bold]")

        name = snapshot.segments[active].name if active is not None else ""
        self._set_input("#name-input", name)
        for input_id, kind in ROW_FIELDS.items():
            self._set_input(f"#{input_id}", session.field_text(kind), session.row.cell(kind))

        for widget in self.query("#row-editor Input"):
            widget.disabled = active is None

        if snapshot.comparison_names != self._input_columns:
            self._rebuild_comparison_inputs()
            return

        for column, widget in enumerate(self._comparison_inputs):
            self._set_input(
                widget,
                session.field_text(FieldKind.COMPARISON_TIME, column),
                session.row.comparison(column),
            )

    def _rebuild_comparison_inputs(self) -> None:
        """One input per comparison column, named by column position"""
        session = self.session
        names = session.snapshot.comparison_names
        container = self.query_one("#comparison-inputs", Vertical)
        container.remove_children()

        self._comparison_inputs = []
        for column, comparison in enumerate(names):
            widget = Input(
                value=session.field_text(FieldKind.COMPARISON_TIME, column),
                name=f"comparison-{column}",
                classes="comparison-input",
                disabled=session.snapshot.active_index is None,
            )
            container.mount(Label(comparison, markup=False))
            container.mount(widget)
            self._comparison_inputs.append(widget)
        self._input_columns = names

    def _set_input(self, target, value: str, cell: Optional[FieldCell] = None) -> None:
        """Show a value without re-triggering change handling; keep the user's text while typing"""
        widget = self.query_one(target, Input) if isinstance(target, str) else target
        if not widget.has_focus and widget.value != value:
            with widget.prevent(Input.Changed):
                widget.value = value
        if cell is not None:
            widget.set_class(not cell.is_valid, "-invalid")

    # Text input

    def on_input_changed(self, event: Input.Changed) -> None:
        """Forward keystrokes to the session; the input keeps the raw text"""
        session = self.session
        if not event.input.has_focus:
            return
        input_id = event.input.id or event.input.name or ""
        value = event.value

        if input_id == "game-input":
            session.set_game_name(value)
        elif input_id == "category-input":
            session.set_category_name(value)
        elif input_id == "offset-input":
            session.parse_and_set_offset(value)
            event.input.set_class(not session.offset_cell.is_valid, "-invalid")
        elif input_id == "attempts-input":
            session.parse_and_set_attempt_count(value)
            event.input.set_class(not session.attempts_cell.is_valid, "-invalid")
        elif input_id == "name-input":
            session.set_segment_name(value)
        elif input_id in ROW_FIELDS:
            kind = ROW_FIELDS[input_id]
            self._set_row_field(kind, value)
            event.input.set_class(not session.row.cell(kind).is_valid, "-invalid")
        elif input_id.startswith("comparison-"):
            column = int(input_id.split("-", 1)[1])
            session.set_comparison_time(column, value)
            event.input.set_class(not session.row.comparison(column).is_valid, "-invalid")
        else:
            return

        self._update_table()

    def _set_row_field(self, kind: FieldKind, value: str) -> None:
        if kind == FieldKind.SPLIT_TIME:
            self.session.set_split_time(value)
        elif kind == FieldKind.SEGMENT_TIME:
            self.session.set_segment_time(value)
        else:
            self.session.set_best_segment_time(value)

    def on_input_blurred(self, event: Input.Blurred) -> None:
        """Drop the typed text in favour of the committed value"""
        session = self.session
        input_id = event.input.id or event.input.name or ""

        if input_id == "offset-input":
            session.blur_offset()
        elif input_id == "attempts-input":
            session.blur_attempt_count()
        elif input_id in ROW_FIELDS:
            session.blur_field(ROW_FIELDS[input_id])
        elif input_id.startswith("comparison-"):
            session.blur_field(FieldKind.COMPARISON_TIME, int(input_id.split("-", 1)[1]))
        self._update_display()

    # Segment selection

    def _cursor_row(self) -> Optional[int]:
        table = self.query_one("#segments", DataTable)
        if table.row_count == 0:
            return None
        return table.cursor_row

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        self.session.focus(event.cursor_row)
        self._update_display()

    def action_toggle_selection(self) -> None:
        row = self._cursor_row()
        if row is None:
            return
        self.session.toggle_selection(row)
        self._update_display()

    # Structural edits

    def action_insert_above(self) -> None:
        self.session.insert_above()
        self._move_cursor_to_active()

    def action_insert_below(self) -> None:
        self.session.insert_below()
        self._move_cursor_to_active()

    def action_remove_segments(self) -> None:
        if self.session.remove_selected():
            self._move_cursor_to_active()

    def action_move_up(self) -> None:
        if self.session.move_selected_up():
            self._move_cursor_to_active()

    def action_move_down(self) -> None:
        if self.session.move_selected_down():
            self._move_cursor_to_active()

    def _move_cursor_to_active(self) -> None:
        self._update_display()
        active = self.session.snapshot.active_index
        if active is not None:
            self.query_one("#segments", DataTable).move_cursor(row=active, animate=False)

    def action_switch_timing_method(self) -> None:
        current = self.session.snapshot.timing_method
        other = TimingMethod.GAME_TIME if current == TimingMethod.REAL_TIME else TimingMethod.REAL_TIME
        self.session.select_timing_method(other)
        self._update_display()

    def action_clear_history(self) -> None:
        self.session.clear_history()
        self._update_display()
        self.notify("Cleared history")

    def action_clear_times(self) -> None:
        self.session.clear_times()
        self._update_display()
        self.notify("Cleared times")

    # Comparisons

    @work(exclusive=True)
    async def action_add_comparison(self) -> None:
        name = await self.app.push_screen_wait(PromptModal("Comparison Name:"))
        if not name:
            return
        if self.session.add_comparison(name):
            self._update_display()
        else:
            self.notify(ADD_CONFLICT_MESSAGE, severity="error")

    @work(exclusive=True)
    async def action_rename_comparison(self) -> None:
        old = await self._pick_comparison("Comparison to rename:")
        if old is None:
            return
        new = await self.app.push_screen_wait(PromptModal("Comparison Name:", default=old))
        if not new:
            return
        if self.session.rename_comparison(old, new):
            self._update_display()
        else:
            self.notify(RENAME_CONFLICT_MESSAGE, severity="error")

    @work(exclusive=True)
    async def action_remove_comparison(self) -> None:
        name = await self._pick_comparison("Comparison to remove:")
        if name is None:
            return
        if self.session.remove_comparison(name):
            self._update_display()

    async def _pick_comparison(self, label: str) -> Optional[str]:
        names = self.session.snapshot.comparison_names
        if not names:
            self.notify("There are no comparisons", severity="warning")
            return None
        name = await self.app.push_screen_wait(PromptModal(label, default=names[0]))
        if name is not None and name not in names:
            self.notify(f"No comparison named {name!r}", severity="warning")
            return None
        return name

    @work(exclusive=True)
    async def action_import_comparison(self) -> None:
        path_text = await self.app.push_screen_wait(PromptModal("Splits file to import:"))
        if not path_text:
            return
        path = Path(path_text).expanduser()
        try:
            run = load_run(path)
        except RunFileError:
            self.notify("Couldn't parse the splits.", severity="error")
            return

        name = await self.app.push_screen_wait(PromptModal("Comparison Name:", default=run_display_name(path)))
        if not name:
            return
        if self.session.import_comparison(run, name):
            self._update_display()
        else:
            self.notify(ADD_CONFLICT_MESSAGE, severity="error")

    # Icons

    async def _read_icon_file(self) -> Optional[bytes]:
        path_text = await self.app.push_screen_wait(PromptModal("Icon image file:"))
        if not path_text:
            return None
        try:
            return Path(path_text).expanduser().read_bytes()
        except OSError:
            # Unreadable icons are ignored like malformed ones
            return None

    @work(exclusive=True)
    async def action_set_game_icon(self) -> None:
        data = await self._read_icon_file()
        if data is not None and self.session.set_game_icon(data):
            self._update_display()

    def action_remove_game_icon(self) -> None:
        self.session.remove_game_icon()
        self._update_display()

    @work(exclusive=True)
    async def action_set_segment_icon(self) -> None:
        row = self._cursor_row()
        if row is None:
            return
        data = await self._read_icon_file()
        if data is not None:
            self.session.set_segment_icon(row, data)
            self._update_display()

    def action_remove_segment_icon(self) -> None:
        row = self._cursor_row()
        if row is None:
            return
        self.session.remove_segment_icon(row)
        self._update_display()

    # Sum of best

    @work(exclusive=True)
    async def action_clean_sum_of_best(self) -> None:
        """Ask about each proposed correction, one modal at a time"""
        with self.session.sum_of_best_cleanup() as workflow:
            for proposal in workflow:
                accepted = await self.app.push_screen_wait(
                    ConfirmModal(proposal.message, title="Clean Sum of Best")
                )
                if accepted:
                    workflow.apply(proposal)

        self._update_display()
        result = workflow.result
        if result.proposed == 0:
            self.notify("Nothing to clean up")
        else:
            self.notify(f"Removed {result.applied} of {result.proposed} suspicious segment times")

    # Closing

    @work(exclusive=True)
    async def action_discard(self) -> None:
        discard = await self.app.push_screen_wait(
            ConfirmModal("Close the editor and discard all changes?", title="Discard Changes")
        )
        if discard:
            self.action_close_editor(False)

    def action_close_editor(self, save: bool) -> None:
        self.app.close_editor(save)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses"""
        button_id = event.button.id
        if button_id == "insert-above-btn":
            self.action_insert_above()
        elif button_id == "insert-below-btn":
            self.action_insert_below()
        elif button_id == "remove-btn":
            self.action_remove_segments()
        elif button_id == "move-up-btn":
            self.action_move_up()
        elif button_id == "move-down-btn":
            self.action_move_down()
        elif button_id == "add-comparison-btn":
            self.action_add_comparison()
        elif button_id == "import-comparison-btn":
            self.action_import_comparison()
        elif button_id == "clean-sob-btn":
            self.action_clean_sum_of_best()
