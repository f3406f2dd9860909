"""File picker screen - Select a run file to edit"""

from datetime import datetime
from pathlib import Path
from typing import Optional

from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import Static, Footer, ListView, ListItem, Label

from runedit.core.run_file import RunFileError, load_run, run_display_name
from runedit.models.config import EditorConfig


class RunFileListItem(ListItem):
    """A list item representing a run file"""

    def __init__(self, file_path: Path):
        super().__init__()
        self.file_path = file_path

    def compose(self) -> ComposeResult:
        modified = datetime.fromtimestamp(self.file_path.stat().st_mtime).strftime("%Y-%m-%d %H:%M")

        try:
            run = load_run(self.file_path)
            detail = f"{run.game_name} - {run.category_name}  •  {len(run.segments)} segment(s)"
        except RunFileError:
            detail = "[red]unreadable run file[/red]"

        yield Label(
            f"[bold]{run_display_name(self.file_path)}[/bold]\n"
            f"  [dim]{detail}  •  {modified}[/dim]"
        )


class FilePickerScreen(Screen):
    """Screen for selecting a run file to edit"""

    BINDINGS = [
        Binding("enter", "select_file", "Select"),
        Binding("q", "quit", "Quit"),
        Binding("r", "refresh", "Refresh"),
    ]

    def __init__(self, config: EditorConfig):
        super().__init__()
        self.config = config
        self.selected_file: Optional[Path] = None

    def compose(self) -> ComposeResult:
        yield Static(
            f"[bold]runedit - Select Run[/bold]\n"
            f"[dim]Folder: {self.config.folder}[/dim]",
            id="header",
        )
        yield Static(
            "[dim]↑/↓[/] navigate  [dim]Enter[/] select  [dim]q[/] quit",
            id="help",
        )
        yield ListView(id="file-list")
        yield Footer()

    def on_mount(self) -> None:
        """Load files on mount"""
        self._refresh_file_list()
        file_list = self.query_one("#file-list", ListView)
        file_list.focus()

    def _refresh_file_list(self) -> None:
        """Refresh the file list"""
        file_list = self.query_one("#file-list", ListView)
        file_list.clear()

        files = self.config.get_run_files()

        if not files:
            file_list.append(
                ListItem(Label("[yellow]No .run.yaml files found in folder[/yellow]"))
            )
            return

        for file_path in files:
            file_list.append(RunFileListItem(file_path))

    def action_refresh(self) -> None:
        """Refresh the file list"""
        self._refresh_file_list()
        self.notify("Refreshed file list")

    def action_select_file(self) -> None:
        """Select the highlighted file"""
        file_list = self.query_one("#file-list", ListView)
        item = file_list.highlighted_child
        if isinstance(item, RunFileListItem):
            self.selected_file = item.file_path
            self.app.exit(result=self.selected_file)

    def action_quit(self) -> None:
        """Quit without selecting"""
        self.app.exit(result=None)

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        """Handle double-click / enter on list item"""
        if isinstance(event.item, RunFileListItem):
            self.selected_file = event.item.file_path
            self.app.exit(result=self.selected_file)
