"""Main Textual application for runedit"""

import logging
from pathlib import Path

from textual.app import App
from textual.binding import Binding

from runedit.core.run_file import save_run
from runedit.models.run import Run, TimingMethod
from runedit.session import EditingSession
from runedit.tui.screens.run_editor import RunEditorScreen


logger = logging.getLogger(__name__)


class RunEditorApp(App):
    """Main runedit TUI application"""

    TITLE = "runedit - Run Editor"
    CSS = """
    Screen {
        background: $surface;
    }

    .title {
        text-style: bold;
        color: $primary;
        padding: 1 2;
    }

    .help-text {
        color: $text-muted;
        padding: 0 2;
    }

    #run-info {
        height: auto;
        padding: 0 1;
    }

    .info-field {
        width: 1fr;
        height: auto;
        padding: 0 1;
    }

    #action-bar {
        height: auto;
        padding: 0 1;
    }

    #action-bar Button {
        margin: 0 1 0 0;
        min-width: 10;
    }

    #editor-body {
        height: 1fr;
    }

    #segments {
        width: 1fr;
        border: solid $primary;
    }

    #row-editor {
        width: 36;
        border: solid $secondary;
        padding: 0 1;
    }

    #comparison-inputs {
        height: auto;
    }

    Input.-invalid {
        border: tall $error;
        background: $error 15%;
    }

    Footer {
        background: $surface-darken-1;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, source_file: Path, run: Run, timing_method: TimingMethod = TimingMethod.REAL_TIME):
        super().__init__()
        self.source_file = source_file
        self.run_data = run
        self.session = EditingSession.open(run, timing_method)

    def on_mount(self) -> None:
        """Start with the run editor screen"""
        self.push_screen(RunEditorScreen(self.session, self.source_file))

    def close_editor(self, save: bool) -> None:
        """Close the session, writing the run back to its file when saving"""
        run = self.session.close(save)
        if run is None:
            self.exit(message="Discarded changes")
            return

        save_run(self.source_file, run)
        self.run_data = run
        logger.info("Saved run to %s", self.source_file)
        self.exit(message=f"Saved: {self.source_file}")

    def action_quit(self) -> None:
        """Quit without saving"""
        if not self.session.closed:
            self.session.close(save=False)
        self.exit(message="Discarded changes")
