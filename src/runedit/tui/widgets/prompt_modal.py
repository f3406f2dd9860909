"""Text prompt modal - asks for a name or a file path"""

from typing import Optional

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Input, Static


class PromptModal(ModalScreen[Optional[str]]):
    """Modal with a single text input; dismisses with None when cancelled."""

    CSS = """
    PromptModal {
        align: center middle;
    }

    #prompt-container {
        width: 60;
        height: auto;
        background: $surface;
        border: thick $primary;
        padding: 1 2;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=False, priority=True),
    ]

    def __init__(self, label: str, default: str = ""):
        super().__init__()
        self.label = label
        self.default = default

    def compose(self) -> ComposeResult:
        with Vertical(id="prompt-container"):
            yield Static(f"[bold]{self.label}[/bold]")
            yield Input(value=self.default, id="prompt-input")
            yield Static("[dim]Enter confirm  |  Esc cancel[/dim]")

    def on_mount(self) -> None:
        self.query_one("#prompt-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        value = event.value.strip()
        self.dismiss(value or None)

    def action_cancel(self) -> None:
        self.dismiss(None)
