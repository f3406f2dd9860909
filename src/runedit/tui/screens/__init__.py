"""TUI screens for runedit"""

from runedit.tui.screens.file_picker import FilePickerScreen
from runedit.tui.screens.run_editor import RunEditorScreen

__all__ = ["FilePickerScreen", "RunEditorScreen"]
