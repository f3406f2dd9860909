"""Reusable TUI widgets"""

from runedit.tui.widgets.confirm_modal import ConfirmModal
from runedit.tui.widgets.prompt_modal import PromptModal

__all__ = ["ConfirmModal", "PromptModal"]
