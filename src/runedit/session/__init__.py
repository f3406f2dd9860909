"""Editing session for runs"""

from runedit.session.cleanup import CleanupResult, CleanupWorkflow, run_cleanup
from runedit.session.comparisons import (
    ADD_CONFLICT_MESSAGE,
    RENAME_CONFLICT_MESSAGE,
    ComparisonColumns,
)
from runedit.session.editing import EditingSession, SessionClosedError
from runedit.session.field import FieldCell, FieldGrammar, RowState
from runedit.session.icons import IconCache
from runedit.session.selection import SelectionModel

__all__ = [
    "ADD_CONFLICT_MESSAGE",
    "RENAME_CONFLICT_MESSAGE",
    "CleanupResult",
    "CleanupWorkflow",
    "ComparisonColumns",
    "EditingSession",
    "FieldCell",
    "FieldGrammar",
    "IconCache",
    "RowState",
    "SelectionModel",
    "SessionClosedError",
    "run_cleanup",
]
