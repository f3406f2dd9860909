"""Data models for runedit"""

from runedit.models.config import EditorConfig
from runedit.models.run import (
    PERSONAL_BEST,
    RESERVED_COMPARISONS,
    Attempt,
    Run,
    Segment,
    Time,
    TimingMethod,
    default_run,
    is_valid_comparison_name,
)
from runedit.models.state import (
    GAME_SLOT,
    Buttons,
    FieldKind,
    RunState,
    SegmentRow,
    SegmentState,
    SelectionState,
    Snapshot,
)

__all__ = [
    "GAME_SLOT",
    "FieldKind",
    "PERSONAL_BEST",
    "RESERVED_COMPARISONS",
    "Attempt",
    "Buttons",
    "EditorConfig",
    "Run",
    "RunState",
    "Segment",
    "SegmentRow",
    "SegmentState",
    "SelectionState",
    "Snapshot",
    "Time",
    "TimingMethod",
    "default_run",
    "is_valid_comparison_name",
]
