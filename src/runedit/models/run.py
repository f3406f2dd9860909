"""Run model - segments, comparisons and attempt history of a speedrun"""

from enum import Enum
from typing import Dict, List, Optional
from pydantic import BaseModel, Field, model_validator


PERSONAL_BEST = "Personal Best"
RACE_PREFIX = "[Race]"

# Generated by the timing engine, never stored as custom comparisons
RESERVED_COMPARISONS = (
    PERSONAL_BEST,
    "Best Segments",
    "Best Split Times",
    "Average Segments",
    "Median Segments",
    "Worst Segments",
    "Balanced PB",
    "Latest Run",
    "None",
)


class TimingMethod(str, Enum):
    """Which clock the editor shows and edits"""
    REAL_TIME = "RealTime"
    GAME_TIME = "GameTime"


class Time(BaseModel):
    """A duration in seconds for each timing method"""
    real_time: Optional[float] = None
    game_time: Optional[float] = None

    def get(self, method: TimingMethod) -> Optional[float]:
        if method == TimingMethod.GAME_TIME:
            return self.game_time
        return self.real_time

    def with_value(self, method: TimingMethod, value: Optional[float]) -> "Time":
        """Copy of this time with one component replaced"""
        if method == TimingMethod.GAME_TIME:
            return self.model_copy(update={"game_time": value})
        return self.model_copy(update={"real_time": value})


class Attempt(BaseModel):
    """One recorded attempt of the run"""
    id: int
    time: Time = Field(default_factory=Time)


class Segment(BaseModel):
    """A named leg of the run"""
    name: str = ""
    icon: str = Field("", description="Base64 encoded image data")

    # Keyed by comparison name, "Personal Best" included
    comparisons: Dict[str, Time] = Field(default_factory=dict)
    best_segment_time: Time = Field(default_factory=Time)

    # Keyed by attempt id; a missing component means the split was skipped
    segment_history: Dict[int, Time] = Field(default_factory=dict)

    def comparison(self, name: str) -> Time:
        return self.comparisons.get(name, Time())

    @property
    def personal_best_split_time(self) -> Time:
        return self.comparison(PERSONAL_BEST)


class Run(BaseModel):
    """Complete run data, stored in a .run.yaml file"""
    version: str = "1.0"
    game_name: str = ""
    category_name: str = ""
    game_icon: str = Field("", description="Base64 encoded image data")

    offset: float = 0.0
    attempt_count: int = 0
    attempt_history: List[Attempt] = Field(default_factory=list)

    custom_comparisons: List[str] = Field(default_factory=lambda: [PERSONAL_BEST])
    segments: List[Segment] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_consistency(self) -> "Run":
        """Enforce the structural invariants every run must satisfy"""
        if not self.segments:
            raise ValueError("a run needs at least one segment")
        if not self.custom_comparisons or self.custom_comparisons[0] != PERSONAL_BEST:
            self.custom_comparisons = [PERSONAL_BEST] + [
                c for c in self.custom_comparisons if c != PERSONAL_BEST
            ]
        if len(set(self.custom_comparisons)) != len(self.custom_comparisons):
            raise ValueError("comparison names must be unique")
        if self.attempt_count < 0:
            raise ValueError("attempt count must not be negative")
        for segment in self.segments:
            self._fill_comparisons(segment)
        return self

    def _fill_comparisons(self, segment: Segment) -> None:
        """Give a segment exactly one time per comparison, in comparison order"""
        segment.comparisons = {
            name: segment.comparisons.get(name, Time()) for name in self.custom_comparisons
        }

    def new_segment(self, name: str = "") -> Segment:
        """Create a segment that carries an empty time for every comparison"""
        segment = Segment(name=name)
        self._fill_comparisons(segment)
        return segment

    def clone(self) -> "Run":
        return self.model_copy(deep=True)

    @property
    def comparison_names(self) -> List[str]:
        """Custom comparisons shown as editor columns"""
        return [c for c in self.custom_comparisons if c != PERSONAL_BEST]


def is_valid_comparison_name(name: str) -> bool:
    """Whether a name may be used for a user-defined comparison"""
    if not name:
        return False
    if name.startswith(RACE_PREFIX):
        return False
    return name not in RESERVED_COMPARISONS


def default_run(
    game_name: str = "Game",
    category_name: str = "Category",
    segment_names: Optional[List[str]] = None,
) -> Run:
    """A fresh run with a single "Time" segment unless names are given"""
    names = segment_names or ["Time"]
    return Run(
        game_name=game_name,
        category_name=category_name,
        segments=[Segment(name=n) for n in names],
    )
