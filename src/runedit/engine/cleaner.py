"""Sum of best cleaner - finds recorded segment times that can't be right"""

import logging
from dataclasses import dataclass
from typing import Optional, Set, Tuple

from runedit.engine.timespan import format_duration
from runedit.models.run import Run, TimingMethod


logger = logging.getLogger(__name__)


class CleanerDisposedError(Exception):
    """Raised when a disposed cleaner is used"""

    pass


@dataclass(frozen=True)
class PotentialCleanUp:
    """A history entry the user may want to remove"""
    start: int
    end: int
    attempt_id: int
    time: float
    best: float
    message: str


class SumOfBestCleaner:
    """Walks the segment history and proposes entries faster than the best segments.

    A recorded time covers segment ``end`` and, if the splits before it were
    skipped in the same attempt, every skipped segment back to ``start``. It is
    proposed when it beats the best segment time (or the sum of best segment
    times) of the segments it covers. Each entry is proposed at most once.
    """

    def __init__(self, run: Run, method: TimingMethod):
        self._run = run
        self._method = method
        self._seen: Set[Tuple[int, int]] = set()
        self._disposed = False

    def next(self) -> Optional[PotentialCleanUp]:
        """Next proposal based on the current run, or None when done"""
        self._check_open()
        for end, segment in enumerate(self._run.segments):
            for attempt_id in sorted(segment.segment_history):
                if (end, attempt_id) in self._seen:
                    continue
                time = segment.segment_history[attempt_id].get(self._method)
                if time is None:
                    continue

                start = self._combined_start(end, attempt_id)
                best = self._sum_of_best(start, end)
                if best is None or time >= best:
                    continue

                self._seen.add((end, attempt_id))
                return PotentialCleanUp(
                    start=start,
                    end=end,
                    attempt_id=attempt_id,
                    time=time,
                    best=best,
                    message=self._message(start, end, attempt_id, time, best),
                )
        return None

    def apply(self, clean_up: PotentialCleanUp) -> None:
        """Remove the history entries covered by a proposal"""
        self._check_open()
        for index in range(clean_up.start, clean_up.end + 1):
            self._run.segments[index].segment_history.pop(clean_up.attempt_id, None)
        logger.info(
            "Removed attempt %d from segment history of segments %d..%d",
            clean_up.attempt_id, clean_up.start, clean_up.end,
        )

    def dispose(self) -> None:
        self._disposed = True

    def _check_open(self) -> None:
        if self._disposed:
            raise CleanerDisposedError("sum of best cleaner was already disposed")

    def _combined_start(self, end: int, attempt_id: int) -> int:
        """First segment of a combined time, walking back over skipped splits"""
        start = end
        index = end - 1
        while index >= 0:
            entry = self._run.segments[index].segment_history.get(attempt_id)
            if entry is None or entry.get(self._method) is not None:
                break
            start = index
            index -= 1
        return start

    def _sum_of_best(self, start: int, end: int) -> Optional[float]:
        total = 0.0
        for segment in self._run.segments[start:end + 1]:
            best = segment.best_segment_time.get(self._method)
            if best is None:
                return None
            total += best
        return total

    def _message(self, start: int, end: int, attempt_id: int, time: float, best: float) -> str:
        segments = self._run.segments
        if start == end:
            return (
                f"You had a {format_duration(time)} segment time in attempt #{attempt_id} "
                f"for the segment \"{segments[end].name}\", which is faster than its best "
                f"segment time of {format_duration(best)}. Do you think this segment time "
                f"is inaccurate and should be removed?"
            )
        return (
            f"You had a {format_duration(time)} segment time combined for the segments "
            f"between \"{segments[start].name}\" and \"{segments[end].name}\" in attempt "
            f"#{attempt_id}, which is faster than the sum of their best segments of "
            f"{format_duration(best)}. Do you think this segment time is inaccurate and "
            f"should be removed?"
        )
