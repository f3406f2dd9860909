"""Sum of best cleanup - ask the user about each proposed correction in turn"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

from runedit.session.capability import CleanupHandle, Proposal


logger = logging.getLogger(__name__)


@dataclass
class CleanupResult:
    """How a cleanup pass went"""
    proposed: int = 0
    applied: int = 0

    @property
    def declined(self) -> int:
        return self.proposed - self.applied


class CleanupWorkflow:
    """Scoped walk over the cleaner's proposals.

    Use as a context manager; the cleaner is disposed and ``on_finish`` runs
    exactly once when the block ends, also when it ends early. Proposals are
    requested one at a time, so an applied correction is visible to the
    cleaner before it proposes the next one.

        with session.sum_of_best_cleanup() as workflow:
            for proposal in workflow:
                if ask(proposal.message):
                    workflow.apply(proposal)
    """

    def __init__(self, handle: CleanupHandle, on_finish: Optional[Callable[[], None]] = None):
        self._handle = handle
        self._on_finish = on_finish
        self._closed = False
        self.result = CleanupResult()

    def __enter__(self) -> "CleanupWorkflow":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False

    def __iter__(self) -> Iterator[Proposal]:
        while not self._closed:
            proposal = self._handle.next()
            if proposal is None:
                return
            self.result.proposed += 1
            yield proposal

    def apply(self, proposal: Proposal) -> None:
        self._handle.apply(proposal)
        self.result.applied += 1

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._handle.dispose()
        finally:
            logger.info(
                "Sum of best cleanup finished: %d proposed, %d applied",
                self.result.proposed, self.result.applied,
            )
            if self._on_finish is not None:
                self._on_finish()


def run_cleanup(workflow: CleanupWorkflow, confirm: Callable[[str], bool]) -> CleanupResult:
    """Drive a workflow to the end, applying every proposal ``confirm`` accepts"""
    with workflow:
        for proposal in workflow:
            if confirm(proposal.message):
                workflow.apply(proposal)
    return workflow.result
