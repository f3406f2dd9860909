"""Comparison columns - the custom comparisons shown next to the split times"""

import logging
from typing import Iterable, Optional, Tuple

from runedit.models.run import Run
from runedit.session.capability import RunEditorCapability


logger = logging.getLogger(__name__)

# The engine only reports success, so duplicates and reserved names share a message
ADD_CONFLICT_MESSAGE = "The comparison could not be added. It may be a duplicate or a reserved name."
RENAME_CONFLICT_MESSAGE = "The comparison could not be renamed. It may be a duplicate or a reserved name."


class ComparisonColumns:
    """Ordered comparison names, mirrored from the engine after every refresh.

    The column order belongs to the engine; this set never reorders locally.
    """

    def __init__(self, editor: RunEditorCapability, names: Iterable[str] = ()):
        self._editor = editor
        self._names: Tuple[str, ...] = tuple(names)

    @property
    def names(self) -> Tuple[str, ...]:
        return self._names

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def index_of(self, name: str) -> Optional[int]:
        try:
            return self._names.index(name)
        except ValueError:
            return None

    def name_at(self, column: int) -> Optional[str]:
        if 0 <= column < len(self._names):
            return self._names[column]
        return None

    def sync(self, names: Iterable[str]) -> None:
        self._names = tuple(names)

    def add(self, name: str) -> bool:
        ok = self._editor.add_comparison(name)
        if not ok:
            logger.info("Comparison %r was rejected", name)
        return ok

    def rename(self, old: str, new: str) -> bool:
        ok = self._editor.rename_comparison(old, new)
        if not ok:
            logger.info("Renaming comparison %r to %r was rejected", old, new)
        return ok

    def remove(self, name: str) -> bool:
        return self._editor.remove_comparison(name)

    def import_from(self, run: Run, name: str) -> bool:
        ok = self._editor.import_comparison(run, name)
        if not ok:
            logger.info("Importing comparison %r was rejected", name)
        return ok
