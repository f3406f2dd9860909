"""Icon cache - keeps icon URLs stable across snapshots"""

from typing import Dict, Optional, Union

from runedit.models.state import GAME_SLOT


Slot = Union[str, int]


class IconCache:
    """Last known icon URL per slot (the game, or a segment index).

    A slot is only recomputed when a snapshot carries a change token for it;
    snapshots without a token keep the cached URL. Slots are never dropped.
    """

    def __init__(self):
        self._tokens: Dict[Slot, str] = {}
        self._urls: Dict[Slot, str] = {}

    def resolve(self, slot: Slot, token: Optional[str] = None) -> str:
        if token is not None and self._tokens.get(slot) != token:
            self._tokens[slot] = token
            self._urls[slot] = self._make_url(token)
        return self._urls.get(slot, "")

    def game_icon(self, token: Optional[str] = None) -> str:
        return self.resolve(GAME_SLOT, token)

    def segment_icon(self, index: int, token: Optional[str] = None) -> str:
        return self.resolve(index, token)

    def __len__(self) -> int:
        return len(self._urls)

    @staticmethod
    def _make_url(token: str) -> str:
        # Tokens are already data URLs; an empty token means the icon was removed
        return token
