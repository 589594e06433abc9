from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple

from models.card import Card
from utils.scheduling import SchedulingStore

BLOCK_SIZE = 30

MODE_BLOCK = "block"
MODE_SCENE = "scene"
MODE_CHRONOLOGICAL = "chronological"
MODE_DUE = "due"


def block_index_of(card_id: int) -> int:
    """1-based block number; ids 1-30 are block 1, 31-60 block 2, and so on."""
    return (card_id - 1) // BLOCK_SIZE + 1


def block_bounds(block_index: int) -> Tuple[int, int]:
    start = (block_index - 1) * BLOCK_SIZE + 1
    return start, block_index * BLOCK_SIZE


def _by_id(cards) -> List[Card]:
    return sorted(cards, key=lambda card: card.id)


class DeckSelector:
    """The working set of cards being drilled and the cursor into it."""

    def __init__(self, cards: Sequence[Card], scheduling: SchedulingStore):
        self.cards: List[Card] = list(cards)
        self.scheduling = scheduling
        self.working_set: List[Card] = []
        self.cursor = 0
        self.mode: Optional[str] = None
        self.mode_arg: Optional[object] = None

    def _switch(self, cards: List[Card], mode: str, arg: Optional[object] = None) -> None:
        self.working_set = cards
        self.cursor = 0
        self.mode = mode
        self.mode_arg = arg

    def select_block(self, block_index: int) -> bool:
        cards = self.block_cards(block_index)
        self._switch(cards, MODE_BLOCK, block_index)
        return bool(cards)

    def select_scene(self, scene: str) -> bool:
        cards = _by_id(c for c in self.cards if c.scene == scene)
        if not cards:
            return False
        self._switch(cards, MODE_SCENE, scene)
        return True

    def select_chronological(self) -> bool:
        self._switch(_by_id(self.cards), MODE_CHRONOLOGICAL)
        return bool(self.working_set)

    def select_due(self, today: Optional[int] = None) -> bool:
        """Returns False, keeping the current set, when nothing is due."""
        if today is None:
            today = self.scheduling.today()
        cards = _by_id(c for c in self.cards if self.scheduling.is_due(c.id, today))
        if not cards:
            return False
        self._switch(cards, MODE_DUE, today)
        return True

    def advance(self) -> Optional[Card]:
        if not self.working_set:
            return None
        self.cursor = (self.cursor + 1) % len(self.working_set)
        return self.current()

    def current(self) -> Optional[Card]:
        if not self.working_set:
            return None
        return self.working_set[self.cursor]

    def current_block_index(self) -> int:
        if not self.working_set:
            return 1
        return block_index_of(self.working_set[0].id)

    def max_block_index(self) -> int:
        if not self.cards:
            return 1
        return math.ceil(max(card.id for card in self.cards) / BLOCK_SIZE)

    def scenes(self) -> List[str]:
        """Distinct non-empty scenes in source order."""
        seen = set()
        scenes: List[str] = []
        for card in self.cards:
            if card.scene and card.scene not in seen:
                seen.add(card.scene)
                scenes.append(card.scene)
        return scenes

    def block_cards(self, block_index: int) -> List[Card]:
        return _by_id(c for c in self.cards if block_index_of(c.id) == block_index)

    def block_progress(self, block_index: int) -> Tuple[int, int]:
        return self.scheduling.progress_ratio(c.id for c in self.block_cards(block_index))

    def current_progress(self) -> Tuple[int, int]:
        return self.block_progress(self.current_block_index())
