"""Trainer: the single drilling session behind the web UI.

Each command runs to completion and leaves the session ready to render.
Commands on an empty deck are no-ops that return False.
"""
from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from models.card import Card
from models.review import Grade
from utils.card_source import load_cards
from utils.deck import DeckSelector
from utils.display import CardDisplay, present
from utils.progress import BlockSummary, block_summary, daily_done, daily_percent, progress_percent
from utils.scheduling import SchedulingStore

logger = logging.getLogger(__name__)

NOTHING_DUE = "No cards are due for review."
NO_SUCH_SCENE = "No cards in that scene."


class Trainer:
    def __init__(
        self,
        cards: Sequence[Card],
        scheduling: SchedulingStore,
        rng: Optional[random.Random] = None,
    ):
        self.scheduling = scheduling
        self.deck = DeckSelector(cards, scheduling)
        self.rng = rng or random.Random()
        self.display: Optional[CardDisplay] = None
        self.notice = ""
        self.deck.select_block(1)
        self._present()

    def _present(self) -> None:
        card = self.deck.current()
        self.display = present(card, self.rng) if card else None

    def _switched(self, switched: bool, failure_notice: str = "") -> bool:
        if switched:
            self.notice = ""
            self._present()
        else:
            self.notice = failure_notice
        return switched

    def next_card(self) -> bool:
        self.notice = ""
        if self.deck.advance() is None:
            return False
        self._present()
        return True

    def toggle_reveal(self) -> bool:
        if self.display is None:
            return False
        self.display.toggle()
        return True

    def grade(self, grade: Grade) -> bool:
        """Grade the current card, then move to the next one."""
        card = self.deck.current()
        if card is None:
            return False
        if grade is Grade.GOOD:
            self.scheduling.grade_good(card.id)
        else:
            self.scheduling.grade_again(card.id)
        return self.next_card()

    def grade_again(self) -> bool:
        return self.grade(Grade.AGAIN)

    def grade_good(self) -> bool:
        return self.grade(Grade.GOOD)

    def show_chronological(self) -> bool:
        self.deck.select_chronological()
        return self._switched(True)

    def show_due(self) -> bool:
        return self._switched(self.deck.select_due(), NOTHING_DUE)

    def show_block(self, block_index: int) -> bool:
        self.deck.select_block(block_index)
        return self._switched(True)

    def show_scene(self, scene: str) -> bool:
        return self._switched(self.deck.select_scene(scene), NO_SUCH_SCENE)

    def set_goal(self, goal: int) -> None:
        self.scheduling.set_goal(goal)

    def blocks(self) -> List[BlockSummary]:
        summaries = []
        for index in range(1, self.deck.max_block_index() + 1):
            learned, total = self.deck.block_progress(index)
            summaries.append(block_summary(index, learned, total))
        return summaries

    def snapshot(self) -> Dict[str, Any]:
        """Plain data for templates and the JSON state endpoint."""
        learned, total = self.deck.current_progress()
        daily = self.scheduling.daily_goal()
        card = None
        if self.display is not None:
            shown = self.display
            card = {
                "id": shown.card.id,
                "prompt": shown.prompt,
                "answer": shown.shown_answer,
                "note": shown.shown_note,
                "revealed": shown.revealed,
                "media_ref": shown.card.media_ref,
                "level": shown.card.level,
                "scene": shown.card.scene,
            }
        return {
            "mode": self.deck.mode,
            "mode_arg": self.deck.mode_arg,
            "cursor": self.deck.cursor,
            "deck_size": len(self.deck.working_set),
            "card": card,
            "notice": self.notice,
            "progress": {
                "block": self.deck.current_block_index(),
                "learned": learned,
                "total": total,
                "percent": progress_percent(learned, total),
            },
            "daily": {
                "done": daily_done(daily),
                "good_count": daily.good_count,
                "goal": daily.goal,
                "percent": daily_percent(daily),
            },
            "blocks": [
                {"index": b.index, "label": b.label, "percent": b.percent}
                for b in self.blocks()
            ],
            "scenes": self.deck.scenes(),
        }


def build_trainer(csv_path: Path, scheduling: SchedulingStore) -> Trainer:
    """Load cards and start a session; an unreadable source yields an empty deck."""
    try:
        cards = load_cards(csv_path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Could not load cards from %s: %s", csv_path, exc)
        cards = []
    logger.info("Loaded %d cards from %s", len(cards), csv_path)
    return Trainer(cards, scheduling)
