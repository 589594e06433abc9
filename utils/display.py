from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

from models.card import PLACEHOLDER, Card, SlotVariant

BLANK = "___"
REVEAL_HINT = "Tap to reveal"
NOTE_PREFIX = "💡 "


def pick_variant(card: Card, rng: Optional[random.Random] = None) -> Optional[SlotVariant]:
    if not card.slot_variants:
        return None
    return (rng or random).choice(card.slot_variants)


@dataclass
class CardDisplay:
    """What is on screen for one card, from (re)display until the next navigation.

    Reveal and note are coupled: a single toggle flips both.
    """

    card: Card
    variant: Optional[SlotVariant]
    prompt: str
    answer: str
    masked_answer: str
    revealed: bool = False
    show_note: bool = False

    def toggle(self) -> None:
        self.revealed = not self.revealed
        self.show_note = self.revealed

    @property
    def shown_answer(self) -> str:
        return self.answer if self.revealed else self.masked_answer

    @property
    def shown_note(self) -> str:
        if self.show_note and self.card.note:
            return NOTE_PREFIX + self.card.note
        return ""


def present(card: Card, rng: Optional[random.Random] = None) -> CardDisplay:
    variant = pick_variant(card, rng)
    if variant is None:
        return CardDisplay(
            card=card,
            variant=None,
            prompt=card.prompt_text,
            answer=card.answer_text,
            masked_answer=REVEAL_HINT,
        )
    return CardDisplay(
        card=card,
        variant=variant,
        prompt=card.prompt_text.replace(PLACEHOLDER, variant.prompt_fragment, 1),
        answer=card.answer_text.replace(PLACEHOLDER, variant.answer_fragment, 1),
        masked_answer=card.answer_text.replace(PLACEHOLDER, BLANK, 1),
    )
