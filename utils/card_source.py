"""Phrase CSV loading.

Header: ``no,jp,en,slots,video,lv,note,scene``. The header line is skipped.
Quotes toggle comma splitting and are stripped from each field. There is no
escaped-quote syntax.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import ValidationError

from models.card import Card, SlotVariant

logger = logging.getLogger(__name__)

SLOT_SEPARATOR = "|"
SLOT_PAIR_SEPARATOR = "="


def split_csv_line(line: str) -> List[str]:
    fields: List[str] = []
    current = ""
    in_quotes = False
    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append(current)
            current = ""
        else:
            current += char
    fields.append(current)
    return [_strip_quotes(field) for field in fields]


def _strip_quotes(field: str) -> str:
    if field.startswith('"'):
        field = field[1:]
    if field.endswith('"'):
        field = field[:-1]
    return field


def parse_slot_variants(raw: str) -> Optional[Tuple[SlotVariant, ...]]:
    if not raw:
        return None
    variants = []
    for item in raw.split(SLOT_SEPARATOR):
        if not item:
            continue
        prompt_fragment, _, answer_fragment = item.partition(SLOT_PAIR_SEPARATOR)
        variants.append(SlotVariant(prompt_fragment=prompt_fragment, answer_fragment=answer_fragment))
    return tuple(variants) or None


def _column(cols: List[str], index: int) -> str:
    return cols[index] if index < len(cols) else ""


def _parse_level(raw: str) -> int:
    try:
        return int(raw or "1")
    except ValueError:
        return 1


def parse_card_line(line: str) -> Optional[Card]:
    cols = split_csv_line(line)
    try:
        card_id = int(_column(cols, 0).strip())
    except ValueError:
        logger.warning("Skipping card row without integer id: %r", line)
        return None
    try:
        return Card(
            id=card_id,
            prompt_text=_column(cols, 1),
            answer_text=_column(cols, 2),
            slot_variants=parse_slot_variants(_column(cols, 3)),
            media_ref=_column(cols, 4),
            level=_parse_level(_column(cols, 5).strip()),
            note=_column(cols, 6),
            scene=_column(cols, 7),
        )
    except ValidationError as exc:
        logger.warning("Skipping invalid card row %r: %s", line, exc)
        return None


def parse_cards(text: str) -> List[Card]:
    """Parse CSV text into cards, dropping duplicate ids after the first."""
    lines = text.strip().splitlines()
    cards: List[Card] = []
    seen = set()
    for line in lines[1:]:
        if not line.strip():
            continue
        card = parse_card_line(line)
        if card is None:
            continue
        if card.id in seen:
            logger.warning("Skipping duplicate card id %d", card.id)
            continue
        seen.add(card.id)
        cards.append(card)
    return cards


def load_cards(path: Path) -> List[Card]:
    """Read cards from a CSV file. Raises OSError/UnicodeDecodeError on failure."""
    text = Path(path).read_text(encoding="utf-8-sig")
    return parse_cards(text)
