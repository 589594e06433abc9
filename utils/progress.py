from __future__ import annotations

from dataclasses import dataclass

from models.daily import DailyGoal
from utils.deck import block_bounds


@dataclass(frozen=True)
class BlockSummary:
    index: int
    label: str
    learned: int
    total: int
    percent: int


def progress_percent(learned: int, total: int) -> int:
    if total <= 0:
        return 0
    return round((learned / total) * 100)


def daily_percent(daily: DailyGoal) -> int:
    return min(100, round((daily.good_count / daily.goal) * 100))


def daily_done(daily: DailyGoal) -> int:
    """Count shown next to the goal; capped so it never reads past it."""
    return min(daily.good_count, daily.goal)


def block_summary(block_index: int, learned: int, total: int) -> BlockSummary:
    start, end = block_bounds(block_index)
    percent = progress_percent(learned, total)
    return BlockSummary(
        index=block_index,
        label=f"{start}-{end} {percent}%",
        learned=learned,
        total=total,
        percent=percent,
    )
