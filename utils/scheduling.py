"""Review scheduling: per-card intervals and the daily "good" quota.

The algorithm is deliberately small. "again" resets a card to interval 0 and
makes it due today; "good" doubles the interval (starting at 1) up to
MAX_INTERVAL_DAYS. Days are UTC day indexes, not local calendar dates.
"""
from __future__ import annotations

import logging
import time
from typing import Callable, Dict, Iterable, Optional, Tuple

from pydantic import ValidationError

from config import DEFAULT_DAILY_GOAL
from models.daily import DailyGoal
from models.review import ReviewState

logger = logging.getLogger(__name__)

SRS_KEY = "srs_v3"
DAILY_KEY = "daily_v3"

MS_PER_DAY = 86_400_000
MAX_INTERVAL_DAYS = 120


def day_index(now_ms: Optional[int] = None) -> int:
    """Whole UTC days since the epoch."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return now_ms // MS_PER_DAY


def next_interval_good(prior: int) -> int:
    if prior <= 0:
        return 1
    return min(MAX_INTERVAL_DAYS, prior * 2)


class SchedulingStore:
    """Owns ReviewState per card and the DailyGoal singleton.

    Every mutation is written through to ``store`` before returning.
    Store errors are not caught and reach the caller.
    """

    def __init__(
        self,
        store,
        clock: Callable[[], int] = day_index,
        default_goal: int = DEFAULT_DAILY_GOAL,
    ):
        self.store = store
        self.clock = clock
        self.default_goal = default_goal
        self.reviews: Dict[int, ReviewState] = {}
        self.daily = DailyGoal(day=clock(), good_count=0, goal=default_goal)
        self.load()

    def today(self) -> int:
        return self.clock()

    def load(self) -> None:
        self.reviews = self._load_reviews()
        self.daily = self._load_daily()
        self.ensure_daily()

    def _load_reviews(self) -> Dict[int, ReviewState]:
        raw = self.store.get(SRS_KEY)
        if raw is None:
            return {}
        if not isinstance(raw, dict):
            logger.warning("Review state is not a mapping, starting empty")
            return {}
        reviews: Dict[int, ReviewState] = {}
        for key, value in raw.items():
            try:
                card_id = int(key)
                reviews[card_id] = ReviewState.model_validate(value)
            except (ValueError, TypeError, ValidationError):
                logger.warning("Dropping malformed review state for card %r", key)
        return reviews

    def _load_daily(self) -> DailyGoal:
        raw = self.store.get(DAILY_KEY)
        if raw is not None:
            try:
                return DailyGoal.model_validate(raw)
            except ValidationError:
                logger.warning("Daily goal record is malformed, resetting")
        return DailyGoal(day=self.today(), good_count=0, goal=self.default_goal)

    def save_reviews(self) -> None:
        self.store.set(
            SRS_KEY,
            {str(card_id): state.model_dump() for card_id, state in self.reviews.items()},
        )

    def save_daily(self) -> None:
        self.store.set(DAILY_KEY, self.daily.model_dump())

    def ensure_daily(self) -> DailyGoal:
        """Roll the daily counter over when the stored day is not today."""
        today = self.today()
        if self.daily.day != today:
            self.daily = DailyGoal(day=today, good_count=0, goal=self.daily.goal)
            self.save_daily()
        return self.daily

    def daily_goal(self) -> DailyGoal:
        return self.ensure_daily()

    def set_goal(self, goal: int) -> DailyGoal:
        if goal <= 0:
            raise ValueError("Daily goal must be positive")
        self.ensure_daily()
        self.daily.goal = goal
        self.save_daily()
        return self.daily

    def review_state(self, card_id: int) -> Optional[ReviewState]:
        return self.reviews.get(card_id)

    def prior_interval(self, card_id: int) -> int:
        state = self.review_state(card_id)
        if state is None:
            return 0
        return state.interval_days

    def grade_again(self, card_id: int) -> ReviewState:
        state = ReviewState(interval_days=0, due_day=self.today())
        self.reviews[card_id] = state
        self.save_reviews()
        return state

    def grade_good(self, card_id: int) -> ReviewState:
        today = self.today()
        interval = next_interval_good(self.prior_interval(card_id))
        state = ReviewState(interval_days=interval, due_day=today + interval)
        self.reviews[card_id] = state
        self.save_reviews()

        self.ensure_daily()
        self.daily.good_count += 1
        self.save_daily()
        return state

    def is_due(self, card_id: int, today: Optional[int] = None) -> bool:
        """Never-reviewed cards are not due; only scheduled cards come back."""
        state = self.review_state(card_id)
        if state is None:
            return False
        if today is None:
            today = self.today()
        return state.due_day <= today

    def progress_ratio(self, card_ids: Iterable[int]) -> Tuple[int, int]:
        """(learned, total) where learned means a positive interval."""
        ids = list(card_ids)
        learned = sum(1 for card_id in ids if self.prior_interval(card_id) > 0)
        return learned, len(ids)
