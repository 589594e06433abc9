from .card import Card, SlotVariant, PLACEHOLDER
from .review import ReviewState, Grade
from .daily import DailyGoal

__all__ = ['Card', 'SlotVariant', 'PLACEHOLDER', 'ReviewState', 'Grade', 'DailyGoal']
