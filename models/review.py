from pydantic import BaseModel, Field
from enum import Enum

class Grade(str, Enum):
    AGAIN = "again"
    GOOD = "good"

class ReviewState(BaseModel):
    """Scheduling state of one card. A card without one has never been graded."""
    interval_days: int = Field(ge=0)
    due_day: int

    class Config:
        frozen = True
