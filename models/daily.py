from pydantic import BaseModel, Field
from config import DEFAULT_DAILY_GOAL

class DailyGoal(BaseModel):
    day: int
    good_count: int = Field(default=0, ge=0)
    goal: int = Field(default=DEFAULT_DAILY_GOAL, gt=0)

    class Config:
        validate_assignment = True
