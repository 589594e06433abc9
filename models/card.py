from pydantic import BaseModel, validator
from typing import Optional, Tuple

PLACEHOLDER = "{x}"

class SlotVariant(BaseModel):
    prompt_fragment: str
    answer_fragment: str

    class Config:
        frozen = True

class Card(BaseModel):
    id: int
    prompt_text: str
    answer_text: str
    slot_variants: Optional[Tuple[SlotVariant, ...]] = None
    media_ref: str = ""
    level: int = 1
    note: str = ""
    scene: str = ""

    class Config:
        frozen = True

    @validator('slot_variants')
    def validate_slot_variants(cls, v):
        if v is not None and len(v) == 0:
            raise ValueError("slot_variants must be None or non-empty")
        return v
