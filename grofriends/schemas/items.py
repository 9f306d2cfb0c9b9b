from pydantic import BaseModel
from typing import Union
from datetime import datetime

class ItemIn(BaseModel):
    title: str
    # loose on input, clamped to 1..9999 on insert
    qty: Union[int, float, str, None] = 1
    note: str = ''

class ItemOut(BaseModel):
    id: int
    title: str
    qty: int
    note: str
    done: bool
    created_at: datetime

    class Config:
        from_attributes = True
