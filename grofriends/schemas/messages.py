from pydantic import BaseModel
from datetime import datetime

class MessageIn(BaseModel):
    friend_id: int
    text: str

class MessageOut(BaseModel):
    id: int
    sender_id: int
    text: str
    created_at: datetime
    mine: bool
