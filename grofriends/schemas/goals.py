from pydantic import BaseModel
from typing import List, Optional
from datetime import date, datetime

from .posts import PostOut
from .users import PublicUserOut

class GoalIn(BaseModel):
    title: str
    target_date: Optional[date] = None

class GoalOut(BaseModel):
    id: int
    title: str
    target_date: Optional[date] = None
    is_public: bool
    created_at: datetime

    class Config:
        from_attributes = True

class PublishOut(BaseModel):
    ok: bool = True
    post_id: Optional[int] = None

class FriendProfileOut(BaseModel):
    profile: PublicUserOut
    goals: List[GoalOut]
    feed: List[PostOut]
