from pydantic import BaseModel
from typing import Optional
from datetime import datetime

class PostIn(BaseModel):
    content: str

class PostOut(BaseModel):
    id: int
    user_id: int
    goal_id: Optional[int] = None
    content: str
    created_at: datetime
    name: str
    email: str
    like_count: int = 0
    comment_count: int = 0

class CommentIn(BaseModel):
    text: str

class CommentOut(BaseModel):
    id: int
    text: str
    created_at: datetime
    name: str
    email: str

class LikeOut(BaseModel):
    liked: bool
    like_count: int
