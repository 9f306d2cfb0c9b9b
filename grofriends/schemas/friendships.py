from pydantic import BaseModel

class InviteIn(BaseModel):
    email: str

class FriendshipIdIn(BaseModel):
    friendship_id: int

class InviteOut(BaseModel):
    friendship_id: int
    status: str

class FriendshipOut(BaseModel):
    friendship_id: int
    other_user_id: int
    other_name: str
    other_email: str
    status: str
    requested_by: int
    can_accept: bool

class AreFriendsOut(BaseModel):
    friends: bool
