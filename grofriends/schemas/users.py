from pydantic import BaseModel, EmailStr
from typing import Optional
from datetime import datetime

class RegisterIn(BaseModel):
    email: EmailStr
    name: str = ''
    password: str

class LoginIn(BaseModel):
    email: str
    password: str

class TokenOut(BaseModel):
    access_token: str
    token_type: str = 'bearer'
    expires_at: datetime

class UserOut(BaseModel):
    id: int
    email: str
    name: str
    locale: Optional[str] = None
    theme: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class PublicUserOut(BaseModel):
    id: int
    email: str
    name: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class PrefsIn(BaseModel):
    name: str = ''
    locale: str = 'auto'
    theme: str = 'pastel'

class PrefsOut(BaseModel):
    name: str
    locale: str
    theme: str

    class Config:
        from_attributes = True

class ActionOkOut(BaseModel):
    ok: bool = True
    message: Optional[str] = None
