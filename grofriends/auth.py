from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from passlib.context import CryptContext

from .sessions import resolve_session

pwd_ctx = CryptContext(schemes=['bcrypt'], deprecated='auto')

bearer_scheme = HTTPBearer(auto_error=False)

def hash_password(password: str) -> str:
    return pwd_ctx.hash(password)

def verify_password(password: str, hashed: str) -> bool:
    return pwd_ctx.verify(password, hashed)

async def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme)) -> dict:
    if not credentials:
        raise HTTPException(status_code=401, detail='Unauthorized')
    user = await resolve_session(credentials.credentials)
    if not user:
        raise HTTPException(status_code=401, detail='Unauthorized (no/invalid/expired token)')
    return user
