from fastapi import APIRouter, Depends, HTTPException
import logging

from ..schemas.users import RegisterIn, LoginIn, TokenOut, UserOut, ActionOkOut
from ..crud import create_user, get_user_by_email, get_user_by_id
from ..auth import hash_password, verify_password, get_current_user
from ..sessions import create_session, delete_session
from ..config import PASSWORD_MIN_LEN, PASSWORD_MAX_LEN
from ..errors import InvalidOperation, NotFound

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post('/register', response_model=UserOut, status_code=201)
async def register(payload: RegisterIn):
    password = payload.password or ''
    if not PASSWORD_MIN_LEN <= len(password) <= PASSWORD_MAX_LEN:
        raise InvalidOperation('Invalid password length')

    user = await create_user(
        email=payload.email.strip().lower(),
        name=payload.name.strip(),
        hashed_password=hash_password(password),
    )
    logger.info({'msg': 'user_registered', 'user_id': user.id})
    return user


@router.post('/login', response_model=TokenOut)
async def login(payload: LoginIn):
    user = await get_user_by_email((payload.email or '').strip().lower())
    if not user or not verify_password(payload.password, user.hashed_password):
        raise HTTPException(status_code=401, detail='Invalid credentials')

    token = await create_session(user.id)
    logger.info({'msg': 'user_logged_in', 'user_id': user.id})
    return token


@router.get('/me', response_model=UserOut)
async def me(current_user: dict = Depends(get_current_user)):
    user = await get_user_by_id(current_user['id'])
    if not user:
        raise NotFound('User not found')
    return user


@router.post('/logout', response_model=ActionOkOut)
async def logout(current_user: dict = Depends(get_current_user)):
    await delete_session(current_user['token'])
    logger.info({'msg': 'user_logged_out', 'user_id': current_user['id']})
    return {'ok': True}
