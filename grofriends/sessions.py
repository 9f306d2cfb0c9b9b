"""
Session store: opaque bearer tokens bound to one user with an absolute
expiry. Only the SHA-256 of a token is persisted. Expired rows are
deleted lazily when presented, plus one purge at startup.
"""
import hashlib
import logging
import secrets
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import select, delete

from .config import SESSION_TTL_DAYS
from .models import AsyncSessionLocal
from .models.session_tokens import SessionToken
from .models.users import User

logger = logging.getLogger(__name__)


def generate_session_token() -> str:
    # 256-bit random token, hex encoded
    return secrets.token_hex(32)

def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode('utf-8')).hexdigest()


async def create_session(user_id: int, ttl: Optional[timedelta] = None) -> dict:
    token = generate_session_token()
    now = datetime.utcnow()
    expires_at = now + (ttl if ttl is not None else timedelta(days=SESSION_TTL_DAYS))
    async with AsyncSessionLocal() as session:
        st = SessionToken(user_id=user_id, token_hash=hash_token(token), created_at=now, expires_at=expires_at)
        session.add(st)
        await session.commit()
    return {'access_token': token, 'token_type': 'bearer', 'expires_at': expires_at}


async def resolve_session(token: str) -> Optional[dict]:
    """Return {id, email, name, expires_at} for a live token, else None."""
    if not token:
        return None
    token_hash = hash_token(token)
    async with AsyncSessionLocal() as session:
        q = await session.execute(
            select(SessionToken, User)
            .join(User, User.id == SessionToken.user_id)
            .where(SessionToken.token_hash == token_hash)
        )
        row = q.first()
        if not row:
            return None
        st, user = row
        if st.expires_at < datetime.utcnow():
            await session.execute(delete(SessionToken).where(SessionToken.id == st.id))
            await session.commit()
            logger.info({'msg': 'session_expired', 'user_id': user.id})
            return None
        return {
            'id': user.id,
            'email': user.email,
            'name': user.name,
            'expires_at': st.expires_at,
            'token': token,
        }


async def delete_session(token: str) -> bool:
    async with AsyncSessionLocal() as session:
        res = await session.execute(delete(SessionToken).where(SessionToken.token_hash == hash_token(token)))
        await session.commit()
        return res.rowcount > 0


async def purge_expired_sessions() -> int:
    async with AsyncSessionLocal() as session:
        res = await session.execute(delete(SessionToken).where(SessionToken.expires_at < datetime.utcnow()))
        await session.commit()
        return res.rowcount or 0
