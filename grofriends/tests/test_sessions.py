from datetime import timedelta

import pytest
from sqlalchemy import select, func

from grofriends.crud import create_user
from grofriends.models import AsyncSessionLocal
from grofriends.models.session_tokens import SessionToken
from grofriends.sessions import (
    create_session,
    resolve_session,
    delete_session,
    purge_expired_sessions,
    hash_token,
)


async def count_sessions():
    async with AsyncSessionLocal() as session:
        q = await session.execute(select(func.count(SessionToken.id)))
        return q.scalar()


@pytest.mark.asyncio
async def test_session_roundtrip_stores_only_hash(db):
    user = await create_user('ann@example.com', 'Ann', 'x')
    token = await create_session(user.id)

    assert token['token_type'] == 'bearer'
    assert len(token['access_token']) == 64

    async with AsyncSessionLocal() as session:
        stored = (await session.execute(select(SessionToken.token_hash))).scalar()
    assert stored == hash_token(token['access_token'])
    assert stored != token['access_token']

    resolved = await resolve_session(token['access_token'])
    assert resolved['id'] == user.id
    assert resolved['email'] == 'ann@example.com'

    assert await delete_session(token['access_token']) is True
    assert await resolve_session(token['access_token']) is None
    assert await delete_session(token['access_token']) is False


@pytest.mark.asyncio
async def test_expired_session_is_deleted_on_use(db):
    user = await create_user('ann@example.com', 'Ann', 'x')
    token = await create_session(user.id, ttl=timedelta(seconds=-1))
    assert await count_sessions() == 1

    assert await resolve_session(token['access_token']) is None
    assert await count_sessions() == 0


@pytest.mark.asyncio
async def test_unknown_or_empty_token(db):
    assert await resolve_session('') is None
    assert await resolve_session('f' * 64) is None


@pytest.mark.asyncio
async def test_purge_removes_only_expired(db):
    user = await create_user('ann@example.com', 'Ann', 'x')
    await create_session(user.id, ttl=timedelta(minutes=-5))
    await create_session(user.id, ttl=timedelta(days=-1))
    live = await create_session(user.id)

    assert await purge_expired_sessions() == 2
    assert await count_sessions() == 1
    assert (await resolve_session(live['access_token']))['id'] == user.id


@pytest.mark.asyncio
async def test_expired_token_is_rejected_over_http(client):
    user = await create_user('ann@example.com', 'Ann', 'x')
    token = await create_session(user.id, ttl=timedelta(seconds=-1))

    r = await client.get('/api/auth/me', headers={'Authorization': f"Bearer {token['access_token']}"})
    assert r.status_code == 401
