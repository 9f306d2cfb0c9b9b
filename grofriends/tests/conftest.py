import os
import tempfile
from pathlib import Path

import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Configure test environment before the package reads it
TEST_DB = Path(tempfile.mkdtemp(prefix='grofriends-')) / 'test.db'
os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{TEST_DB}'
os.environ.setdefault('REDIS_URL', '')
os.environ['METRICS_ENABLED'] = '0'

from grofriends.main import app  # noqa: E402
from grofriends.models import Base, engine  # noqa: E402
from grofriends.ratelimit import limiter  # noqa: E402
from grofriends.push import hub  # noqa: E402


@pytest_asyncio.fixture
async def db():
    """Fresh schema, empty rate-limit counters and no push listeners per test."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    await limiter.reset()
    hub.clear()
    yield
    await engine.dispose()


@pytest_asyncio.fixture
async def client(db):
    async with AsyncClient(transport=ASGITransport(app=app), base_url='http://test') as ac:
        yield ac


@pytest_asyncio.fixture
async def signup(client):
    """Register and log in a user; returns (user_json, auth_headers)."""
    async def _signup(email, name, password='password123'):
        r = await client.post('/api/auth/register', json={'email': email, 'name': name, 'password': password})
        assert r.status_code == 201, r.text
        l = await client.post('/api/auth/login', json={'email': email, 'password': password})
        assert l.status_code == 200, l.text
        return r.json(), {'Authorization': f"Bearer {l.json()['access_token']}"}
    return _signup


@pytest_asyncio.fixture
async def users(signup):
    """alice (id 1), bob (id 2) and carol (id 3), each as (user_json, auth_headers)."""
    return {
        'alice': await signup('alice@example.com', 'Alice'),
        'bob': await signup('bob@example.com', 'Bob'),
        'carol': await signup('carol@example.com', 'Carol'),
    }
