"""
Fixed-window rate limiting over a swappable counter store.

The limiter never owns global state directly: it wraps a RateLimitStore
that can be replaced (Redis in production) or reset (tests).
"""
import logging
import time
from typing import Dict, List, Optional

from redis.exceptions import RedisError

logger = logging.getLogger(__name__)


class RateLimitStore:
    """key -> counter within a window"""

    async def hit(self, key: str, window: int) -> int:
        """Increment the counter for key and return its value in the current window"""
        raise NotImplementedError

    async def reset(self) -> None:
        raise NotImplementedError


class InMemoryRateLimitStore(RateLimitStore):

    def __init__(self, clock=time.monotonic):
        self._clock = clock
        self._windows: Dict[str, List] = {}

    async def hit(self, key: str, window: int) -> int:
        now = self._clock()
        entry = self._windows.get(key)
        if entry is None or now - entry[0] >= window:
            entry = [now, 0]
            self._windows[key] = entry
        entry[1] += 1
        return entry[1]

    async def reset(self) -> None:
        self._windows.clear()


class RedisRateLimitStore(RateLimitStore):

    def __init__(self, redis, prefix: str = 'rate'):
        self.redis = redis
        self.prefix = prefix

    async def hit(self, key: str, window: int) -> int:
        """Fails open: while Redis is unreachable every hit is allowed."""
        cache_key = f"{self.prefix}:{key}"
        try:
            count = await self.redis.incr(cache_key)
            if count == 1:
                await self.redis.expire(cache_key, window)
        except RedisError as e:
            logger.warning({'msg': 'rate_limit_store_unavailable', 'key': key, 'error': str(e)})
            return 0
        return int(count)

    async def reset(self) -> None:
        async for key in self.redis.scan_iter(match=f"{self.prefix}:*"):
            await self.redis.delete(key)


class RateLimiter:

    def __init__(self, store: Optional[RateLimitStore] = None):
        self.store = store or InMemoryRateLimitStore()

    def use(self, store: RateLimitStore):
        self.store = store

    async def allow(self, key: str, limit: int, window: int) -> bool:
        return await self.store.hit(key, window) <= limit

    async def reset(self):
        await self.store.reset()


limiter = RateLimiter()


async def check_rate_limit(user_id: int, action: str, limit: int = 100, window: int = 3600) -> bool:
    """Check if user is within rate limit"""
    return await limiter.allow(f"user:{user_id}:{action}", limit, window)
