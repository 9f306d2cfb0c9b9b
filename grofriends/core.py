import asyncio
from prometheus_client import Counter, start_http_server
import logging

from .config import REDIS_URL, METRICS_PORT

logger = logging.getLogger(__name__)

REDIS = None

FRIENDSHIP_TRANSITIONS = Counter(
    'grofriends_friendship_transitions_total',
    'Friendship state machine transitions',
    ['transition'],
)
PUSH_EVENTS = Counter(
    'grofriends_push_events_total',
    'Events handed to connected listeners',
    ['event'],
)

def init_metrics(port: int = METRICS_PORT):
    """Initialize Prometheus metrics server"""
    try:
        start_http_server(port)
        logger.info(f"Prometheus metrics server started on port {port}")
    except OSError as e:
        logger.warning(f'Prometheus start failed: {e}')

async def redis_startup():
    """Connect to Redis if configured; leaves REDIS as None otherwise"""
    global REDIS

    if not REDIS_URL:
        logger.info("REDIS_URL not set, using in-memory stores")
        return None

    import redis.asyncio as aioredis

    max_retries = 3
    retry_delay = 3  # seconds

    for attempt in range(max_retries):
        try:
            logger.info(f"Attempting to connect to Redis: {REDIS_URL} (attempt {attempt + 1}/{max_retries})")

            REDIS = aioredis.from_url(
                REDIS_URL,
                decode_responses=True,
                max_connections=20,
                retry_on_timeout=True,
                health_check_interval=30,
                socket_connect_timeout=5,
                socket_timeout=5
            )

            # Test the connection
            await REDIS.ping()

            logger.info("Redis connected successfully")
            break

        except (aioredis.RedisError, OSError) as e:
            logger.warning(f'Redis startup attempt {attempt + 1} failed: {e}')
            if REDIS:
                await REDIS.close()
                REDIS = None

            if attempt < max_retries - 1:
                logger.info(f"Retrying Redis connection in {retry_delay} seconds...")
                await asyncio.sleep(retry_delay)
            else:
                logger.error("Failed to connect to Redis after all retries")
    return REDIS

async def shutdown_connections():
    """Gracefully shutdown all connections"""
    global REDIS
    logger.info("Shutting down connections...")

    if REDIS:
        try:
            await REDIS.close()
            logger.info("Redis connection closed")
        except OSError as e:
            logger.error(f"Error closing Redis connection: {e}")
        REDIS = None
