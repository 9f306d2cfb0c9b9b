import os

DATABASE_URL = os.getenv('DATABASE_URL') or 'sqlite+aiosqlite:///./grofriends.db'
if DATABASE_URL.startswith('postgresql://'):
    DATABASE_URL = DATABASE_URL.replace('postgresql://', 'postgresql+asyncpg://', 1)

# Redis backs the rate limiter when reachable; empty disables it
REDIS_URL = os.getenv('REDIS_URL', '')

SESSION_TTL_DAYS = int(os.getenv('SESSION_TTL_DAYS', '7'))

PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 72

RATE_LIMIT_WINDOW_SECONDS = int(os.getenv('RATE_LIMIT_WINDOW_SECONDS', '60'))
RATE_LIMIT_MAX_AUTH = int(os.getenv('RATE_LIMIT_MAX_AUTH', '40'))
RATE_LIMIT_MAX_GENERIC = int(os.getenv('RATE_LIMIT_MAX_GENERIC', '300'))

METRICS_PORT = int(os.getenv('METRICS_PORT', '8001'))
METRICS_ENABLED = os.getenv('METRICS_ENABLED', '1') == '1'

CORS_ORIGINS = [o.strip() for o in os.getenv('CORS_ORIGINS', '*').split(',') if o.strip()]

EVENTS_KEEPALIVE_SECONDS = float(os.getenv('EVENTS_KEEPALIVE_SECONDS', '25'))
EVENTS_QUEUE_SIZE = int(os.getenv('EVENTS_QUEUE_SIZE', '100'))

LOCALES = ('auto', 'en', 'es')
THEMES = ('pastel', 'dark', 'ocean', 'forest', 'rose', 'mono')
