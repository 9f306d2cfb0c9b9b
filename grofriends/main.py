from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from .routes import router
from .core import redis_startup, init_metrics, shutdown_connections
from .config import (
    CORS_ORIGINS,
    METRICS_ENABLED,
    RATE_LIMIT_WINDOW_SECONDS,
    RATE_LIMIT_MAX_AUTH,
    RATE_LIMIT_MAX_GENERIC,
)
from .errors import SocialAppError, social_error_handler
from .models import init_models
from .ratelimit import limiter, RedisRateLimitStore
from .sessions import purge_expired_sessions
import logging
from pythonjsonlogger import jsonlogger

# setup structured logging
logger = logging.getLogger('grofriends')
handler = logging.StreamHandler()
formatter = jsonlogger.JsonFormatter('%(asctime)s %(levelname)s %(name)s %(message)s')
handler.setFormatter(formatter)
logger.addHandler(handler)
logger.setLevel(logging.INFO)

SECURITY_HEADERS = {
    'X-Content-Type-Options': 'nosniff',
    'X-Frame-Options': 'DENY',
    'Referrer-Policy': 'no-referrer',
    'Permissions-Policy': 'geolocation=(), microphone=(), camera=()',
}

app = FastAPI(title="GroFriends API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

app.add_exception_handler(SocialAppError, social_error_handler)

app.include_router(router, prefix="/api")

@app.get('/healthz')
async def healthz():
    return {'status': 'ok'}

@app.middleware('http')
async def rate_limit(request: Request, call_next):
    ip = request.client.host if request.client else 'unknown'
    if request.url.path.startswith('/api/auth/'):
        bucket, limit = 'auth', RATE_LIMIT_MAX_AUTH
    else:
        bucket, limit = 'generic', RATE_LIMIT_MAX_GENERIC
    if not await limiter.allow(f"ip:{ip}:{bucket}", limit, RATE_LIMIT_WINDOW_SECONDS):
        logger.warning({'msg': 'rate_limited', 'ip': ip, 'bucket': bucket})
        return JSONResponse(status_code=429, content={'detail': 'Too many requests'})
    return await call_next(request)

@app.middleware('http')
async def log_requests(request: Request, call_next):
    logger.info({'msg':'request_start','method':request.method,'path':request.url.path})
    response = await call_next(request)
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    logger.info({'msg':'request_end','status': response.status_code})
    return response

@app.on_event("startup")
async def startup():
    await init_models()
    purged = await purge_expired_sessions()
    logger.info({'msg': 'expired_sessions_purged', 'count': purged})
    # Best-effort init, don't block app from starting if a dependency fails
    redis = await redis_startup()
    if redis is not None:
        limiter.use(RedisRateLimitStore(redis))
    if METRICS_ENABLED:
        init_metrics()

@app.on_event("shutdown")
async def shutdown():
    await shutdown_connections()
