"""
Domain errors raised by the services and rendered by a single handler
registered in main.py. Transport-level failures (401, 429) stay as
HTTPException in the routes.
"""
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.responses import JSONResponse


class SocialAppError(Exception):
    status_code = 400
    default_detail = 'Bad request'

    def __init__(self, detail: Optional[str] = None, **extra: Any):
        self.detail = detail or self.default_detail
        self.extra: Dict[str, Any] = extra
        super().__init__(self.detail)


class NotFound(SocialAppError):
    status_code = 404
    default_detail = 'Not found'


class InvalidOperation(SocialAppError):
    status_code = 400
    default_detail = 'Invalid operation'


class Conflict(SocialAppError):
    status_code = 409
    default_detail = 'Conflict'


class Forbidden(SocialAppError):
    status_code = 403
    default_detail = 'Forbidden'


async def social_error_handler(request: Request, exc: SocialAppError):
    body = {'detail': exc.detail}
    body.update(exc.extra)
    return JSONResponse(status_code=exc.status_code, content=body)
