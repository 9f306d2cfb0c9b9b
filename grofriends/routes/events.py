from fastapi import APIRouter, Query, Request
from fastapi.responses import PlainTextResponse, StreamingResponse
import asyncio

from ..config import EVENTS_KEEPALIVE_SECONDS
from ..push import hub, format_event
from ..sessions import resolve_session

router = APIRouter()


async def event_stream(request: Request, user_id: int):
    queue = hub.connect(user_id)
    try:
        yield format_event('ping', {})
        while True:
            if await request.is_disconnected():
                break
            try:
                payload = await asyncio.wait_for(queue.get(), timeout=EVENTS_KEEPALIVE_SECONDS)
            except asyncio.TimeoutError:
                payload = format_event('ping', {})
            yield payload
    finally:
        hub.disconnect(user_id, queue)


@router.get('')
async def events(request: Request, token: str = Query('')):
    # EventSource cannot send headers, so the token rides in the query string
    user = await resolve_session(token)
    if not user:
        return PlainTextResponse('Unauthorized', status_code=401)
    return StreamingResponse(
        event_stream(request, user['id']),
        media_type='text/event-stream',
        headers={
            'Cache-Control': 'no-cache',
            'Connection': 'keep-alive',
            'X-Accel-Buffering': 'no',
        },
    )
