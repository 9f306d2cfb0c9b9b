from fastapi import APIRouter, Depends, HTTPException
from typing import List
import logging

from ..schemas.messages import MessageIn, MessageOut
from ..schemas.users import ActionOkOut
from ..crud import clamp, send_message, list_dialog
from ..auth import get_current_user
from ..gate import require_friend
from ..errors import InvalidOperation
from ..ratelimit import check_rate_limit
from ..push import hub

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get('', response_model=List[MessageOut])
async def dialog(friend_id: int, limit: str = '50', offset: str = '0', current_user: dict = Depends(get_current_user)):
    await require_friend(current_user['id'], friend_id)
    return await list_dialog(current_user['id'], friend_id, clamp(limit, 1, 100), clamp(offset, 0, 1_000_000))

@router.post('/send', response_model=ActionOkOut, status_code=201)
async def send(payload: MessageIn, current_user: dict = Depends(get_current_user)):
    # Rate limiting - max 100 messages per hour
    if not await check_rate_limit(current_user['id'], 'send_message', limit=100, window=3600):
        raise HTTPException(429, 'Rate limit exceeded. Too many messages.')

    text = payload.text.strip()
    if not text:
        raise InvalidOperation('Missing friend_id or text')
    await require_friend(current_user['id'], payload.friend_id)

    m = await send_message(current_user['id'], payload.friend_id, text)
    event = {'sender_id': m.sender_id, 'text': m.text, 'created_at': m.created_at}
    hub.send_to(payload.friend_id, 'dm:new', event)
    hub.send_to(current_user['id'], 'dm:new', event)
    logger.info({'msg': 'dm_sent', 'message_id': m.id})
    return {'ok': True}
