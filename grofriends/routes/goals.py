from fastapi import APIRouter, Depends
from typing import List
import logging

from ..schemas.goals import GoalIn, GoalOut, PublishOut
from ..crud import list_goals, create_goal, publish_goal, get_post
from ..auth import get_current_user
from ..errors import InvalidOperation
from ..push import hub

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get('', response_model=List[GoalOut])
async def goals(current_user: dict = Depends(get_current_user)):
    return await list_goals(current_user['id'])

@router.post('', response_model=GoalOut, status_code=201)
async def create(payload: GoalIn, current_user: dict = Depends(get_current_user)):
    title = payload.title.strip()
    if not title:
        raise InvalidOperation('Missing title')
    return await create_goal(current_user['id'], title, payload.target_date)

@router.post('/{goal_id}/publish', response_model=PublishOut)
async def publish(goal_id: int, current_user: dict = Depends(get_current_user)):
    post_id = await publish_goal(current_user['id'], goal_id)
    if post_id is not None:
        post = await get_post(post_id)
        hub.broadcast('feed:new', post)
        logger.info({'msg': 'goal_published', 'goal_id': goal_id, 'post_id': post_id})
    return {'ok': True, 'post_id': post_id}
