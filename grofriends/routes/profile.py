"""
Profile routes: own preferences, account deletion and the friend-only
public profile view.
"""

from fastapi import APIRouter, Depends
import logging

from ..schemas.users import PrefsIn, PrefsOut, ActionOkOut
from ..schemas.goals import FriendProfileOut
from ..crud import (
    get_user_by_id,
    update_user_prefs,
    delete_user,
    list_public_goals,
    list_feed_by_user,
)
from ..auth import get_current_user
from ..gate import require_friend
from ..errors import NotFound

logger = logging.getLogger(__name__)

router = APIRouter()

# ==================== OWN PROFILE ====================

@router.get('/prefs', response_model=PrefsOut)
async def get_prefs(current_user: dict = Depends(get_current_user)):
    user = await get_user_by_id(current_user['id'])
    if not user:
        raise NotFound('User not found')
    return user


@router.post('/prefs', response_model=PrefsOut)
async def set_prefs(payload: PrefsIn, current_user: dict = Depends(get_current_user)):
    user = await update_user_prefs(
        current_user['id'],
        name=payload.name.strip(),
        locale=payload.locale.strip(),
        theme=payload.theme.strip(),
    )
    if not user:
        raise NotFound('User not found')
    return user


@router.post('/delete', response_model=ActionOkOut)
async def delete_account(current_user: dict = Depends(get_current_user)):
    """Delete the account together with everything it owns"""
    await delete_user(current_user['id'])
    logger.info({'msg': 'account_deleted', 'user_id': current_user['id']})
    return ActionOkOut(message='Account deleted')

# ==================== FRIEND PROFILE ====================

@router.get('/{user_id}', response_model=FriendProfileOut)
async def view_friend_profile(user_id: int, current_user: dict = Depends(get_current_user)):
    """Profile, public goals and recent posts of an accepted friend"""
    profile = await require_friend(current_user['id'], user_id)
    goals = await list_public_goals(user_id, limit=10)
    feed = await list_feed_by_user(user_id, limit=10, offset=0)
    return {'profile': profile, 'goals': goals, 'feed': feed}
