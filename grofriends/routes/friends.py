from fastapi import APIRouter, Depends, HTTPException
from typing import List

from ..schemas.friendships import InviteIn, InviteOut, FriendshipIdIn, FriendshipOut, AreFriendsOut
from ..schemas.users import ActionOkOut
from ..auth import get_current_user
from ..ratelimit import check_rate_limit
from .. import friendships
from ..gate import are_friends

router = APIRouter()


@router.get('', response_model=List[FriendshipOut])
async def my_friendships(current_user: dict = Depends(get_current_user)):
    """Every relationship row of the caller: incoming, outgoing and accepted"""
    return await friendships.list_for_user(current_user['id'])


@router.post('/invite', response_model=InviteOut, status_code=201)
async def invite(payload: InviteIn, current_user: dict = Depends(get_current_user)):
    # Rate limiting - max 20 invites per hour
    if not await check_rate_limit(current_user['id'], 'friend_invite', limit=20, window=3600):
        raise HTTPException(429, 'Rate limit exceeded. Too many friend requests.')

    f = await friendships.invite(current_user['id'], payload.email)
    return {'friendship_id': f.id, 'status': f.status}


@router.post('/accept', response_model=ActionOkOut)
async def accept(payload: FriendshipIdIn, current_user: dict = Depends(get_current_user)):
    await friendships.accept(current_user['id'], payload.friendship_id)
    return {'ok': True}


@router.post('/cancel', response_model=ActionOkOut)
@router.post('/remove', response_model=ActionOkOut)
async def remove(payload: FriendshipIdIn, current_user: dict = Depends(get_current_user)):
    await friendships.remove(current_user['id'], payload.friendship_id)
    return {'ok': True}


@router.get('/{other_id}/are-friends', response_model=AreFriendsOut)
async def check_friend(other_id: int, current_user: dict = Depends(get_current_user)):
    return {'friends': await are_friends(current_user['id'], other_id)}
