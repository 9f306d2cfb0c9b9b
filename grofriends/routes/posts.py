from fastapi import APIRouter, Depends
from typing import List

from ..schemas.posts import PostIn, PostOut, CommentIn, CommentOut, LikeOut
from ..schemas.users import ActionOkOut
from ..crud import clamp, list_feed, create_post, get_post, toggle_like, add_comment, list_comments
from ..auth import get_current_user
from ..errors import InvalidOperation
from ..push import hub

router = APIRouter()

@router.get('', response_model=List[PostOut])
async def feed(limit: str = '20', offset: str = '0', current_user: dict = Depends(get_current_user)):
    return await list_feed(clamp(limit, 1, 50), clamp(offset, 0, 10_000))

@router.post('', response_model=PostOut, status_code=201)
async def create(payload: PostIn, current_user: dict = Depends(get_current_user)):
    content = payload.content.strip()
    if not content:
        raise InvalidOperation('Missing content')
    post = await get_post(await create_post(current_user['id'], content))
    hub.broadcast('feed:new', post)
    return post

@router.get('/{post_id}/comments', response_model=List[CommentOut])
async def comments(post_id: int, current_user: dict = Depends(get_current_user)):
    return await list_comments(post_id)

@router.post('/{post_id}/like', response_model=LikeOut)
async def like(post_id: int, current_user: dict = Depends(get_current_user)):
    liked, count = await toggle_like(current_user['id'], post_id)
    hub.broadcast('feed:update', {'post_id': post_id, 'like_count': count})
    return {'liked': liked, 'like_count': count}

@router.post('/{post_id}/comment', response_model=ActionOkOut, status_code=201)
async def comment(post_id: int, payload: CommentIn, current_user: dict = Depends(get_current_user)):
    text = payload.text.strip()
    if not text:
        raise InvalidOperation('Missing text')
    await add_comment(current_user['id'], post_id, text)
    hub.broadcast('feed:update', {'post_id': post_id, 'comment_added': True})
    return {'ok': True}
