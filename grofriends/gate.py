from .crud import get_user_by_id
from .errors import NotFound, Forbidden
from .models.friendships import ACCEPTED
from .models.users import User
from .social_graph import find_pair


async def are_friends(u: int, v: int) -> bool:
    f = await find_pair(u, v)
    return f is not None and f.status == ACCEPTED


async def require_friend(viewer_id: int, target_id: int) -> User:
    """Gate for cross-user reads and writes (DMs, friend profile)."""
    target = await get_user_by_id(target_id)
    if not target:
        raise NotFound('User not found')
    if not await are_friends(viewer_id, target_id):
        raise Forbidden('Not friends')
    return target
