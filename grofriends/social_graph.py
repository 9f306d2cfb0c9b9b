"""
Row store for friendships. Every read and write goes through the
canonical pair so a relationship started by either side lands on the
same row; the unique constraint on (user_a, user_b) settles races.
"""
from typing import List, Optional, Tuple

from sqlalchemy import select, update, delete, or_, case
from sqlalchemy.exc import IntegrityError

from .errors import Conflict
from .models import AsyncSessionLocal
from .models.friendships import Friendship, PENDING, ACCEPTED
from .models.users import User


def canonical_pair(u: int, v: int) -> Tuple[int, int]:
    u, v = int(u), int(v)
    return (u, v) if u < v else (v, u)


async def find_pair(u: int, v: int) -> Optional[Friendship]:
    a, b = canonical_pair(u, v)
    async with AsyncSessionLocal() as session:
        res = await session.execute(select(Friendship).where(Friendship.user_a == a, Friendship.user_b == b))
        return res.scalars().first()


async def get_friendship(friendship_id: int) -> Optional[Friendship]:
    async with AsyncSessionLocal() as session:
        res = await session.execute(select(Friendship).where(Friendship.id == friendship_id))
        return res.scalars().first()


async def insert_pending(requester_id: int, other_id: int) -> Friendship:
    a, b = canonical_pair(requester_id, other_id)
    async with AsyncSessionLocal() as session:
        f = Friendship(user_a=a, user_b=b, status=PENDING, requested_by=requester_id)
        session.add(f)
        try:
            await session.commit()
        except IntegrityError:
            await session.rollback()
            raise Conflict('Already invited or friends')
        await session.refresh(f)
        return f


async def mark_accepted(friendship_id: int) -> bool:
    async with AsyncSessionLocal() as session:
        res = await session.execute(
            update(Friendship).where(Friendship.id == friendship_id).values(status=ACCEPTED)
        )
        await session.commit()
        return res.rowcount > 0


async def delete_friendship(friendship_id: int) -> bool:
    async with AsyncSessionLocal() as session:
        res = await session.execute(delete(Friendship).where(Friendship.id == friendship_id))
        await session.commit()
        return res.rowcount > 0


async def list_touching(user_id: int) -> List[tuple]:
    """Rows involving user_id joined with the other party, newest first."""
    other_id = case((Friendship.user_a == user_id, Friendship.user_b), else_=Friendship.user_a)
    async with AsyncSessionLocal() as session:
        res = await session.execute(
            select(Friendship, User.id, User.name, User.email)
            .join(User, User.id == other_id)
            .where(or_(Friendship.user_a == user_id, Friendship.user_b == user_id))
            .order_by(Friendship.id.desc())
        )
        return res.all()
