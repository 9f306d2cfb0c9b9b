from .models import AsyncSessionLocal
from .models.users import User
from .models.items import Item
from .models.goals import Goal
from .models.posts import Post
from .models.likes import Like
from .models.comments import Comment
from .models.messages import Message
from .errors import Conflict, NotFound
from .config import LOCALES, THEMES
from sqlalchemy import select, update, delete, func, or_, and_
from sqlalchemy.exc import IntegrityError
from typing import Optional

def clamp(value, lo: int, hi: int) -> int:
    try:
        n = int(value)
    except (TypeError, ValueError):
        n = lo
    return max(lo, min(hi, n))

# users
async def create_user(email: str, name: str, hashed_password: str):
    async with AsyncSessionLocal() as session:
        user = User(email=email, name=name, hashed_password=hashed_password)
        session.add(user)
        try:
            await session.commit()
        except IntegrityError:
            await session.rollback()
            raise Conflict('Email already registered')
        await session.refresh(user)
        return user

async def get_user_by_email(email: str) -> Optional[User]:
    async with AsyncSessionLocal() as session:
        q = await session.execute(select(User).where(User.email == email))
        return q.scalars().first()

async def get_user_by_id(user_id: int) -> Optional[User]:
    async with AsyncSessionLocal() as session:
        q = await session.execute(select(User).where(User.id == user_id))
        return q.scalars().first()

async def update_user_prefs(user_id: int, name: str, locale: str, theme: str):
    """Unknown locale/theme values fall back to the defaults."""
    if locale not in LOCALES:
        locale = 'auto'
    if theme not in THEMES:
        theme = 'pastel'
    async with AsyncSessionLocal() as session:
        q = await session.execute(select(User).where(User.id == user_id))
        user = q.scalars().first()
        if not user:
            return None
        user.name = name
        user.locale = locale
        user.theme = theme
        await session.commit()
        await session.refresh(user)
        return user

async def delete_user(user_id: int) -> bool:
    # owned rows go with it through ON DELETE CASCADE
    async with AsyncSessionLocal() as session:
        res = await session.execute(delete(User).where(User.id == user_id))
        await session.commit()
        return res.rowcount > 0

# items
async def list_items(user_id: int):
    async with AsyncSessionLocal() as session:
        res = await session.execute(
            select(Item).where(Item.user_id == user_id).order_by(Item.done.asc(), Item.id.desc())
        )
        return res.scalars().all()

async def create_item(user_id: int, title: str, qty: int = 1, note: str = ''):
    async with AsyncSessionLocal() as session:
        item = Item(user_id=user_id, title=title, qty=clamp(qty, 1, 9999), note=note, done=False)
        session.add(item)
        await session.commit()
        await session.refresh(item)
        return item

async def toggle_item(user_id: int, item_id: int):
    async with AsyncSessionLocal() as session:
        res = await session.execute(
            update(Item).where(Item.id == item_id, Item.user_id == user_id).values(done=~Item.done)
        )
        await session.commit()
        if not res.rowcount:
            raise NotFound('Item not found')

async def delete_item(user_id: int, item_id: int):
    async with AsyncSessionLocal() as session:
        res = await session.execute(delete(Item).where(Item.id == item_id, Item.user_id == user_id))
        await session.commit()
        if not res.rowcount:
            raise NotFound('Item not found')

# goals
async def list_goals(user_id: int):
    async with AsyncSessionLocal() as session:
        res = await session.execute(select(Goal).where(Goal.user_id == user_id).order_by(Goal.id.desc()))
        return res.scalars().all()

async def list_public_goals(user_id: int, limit: int = 10):
    async with AsyncSessionLocal() as session:
        res = await session.execute(
            select(Goal).where(Goal.user_id == user_id, Goal.is_public.is_(True))
            .order_by(Goal.id.desc()).limit(limit)
        )
        return res.scalars().all()

async def create_goal(user_id: int, title: str, target_date=None):
    async with AsyncSessionLocal() as session:
        goal = Goal(user_id=user_id, title=title, target_date=target_date, is_public=False)
        session.add(goal)
        await session.commit()
        await session.refresh(goal)
        return goal

async def publish_goal(user_id: int, goal_id: int) -> Optional[int]:
    """
    Flip a goal to public and announce it in the feed. Returns the new
    post id, or None when the goal was already public.
    """
    async with AsyncSessionLocal() as session:
        q = await session.execute(select(Goal).where(Goal.id == goal_id, Goal.user_id == user_id))
        goal = q.scalars().first()
        if not goal:
            raise NotFound('Goal not found')
        res = await session.execute(
            update(Goal).where(Goal.id == goal_id, Goal.is_public.is_(False)).values(is_public=True)
        )
        if not res.rowcount:
            await session.rollback()
            return None
        post = Post(user_id=user_id, goal_id=goal_id, content='New goal: ' + goal.title)
        session.add(post)
        await session.commit()
        await session.refresh(post)
        return post.id

# feed
def _post_columns():
    like_count = select(func.count(Like.id)).where(Like.post_id == Post.id).correlate(Post).scalar_subquery()
    comment_count = select(func.count(Comment.id)).where(Comment.post_id == Post.id).correlate(Post).scalar_subquery()
    return (
        Post.id, Post.user_id, Post.goal_id, Post.content, Post.created_at,
        User.name, User.email,
        like_count.label('like_count'), comment_count.label('comment_count'),
    )

async def list_feed(limit: int = 20, offset: int = 0):
    async with AsyncSessionLocal() as session:
        res = await session.execute(
            select(*_post_columns()).join(User, User.id == Post.user_id)
            .order_by(Post.id.desc()).limit(limit).offset(offset)
        )
        return [dict(r._mapping) for r in res.all()]

async def list_feed_by_user(user_id: int, limit: int = 10, offset: int = 0):
    async with AsyncSessionLocal() as session:
        res = await session.execute(
            select(*_post_columns()).join(User, User.id == Post.user_id)
            .where(Post.user_id == user_id)
            .order_by(Post.id.desc()).limit(limit).offset(offset)
        )
        return [dict(r._mapping) for r in res.all()]

async def get_post(post_id: int) -> Optional[dict]:
    async with AsyncSessionLocal() as session:
        res = await session.execute(
            select(*_post_columns()).join(User, User.id == Post.user_id).where(Post.id == post_id)
        )
        row = res.first()
        return dict(row._mapping) if row else None

async def create_post(user_id: int, content: str) -> int:
    async with AsyncSessionLocal() as session:
        post = Post(user_id=user_id, content=content)
        session.add(post)
        await session.commit()
        await session.refresh(post)
        return post.id

async def _require_post(session, post_id: int):
    q = await session.execute(select(Post.id).where(Post.id == post_id))
    if q.scalar() is None:
        raise NotFound('Post not found')

async def toggle_like(user_id: int, post_id: int):
    """Returns (liked, like_count) after the toggle."""
    async with AsyncSessionLocal() as session:
        await _require_post(session, post_id)
        q = await session.execute(select(Like.id).where(Like.post_id == post_id, Like.user_id == user_id))
        if q.scalar() is not None:
            await session.execute(delete(Like).where(Like.post_id == post_id, Like.user_id == user_id))
            liked = False
        else:
            session.add(Like(post_id=post_id, user_id=user_id))
            liked = True
        try:
            await session.commit()
        except IntegrityError:
            # lost a race against our own concurrent like
            await session.rollback()
            liked = True
        count = await session.execute(select(func.count(Like.id)).where(Like.post_id == post_id))
        return liked, count.scalar() or 0

async def add_comment(user_id: int, post_id: int, text: str):
    async with AsyncSessionLocal() as session:
        await _require_post(session, post_id)
        c = Comment(post_id=post_id, user_id=user_id, text=text)
        session.add(c)
        await session.commit()
        await session.refresh(c)
        return c

async def list_comments(post_id: int):
    async with AsyncSessionLocal() as session:
        await _require_post(session, post_id)
        res = await session.execute(
            select(Comment.id, Comment.text, Comment.created_at, User.name, User.email)
            .join(User, User.id == Comment.user_id)
            .where(Comment.post_id == post_id)
            .order_by(Comment.id.asc())
        )
        return [dict(r._mapping) for r in res.all()]

# messaging
async def send_message(sender_id: int, receiver_id: int, text: str):
    async with AsyncSessionLocal() as session:
        m = Message(sender_id=sender_id, receiver_id=receiver_id, text=text)
        session.add(m)
        await session.commit()
        await session.refresh(m)
        return m

async def list_dialog(user_id: int, peer_id: int, limit: int = 50, offset: int = 0):
    async with AsyncSessionLocal() as session:
        q = select(Message).where(
            or_(
                and_(Message.sender_id == user_id, Message.receiver_id == peer_id),
                and_(Message.sender_id == peer_id, Message.receiver_id == user_id),
            )
        ).order_by(Message.id.desc()).limit(limit).offset(offset)
        res = await session.execute(q)
        return [
            {
                'id': m.id,
                'sender_id': m.sender_id,
                'text': m.text,
                'created_at': m.created_at,
                'mine': m.sender_id == user_id,
            }
            for m in res.scalars().all()
        ]
