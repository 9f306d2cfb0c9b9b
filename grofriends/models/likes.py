from sqlalchemy import Column, Integer, DateTime, ForeignKey, UniqueConstraint, func
from . import Base

class Like(Base):
    __tablename__ = 'feed_likes'
    id = Column(Integer, primary_key=True)
    post_id = Column(Integer, ForeignKey('feed_posts.id', ondelete='CASCADE'), index=True, nullable=False)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    __table_args__ = (
        UniqueConstraint('post_id', 'user_id', name='uix_post_user_like'),
    )
