from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, func
from . import Base

class Post(Base):
    __tablename__ = 'feed_posts'
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), index=True, nullable=False)
    goal_id = Column(Integer, ForeignKey('goals.id', ondelete='SET NULL'), nullable=True)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
