from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, func
from . import Base

class Comment(Base):
    __tablename__ = 'feed_comments'
    id = Column(Integer, primary_key=True, index=True)
    post_id = Column(Integer, ForeignKey('feed_posts.id', ondelete='CASCADE'), index=True, nullable=False)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    text = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
