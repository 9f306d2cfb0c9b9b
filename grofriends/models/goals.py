from sqlalchemy import Column, Integer, String, Date, Boolean, DateTime, ForeignKey, func
from . import Base

class Goal(Base):
    __tablename__ = 'goals'
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), index=True, nullable=False)
    title = Column(String(200), nullable=False)
    target_date = Column(Date, nullable=True)
    is_public = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
