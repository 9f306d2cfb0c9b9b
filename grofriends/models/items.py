from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, func
from . import Base

class Item(Base):
    __tablename__ = 'items'
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), index=True, nullable=False)
    title = Column(String(200), nullable=False)
    qty = Column(Integer, nullable=False, default=1)
    note = Column(Text, nullable=False, default='')
    done = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
