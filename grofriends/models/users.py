from sqlalchemy import Column, Integer, String, DateTime, func
from . import Base

class User(Base):
    __tablename__ = 'users'
    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(120), nullable=False, default='')
    hashed_password = Column(String(255), nullable=False)
    locale = Column(String(10), nullable=False, default='auto')
    theme = Column(String(20), nullable=False, default='pastel')
    created_at = Column(DateTime, nullable=False, server_default=func.now())
