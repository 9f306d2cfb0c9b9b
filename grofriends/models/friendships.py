from sqlalchemy import (
    Column, Integer, String, DateTime, ForeignKey,
    UniqueConstraint, CheckConstraint, func,
)
from . import Base

PENDING = 'pending'
ACCEPTED = 'accepted'


class Friendship(Base):
    """
    One row per unordered pair of users, stored as (user_a, user_b) with
    user_a < user_b. No row means no relationship.
    """
    __tablename__ = 'friendships'
    id = Column(Integer, primary_key=True)
    user_a = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), index=True, nullable=False)
    user_b = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), index=True, nullable=False)
    status = Column(String(16), nullable=False, default=PENDING)
    requested_by = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    __table_args__ = (
        UniqueConstraint('user_a', 'user_b', name='uix_friend_pair'),
        CheckConstraint('user_a < user_b', name='ck_friend_pair_order'),
        CheckConstraint("status IN ('pending', 'accepted')", name='ck_friend_status'),
        CheckConstraint('requested_by IN (user_a, user_b)', name='ck_friend_requested_by'),
    )

    def __repr__(self):
        return f"<Friendship(user_a={self.user_a}, user_b={self.user_b}, status={self.status})>"
