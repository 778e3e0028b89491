"""User and subscription models."""

import uuid

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from quizbank.common.time import utcnow
from quizbank.db.base import Base


class User(Base):
    """User model."""

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    username = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow, nullable=True)

    subscriptions = relationship(
        "UserSubscription", back_populates="user", cascade="all, delete-orphan"
    )


class UserSubscription(Base):
    """Paid access window for a user; deactivated by the expiry sweep."""

    __tablename__ = "user_subscriptions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False
    )
    expire_at = Column(DateTime(timezone=True), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    is_deleted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow, nullable=True)

    user = relationship("User", back_populates="subscriptions")

    __table_args__ = (Index("ix_user_subscriptions_active_expire", "is_active", "expire_at"),)
