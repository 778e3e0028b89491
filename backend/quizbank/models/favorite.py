"""Favorite question model."""

from sqlalchemy import Column, DateTime, ForeignKey, Uuid
from sqlalchemy.sql import func

from quizbank.common.time import utcnow
from quizbank.db.base import Base


class UserFavoriteQuestion(Base):
    """Question a user marked as favorite."""

    __tablename__ = "user_favorite_questions"

    user_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE", onupdate="CASCADE"), primary_key=True
    )
    question_id = Column(
        Uuid,
        ForeignKey("questions.id", ondelete="CASCADE", onupdate="CASCADE"),
        primary_key=True,
    )
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
