"""Database models."""

# Import all models here so Alembic and create_all can see them
from quizbank.models.content import Answer, Category, Question, QuestionCategory, Topic
from quizbank.models.favorite import UserFavoriteQuestion
from quizbank.models.test_session import (
    FilterType,
    TestQuestion,
    TestQuestionAnswer,
    TestSession,
    TestStatus,
)
from quizbank.models.user import User, UserSubscription

__all__ = [
    "Answer",
    "Category",
    "FilterType",
    "Question",
    "QuestionCategory",
    "TestQuestion",
    "TestQuestionAnswer",
    "TestSession",
    "TestStatus",
    "Topic",
    "User",
    "UserFavoriteQuestion",
    "UserSubscription",
]
