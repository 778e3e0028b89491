"""Content models: topics, categories, questions and their answer options.

These tables are owned by the content management side of the platform; the
test engine only reads them.
"""

import uuid

from sqlalchemy import Boolean, Column, ForeignKey, Index, SmallInteger, String, Text, Uuid
from sqlalchemy.orm import relationship

from quizbank.db.base import Base


class Topic(Base):
    """A study topic grouping questions."""

    __tablename__ = "topics"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    difficulty = Column(String(50), nullable=False, default="medium")
    duration = Column(SmallInteger, nullable=False, default=0)  # minutes
    subscription_required = Column(Boolean, nullable=False, default=False)

    questions = relationship("Question", back_populates="topic")


class Category(Base):
    """Cross-topic question category."""

    __tablename__ = "categories"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)


class Question(Base):
    """A question in one language."""

    __tablename__ = "questions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    topic_id = Column(
        Uuid, ForeignKey("topics.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False
    )
    name = Column(String(500), nullable=False)
    lang = Column(String(10), nullable=False)
    content = Column(Text, nullable=True)
    explanation = Column(Text, nullable=False, default="")

    topic = relationship("Topic", back_populates="questions")
    answers = relationship("Answer", back_populates="question", cascade="all, delete-orphan")

    __table_args__ = (Index("ix_questions_topic_lang", "topic_id", "lang"),)


class QuestionCategory(Base):
    """Many-to-many link between questions and categories."""

    __tablename__ = "question_categories"

    question_id = Column(
        Uuid,
        ForeignKey("questions.id", ondelete="CASCADE", onupdate="CASCADE"),
        primary_key=True,
    )
    category_id = Column(
        Uuid,
        ForeignKey("categories.id", ondelete="CASCADE", onupdate="CASCADE"),
        primary_key=True,
    )

    __table_args__ = (Index("ix_question_categories_category", "category_id"),)


class Answer(Base):
    """Answer option of a question; several options may be correct."""

    __tablename__ = "answers"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    question_id = Column(
        Uuid, ForeignKey("questions.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False
    )
    value = Column(String(500), nullable=False)
    is_correct = Column(Boolean, nullable=False, default=False)

    question = relationship("Question", back_populates="answers")

    __table_args__ = (Index("ix_answers_question_id", "question_id"),)
