"""Create, update and delete topics, categories, questions and answers.

Questions and answers belong to a topic; touching them requires access to
that topic (an active subscription when the topic is paid).
"""

from typing import Any, TypeVar
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from quizbank.core.app_exceptions import already_exists, not_found
from quizbank.core.logging import get_logger
from quizbank.db.base import Base
from quizbank.models.content import Answer, Category, Question, QuestionCategory, Topic
from quizbank.services.subscriptions import ensure_topic_access

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

# Columns that accept an explicit null in a partial update
NULLABLE_FIELDS = {"content"}


def get_or_404(db: Session, model: type[ModelT], entity_id: UUID) -> ModelT:
    entity = db.get(model, entity_id)
    if entity is None:
        raise not_found(f"{model.__name__} not found", id=str(entity_id))
    return entity


def apply_changes(entity: Base, changes: dict[str, Any]) -> None:
    for field, value in changes.items():
        if value is None and field not in NULLABLE_FIELDS:
            continue
        setattr(entity, field, value)


def save(db: Session, entity: Base, event: str) -> None:
    db.add(entity)
    db.commit()
    db.refresh(entity)
    logger.info(
        "Content saved",
        extra={"event": event, "entity": type(entity).__name__, "id": str(entity.id)},
    )


def remove(db: Session, entity: Base) -> None:
    """Delete by primary key; dependent rows go through ON DELETE CASCADE."""
    model = type(entity)
    entity_id = str(entity.id)
    db.execute(delete(model).where(model.id == entity.id))
    db.commit()
    logger.info(
        "Content deleted",
        extra={"event": "content_deleted", "entity": type(entity).__name__, "id": entity_id},
    )


# ============================================================================
# Topics and categories
# ============================================================================


def list_topics(db: Session) -> list[Topic]:
    return list(db.scalars(select(Topic).order_by(Topic.name, Topic.id)))


def create_topic(db: Session, data: dict[str, Any]) -> Topic:
    topic = Topic(**data)
    save(db, topic, "topic_created")
    return topic


def update_topic(db: Session, topic_id: UUID, changes: dict[str, Any]) -> Topic:
    topic = get_or_404(db, Topic, topic_id)
    apply_changes(topic, changes)
    save(db, topic, "topic_updated")
    return topic


def delete_topic(db: Session, topic_id: UUID) -> None:
    remove(db, get_or_404(db, Topic, topic_id))


def list_categories(db: Session) -> list[Category]:
    return list(db.scalars(select(Category).order_by(Category.name, Category.id)))


def create_category(db: Session, data: dict[str, Any]) -> Category:
    category = Category(**data)
    save(db, category, "category_created")
    return category


def update_category(db: Session, category_id: UUID, changes: dict[str, Any]) -> Category:
    category = get_or_404(db, Category, category_id)
    apply_changes(category, changes)
    save(db, category, "category_updated")
    return category


def delete_category(db: Session, category_id: UUID) -> None:
    remove(db, get_or_404(db, Category, category_id))


# ============================================================================
# Questions
# ============================================================================


def accessible_topic(db: Session, user_id: UUID, topic_id: UUID) -> Topic:
    topic = get_or_404(db, Topic, topic_id)
    ensure_topic_access(db, user_id, topic)
    return topic


def list_questions(db: Session, lang: str) -> list[Question]:
    stmt = select(Question).where(Question.lang == lang).order_by(Question.id)
    return list(db.scalars(stmt))


def get_question(
    db: Session, user_id: UUID, question_id: UUID, lang: str | None = None
) -> Question:
    question = get_or_404(db, Question, question_id)
    if lang is not None and question.lang != lang:
        raise not_found("Question not found", id=str(question_id))
    accessible_topic(db, user_id, question.topic_id)
    return question


def questions_for_topic(db: Session, user_id: UUID, topic_id: UUID, lang: str) -> list[Question]:
    topic = accessible_topic(db, user_id, topic_id)
    stmt = (
        select(Question)
        .where(Question.topic_id == topic.id, Question.lang == lang)
        .order_by(Question.id)
    )
    return list(db.scalars(stmt))


def create_question(db: Session, user_id: UUID, data: dict[str, Any]) -> Question:
    accessible_topic(db, user_id, data["topic_id"])
    question = Question(**data)
    save(db, question, "question_created")
    return question


def update_question(
    db: Session, user_id: UUID, question_id: UUID, changes: dict[str, Any]
) -> Question:
    question = get_question(db, user_id, question_id)
    new_topic_id = changes.get("topic_id")
    if new_topic_id is not None and new_topic_id != question.topic_id:
        accessible_topic(db, user_id, new_topic_id)
    apply_changes(question, changes)
    save(db, question, "question_updated")
    return question


def delete_question(db: Session, user_id: UUID, question_id: UUID) -> None:
    remove(db, get_question(db, user_id, question_id))


# ============================================================================
# Answers
# ============================================================================


def list_answers(db: Session) -> list[Answer]:
    return list(db.scalars(select(Answer).order_by(Answer.question_id, Answer.id)))


def get_answer(db: Session, user_id: UUID, answer_id: UUID) -> Answer:
    answer = get_or_404(db, Answer, answer_id)
    get_question(db, user_id, answer.question_id)
    return answer


def answers_for_question(db: Session, user_id: UUID, question_id: UUID) -> list[Answer]:
    question = get_question(db, user_id, question_id)
    stmt = select(Answer).where(Answer.question_id == question.id).order_by(Answer.id)
    return list(db.scalars(stmt))


def create_answer(db: Session, user_id: UUID, data: dict[str, Any]) -> Answer:
    get_question(db, user_id, data["question_id"])
    answer = Answer(**data)
    save(db, answer, "answer_created")
    return answer


def update_answer(db: Session, user_id: UUID, answer_id: UUID, changes: dict[str, Any]) -> Answer:
    answer = get_answer(db, user_id, answer_id)
    new_question_id = changes.get("question_id")
    if new_question_id is not None and new_question_id != answer.question_id:
        get_question(db, user_id, new_question_id)
    apply_changes(answer, changes)
    save(db, answer, "answer_updated")
    return answer


def delete_answer(db: Session, user_id: UUID, answer_id: UUID) -> None:
    remove(db, get_answer(db, user_id, answer_id))


# ============================================================================
# Question categories
# ============================================================================


def question_categories(db: Session, question_id: UUID) -> list[Category]:
    get_or_404(db, Question, question_id)
    stmt = (
        select(Category)
        .join(QuestionCategory, QuestionCategory.category_id == Category.id)
        .where(QuestionCategory.question_id == question_id)
        .order_by(Category.name, Category.id)
    )
    return list(db.scalars(stmt))


def link_category(db: Session, question_id: UUID, category_id: UUID) -> QuestionCategory:
    get_or_404(db, Question, question_id)
    get_or_404(db, Category, category_id)
    if db.get(QuestionCategory, (question_id, category_id)) is not None:
        raise already_exists("Question is already in this category")

    link = QuestionCategory(question_id=question_id, category_id=category_id)
    db.add(link)
    try:
        db.commit()
    except IntegrityError:
        # Concurrent link of the same pair
        db.rollback()
        raise already_exists("Question is already in this category") from None
    return link


def unlink_category(db: Session, question_id: UUID, category_id: UUID) -> None:
    link = db.get(QuestionCategory, (question_id, category_id))
    if link is None:
        raise not_found("Question is not in this category")
    db.delete(link)
    db.commit()
