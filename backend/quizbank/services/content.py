"""Read-only access to questions, answers, topics and categories."""

from collections import defaultdict
from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from quizbank.models.content import Answer, Category, Question, QuestionCategory, Topic


def topic_exists(db: Session, topic_id: UUID) -> bool:
    return db.get(Topic, topic_id) is not None


def category_exists(db: Session, category_id: UUID) -> bool:
    return db.get(Category, category_id) is not None


def question_exists(db: Session, question_id: UUID) -> bool:
    return db.get(Question, question_id) is not None


def question_ids_for_topic(db: Session, topic_id: UUID, lang: str) -> list[UUID]:
    """IDs of questions under a topic in one language."""
    stmt = (
        select(Question.id)
        .where(Question.topic_id == topic_id, Question.lang == lang)
        .order_by(Question.id)
    )
    return list(db.scalars(stmt))


def question_ids_for_category(db: Session, category_id: UUID, lang: str) -> list[UUID]:
    """IDs of questions linked to a category in one language."""
    stmt = (
        select(Question.id)
        .join(QuestionCategory, QuestionCategory.question_id == Question.id)
        .where(QuestionCategory.category_id == category_id, Question.lang == lang)
        .order_by(Question.id)
    )
    return list(db.scalars(stmt))


def question_ids_in(db: Session, question_ids: Iterable[UUID], lang: str) -> list[UUID]:
    """Subset of the given question IDs that exist in the language."""
    ids = list(question_ids)
    if not ids:
        return []
    stmt = (
        select(Question.id)
        .where(Question.id.in_(ids), Question.lang == lang)
        .order_by(Question.id)
    )
    return list(db.scalars(stmt))


def get_question(db: Session, question_id: UUID) -> Question | None:
    return db.get(Question, question_id)


def get_questions(db: Session, question_ids: Iterable[UUID]) -> dict[UUID, Question]:
    ids = list(question_ids)
    if not ids:
        return {}
    return {q.id: q for q in db.scalars(select(Question).where(Question.id.in_(ids)))}


def answers_for_question(db: Session, question_id: UUID) -> list[Answer]:
    """All answer options of a question in a stable order."""
    stmt = select(Answer).where(Answer.question_id == question_id).order_by(Answer.id)
    return list(db.scalars(stmt))


def answers_for_questions(db: Session, question_ids: Iterable[UUID]) -> dict[UUID, list[Answer]]:
    """Answer options for many questions in one query, keyed by question ID."""
    ids = list(question_ids)
    grouped: dict[UUID, list[Answer]] = defaultdict(list)
    if not ids:
        return grouped
    stmt = select(Answer).where(Answer.question_id.in_(ids)).order_by(Answer.id)
    for answer in db.scalars(stmt):
        grouped[answer.question_id].append(answer)
    return grouped


def correct_answer_ids(db: Session, question_id: UUID) -> set[UUID]:
    stmt = select(Answer.id).where(Answer.question_id == question_id, Answer.is_correct.is_(True))
    return set(db.scalars(stmt))


def existing_answer_ids(db: Session, answer_ids: Iterable[UUID]) -> set[UUID]:
    """Subset of the given answer IDs that exist under any question."""
    ids = list(answer_ids)
    if not ids:
        return set()
    return set(db.scalars(select(Answer.id).where(Answer.id.in_(ids))))
