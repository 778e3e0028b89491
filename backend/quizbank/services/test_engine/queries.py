"""Listing, detail and soft-delete of a user's tests."""

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from quizbank.core.app_exceptions import invalid_field_value
from quizbank.core.logging import get_logger
from quizbank.models.test_session import TestQuestion, TestSession, TestStatus
from quizbank.schemas.test_session import TestDetailOut, TestOut, TestQuestionInfo
from quizbank.services.test_engine.access import answered_counts, get_owned_test

logger = get_logger(__name__)


def parse_status(value: str | None) -> TestStatus | None:
    if value is None:
        return None
    try:
        return TestStatus(value)
    except ValueError:
        raise invalid_field_value("status", f"Unknown status {value!r}") from None


def summarize(test: TestSession, answered: int) -> TestOut:
    return TestOut(
        id=test.id,
        filter_type=test.filter_type,
        filter_id=test.filter_id,
        lang=test.lang,
        total_questions=test.total_questions,
        answered_count=answered,
        correct_count=test.correct_count,
        status=test.status,
        score_percent=test.score_percent,
        created_at=test.created_at,
        completed_at=test.completed_at,
    )


def _summaries(db: Session, tests: Sequence[TestSession]) -> list[TestOut]:
    counts = answered_counts(db, (test.id for test in tests))
    return [summarize(test, counts.get(test.id, 0)) for test in tests]


def list_tests(db: Session, user_id: UUID, status: TestStatus | None = None) -> list[TestOut]:
    """Non-deleted tests of the user, newest first."""
    stmt = select(TestSession).where(
        TestSession.user_id == user_id, TestSession.is_deleted.is_(False)
    )
    if status is not None:
        stmt = stmt.where(TestSession.status == status)
    stmt = stmt.order_by(TestSession.created_at.desc())
    return _summaries(db, list(db.scalars(stmt)))


def list_history(db: Session, user_id: UUID) -> list[TestOut]:
    """Completed and abandoned tests, most recently finished first."""
    stmt = (
        select(TestSession)
        .where(
            TestSession.user_id == user_id,
            TestSession.is_deleted.is_(False),
            TestSession.status.in_([TestStatus.COMPLETED, TestStatus.ABANDONED]),
        )
        .order_by(TestSession.completed_at.desc())
    )
    return _summaries(db, list(db.scalars(stmt)))


def get_test_detail(db: Session, test_id: UUID, user_id: UUID) -> TestDetailOut:
    test = get_owned_test(db, test_id, user_id)
    slots = list(
        db.scalars(
            select(TestQuestion)
            .where(TestQuestion.test_id == test.id)
            .order_by(TestQuestion.question_order)
        )
    )
    return TestDetailOut(
        id=test.id,
        filter_type=test.filter_type,
        filter_id=test.filter_id,
        lang=test.lang,
        total_questions=test.total_questions,
        answered_count=sum(1 for slot in slots if slot.is_answered),
        correct_count=test.correct_count,
        status=test.status,
        score_percent=test.score_percent,
        questions=[
            TestQuestionInfo(
                order=slot.question_order,
                question_id=slot.question_id,
                is_answered=slot.is_answered,
                is_correct=slot.is_correct,
            )
            for slot in slots
        ],
    )


def delete_test(db: Session, test_id: UUID, user_id: UUID) -> None:
    """Soft-delete a test in any status."""
    test = get_owned_test(db, test_id, user_id)
    test.is_deleted = True
    db.commit()
    logger.info(
        "Test deleted",
        extra={"event": "test_deleted", "test_id": str(test_id), "user_id": str(user_id)},
    )
