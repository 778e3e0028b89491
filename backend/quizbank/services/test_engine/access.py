"""Session lookup with ownership and visibility checks."""

from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from quizbank.core.app_exceptions import forbidden, not_found
from quizbank.models.test_session import TestQuestion, TestSession


def get_owned_test(
    db: Session,
    test_id: UUID,
    user_id: UUID,
    *,
    for_update: bool = False,
) -> TestSession:
    """Load a non-deleted test owned by the user.

    With ``for_update`` the row is locked until the transaction ends on
    backends that support ``SELECT ... FOR UPDATE``.
    """
    stmt = select(TestSession).where(TestSession.id == test_id, TestSession.is_deleted.is_(False))
    if for_update:
        stmt = stmt.with_for_update().execution_options(populate_existing=True)

    test = db.scalars(stmt).first()
    if test is None:
        raise not_found("Test not found")
    if test.user_id != user_id:
        raise forbidden("Not authorized to access this test")
    return test


def answered_count(db: Session, test_id: UUID) -> int:
    stmt = select(func.count()).where(
        TestQuestion.test_id == test_id, TestQuestion.answered_at.is_not(None)
    )
    return db.scalar(stmt) or 0


def unanswered_count(db: Session, test_id: UUID) -> int:
    stmt = select(func.count()).where(
        TestQuestion.test_id == test_id, TestQuestion.answered_at.is_(None)
    )
    return db.scalar(stmt) or 0


def answered_counts(db: Session, test_ids: Iterable[UUID]) -> dict[UUID, int]:
    """Answered slot count per test, in one aggregate query."""
    ids = list(test_ids)
    if not ids:
        return {}
    stmt = (
        select(TestQuestion.test_id, func.count())
        .where(TestQuestion.test_id.in_(ids), TestQuestion.answered_at.is_not(None))
        .group_by(TestQuestion.test_id)
    )
    return {test_id: count for test_id, count in db.execute(stmt)}
